"""
Configuration and constants for the document structuring pipeline.

This module provides:
- Global configuration settings
- Processing parameters
- Environment overrides
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

# ============================================================================
# Logging Configuration
# ============================================================================

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("doc_structure")


# ============================================================================
# Processing Configuration
# ============================================================================

@dataclass
class ClassifierConfig:
    """Line classification configuration."""
    heading_max_length: int = 50  # Headings are strictly shorter
    bbox_precision: int = 2  # Decimal places kept for bounding boxes


@dataclass
class StatisticsConfig:
    """Confidence statistics configuration."""
    confidence_precision: int = 2


@dataclass
class SectionConfig:
    """Section organization configuration."""
    introduction_title: str = "Introduction"
    placeholder_table_id: str = "table-1"


@dataclass
class ExportConfig:
    """Export configuration."""
    formats: List[str] = field(default_factory=lambda: ["json", "markdown"])
    markdown_heading_level: int = 2
    include_tables: bool = True
    include_key_values: bool = True


@dataclass
class PipelineConfig:
    """Main pipeline configuration."""
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    sections: SectionConfig = field(default_factory=SectionConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    debug_mode: bool = False

    def structuring_options(self) -> Dict[str, Any]:
        """Keyword arguments for DocumentAggregator."""
        return {
            "heading_max_length": self.classifier.heading_max_length,
            "bbox_precision": self.classifier.bbox_precision,
            "confidence_precision": self.statistics.confidence_precision,
            "introduction_title": self.sections.introduction_title,
            "placeholder_table_id": self.sections.placeholder_table_id,
        }


# ============================================================================
# Default Configuration Instance
# ============================================================================

def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}")
        return default


def get_config() -> PipelineConfig:
    """Get the default pipeline configuration with environment overrides."""
    config = PipelineConfig()

    config.classifier.heading_max_length = _env_int(
        "DOC_STRUCTURE_HEADING_MAX_LENGTH", config.classifier.heading_max_length
    )
    config.classifier.bbox_precision = _env_int(
        "DOC_STRUCTURE_BBOX_PRECISION", config.classifier.bbox_precision
    )

    intro_title = os.environ.get("DOC_STRUCTURE_INTRO_TITLE")
    if intro_title:
        config.sections.introduction_title = intro_title

    if os.environ.get("DOC_STRUCTURE_DEBUG", "").lower() == "true":
        config.debug_mode = True

    return config

