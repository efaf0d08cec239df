"""
I/O utilities for the document structuring pipeline.

Handles:
- Loading provider block lists from JSON
- JSON serialization
- Directory management
"""

import json
import logging
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import numpy as np

from .blocks import BlockValidationError

logger = logging.getLogger(__name__)


# ============================================================================
# JSON Serialization
# ============================================================================

class EnhancedJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars, dataclasses, enums and sets."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if hasattr(obj, 'to_dict'):
            return obj.to_dict()
        if hasattr(obj, '__dataclass_fields__'):
            return asdict(obj)
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def save_json(
    data: Any,
    output_path: Union[str, Path],
    indent: int = 2,
    ensure_ascii: bool = False
) -> Path:
    """
    Save data to a JSON file.

    Args:
        data: Data to serialize (dict, list, dataclass, etc.)
        output_path: Path to save the JSON file
        indent: Indentation level for pretty printing
        ensure_ascii: If True, escape non-ASCII characters

    Returns:
        Path to the saved file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii, cls=EnhancedJSONEncoder)

    logger.debug(f"Saved JSON: {output_path}")
    return output_path


def load_json(json_path: Union[str, Path]) -> Any:
    """
    Load data from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    json_path = Path(json_path)
    if not json_path.exists():
        raise FileNotFoundError(f"JSON file not found: {json_path}")

    with open(json_path, 'r', encoding='utf-8') as f:
        return json.load(f)


# ============================================================================
# Block Loading
# ============================================================================

def extract_blocks(payload: Any) -> List[Dict[str, Any]]:
    """
    Pull the block list out of a provider payload.

    Accepts a single response (``{"Blocks": [...]}``), a bare block list, or
    a list of paginated responses whose blocks are concatenated in order.

    Raises:
        BlockValidationError: If no block list can be found
    """
    if isinstance(payload, dict):
        if "Blocks" not in payload:
            raise BlockValidationError("Response has no 'Blocks' field")
        blocks = payload["Blocks"]
        if blocks is None:
            return []
        if not isinstance(blocks, list):
            raise BlockValidationError("'Blocks' must be a list")
        return blocks

    if isinstance(payload, list):
        if payload and all(isinstance(p, dict) and "Blocks" in p for p in payload):
            blocks = []
            for page in payload:
                blocks.extend(extract_blocks(page))
            return blocks
        return payload

    raise BlockValidationError(f"Unsupported payload type: {type(payload).__name__}")


def load_blocks(json_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load a provider block list from a JSON file."""
    blocks = extract_blocks(load_json(json_path))
    logger.info(f"Loaded {len(blocks)} blocks from {json_path}")
    return blocks


# ============================================================================
# Directory Management
# ============================================================================

def ensure_dir(path: Union[str, Path]) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
