"""Load system JSON files from disk."""

import json
from pathlib import Path

from loguru import logger

from jdfind.config import MAX_FILE_SIZE
from jdfind.core.importer.json_reader import ValidationError, parse_payload
from jdfind.models.hierarchy import System


def read_systems_file(path: Path) -> list[System]:
    """Read and validate a system export (single system or domains wrapper).

    Args:
        path: JSON file to read.

    Returns:
        The systems contained in the file, in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValidationError: If the file is too large, not JSON, or not a valid system.
    """
    size = path.stat().st_size
    if size > MAX_FILE_SIZE:
        msg = f"File too large: {size} bytes (maximum {MAX_FILE_SIZE})"
        raise ValidationError(msg)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid JSON: {e}"
        raise ValidationError(msg) from e

    systems = parse_payload(data)
    logger.debug("Read {} system(s) from {}", len(systems), path)
    return systems
