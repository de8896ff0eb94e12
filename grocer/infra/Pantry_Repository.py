"""Pantry repository helpers (file persistence)."""
import logging
from pathlib import Path
from typing import Optional, Union

from grocer.domain.Pantry import PantryConfig, parse_pantry_lenient

logger = logging.getLogger(__name__)


def reading_from_pantry(pantry_path: Optional[Union[str, Path]]) -> Optional[PantryConfig]:
    """Load the pantry leniently. None means "no pantry": not configured, unreadable or unparsable."""
    if pantry_path is None:
        logger.debug("No pantry file configured")
        return None
    try:
        with open(pantry_path, 'r', encoding='utf-8') as f:
            content = f.read()
        logger.debug("Loaded pantry file from: %s", pantry_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read pantry file from %s: %s", pantry_path, e)
        return None

    result = parse_pantry_lenient(content)
    for warning in result.warnings:
        logger.warning("Pantry configuration warning: %s", warning)
    return result.output
