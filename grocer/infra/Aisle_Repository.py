"""Aisle repository helpers (file persistence)."""
import logging
from pathlib import Path
from typing import Optional, Union

from grocer.domain.Aisle import AisleConfig, parse_aisle_lenient

logger = logging.getLogger(__name__)


def reading_from_aisle(aisle_path: Optional[Union[str, Path]]) -> AisleConfig:
    """Load the aisle configuration leniently; anything missing degrades to an empty config."""
    content = ""
    if aisle_path is None:
        logger.debug("No aisle file configured")
    else:
        try:
            with open(aisle_path, 'r', encoding='utf-8') as f:
                content = f.read()
            logger.debug("Loaded aisle file from: %s", aisle_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read aisle file from %s: %s", aisle_path, e)

    result = parse_aisle_lenient(content)
    for warning in result.warnings:
        logger.warning("Aisle configuration warning: %s", warning)
    return result.output
