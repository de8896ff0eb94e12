from pathlib import Path
from typing import Optional, Union

from grocer.utilities.constants import RECIPE_SUFFIX, STORE_FILENAME

# Centralized path resolution; everything lives under one base directory


def store_file(base_path: Union[str, Path]) -> Path:
    return Path(base_path) / STORE_FILENAME


def resolve_recipe_path(base_path: Union[str, Path], recipe: str) -> Optional[Path]:
    """Return the recipe file for a reference, or None if it is missing or escapes base_path."""
    base = Path(base_path).resolve()
    relative = (recipe or '').strip().lstrip('/')
    if not relative:
        return None
    candidate = (base / relative).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    if candidate.is_file():
        return candidate
    if candidate.suffix.lower() != RECIPE_SUFFIX:
        with_suffix = candidate.with_name(candidate.name + RECIPE_SUFFIX)
        if with_suffix.is_file():
            return with_suffix
    return None

__all__ = ['store_file', 'resolve_recipe_path']
