"""Recipe file loading and ingredient extraction into an IngredientList.

A recipe is a JSON file under the base path::

    {
      "name": "Pizza",
      "servings": 2,
      "ingredients": [
        {"name": "Flour", "default_quantity": 300, "unit": "g"},
        {"name": "Salt", "default_quantity": "a pinch"},
        {"name": "Tomato sauce", "recipe": "Basics/Tomato Sauce", "default_quantity": 1}
      ]
    }

An ingredient with a "recipe" key is a sub-recipe; its own ingredients are
expanded in place, scaled by the parent scale times its quantity.
"""
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from grocer.domain.Ingredient import DEFAULT_CONVERTER, IngredientList, Quantity, UnitConverter
from grocer.domain.errors import ExtractionError
from grocer.infra.paths import resolve_recipe_path

logger = logging.getLogger(__name__)


def split_scaled_reference(reference: str) -> Tuple[str, float]:
    """Split "path:2.5" into ("path", 2.5); a suffix that is not a number stays in the path."""
    path, sep, suffix = (reference or "").rpartition(':')
    if sep and path:
        try:
            return path, float(suffix)
        except ValueError:
            pass
    return reference, 1.0


def read_recipe(base_path: Union[str, Path], recipe: str) -> Tuple[Path, Dict[str, Any]]:
    """Load one recipe document; any problem is an ExtractionError."""
    recipe_file = resolve_recipe_path(base_path, recipe)
    if recipe_file is None:
        raise ExtractionError(f"Recipe not found: {recipe}")
    try:
        with open(recipe_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Invalid JSON in recipe {recipe}: {e}") from e
    except OSError as e:
        raise ExtractionError(f"Cannot read recipe {recipe}: {e}") from e
    if not isinstance(data, dict):
        raise ExtractionError(f"Recipe {recipe} must be a JSON object")
    return recipe_file, data


def _ingredient_quantity(ing: Dict[str, Any]) -> Optional[Quantity]:
    raw = ing.get('default_quantity')
    unit = ing.get('unit') or None
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ExtractionError(f"Invalid quantity for {ing.get('name')!r}: {raw!r}")
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError as e:
            raise ExtractionError(f"Invalid quantity for {ing.get('name')!r}: {raw!r}") from e
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return Quantity(text, unit)
    # json.load accepts NaN and Infinity
    if not math.isfinite(value):
        raise ExtractionError(f"Invalid quantity for {ing.get('name')!r}: {raw!r}")
    return Quantity(value, unit)


def extract_ingredients(reference: str, into: IngredientList, seen: Dict[str, int],
                        base_path: Union[str, Path], converter: UnitConverter = DEFAULT_CONVERTER,
                        allow_partial: bool = False, _depth: int = 0) -> None:
    """Merge the ingredients of a (possibly scaled) recipe reference into ``into``.

    Args:
        reference: "path" or "path:scale".
        into: running list, mutated in place.
        seen: recipes currently being expanded, mapped to their depth. Shared by the
            caller across calls; re-entering a recipe here is a circular reference.
        base_path: recipes root; references may not escape it.
        converter: unit-name normalization used when merging quantities.
        allow_partial: skip (with a warning) sub-recipes that cannot be found
            instead of failing.

    Raises:
        ExtractionError: unresolvable reference, invalid recipe file, or a cycle.
    """
    path, scale = split_scaled_reference(reference)
    if not math.isfinite(scale):
        raise ExtractionError(f"Invalid scale for recipe {path}: {scale}")
    recipe_file, data = read_recipe(base_path, path)
    key = str(recipe_file)
    if key in seen:
        raise ExtractionError(f"Circular recipe reference: {path}")
    seen[key] = _depth
    try:
        ingredients = data.get('ingredients', [])
        if not isinstance(ingredients, list):
            raise ExtractionError(f"Recipe {path}: 'ingredients' must be a list")
        for ing in ingredients:
            if not isinstance(ing, dict):
                raise ExtractionError(f"Recipe {path}: ingredient entries must be objects")
            name = ing.get('name')
            sub_recipe = ing.get('recipe')
            if sub_recipe:
                if allow_partial and resolve_recipe_path(base_path, str(sub_recipe)) is None:
                    logger.warning("Skipping missing sub-recipe %s of %s", sub_recipe, path)
                    continue
                quantity = _ingredient_quantity(ing)
                factor = float(quantity.value) if quantity and quantity.is_numeric else 1.0
                extract_ingredients(f"{sub_recipe}:{scale * factor}", into, seen, base_path,
                                    converter, allow_partial, _depth + 1)
                continue
            if not isinstance(name, str) or not name.strip():
                continue
            quantity = _ingredient_quantity(ing)
            into.add_ingredient(name, quantity.scaled(scale) if quantity else None, converter)
    finally:
        seen.pop(key, None)
