"""Shopping list builder.

Provides aggregate(entries, settings): merge recipe demand, take the pantry into
account, group by aisle and append custom items as their own trailing category.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from grocer.domain.Aisle import AisleConfig
from grocer.domain.Ingredient import DEFAULT_CONVERTER, IngredientList, Quantity, UnitConverter
from grocer.domain.Pantry import PantryConfig, PantryEntry
from grocer.domain.ShoppingList import ShoppingCategory, ShoppingList, ShoppingListEntry
from grocer.domain.ShoppingListItem import ItemKind
from grocer.domain.errors import ExtractionError
from grocer.infra.Aisle_Repository import reading_from_aisle
from grocer.infra.Pantry_Repository import reading_from_pantry
from grocer.infra.Recipe_Repository import extract_ingredients
from grocer.utilities.config import AppSettings
from grocer.utilities.constants import CUSTOM_ITEMS_CATEGORY, UNLIMITED_QUANTITIES
from grocer.utilities.validators import RecipeRequest

logger = logging.getLogger(__name__)


def is_pantry_available(entry: PantryEntry) -> bool:
    """True when the pantry entry covers demand: no quantity, unlimited, or a positive amount."""
    qty_str = entry.quantity_string()
    if qty_str is None:
        # No quantity specified means we have it
        return True
    if qty_str in UNLIMITED_QUANTITIES:
        return True
    parsed = entry.parsed_quantity()
    return parsed is not None and parsed[0] > 0


def find_pantry_items(ingredients: IngredientList, pantry: PantryConfig) -> List[str]:
    pantry_items: List[str] = []
    for name in ingredients.names():
        match = pantry.find_ingredient(name)
        if match is not None and is_pantry_available(match[1]):
            pantry_items.append(name)
    return pantry_items


def collect_ingredients(entries: Sequence[RecipeRequest], base_path,
                        converter: UnitConverter = DEFAULT_CONVERTER) -> IngredientList:
    """Merge every recipe entry into one IngredientList; custom entries are skipped."""
    ingredients = IngredientList()
    seen: Dict[str, int] = {}
    for entry in entries:
        if entry.kind is ItemKind.CUSTOM:
            continue
        reference = entry.scaled_reference()
        try:
            extract_ingredients(reference, ingredients, seen, base_path, converter, False)
        except ExtractionError as e:
            logger.error("Error processing recipe: %s", e)
            raise
    return ingredients


def build_custom_category(entries: Sequence[RecipeRequest]) -> Optional[ShoppingCategory]:
    items = [
        ShoppingListEntry(entry.display_name(),
                          [Quantity(entry.quantity)] if entry.quantity is not None else [])
        for entry in entries if entry.kind is ItemKind.CUSTOM
    ]
    if not items:
        return None
    return ShoppingCategory(CUSTOM_ITEMS_CATEGORY, items)


def _as_requests(entries: Sequence[Union[RecipeRequest, Dict[str, Any]]]) -> List[RecipeRequest]:
    return [e if isinstance(e, RecipeRequest) else RecipeRequest.model_validate(e) for e in entries]


def aggregate(entries: Sequence[Union[RecipeRequest, Dict[str, Any]]], settings: AppSettings, *,
              converter: UnitConverter = DEFAULT_CONVERTER) -> ShoppingList:
    """Compute the categorized shopping list for a set of recipe and custom entries.

    Args:
        entries: aggregation entries (RecipeRequest or equivalent dicts), in display order.
        settings: base path for recipes plus the optional aisle and pantry files.
        converter: unit-name normalization passed through to the ingredient helpers.

    Returns:
        ShoppingList with recipe-derived categories, a trailing "Custom Items"
        category when custom entries exist, and the pantry items that covered demand.

    Raises:
        ExtractionError: a recipe entry could not be resolved; nothing partial is returned.
    """
    requests = _as_requests(entries)
    ingredients = collect_ingredients(requests, settings.base_path, converter)

    aisle: AisleConfig = reading_from_aisle(settings.aisle_path)
    pantry: Optional[PantryConfig] = reading_from_pantry(settings.pantry_path)

    ingredients = aisle.resolve_common_names(ingredients, converter)

    pantry_items: List[str] = []
    if pantry is not None:
        pantry_items = find_pantry_items(ingredients, pantry)
        final_list = ingredients.subtract_pantry(pantry, converter)
    else:
        final_list = ingredients

    categories: List[ShoppingCategory] = []
    for category, items in final_list.categorize(aisle):
        shopping_items = [ShoppingListEntry(name, quantities) for name, quantities in items]
        if shopping_items:
            categories.append(ShoppingCategory(category, shopping_items))

    custom = build_custom_category(requests)
    if custom is not None:
        categories.append(custom)

    logger.debug("Aggregated %d entries into %d categories (%d pantry items)",
                 len(requests), len(categories), len(pantry_items))
    return ShoppingList(categories, pantry_items)


__all__ = ['aggregate', 'collect_ingredients', 'find_pantry_items', 'is_pantry_available',
           'build_custom_category']
