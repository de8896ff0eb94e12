"""Operations over the stored shopping list references."""
import logging
import re
import time
from typing import List, Optional

from grocer.domain.ShoppingList import ShoppingList
from grocer.domain.ShoppingListItem import ItemKind, ShoppingListItem
from grocer.domain.errors import ClientInputError
from grocer.infra.Shopping_List_Repository import ShoppingListStore
from grocer.logic.shopping.list_builder import aggregate
from grocer.utilities.config import AppSettings
from grocer.utilities.constants import CUSTOM_PATH_PREFIX
from grocer.utilities.validators import AddItemRequest, RecipeRequest

logger = logging.getLogger(__name__)

_SLUG_DROP = re.compile(r'[^\w\s-]')
_WHITESPACE = re.compile(r'\s+')


def slugify(name: str) -> str:
    kept = _SLUG_DROP.sub('', name or '').replace('_', '')
    return _WHITESPACE.sub('-', kept.strip()).lower()


def generate_custom_path(name: str, now_ms: Optional[int] = None) -> str:
    """custom:<slug>-<milliseconds since epoch>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{CUSTOM_PATH_PREFIX}{slugify(name)}-{now_ms}"


def list_references(settings: AppSettings) -> List[ShoppingListItem]:
    return ShoppingListStore(settings.base_path).load()


def add_reference(request: AddItemRequest, settings: AppSettings) -> ShoppingListItem:
    provided_path = (request.path or '').strip()
    if request.kind is ItemKind.CUSTOM and not provided_path:
        path = generate_custom_path(request.name)
    else:
        path = provided_path

    if not path:
        if not request.name.strip():
            raise ClientInputError("A name is required when no path is given")
        path = generate_custom_path(request.name)

    item = ShoppingListItem(
        path=path,
        name=request.name,
        scale=request.scale,
        kind=request.kind,
        quantity=request.quantity,
    )
    ShoppingListStore(settings.base_path).add(item)
    logger.info("Added %s to shopping list", item.path)
    return item


def remove_reference(path: str, settings: AppSettings) -> None:
    ShoppingListStore(settings.base_path).remove(path)
    logger.info("Removed %s from shopping list", path)


def clear_references(settings: AppSettings) -> None:
    ShoppingListStore(settings.base_path).clear()
    logger.info("Cleared shopping list")


def as_request(item: ShoppingListItem) -> RecipeRequest:
    return RecipeRequest(
        recipe=item.path,
        scale=item.scale,
        kind=item.kind,
        name=item.name,
        quantity=item.quantity,
    )


def aggregate_stored(settings: AppSettings) -> ShoppingList:
    """Aggregate everything currently on the stored list."""
    return aggregate([as_request(item) for item in list_references(settings)], settings)


__all__ = ['generate_custom_path', 'slugify', 'list_references', 'add_reference',
           'remove_reference', 'clear_references', 'aggregate_stored', 'as_request']
