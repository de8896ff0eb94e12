"""ShoppingListItem domain entity: a stored reference to a recipe or a custom entry."""
from enum import Enum
from typing import Any, Dict, Optional


class ItemKind(str, Enum):
    RECIPE = "recipe"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> "ItemKind":
        '''Case-insensitive parse; anything unknown or missing is a recipe.'''
        if isinstance(value, ItemKind):
            return value
        text = str(value or "").strip().lower()
        for kind in cls:
            if kind.value == text:
                return kind
        return cls.RECIPE


class ShoppingListItem:
    def __init__(self, path: str, name: str, scale: float = 1.0,
                 kind: ItemKind = ItemKind.RECIPE, quantity: Optional[str] = None):
        self.path = path
        self.name = name
        self.scale = scale
        self.kind = ItemKind.parse(kind)
        self.quantity = quantity

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShoppingListItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        parts = [f"{self.name} ({self.kind.value}) x{self.scale:g}", self.path]
        if self.quantity:
            parts.append(f"Qty: {self.quantity}")
        return " - ".join(parts)

    __repr__ = __str__

    def to_dict(self) -> Dict[str, Any]:
        '''Converts the item to a dictionary for JSON responses.'''
        return {
            "path": self.path,
            "name": self.name,
            "scale": self.scale,
            "kind": self.kind.value,
            "quantity": self.quantity,
        }
