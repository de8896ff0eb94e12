"""ShoppingList result: categorized items to purchase plus the pantry items that covered demand."""
from typing import Any, Dict, List, Optional

from grocer.domain.Ingredient import Quantity


class ShoppingListEntry:
    def __init__(self, name: str, quantities: Optional[List[Quantity]] = None):
        self.name = name
        self.quantities = list(quantities or [])

    def __str__(self) -> str:
        qty = ", ".join(str(q) for q in self.quantities)
        return f"{self.name} - {qty}" if qty else self.name

    __repr__ = __str__

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "quantities": [q.to_dict() for q in self.quantities]}


class ShoppingCategory:
    def __init__(self, category: str, items: Optional[List[ShoppingListEntry]] = None):
        self.category = category
        self.items = list(items or [])

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "items": [item.to_dict() for item in self.items]}


class ShoppingList:
    def __init__(self, categories: Optional[List[ShoppingCategory]] = None,
                 pantry_items: Optional[List[str]] = None):
        self.categories = list(categories or [])
        self.pantry_items = list(pantry_items or [])

    def __str__(self) -> str:
        lines = []
        for category in self.categories:
            lines.append(f"[{category.category}]")
            lines.extend(f"\t{item}" for item in category.items)
        return "Shopping List\n" + "\n".join(lines)

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self) -> Dict[str, Any]:
        '''JSON shape returned by the API.'''
        return {
            "categories": [c.to_dict() for c in self.categories],
            "pantry_items": list(self.pantry_items),
        }
