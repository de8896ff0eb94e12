"""Pantry configuration: what is already at home, parsed leniently from JSON.

Accepted documents are either a list of items or an object mapping a section
name (e.g. "fridge") to a list of items. Items look like::

    {"name": "Flour", "default_quantity": 500, "unit": "g"}
    {"name": "Salt", "quantity": "unlimited"}
    {"name": "Olive oil"}
"""
import json
import re
from typing import Any, Dict, List, Optional, Tuple

from grocer.domain.ParseResult import ParseResult

_QUANTITY_RE = re.compile(r'^\s*([+-]?\d+(?:\.\d+)?)(?:\s*/\s*(\d+(?:\.\d+)?))?\s*%?\s*(.*?)\s*$')


def _normalize_name(name: str) -> str:
    """Normalize an ingredient name for matching (case + basic plural handling)."""
    if not isinstance(name, str):
        return ""
    n = " ".join(name.strip().lower().split())
    # basic plural -> singular heuristics
    if n.endswith('ies') and len(n) > 3:
        n = n[:-3] + 'y'
    elif n.endswith('oes') and len(n) > 3:  # tomatoes -> tomato
        n = n[:-3] + 'o'
    elif n.endswith(('sses', 'xes', 'zes', 'ches', 'shes')) and len(n) > 4:  # peaches -> peach
        n = n[:-2]
    elif n.endswith('s') and not n.endswith('ss') and len(n) > 1:  # dates -> date
        n = n[:-1]
    return n


def parse_quantity(text: str) -> Optional[Tuple[float, str]]:
    '''Parse "500 g", "1.5kg", "1/2 cup" or "2" into (value, unit).'''
    if not isinstance(text, str):
        return None
    m = _QUANTITY_RE.match(text)
    if not m:
        return None
    value = float(m.group(1))
    if m.group(2) is not None:
        denominator = float(m.group(2))
        if denominator == 0:
            return None
        value = value / denominator
    return value, m.group(3)


class PantryEntry:
    def __init__(self, name: str, quantity: Optional[str] = None, default_quantity: Any = None,
                 unit: str = "", section: str = ""):
        self.name = name
        self.quantity = quantity
        self.default_quantity = default_quantity
        self.unit = unit or ""
        self.section = section

    def quantity_string(self) -> Optional[str]:
        '''The stock as written, or None when the entry carries no quantity at all.'''
        if isinstance(self.quantity, str):
            return self.quantity.strip()
        if self.default_quantity is None or self.default_quantity == "":
            return None
        text = f"{self.default_quantity:g}" if isinstance(self.default_quantity, (int, float)) \
            else str(self.default_quantity).strip()
        return f"{text} {self.unit}".strip() if self.unit else text

    def parsed_quantity(self) -> Optional[Tuple[float, str]]:
        qty = self.quantity_string()
        return parse_quantity(qty) if qty is not None else None

    def __str__(self) -> str:
        return f"{self.name} - {self.quantity_string() or 'unlimited'}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any], section: str = "") -> "PantryEntry":
        '''Creates a PantryEntry from a dictionary. Ignores unknown keys.'''
        quantity = data.get("quantity")
        if quantity is not None and not isinstance(quantity, str):
            quantity = str(quantity)
        return PantryEntry(
            name=str(data.get("name") or "").strip(),
            quantity=quantity,
            default_quantity=data.get("default_quantity"),
            unit=str(data.get("unit") or ""),
            section=section,
        )


class PantryConfig:
    def __init__(self, items: Optional[List[PantryEntry]] = None):
        self.items: List[PantryEntry] = []
        self._index: Dict[str, PantryEntry] = {}
        for item in items or []:
            self.add_item(item)

    def add_item(self, item: PantryEntry):
        '''
        Adds an entry; the first entry for a given name wins lookups.
        '''
        self.items.append(item)
        self._index.setdefault(_normalize_name(item.name), item)

    def get_items(self) -> List[PantryEntry]:
        return self.items

    def find_ingredient(self, name: str) -> Optional[Tuple[str, PantryEntry]]:
        entry = self._index.get(_normalize_name(name))
        if entry is None:
            return None
        return entry.name, entry

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Pantry:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()


def parse_pantry_lenient(text: str) -> ParseResult[Optional[PantryConfig]]:
    """Parse pantry JSON. Fatal problems give output None; bad items are skipped with a warning."""
    result: ParseResult[Optional[PantryConfig]] = ParseResult(None)
    try:
        data = json.loads(text) if (text or "").strip() else []
    except json.JSONDecodeError as e:
        result.warn(f"invalid pantry JSON: {e.msg}", e.lineno)
        return result

    if isinstance(data, list):
        sections = [("", data)]
    elif isinstance(data, dict):
        sections = []
        for section, items in data.items():
            if not isinstance(items, list):
                result.warn(f"section '{section}' is not a list, skipped")
                continue
            sections.append((str(section), items))
    else:
        result.warn("pantry document must be a list or an object of sections")
        return result

    pantry = PantryConfig()
    for section, items in sections:
        for idx, item in enumerate(items):
            where = f"{section}[{idx}]" if section else f"[{idx}]"
            if not isinstance(item, dict):
                result.warn(f"pantry item {where} is not an object, skipped")
                continue
            entry = PantryEntry.from_dict(item, section)
            if not entry.name:
                result.warn(f"pantry item {where} has no name, skipped")
                continue
            pantry.add_item(entry)
    result.output = pantry
    return result


__all__ = ['PantryEntry', 'PantryConfig', 'parse_pantry_lenient', 'parse_quantity']
