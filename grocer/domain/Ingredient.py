"""Ingredient quantities and the running IngredientList built during aggregation."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple, Union

from grocer.utilities.constants import OTHER_CATEGORY, UNIT_ALIASES, UNLIMITED_QUANTITIES

if TYPE_CHECKING:
    from grocer.domain.Aisle import AisleConfig
    from grocer.domain.Pantry import PantryConfig


class UnitConverter:
    """Unit-name normalization only; quantities in different units are never converted."""

    def __init__(self, aliases: Optional[Dict[str, str]] = None):
        self.aliases = dict(UNIT_ALIASES if aliases is None else aliases)

    def normalize(self, unit: Optional[str]) -> str:
        u = (unit or "").strip().lower()
        return self.aliases.get(u, u)

    def same_unit(self, a: Optional[str], b: Optional[str]) -> bool:
        return self.normalize(a) == self.normalize(b)


DEFAULT_CONVERTER = UnitConverter()


class Quantity:
    def __init__(self, value: Union[float, str], unit: Optional[str] = None):
        self.value = value
        self.unit = unit or None

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)

    def scaled(self, factor: float) -> "Quantity":
        if self.is_numeric:
            return Quantity(float(self.value) * factor, self.unit)
        return Quantity(self.value, self.unit)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value == other.value and self.unit == other.unit

    def __str__(self) -> str:
        value = f"{self.value:g}" if self.is_numeric else str(self.value)
        return f"{value} {self.unit}" if self.unit else value

    __repr__ = __str__

    def to_dict(self):
        d = {"value": self.value}
        if self.unit:
            d["unit"] = self.unit
        return d


class IngredientList:
    """Insertion-ordered ingredient name -> quantities, matched case-insensitively."""

    def __init__(self):
        self._names: Dict[str, str] = {}
        self._quantities: Dict[str, List[Quantity]] = {}

    @staticmethod
    def _key(name: str) -> str:
        return (name or "").strip().lower()

    def add_ingredient(self, name: str, quantity: Optional[Quantity] = None,
                       converter: UnitConverter = DEFAULT_CONVERTER):
        '''
        Adds demand for an ingredient. Numeric quantities in the same unit are summed,
        anything else is kept alongside.
        '''
        key = self._key(name)
        if not key:
            return
        if key not in self._names:
            self._names[key] = name.strip()
            self._quantities[key] = []
        if quantity is None:
            return
        bucket = self._quantities[key]
        if quantity.is_numeric:
            for i, existing in enumerate(bucket):
                if existing.is_numeric and converter.same_unit(existing.unit, quantity.unit):
                    bucket[i] = Quantity(float(existing.value) + float(quantity.value), existing.unit)
                    return
        bucket.append(quantity)

    def get(self, name: str) -> Optional[List[Quantity]]:
        quantities = self._quantities.get(self._key(name))
        return list(quantities) if quantities is not None else None

    def names(self) -> List[str]:
        return list(self._names.values())

    def __contains__(self, name: str) -> bool:
        return self._key(name) in self._names

    def __iter__(self) -> Iterator[Tuple[str, List[Quantity]]]:
        for key, display in self._names.items():
            yield display, list(self._quantities[key])

    def __len__(self) -> int:
        return len(self._names)

    def __str__(self) -> str:
        items_str = ",\n\t".join(
            f"{name}: {', '.join(str(q) for q in qs) or '-'}" for name, qs in self
        )
        return f"Ingredients:\n\t{items_str}"

    __repr__ = __str__

    def subtract_pantry(self, pantry: "PantryConfig",
                        converter: UnitConverter = DEFAULT_CONVERTER) -> "IngredientList":
        '''
        Returns a new list with pantry stock taken off the demand.
        Unlimited entries remove the ingredient; zero or unparsable stock leaves it alone.
        '''
        result = IngredientList()
        for name, quantities in self:
            match = pantry.find_ingredient(name)
            if match is None:
                result._put(name, quantities)
                continue
            _, entry = match
            qty_str = entry.quantity_string()
            if qty_str is None or qty_str in UNLIMITED_QUANTITIES:
                continue
            parsed = entry.parsed_quantity()
            if parsed is None or parsed[0] <= 0:
                result._put(name, quantities)
                continue
            if not quantities:
                continue
            stock, stock_unit = parsed
            remaining: List[Quantity] = []
            for q in quantities:
                if stock > 0 and q.is_numeric and converter.same_unit(q.unit, stock_unit):
                    left = float(q.value) - stock
                    stock = max(0.0, stock - float(q.value))
                    if left > 0:
                        remaining.append(Quantity(left, q.unit))
                else:
                    remaining.append(q)
            if remaining:
                result._put(name, remaining)
        return result

    def categorize(self, aisle: "AisleConfig") -> List[Tuple[str, List[Tuple[str, List[Quantity]]]]]:
        '''
        Groups ingredients by aisle category, in aisle-file order, with unmatched
        ingredients under "other". Categories may come back empty.
        '''
        groups: Dict[str, List[Tuple[str, List[Quantity]]]] = {c: [] for c in aisle.categories()}
        for name, quantities in self:
            category = aisle.category_for(name) or OTHER_CATEGORY
            groups.setdefault(category, []).append((name, quantities))
        return [(category, sorted(items, key=lambda i: i[0].lower()))
                for category, items in groups.items()]

    def _put(self, name: str, quantities: List[Quantity]):
        key = self._key(name)
        self._names[key] = name
        self._quantities[key] = list(quantities)
