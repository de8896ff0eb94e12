"""Aisle configuration: shop categories and the ingredient names (with synonyms) in each.

File format::

    [produce]
    tomato|tomatoes|cherry tomatoes
    potato

    [dairy]
    milk

The first name on an ingredient line is its common name; the rest are synonyms.
Blank lines and lines starting with ``#`` or ``//`` are ignored.
"""
from typing import Dict, List, Optional, Tuple

from grocer.domain.Ingredient import DEFAULT_CONVERTER, IngredientList, UnitConverter
from grocer.domain.ParseResult import ParseResult


class AisleConfig:
    def __init__(self, categories: Optional[List[Tuple[str, List[List[str]]]]] = None):
        self._categories: List[Tuple[str, List[List[str]]]] = []
        self._index: Dict[str, Tuple[str, str]] = {}
        for category, lines in categories or []:
            for names in lines:
                self._add(category, names)
            if category not in self.categories():
                self._categories.append((category, []))

    def _add(self, category: str, names: List[str]):
        for cat, lines in self._categories:
            if cat == category:
                lines.append(names)
                break
        else:
            self._categories.append((category, [names]))
        common = names[0]
        for n in names:
            self._index.setdefault(n.strip().lower(), (category, common))

    def categories(self) -> List[str]:
        return [c for c, _ in self._categories]

    def ingredients(self, category: str) -> List[List[str]]:
        for c, lines in self._categories:
            if c == category:
                return [list(names) for names in lines]
        return []

    def is_empty(self) -> bool:
        return not self._categories

    def knows(self, name: str) -> bool:
        return (name or "").strip().lower() in self._index

    def category_for(self, name: str) -> Optional[str]:
        hit = self._index.get((name or "").strip().lower())
        return hit[0] if hit else None

    def common_name(self, name: str) -> Optional[str]:
        hit = self._index.get((name or "").strip().lower())
        return hit[1] if hit else None

    def resolve_common_names(self, ingredients: IngredientList,
                             converter: UnitConverter = DEFAULT_CONVERTER) -> IngredientList:
        '''Renames every ingredient to its common name; synonyms merge into one entry.'''
        result = IngredientList()
        for name, quantities in ingredients:
            target = self.common_name(name) or name
            result.add_ingredient(target, None, converter)
            for q in quantities:
                result.add_ingredient(target, q, converter)
        return result

    def __str__(self) -> str:
        return f"AisleConfig({', '.join(self.categories())})"

    __repr__ = __str__


def parse_aisle_lenient(text: str) -> ParseResult[AisleConfig]:
    """Parse aisle text, skipping bad lines and reporting them as warnings."""
    result: ParseResult[AisleConfig] = ParseResult(AisleConfig())
    config = result.output
    current: Optional[str] = None
    for lineno, raw in enumerate((text or "").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith('#') or line.startswith('//'):
            continue
        if line.startswith('['):
            if not line.endswith(']'):
                result.warn(f"unterminated category header '{line}'", lineno)
                current = None
                continue
            name = line[1:-1].strip()
            if not name:
                result.warn("empty category name", lineno)
                current = None
                continue
            if name in config.categories():
                result.warn(f"duplicate category '{name}', merging", lineno)
            else:
                config._categories.append((name, []))
            current = name
            continue
        if current is None:
            result.warn(f"ingredient '{line}' outside of any category", lineno)
            continue
        names = []
        for part in line.split('|'):
            part = part.strip()
            if not part:
                result.warn("empty ingredient name", lineno)
                continue
            if config.knows(part) or part.lower() in (n.lower() for n in names):
                result.warn(f"ingredient '{part}' already listed", lineno)
                continue
            names.append(part)
        if names:
            config._add(current, names)
    return result


__all__ = ['AisleConfig', 'parse_aisle_lenient']
