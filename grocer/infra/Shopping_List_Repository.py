"""Shopping list reference store: a flat, tab-separated text file under the base path.

Each record line is ``path<TAB>name<TAB>scale<TAB>kind<TAB>quantity``. Every call
re-reads the whole file; mutations rewrite it through a temp file in the same
directory. Mutations are serialized per file within this process only; two
processes writing the same file still race (last writer wins).
"""
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from grocer.domain.ShoppingListItem import ItemKind, ShoppingListItem
from grocer.domain.errors import StorageError
from grocer.infra.paths import store_file
from grocer.utilities.constants import STORE_FIELD_SEPARATOR, STORE_HEADER

logger = logging.getLogger(__name__)

_LOCKS: Dict[str, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = _LOCKS[key] = threading.Lock()
        return lock


def _parse_scale(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return 1.0


def parse_line(line: str) -> Optional[ShoppingListItem]:
    """Parse one record line; None for blanks, comments and lines with too few fields."""
    line = line.strip()
    if not line or line.startswith('#'):
        return None
    parts = line.split(STORE_FIELD_SEPARATOR)
    if len(parts) < 3:
        return None
    kind = ItemKind.parse(parts[3]) if len(parts) > 3 else ItemKind.RECIPE
    quantity = parts[4] if len(parts) > 4 and parts[4].strip() else None
    return ShoppingListItem(
        path=parts[0],
        name=parts[1],
        scale=_parse_scale(parts[2]),
        kind=kind,
        quantity=quantity,
    )


def format_line(item: ShoppingListItem) -> str:
    return STORE_FIELD_SEPARATOR.join([
        item.path,
        item.name,
        repr(float(item.scale)),
        item.kind.value,
        item.quantity or "",
    ])


class ShoppingListStore:
    def __init__(self, base_path: Union[str, Path]):
        self.file_path = store_file(base_path)

    def load(self) -> List[ShoppingListItem]:
        '''
        Returns the stored items in insertion order; a missing file is an empty list.
        '''
        if not self.file_path.exists():
            return []
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read shopping list %s: %s", self.file_path, e)
            raise StorageError(f"Failed to read shopping list: {e}") from e
        items = []
        for line in content.splitlines():
            item = parse_line(line)
            if item is not None:
                items.append(item)
        return items

    def save(self, items: Sequence[ShoppingListItem]) -> None:
        '''
        Rewrites the whole file: header, then one record per item in order.
        '''
        content = STORE_HEADER + "".join(format_line(item) + "\n" for item in items)
        directory = self.file_path.parent
        tmp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(directory), prefix=".shopping_list_", suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                tmp.write(content)
            shutil.move(tmp_path, str(self.file_path))
            tmp_path = None
        except OSError as e:
            logger.error("Failed to write shopping list %s: %s", self.file_path, e)
            raise StorageError(f"Failed to write shopping list: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def add(self, item: ShoppingListItem) -> None:
        # Always a new entry so the same recipe can be listed with different scales
        with _lock_for(self.file_path):
            items = self.load()
            items.append(item)
            self.save(items)

    def remove(self, path: str) -> None:
        # Only the first match goes, duplicates are removed one call at a time
        with _lock_for(self.file_path):
            items = self.load()
            for idx, item in enumerate(items):
                if item.path == path:
                    del items[idx]
                    break
            self.save(items)

    def clear(self) -> None:
        with _lock_for(self.file_path):
            self.save([])


__all__ = ['ShoppingListStore', 'parse_line', 'format_line']
