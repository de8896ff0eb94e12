import os
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

from grocer.domain.ShoppingListItem import ItemKind, ShoppingListItem
from grocer.domain.errors import StorageError
from grocer.infra.Shopping_List_Repository import ShoppingListStore


class TestShoppingListStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name)
        self.store = ShoppingListStore(self.base)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, content: str):
        with open(self.base / ".shopping_list.txt", "w", encoding="utf-8") as f:
            f.write(content)

    def test_load_missing_file_is_empty(self):
        self.assertEqual(self.store.load(), [])

    def test_add_then_load_round_trip(self):
        item = ShoppingListItem("Breakfast/Pancakes.json", "Pancakes", 2.5, ItemKind.RECIPE)
        custom = ShoppingListItem("custom:milk-1", "Milk", 1.0, ItemKind.CUSTOM, "2 l")
        self.store.add(item)
        self.store.add(custom)
        loaded = self.store.load()
        self.assertEqual(loaded, [item, custom])
        self.assertEqual(loaded[-1].quantity, "2 l")
        self.assertEqual(loaded[-1].kind, ItemKind.CUSTOM)

    def test_add_keeps_duplicates_in_order(self):
        self.store.add(ShoppingListItem("pie", "Pie", 1.0))
        self.store.add(ShoppingListItem("pie", "Pie", 3.0))
        scales = [i.scale for i in self.store.load()]
        self.assertEqual(scales, [1.0, 3.0])

    def test_remove_only_first_match(self):
        self.store.add(ShoppingListItem("p", "First", 1.0))
        self.store.add(ShoppingListItem("q", "Other", 1.0))
        self.store.add(ShoppingListItem("p", "Second", 2.0))
        self.store.remove("p")
        loaded = self.store.load()
        self.assertEqual([(i.path, i.name) for i in loaded], [("q", "Other"), ("p", "Second")])

    def test_remove_missing_path_is_noop(self):
        self.store.add(ShoppingListItem("p", "Pie", 1.0))
        self.store.remove("nope")
        self.assertEqual(len(self.store.load()), 1)

    def test_clear(self):
        self.store.add(ShoppingListItem("p", "Pie", 1.0))
        self.store.clear()
        self.assertEqual(self.store.load(), [])
        with open(self.base / ".shopping_list.txt", encoding="utf-8") as f:
            self.assertTrue(f.read().startswith("# Shopping List\n"))

    def test_save_writes_header_and_records(self):
        self.store.save([ShoppingListItem("p", "Pie", 2.0, ItemKind.CUSTOM, "1 whole")])
        with open(self.base / ".shopping_list.txt", encoding="utf-8") as f:
            lines = f.read().splitlines()
        self.assertEqual(lines[0], "# Shopping List")
        self.assertEqual(lines[1], "# Format: path<TAB>name<TAB>scale<TAB>kind<TAB>quantity")
        self.assertEqual(lines[3], "p\tPie\t2.0\tcustom\t1 whole")

    def test_malformed_lines_are_skipped(self):
        self._write(
            "# comment\n"
            "\n"
            "only-two\tfields\n"
            "a\tApple pie\tnot-a-number\n"
            "b\tBread\t1.5\tCUSTOM\t  \n"
            "c\tCake\t2\tsomething-else\t3 pieces\n"
        )
        items = self.store.load()
        self.assertEqual([i.path for i in items], ["a", "b", "c"])
        self.assertEqual(items[0].scale, 1.0)
        self.assertEqual(items[0].kind, ItemKind.RECIPE)
        self.assertIsNone(items[0].quantity)
        self.assertEqual(items[1].kind, ItemKind.CUSTOM)
        self.assertIsNone(items[1].quantity)
        self.assertEqual(items[2].kind, ItemKind.RECIPE)
        self.assertEqual(items[2].quantity, "3 pieces")

    def test_write_failure_raises_storage_error(self):
        with mock.patch("grocer.infra.Shopping_List_Repository.tempfile.mkstemp",
                        side_effect=PermissionError("denied")):
            with self.assertRaises(StorageError):
                self.store.add(ShoppingListItem("p", "Pie", 1.0))

    def test_read_failure_raises_storage_error(self):
        self._write("p\tPie\t1.0\n")
        with mock.patch("builtins.open", side_effect=PermissionError("denied")):
            with self.assertRaises(StorageError):
                self.store.load()

    def test_no_temp_files_left_behind(self):
        self.store.add(ShoppingListItem("p", "Pie", 1.0))
        self.assertEqual(sorted(os.listdir(self.base)), [".shopping_list.txt"])

    def test_concurrent_adds_are_not_lost(self):
        def add(i):
            ShoppingListStore(self.base).add(ShoppingListItem(f"r{i}", f"Recipe {i}", 1.0))

        threads = [threading.Thread(target=add, args=(i,)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        loaded = self.store.load()
        self.assertEqual(len(loaded), 50)
        self.assertEqual(sorted(i.path for i in loaded), sorted(f"r{i}" for i in range(50)))
