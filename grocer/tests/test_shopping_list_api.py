import json
import re
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from grocer.api.api_run import app
from grocer.utilities.config import AppSettings, get_settings


class TestShoppingListAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name)
        (self.base / "Pancakes.json").write_text(json.dumps({"name": "Pancakes", "ingredients": [
            {"name": "Flour", "default_quantity": 200, "unit": "g"},
            {"name": "Milk", "default_quantity": 300, "unit": "ml"},
        ]}), encoding="utf-8")
        (self.base / "aisle.conf").write_text("[baking]\nflour\n[dairy]\nmilk\n", encoding="utf-8")
        (self.base / "pantry.json").write_text(json.dumps([{"name": "Milk", "quantity": "1 l"}]),
                                               encoding="utf-8")
        settings = AppSettings(base_path=self.base, aisle_path=self.base / "aisle.conf",
                               pantry_path=self.base / "pantry.json")
        app.dependency_overrides[get_settings] = lambda: settings

    def tearDown(self):
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def test_aggregate(self):
        resp = self.client.post('/api/shopping_list', json=[
            {"recipe": "Pancakes", "scale": 2},
            {"recipe": "ignored", "name": "Paper towels", "quantity": "1 pack", "kind": "custom"},
        ])
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(data["pantry_items"], ["milk"])
        self.assertEqual([c["category"] for c in data["categories"]], ["baking", "dairy", "Custom Items"])
        self.assertEqual(data["categories"][0]["items"],
                         [{"name": "flour", "quantities": [{"value": 400.0, "unit": "g"}]}])
        # litres are not converted to millilitres, so the milk demand stays
        self.assertEqual(data["categories"][1]["items"][0]["quantities"], [{"value": 600.0, "unit": "ml"}])
        self.assertEqual(data["categories"][2]["items"],
                         [{"name": "Paper towels", "quantities": [{"value": "1 pack"}]}])

    def test_aggregate_unknown_recipe_is_bad_request(self):
        resp = self.client.post('/api/shopping_list', json=[{"recipe": "Waffles"}])
        self.assertEqual(resp.status_code, 400)

    def test_aggregate_non_finite_quantity_is_bad_request(self):
        (self.base / "Odd.json").write_text(
            '{"ingredients": [{"name": "a", "default_quantity": NaN}]}', encoding="utf-8")
        resp = self.client.post('/api/shopping_list', json=[{"recipe": "Odd"}])
        self.assertEqual(resp.status_code, 400)

    def test_add_list_remove_clear(self):
        resp = self.client.post('/api/shopping_list/add', json={"path": "Pancakes", "name": "Pancakes", "scale": 2})
        self.assertEqual(resp.status_code, 200, resp.text)
        resp = self.client.post('/api/shopping_list/add',
                                json={"name": "Bread Rolls!", "kind": "custom", "quantity": "6"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertRegex(resp.json()["path"], r"^custom:bread-rolls-\d+$")

        items = self.client.get('/api/shopping_list/items').json()
        self.assertEqual(items[0], {"path": "Pancakes", "name": "Pancakes", "scale": 2.0,
                                    "kind": "recipe", "quantity": None})
        self.assertEqual(items[1]["kind"], "custom")
        self.assertEqual(items[1]["quantity"], "6")

        current = self.client.get('/api/shopping_list/current').json()
        self.assertEqual(current["categories"][-1]["items"],
                         [{"name": "Bread Rolls!", "quantities": [{"value": "6"}]}])

        self.client.post('/api/shopping_list/remove', json={"path": "Pancakes"})
        self.assertEqual(len(self.client.get('/api/shopping_list/items').json()), 1)

        self.client.post('/api/shopping_list/clear')
        self.assertEqual(self.client.get('/api/shopping_list/items').json(), [])

    def test_add_requires_name(self):
        resp = self.client.post('/api/shopping_list/add', json={"path": "Pancakes"})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/shopping_list/add', json={"name": " "})
        self.assertEqual(resp.status_code, 400)

    def test_unknown_kind_is_recipe(self):
        self.client.post('/api/shopping_list/add', json={"path": "Pancakes", "name": "P", "kind": "weird"})
        self.assertEqual(self.client.get('/api/shopping_list/items').json()[0]["kind"], "recipe")

    def test_pdf_export(self):
        self.client.post('/api/shopping_list/add', json={"path": "Pancakes", "name": "Pancakes"})
        resp = self.client.get('/api/shopping_list/pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_stored_list_with_missing_recipe(self):
        self.client.post('/api/shopping_list/add', json={"path": "Gone", "name": "Gone"})
        self.assertEqual(self.client.get('/api/shopping_list/current').status_code, 400)


def test_health():
    assert TestClient(app).get('/health').json() == {"status": "ok"}


def test_settings_from_env(tmp_path, monkeypatch):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "aisle.conf").write_text("[x]\ny\n", encoding="utf-8")
    monkeypatch.setenv("GROCER_BASE_PATH", str(tmp_path))
    monkeypatch.delenv("GROCER_AISLE_PATH", raising=False)
    monkeypatch.setenv("GROCER_PANTRY_PATH", " ")
    settings = AppSettings.from_env()
    assert settings.base_path == tmp_path.resolve()
    assert settings.aisle_path == tmp_path.resolve() / "config" / "aisle.conf"
    assert settings.pantry_path is None
    assert re.search(r"aisle\.conf$", str(get_settings().aisle_path))
