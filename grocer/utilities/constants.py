from typing import Final

STORE_FILENAME: Final[str] = ".shopping_list.txt"
STORE_FIELD_SEPARATOR: Final[str] = "\t"
STORE_HEADER: Final[str] = (
    "# Shopping List\n"
    "# Format: path<TAB>name<TAB>scale<TAB>kind<TAB>quantity\n"
    "\n"
)

CUSTOM_ITEMS_CATEGORY: Final[str] = "Custom Items"
CUSTOM_PATH_PREFIX: Final[str] = "custom:"
OTHER_CATEGORY: Final[str] = "other"

UNLIMITED_QUANTITIES: Final[tuple[str, ...]] = ("unlim", "unlimited")

DEFAULT_AISLE_FILE: Final[str] = "config/aisle.conf"
DEFAULT_PANTRY_FILE: Final[str] = "config/pantry.json"
RECIPE_SUFFIX: Final[str] = ".json"

UNIT_ALIASES: Final[dict[str, str]] = {
    "gram": "g", "grams": "g", "gr": "g",
    "kilogram": "kg", "kilograms": "kg",
    "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "millilitres": "ml",
    "liter": "l", "liters": "l", "litre": "l", "litres": "l",
    "tablespoon": "tbsp", "tablespoons": "tbsp", "tbs": "tbsp",
    "teaspoon": "tsp", "teaspoons": "tsp",
    "cups": "cup",
    "piece": "pcs", "pieces": "pcs", "pc": "pcs",
    "clove": "cloves",
}
