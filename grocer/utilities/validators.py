"""
Input validation schemas using Pydantic for the shopping list API.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from grocer.domain.ShoppingListItem import ItemKind


class RecipeRequest(BaseModel):
    """One entry of an aggregation request."""
    recipe: str
    scale: Optional[float] = None
    kind: ItemKind = ItemKind.RECIPE
    name: Optional[str] = None
    quantity: Optional[str] = None

    @field_validator('kind', mode='before')
    @classmethod
    def parse_kind(cls, v):
        """Case-insensitive kind; unknown or missing values mean a recipe."""
        return ItemKind.parse(v)

    def display_name(self) -> str:
        '''Custom entries show their name, falling back to the recipe field.'''
        return self.name if self.name is not None else self.recipe

    def scaled_reference(self) -> str:
        if self.scale is None:
            return self.recipe
        return f"{self.recipe}:{self.scale}"


class AddItemRequest(BaseModel):
    """Schema for adding a reference to the stored shopping list."""
    path: Optional[str] = None
    name: str
    scale: float = Field(default=1.0)
    kind: ItemKind = ItemKind.RECIPE
    quantity: Optional[str] = None

    @field_validator('kind', mode='before')
    @classmethod
    def parse_kind(cls, v):
        return ItemKind.parse(v)

    @field_validator('scale', mode='before')
    @classmethod
    def default_scale(cls, v):
        """A null scale means the default."""
        return 1.0 if v is None else v

    @field_validator('quantity', mode='before')
    @classmethod
    def blank_quantity(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RemoveItemRequest(BaseModel):
    path: str
