"""Models for AI recipe generation results."""

from decimal import Decimal

from pydantic import BaseModel, Field


class GeneratedIngredient(BaseModel):
    """Single ingredient line proposed by the model."""

    name: str = Field(min_length=1)
    quantity: Decimal = Field(ge=0)
    unit: str = ""


class GeneratedRecipe(BaseModel):
    """Recipe proposed by the model."""

    name: str
    description: str = ""
    ingredients: list[GeneratedIngredient]


class GeneratedRecipes(BaseModel):
    """Structured output for recipe generation."""

    recipes: list[GeneratedRecipe]
