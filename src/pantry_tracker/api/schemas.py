"""Request and response models for the HTTP API."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from pantry_tracker.domain.confirmation import ConfirmationResult, Shortage
from pantry_tracker.domain.errors import ConfirmationError
from pantry_tracker.domain.inventory import FoodItem
from pantry_tracker.domain.recipes import Recipe
from pantry_tracker.services.stock import StockCheck

Quantity = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class FoodItemIn(BaseModel):
    """Payload to create or replace an inventory item."""

    name: str = Field(min_length=1, max_length=200)
    quantity: Decimal = Field(ge=0)
    unit: str = Field(min_length=1, max_length=50)
    expires_at: datetime | None = None


class FoodItemOut(BaseModel):
    """Inventory item read model."""

    id: UUID
    name: str
    quantity: Quantity
    unit: str
    expires_at: datetime | None

    @classmethod
    def from_domain(cls, item: FoodItem) -> "FoodItemOut":
        return cls(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            expires_at=item.expires_at,
        )


class IngredientOut(BaseModel):
    name: str
    quantity: Quantity
    unit: str


class RecipeOut(BaseModel):
    """Recipe read model."""

    id: UUID
    title: str
    description: str
    dish_type: str
    ingredients: list[IngredientOut]

    @classmethod
    def from_domain(cls, recipe: Recipe) -> "RecipeOut":
        return cls(
            id=recipe.id,
            title=recipe.title,
            description=recipe.description,
            dish_type=recipe.dish_type.value,
            ingredients=[
                IngredientOut(name=item.name, quantity=item.quantity, unit=item.unit)
                for item in recipe.ingredients
            ],
        )


class GenerateRecipesRequest(BaseModel):
    dish_type: str
    number_of_persons: int = Field(ge=1, le=100)
    count: int | None = Field(default=None, ge=1)


class ConfirmRecipesRequest(BaseModel):
    recipe_ids: list[UUID] = Field(min_length=1)


class InventoryUpdateOut(BaseModel):
    product_name: str
    previous_quantity: Quantity
    used_quantity: Quantity
    new_quantity: Quantity
    unit: str


class ConfirmRecipesResponse(BaseModel):
    """Result of a recipe confirmation."""

    success: bool
    message: str
    confirmed_recipe_count: int
    inventory_updates: list[InventoryUpdateOut]

    @classmethod
    def from_domain(cls, result: ConfirmationResult) -> "ConfirmRecipesResponse":
        return cls(
            success=result.success,
            message=result.message,
            confirmed_recipe_count=result.confirmed_recipe_count,
            inventory_updates=[
                InventoryUpdateOut(
                    product_name=update.product_name,
                    previous_quantity=update.previous_quantity,
                    used_quantity=update.used_quantity,
                    new_quantity=update.new_quantity,
                    unit=update.unit,
                )
                for update in result.inventory_updates
            ],
        )


class ShortageOut(BaseModel):
    name: str
    required: Quantity
    available: Quantity
    unit: str

    @classmethod
    def from_domain(cls, shortage: Shortage) -> "ShortageOut":
        return cls(
            name=shortage.name,
            required=shortage.required,
            available=shortage.available,
            unit=shortage.unit,
        )


class StockCheckResponse(BaseModel):
    """Dry-run result for a set of recipes."""

    sufficient: bool
    missing: list[str]
    insufficient: list[ShortageOut]

    @classmethod
    def from_domain(cls, check: StockCheck) -> "StockCheckResponse":
        return cls(
            sufficient=check.sufficient,
            missing=list(check.missing),
            insufficient=[ShortageOut.from_domain(item) for item in check.insufficient],
        )


class ConfirmationProblem(BaseModel):
    """Problem body returned when recipes cannot be confirmed."""

    title: str = "Recipe Confirmation Failed"
    detail: str
    code: str
    missing_ids: list[UUID] | None = None
    names: list[str] | None = None
    shortages: list[ShortageOut] | None = None

    @classmethod
    def from_error(cls, exc: ConfirmationError) -> "ConfirmationProblem":
        return cls(detail=str(exc), code=exc.code, **exc.details())
