"""Business errors raised by the pantry services.

Each confirmation failure carries a stable ``code`` and structured details so
callers can render a precise message without parsing text.
"""

from collections.abc import Sequence
from uuid import UUID

from pantry_tracker.domain.confirmation import Shortage


class ConfirmationError(Exception):
    """Base class for expected recipe confirmation failures."""

    code = "confirmation_failed"

    def details(self) -> dict[str, object]:
        """Return structured data describing the failure."""
        return {}


class RecipesNotFoundError(ConfirmationError):
    """None of the requested recipes exist for the owner."""

    code = "recipes_not_found"

    def __init__(self) -> None:
        super().__init__("No recipes found for the provided IDs.")


class PartialRecipesNotFoundError(ConfirmationError):
    """Some of the requested recipes do not exist for the owner."""

    code = "partial_recipes_not_found"

    def __init__(self, missing_ids: Sequence[UUID]) -> None:
        self.missing_ids = list(missing_ids)
        joined = ", ".join(str(recipe_id) for recipe_id in self.missing_ids)
        super().__init__(f"The following recipe IDs were not found: {joined}")

    def details(self) -> dict[str, object]:
        return {"missing_ids": [str(recipe_id) for recipe_id in self.missing_ids]}


class IngredientsMissingError(ConfirmationError):
    """Required ingredients have no matching inventory item."""

    code = "ingredients_missing"

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        super().__init__(
            "The following ingredients are not in your inventory: "
            + ", ".join(self.names)
        )

    def details(self) -> dict[str, object]:
        return {"names": list(self.names)}


class IngredientsInsufficientError(ConfirmationError):
    """Required ingredients are in inventory but in too small a quantity."""

    code = "ingredients_insufficient"

    def __init__(self, shortages: Sequence[Shortage]) -> None:
        self.shortages = list(shortages)
        summary = "; ".join(
            f"{item.name} (required: {item.required}, available: {item.available})"
            for item in self.shortages
        )
        super().__init__(
            f"Insufficient quantities for the following ingredients: {summary}"
        )

    def details(self) -> dict[str, object]:
        return {
            "shortages": [
                {
                    "name": item.name,
                    "required": item.required,
                    "available": item.available,
                    "unit": item.unit,
                }
                for item in self.shortages
            ]
        }


class RecipeGenerationError(Exception):
    """Recipes could not be generated from the current inventory."""


class DuplicateItemNameError(Exception):
    """Another inventory item of the owner already uses the name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"An inventory item named '{name}' already exists.")
