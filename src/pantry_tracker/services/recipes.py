"""Recipe generation and lookup services."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pantry_tracker.domain.errors import RecipeGenerationError
from pantry_tracker.domain.generation import GeneratedRecipes
from pantry_tracker.domain.inventory import FoodItem
from pantry_tracker.domain.recipes import DishType, Recipe
from pantry_tracker.services.inventory import FoodItemRepository

MAX_PERSONS = 100

_logger = logging.getLogger(__name__)

RECIPES_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recipes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "ingredients": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "quantity": {"type": "number", "minimum": 0},
                                "unit": {"type": "string"},
                            },
                            "required": ["name", "quantity", "unit"],
                            "additionalProperties": False,
                        },
                    },
                },
                "required": ["name", "description", "ingredients"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["recipes"],
    "additionalProperties": False,
}


class RecipeRepository(Protocol):
    """Persistence interface for generated recipes."""

    def list_by_ids(self, user_id: UUID, recipe_ids: list[UUID]) -> list[Recipe]:
        """Return the user's recipes among the given ids."""

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Return a recipe owned by the user, if present."""

    def list_recent(self, user_id: UUID, limit: int) -> list[Recipe]:
        """Return the user's most recently generated recipes."""

    def create_recipes(
        self, user_id: UUID, dish_type: DishType, recipes: GeneratedRecipes
    ) -> list[Recipe]:
        """Persist generated recipes and return them with identifiers."""


class RecipeClient(Protocol):
    """Interface for LLM recipe generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured recipe data."""


@dataclass
class RecipeSuggestionService:
    """Generates recipes from the user's available inventory."""

    client: RecipeClient
    recipe_repository: RecipeRepository
    food_item_repository: FoodItemRepository
    model: str
    reasoning_effort: str | None
    store: bool
    default_count: int = 3
    max_count: int = 10

    async def generate(
        self,
        user_id: UUID,
        dish_type: DishType,
        number_of_persons: int,
        count: int | None = None,
    ) -> list[Recipe]:
        """Generate, persist and return recipe suggestions."""
        if not 1 <= number_of_persons <= MAX_PERSONS:
            raise ValueError(f"number_of_persons must be between 1 and {MAX_PERSONS}")
        recipe_count = min(count or self.default_count, self.max_count)
        _logger.info(
            "User %s generating %s %s recipe(s) for %s person(s)",
            user_id,
            recipe_count,
            dish_type.value,
            number_of_persons,
        )

        available = self.food_item_repository.list_available(user_id)
        if not available:
            _logger.warning("No available food items for user %s", user_id)
            raise RecipeGenerationError(
                "No suitable recipes could be generated. Your inventory is empty "
                "or all items have zero quantity."
            )

        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            schema=RECIPES_SCHEMA,
            prompt=build_prompt(available, dish_type, number_of_persons, recipe_count),
        )
        generated = GeneratedRecipes.model_validate(raw)
        if not generated.recipes:
            _logger.warning(
                "Model returned no %s recipes for user %s", dish_type.value, user_id
            )
            raise RecipeGenerationError(
                f"No suitable recipes could be generated for {_label(dish_type)} "
                "with the available ingredients. Try adding more ingredients to "
                "your inventory or selecting a different dish type."
            )

        saved = self.recipe_repository.create_recipes(user_id, dish_type, generated)
        _logger.info("Saved %s recipes for user %s", len(saved), user_id)
        return saved

    def list_recipes(self, user_id: UUID, limit: int = 20) -> list[Recipe]:
        """Return recently generated recipes."""
        return self.recipe_repository.list_recent(user_id, limit)

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Return a single recipe."""
        return self.recipe_repository.get_recipe(user_id, recipe_id)


def build_prompt(
    available: list[FoodItem],
    dish_type: DishType,
    number_of_persons: int,
    recipe_count: int,
) -> str:
    """Build the generation prompt listing available ingredients."""
    lines = [
        f"- {item.name}: {item.quantity} {item.unit}".rstrip() for item in available
    ]
    dish = _label(dish_type)
    return (
        f"Based on the following available ingredients and their quantities, "
        f"generate exactly {recipe_count} {dish} recipe(s) for "
        f"{number_of_persons} person(s).\n\n"
        "Available ingredients:\n"
        + "\n".join(lines)
        + "\n\nRequirements:\n"
        "1. Only use ingredients from the list above, spelled exactly as listed.\n"
        "2. Do not exceed the available quantities.\n"
        "3. Use the same unit as the listed ingredient.\n"
        f"4. Each recipe must serve {number_of_persons} person(s) and be a {dish}.\n"
        "If no valid recipe can be made, return an empty recipes list."
    )


def _label(dish_type: DishType) -> str:
    return dish_type.value.replace("_", " ")
