"""Supabase repository for generated recipes."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from supabase import Client

from pantry_tracker.domain.generation import GeneratedRecipes
from pantry_tracker.domain.recipes import DishType, Ingredient, Recipe
from pantry_tracker.services.recipes import RecipeRepository

_TABLE = "recipes"
_COLUMNS = "id, user_id, title, description, dish_type, ingredients"


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe repository. Ingredients are stored as JSON."""

    client: Client

    def list_by_ids(self, user_id: UUID, recipe_ids: list[UUID]) -> list[Recipe]:
        """Return the user's recipes among the given ids."""
        if not recipe_ids:
            return []
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .in_("id", [str(recipe_id) for recipe_id in recipe_ids])
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Return a recipe owned by the user, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", str(recipe_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recent(self, user_id: UUID, limit: int) -> list[Recipe]:
        """Return the most recently created recipes."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def create_recipes(
        self, user_id: UUID, dish_type: DishType, recipes: GeneratedRecipes
    ) -> list[Recipe]:
        """Insert all generated recipes in one statement."""
        payload = [
            {
                "user_id": str(user_id),
                "title": recipe.name,
                "description": recipe.description,
                "dish_type": dish_type.value,
                "ingredients": [
                    {
                        "name": ingredient.name,
                        "quantity": str(ingredient.quantity),
                        "unit": ingredient.unit,
                    }
                    for ingredient in recipe.ingredients
                ],
            }
            for recipe in recipes.recipes
        ]
        response = self.client.table(_TABLE).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create recipes")
        return [_parse_recipe(row) for row in response.data]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    ingredients = [
        Ingredient(
            name=str(item.get("name", "")),
            quantity=Decimal(str(item.get("quantity", 0))),
            unit=str(item.get("unit") or ""),
        )
        for item in row.get("ingredients") or []
    ]
    return Recipe(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        title=str(row.get("title", "")),
        description=str(row.get("description") or ""),
        dish_type=DishType(row.get("dish_type", DishType.MAIN_COURSE.value)),
        ingredients=ingredients,
    )
