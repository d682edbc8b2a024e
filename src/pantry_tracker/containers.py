"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pantry_tracker.adapters.openai_recipe_client import OpenAIRecipeClient
from pantry_tracker.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from pantry_tracker.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from pantry_tracker.config import Settings
from pantry_tracker.services.confirmation import RecipeConfirmationService
from pantry_tracker.services.inventory import InventoryService
from pantry_tracker.services.recipes import RecipeSuggestionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    inventory_service: InventoryService
    recipe_suggestion_service: RecipeSuggestionService
    confirmation_service: RecipeConfirmationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_item_repository = SupabaseFoodItemRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    recipe_client = OpenAIRecipeClient.create(resolved_settings.openai_api_key)
    inventory_service = InventoryService(food_item_repository)
    recipe_suggestion_service = RecipeSuggestionService(
        client=recipe_client,
        recipe_repository=recipe_repository,
        food_item_repository=food_item_repository,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        default_count=resolved_settings.recipe_default_count,
        max_count=resolved_settings.recipe_max_count,
    )
    confirmation_service = RecipeConfirmationService(
        recipe_repository=recipe_repository,
        food_item_repository=food_item_repository,
    )

    async def close_resources() -> None:
        await recipe_client.close()

    return AppContainer(
        settings=resolved_settings,
        inventory_service=inventory_service,
        recipe_suggestion_service=recipe_suggestion_service,
        confirmation_service=confirmation_service,
        close_resources=close_resources,
    )
