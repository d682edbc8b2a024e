"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from pantry_tracker.config import Settings
from pantry_tracker.containers import AppContainer
from pantry_tracker.domain.generation import GeneratedRecipes
from pantry_tracker.domain.inventory import FoodItem, QuantityChange, name_key
from pantry_tracker.domain.recipes import DishType, Ingredient, Recipe
from pantry_tracker.services.confirmation import RecipeConfirmationService
from pantry_tracker.services.inventory import FoodItemRepository, InventoryService
from pantry_tracker.services.recipes import (
    RecipeClient,
    RecipeRepository,
    RecipeSuggestionService,
)


@dataclass
class InMemoryFoodItemRepository(FoodItemRepository):
    """In-memory inventory repository for tests.

    Reads return copies so callers never share state with the store.
    """

    items: dict[UUID, FoodItem] = field(default_factory=dict)
    batch_writes: list[list[QuantityChange]] = field(default_factory=list)
    fail_on_update: bool = False

    def add(
        self, user_id: UUID, name: str, quantity: str | int, unit: str = "pcs"
    ) -> FoodItem:
        item = FoodItem(
            id=uuid4(),
            user_id=user_id,
            name=name,
            quantity=Decimal(str(quantity)),
            unit=unit,
        )
        self.items[item.id] = item
        return replace(item)

    def quantity_of(self, user_id: UUID, name: str) -> Decimal | None:
        for item in self.items.values():
            if item.user_id == user_id and item.key == name_key(name):
                return item.quantity
        return None

    def get_item(self, user_id: UUID, item_id: UUID) -> FoodItem | None:
        item = self.items.get(item_id)
        if item is None or item.user_id != user_id:
            return None
        return replace(item)

    def list_items(self, user_id: UUID, offset: int, limit: int) -> list[FoodItem]:
        owned = sorted(
            (item for item in self.items.values() if item.user_id == user_id),
            key=lambda item: item.name,
        )
        return [replace(item) for item in owned[offset : offset + limit]]

    def list_available(self, user_id: UUID) -> list[FoodItem]:
        return [
            replace(item)
            for item in sorted(self.items.values(), key=lambda item: item.name)
            if item.user_id == user_id and item.quantity > 0
        ]

    def list_by_names(self, user_id: UUID, names: list[str]) -> list[FoodItem]:
        keys = {name_key(name) for name in names}
        return [
            replace(item)
            for item in self.items.values()
            if item.user_id == user_id and item.key in keys
        ]

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        item = FoodItem(
            id=uuid4(),
            user_id=user_id,
            name=str(payload["name"]),
            quantity=Decimal(str(payload["quantity"])),
            unit=str(payload["unit"]),
            expires_at=payload.get("expires_at"),
        )
        self.items[item.id] = item
        return replace(item)

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> FoodItem:
        current = self.items[item_id]
        if current.user_id != user_id:
            raise RuntimeError("Failed to update food item")
        updated = replace(
            current,
            name=str(payload.get("name", current.name)),
            quantity=Decimal(str(payload.get("quantity", current.quantity))),
            unit=str(payload.get("unit", current.unit)),
            expires_at=payload.get("expires_at", current.expires_at),
        )
        self.items[item_id] = updated
        return replace(updated)

    def update_quantities(self, changes: list[QuantityChange]) -> None:
        if self.fail_on_update:
            raise RuntimeError("Failed to update inventory quantities")
        for change in changes:
            current = self.items.get(change.item_id)
            if (
                current is None
                or current.user_id != change.user_id
                or current.quantity != change.previous_quantity
            ):
                raise RuntimeError("Failed to update inventory quantities")
        self.batch_writes.append(list(changes))
        for change in changes:
            self.items[change.item_id] = replace(
                self.items[change.item_id], quantity=change.new_quantity
            )

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        item = self.items.get(item_id)
        if item is not None and item.user_id == user_id:
            del self.items[item_id]


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[UUID, Recipe] = field(default_factory=dict)

    def add(
        self,
        user_id: UUID,
        ingredients: list[tuple[str, str | int, str]],
        title: str = "Recipe",
    ) -> Recipe:
        recipe = Recipe(
            id=uuid4(),
            user_id=user_id,
            title=title,
            description="",
            dish_type=DishType.MAIN_COURSE,
            ingredients=[
                Ingredient(name=name, quantity=Decimal(str(quantity)), unit=unit)
                for name, quantity, unit in ingredients
            ],
        )
        self.recipes[recipe.id] = recipe
        return recipe

    def list_by_ids(self, user_id: UUID, recipe_ids: list[UUID]) -> list[Recipe]:
        return [
            recipe
            for recipe_id in recipe_ids
            if (recipe := self.recipes.get(recipe_id)) is not None
            and recipe.user_id == user_id
        ]

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            return None
        return recipe

    def list_recent(self, user_id: UUID, limit: int) -> list[Recipe]:
        owned = [r for r in self.recipes.values() if r.user_id == user_id]
        return list(reversed(owned))[:limit]

    def create_recipes(
        self, user_id: UUID, dish_type: DishType, recipes: GeneratedRecipes
    ) -> list[Recipe]:
        created = []
        for generated in recipes.recipes:
            recipe = Recipe(
                id=uuid4(),
                user_id=user_id,
                title=generated.name,
                description=generated.description,
                dish_type=dish_type,
                ingredients=[
                    Ingredient(name=item.name, quantity=item.quantity, unit=item.unit)
                    for item in generated.ingredients
                ],
            )
            self.recipes[recipe.id] = recipe
            created.append(recipe)
        return created


@dataclass
class FakeRecipeClient(RecipeClient):
    """Fake recipe client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "recipes": [
                {
                    "name": "Tomato salad",
                    "description": "Slice and season.",
                    "ingredients": [
                        {"name": "Tomato", "quantity": 2, "unit": "pcs"},
                        {"name": "Onion", "quantity": 1, "unit": "pcs"},
                    ],
                }
            ]
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        api_token="api-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def food_item_repository() -> InMemoryFoodItemRepository:
    return InMemoryFoodItemRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def recipe_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def container(
    settings: Settings,
    food_item_repository: InMemoryFoodItemRepository,
    recipe_repository: InMemoryRecipeRepository,
    recipe_client: FakeRecipeClient,
) -> AppContainer:
    recipe_suggestion_service = RecipeSuggestionService(
        client=recipe_client,
        recipe_repository=recipe_repository,
        food_item_repository=food_item_repository,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
        default_count=settings.recipe_default_count,
        max_count=settings.recipe_max_count,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        inventory_service=InventoryService(food_item_repository),
        recipe_suggestion_service=recipe_suggestion_service,
        confirmation_service=RecipeConfirmationService(
            recipe_repository=recipe_repository,
            food_item_repository=food_item_repository,
        ),
        close_resources=close_resources,
    )