"""Recipe confirmation: deplete inventory for recipes that were cooked."""

import logging
from dataclasses import dataclass
from uuid import UUID

from pantry_tracker.domain.confirmation import ConfirmationResult, InventoryUpdate
from pantry_tracker.domain.errors import (
    PartialRecipesNotFoundError,
    RecipesNotFoundError,
)
from pantry_tracker.domain.inventory import FoodItem, QuantityChange
from pantry_tracker.domain.recipes import DemandLine, Recipe
from pantry_tracker.services.demand import aggregate_ingredients
from pantry_tracker.services.inventory import FoodItemRepository
from pantry_tracker.services.recipes import RecipeRepository
from pantry_tracker.services.stock import StockCheck, check_stock

_logger = logging.getLogger(__name__)


@dataclass
class RecipeConfirmationService:
    """Confirms cooked recipes and reconciles inventory in one batch."""

    recipe_repository: RecipeRepository
    food_item_repository: FoodItemRepository

    def confirm_recipes(
        self, recipe_ids: list[UUID], user_id: UUID
    ) -> ConfirmationResult:
        """Deplete the combined ingredients of the recipes from inventory.

        Either every ingredient is decremented and persisted with a single
        write, or a ConfirmationError is raised and nothing is written.
        """
        _logger.info("User %s confirming %s recipes", user_id, len(recipe_ids))
        recipes, demand, check = self._prepare(recipe_ids, user_id)
        if not check.sufficient:
            _log_shortage(check)
        lookup = check.raise_for_shortage()

        changes, updates = apply_demand(demand, lookup)
        self.food_item_repository.update_quantities(changes)

        _logger.info(
            "Confirmed %s recipes and updated %s inventory items for user %s",
            len(recipes),
            len(changes),
            user_id,
        )
        return build_confirmation_result(len(recipes), updates)

    def check_recipes(self, recipe_ids: list[UUID], user_id: UUID) -> StockCheck:
        """Report whether the recipes could be confirmed, without writing."""
        _, _, check = self._prepare(recipe_ids, user_id)
        return check

    def _prepare(
        self, recipe_ids: list[UUID], user_id: UUID
    ) -> tuple[list[Recipe], dict[str, DemandLine], StockCheck]:
        requested = list(dict.fromkeys(recipe_ids))
        recipes = self._load_recipes(requested, user_id)

        demand = aggregate_ingredients(recipes)
        _logger.info(
            "Aggregated %s unique ingredients from %s recipes",
            len(demand),
            len(recipes),
        )
        names = [line.name for line in demand.values()]
        stock = self.food_item_repository.list_by_names(user_id, names) if names else []
        return recipes, demand, check_stock(demand, stock)

    def _load_recipes(self, requested: list[UUID], user_id: UUID) -> list[Recipe]:
        recipes = (
            self.recipe_repository.list_by_ids(user_id, requested) if requested else []
        )
        if not recipes:
            _logger.warning("No recipes found for user %s", user_id)
            raise RecipesNotFoundError()
        found = {recipe.id for recipe in recipes}
        missing = [recipe_id for recipe_id in requested if recipe_id not in found]
        if missing:
            _logger.warning(
                "Some recipes were not found: %s",
                ", ".join(str(recipe_id) for recipe_id in missing),
            )
            raise PartialRecipesNotFoundError(missing)
        return recipes


def apply_demand(
    demand: dict[str, DemandLine], lookup: dict[str, FoodItem]
) -> tuple[list[QuantityChange], list[InventoryUpdate]]:
    """Subtract demand from the resolved items in place.

    Sufficiency must already have been checked against the same items. Each
    change carries the quantity the item was read with so the write can detect
    concurrent modification.
    """
    changes: list[QuantityChange] = []
    updates: list[InventoryUpdate] = []
    for key, line in demand.items():
        item = lookup[key]
        previous = item.quantity
        item.quantity = previous - line.quantity
        changes.append(
            QuantityChange(
                item_id=item.id,
                user_id=item.user_id,
                previous_quantity=previous,
                new_quantity=item.quantity,
            )
        )
        updates.append(
            InventoryUpdate(
                product_name=item.name,
                previous_quantity=previous,
                used_quantity=line.quantity,
                new_quantity=item.quantity,
                unit=item.unit,
            )
        )
        _logger.debug(
            "Updating %s: %s - %s = %s %s",
            item.name,
            previous,
            line.quantity,
            item.quantity,
            item.unit,
        )
    return changes, updates


def build_confirmation_result(
    recipe_count: int, updates: list[InventoryUpdate]
) -> ConfirmationResult:
    """Wrap inventory updates into the user-facing result."""
    return ConfirmationResult(
        success=True,
        message=(
            f"Successfully confirmed {recipe_count} recipe(s) and updated inventory."
        ),
        confirmed_recipe_count=recipe_count,
        inventory_updates=updates,
    )


def _log_shortage(check: StockCheck) -> None:
    if check.missing:
        _logger.warning(
            "Missing ingredients in inventory: %s", ", ".join(check.missing)
        )
    elif check.insufficient:
        _logger.warning(
            "Insufficient ingredient quantities: %s",
            "; ".join(
                f"{item.name} (required: {item.required}, available: {item.available})"
                for item in check.insufficient
            ),
        )
