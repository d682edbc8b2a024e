"""Ingredient demand aggregation across recipes."""

from collections.abc import Iterable

from pantry_tracker.domain.inventory import name_key
from pantry_tracker.domain.recipes import DemandLine, Recipe


def aggregate_ingredients(recipes: Iterable[Recipe]) -> dict[str, DemandLine]:
    """Sum ingredient quantities across recipes, keyed case-insensitively.

    The first spelling of a name is kept for display. Iteration order follows
    the first appearance of each ingredient.
    """
    demand: dict[str, DemandLine] = {}
    for recipe in recipes:
        for ingredient in recipe.ingredients:
            key = name_key(ingredient.name)
            existing = demand.get(key)
            if existing is None:
                demand[key] = DemandLine(
                    name=ingredient.name, quantity=ingredient.quantity
                )
            else:
                demand[key] = DemandLine(
                    name=existing.name,
                    quantity=existing.quantity + ingredient.quantity,
                )
    return demand
