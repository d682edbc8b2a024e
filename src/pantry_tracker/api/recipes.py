"""Recipe generation and confirmation endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from pantry_tracker.api.deps import get_user_id, require_api_token
from pantry_tracker.api.schemas import (
    ConfirmationProblem,
    ConfirmRecipesRequest,
    ConfirmRecipesResponse,
    GenerateRecipesRequest,
    RecipeOut,
    StockCheckResponse,
)
from pantry_tracker.config import parse_dish_type
from pantry_tracker.domain.errors import ConfirmationError, RecipeGenerationError

if TYPE_CHECKING:
    from pantry_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/recipes",
    tags=["recipes"],
    dependencies=[Depends(require_api_token)],
)


@router.post("/generate")
async def generate_recipes(
    payload: GenerateRecipesRequest,
    request: Request,
    user_id: UUID = Depends(get_user_id),
) -> list[RecipeOut]:
    """Generate recipes from the user's available inventory."""
    container: AppContainer = request.app.state.container
    dish_type = parse_dish_type(payload.dish_type)
    if dish_type is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="A valid dish type must be specified.",
        )
    try:
        recipes = await container.recipe_suggestion_service.generate(
            user_id,
            dish_type=dish_type,
            number_of_persons=payload.number_of_persons,
            count=payload.count,
        )
    except RecipeGenerationError as exc:
        _logger.warning("Failed to generate recipes: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"title": "Recipe Generation Failed", "detail": str(exc)},
        ) from exc
    return [RecipeOut.from_domain(recipe) for recipe in recipes]


@router.get("")
async def list_recipes(
    request: Request, limit: int = 20, user_id: UUID = Depends(get_user_id)
) -> list[RecipeOut]:
    """Return recently generated recipes."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_suggestion_service.list_recipes(user_id, limit)
    return [RecipeOut.from_domain(recipe) for recipe in recipes]


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: UUID, request: Request, user_id: UUID = Depends(get_user_id)
) -> RecipeOut:
    """Return a single recipe."""
    container: AppContainer = request.app.state.container
    recipe = container.recipe_suggestion_service.get_recipe(user_id, recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return RecipeOut.from_domain(recipe)


@router.post("/check")
async def check_recipes(
    payload: ConfirmRecipesRequest,
    request: Request,
    user_id: UUID = Depends(get_user_id),
) -> StockCheckResponse:
    """Report whether the recipes can be cooked with current stock."""
    container: AppContainer = request.app.state.container
    try:
        check = container.confirmation_service.check_recipes(
            payload.recipe_ids, user_id
        )
    except ConfirmationError as exc:
        raise _confirmation_failed(exc) from exc
    return StockCheckResponse.from_domain(check)


@router.post("/confirm")
async def confirm_recipes(
    payload: ConfirmRecipesRequest,
    request: Request,
    user_id: UUID = Depends(get_user_id),
) -> ConfirmRecipesResponse:
    """Mark recipes as cooked and deplete their ingredients."""
    container: AppContainer = request.app.state.container
    try:
        result = container.confirmation_service.confirm_recipes(
            payload.recipe_ids, user_id
        )
    except ConfirmationError as exc:
        raise _confirmation_failed(exc) from exc
    return ConfirmRecipesResponse.from_domain(result)


def _confirmation_failed(exc: ConfirmationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=ConfirmationProblem.from_error(exc).model_dump(
            mode="json", exclude_none=True
        ),
    )
