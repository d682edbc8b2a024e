"""Inventory API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from pantry_tracker.api.deps import get_user_id, require_api_token
from pantry_tracker.api.schemas import FoodItemIn, FoodItemOut
from pantry_tracker.domain.errors import DuplicateItemNameError

if TYPE_CHECKING:
    from pantry_tracker.containers import AppContainer

router = APIRouter(
    prefix="/inventory",
    tags=["inventory"],
    dependencies=[Depends(require_api_token)],
)


@router.get("")
async def list_items(
    request: Request,
    page: int = 1,
    page_size: int = 20,
    user_id: UUID = Depends(get_user_id),
) -> list[FoodItemOut]:
    """Return a page of the user's inventory."""
    container: AppContainer = request.app.state.container
    try:
        items = container.inventory_service.list_items(user_id, page, page_size)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return [FoodItemOut.from_domain(item) for item in items]


@router.get("/{item_id}")
async def get_item(
    item_id: UUID, request: Request, user_id: UUID = Depends(get_user_id)
) -> FoodItemOut:
    """Return a single inventory item."""
    container: AppContainer = request.app.state.container
    item = container.inventory_service.get_item(user_id, item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return FoodItemOut.from_domain(item)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: FoodItemIn, request: Request, user_id: UUID = Depends(get_user_id)
) -> FoodItemOut:
    """Add an item to the inventory, topping up an item of the same name."""
    container: AppContainer = request.app.state.container
    item = container.inventory_service.create_item(
        user_id,
        name=payload.name,
        quantity=payload.quantity,
        unit=payload.unit,
        expires_at=payload.expires_at,
    )
    return FoodItemOut.from_domain(item)


@router.put("/{item_id}")
async def update_item(
    item_id: UUID,
    payload: FoodItemIn,
    request: Request,
    user_id: UUID = Depends(get_user_id),
) -> FoodItemOut:
    """Replace an inventory item's fields."""
    container: AppContainer = request.app.state.container
    try:
        item = container.inventory_service.update_item(
            user_id,
            item_id,
            name=payload.name,
            quantity=payload.quantity,
            unit=payload.unit,
            expires_at=payload.expires_at,
        )
    except DuplicateItemNameError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return FoodItemOut.from_domain(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID, request: Request, user_id: UUID = Depends(get_user_id)
) -> Response:
    """Delete an inventory item."""
    container: AppContainer = request.app.state.container
    container.inventory_service.delete_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
