"""Services for managing a user's food inventory.

Item names are unique per owner, compared case-insensitively. Adding an item
whose name already exists tops up the existing item instead of creating a
second one, and renaming onto another item's name is rejected.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from pantry_tracker.domain.errors import DuplicateItemNameError
from pantry_tracker.domain.inventory import FoodItem, QuantityChange, name_key

_logger = logging.getLogger(__name__)


class FoodItemRepository(Protocol):
    """Persistence interface for inventory items."""

    def get_item(self, user_id: UUID, item_id: UUID) -> FoodItem | None:
        """Return an item owned by the user, if present."""

    def list_items(self, user_id: UUID, offset: int, limit: int) -> list[FoodItem]:
        """Return a page of the user's items ordered by name."""

    def list_available(self, user_id: UUID) -> list[FoodItem]:
        """Return the user's items with a positive quantity."""

    def list_by_names(self, user_id: UUID, names: list[str]) -> list[FoodItem]:
        """Return the user's items matching any name, case-insensitively."""

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Create an item and return it."""

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> FoodItem:
        """Update an item owned by the user and return it."""

    def update_quantities(self, changes: list[QuantityChange]) -> None:
        """Apply all quantity changes in one atomic write.

        Fails without writing anything if any item no longer exists or no
        longer holds its previous quantity.
        """

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete an item owned by the user."""


@dataclass
class InventoryService:
    """Application service for inventory CRUD."""

    repository: FoodItemRepository

    def list_items(
        self, user_id: UUID, page: int = 1, page_size: int = 20
    ) -> list[FoodItem]:
        """Return a page of inventory items."""
        if page <= 0 or page_size <= 0:
            raise ValueError("page and page_size must be positive")
        return self.repository.list_items(
            user_id, offset=(page - 1) * page_size, limit=page_size
        )

    def list_available(self, user_id: UUID) -> list[FoodItem]:
        """Return items that can be cooked with."""
        return self.repository.list_available(user_id)

    def get_item(self, user_id: UUID, item_id: UUID) -> FoodItem | None:
        """Return a single item."""
        return self.repository.get_item(user_id, item_id)

    def create_item(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        quantity: Decimal,
        unit: str,
        expires_at: datetime | None = None,
    ) -> FoodItem:
        """Add an item, merging into an existing item with the same name."""
        existing = self._find_by_name(user_id, name)
        if existing is not None:
            _logger.info(
                "Merging %s %s into existing item %s for user %s",
                quantity,
                existing.unit,
                existing.id,
                user_id,
            )
            return self.repository.update_item(
                user_id, existing.id, {"quantity": existing.quantity + quantity}
            )
        return self.repository.create_item(
            user_id, _payload(name, quantity, unit, expires_at)
        )

    def update_item(  # noqa: PLR0913
        self,
        user_id: UUID,
        item_id: UUID,
        name: str,
        quantity: Decimal,
        unit: str,
        expires_at: datetime | None = None,
    ) -> FoodItem | None:
        """Replace an item's fields if the user owns it.

        Raises DuplicateItemNameError when the new name belongs to another item.
        """
        if self.repository.get_item(user_id, item_id) is None:
            return None
        clash = self._find_by_name(user_id, name)
        if clash is not None and clash.id != item_id:
            _logger.warning(
                "Rename of item %s to %s collides with item %s", item_id, name, clash.id
            )
            raise DuplicateItemNameError(name)
        return self.repository.update_item(
            user_id, item_id, _payload(name, quantity, unit, expires_at)
        )

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Remove an item from the inventory."""
        self.repository.delete_item(user_id, item_id)

    def _find_by_name(self, user_id: UUID, name: str) -> FoodItem | None:
        key = name_key(name)
        for item in self.repository.list_by_names(user_id, [name]):
            if item.key == key:
                return item
        return None


def _payload(
    name: str, quantity: Decimal, unit: str, expires_at: datetime | None
) -> dict[str, object]:
    return {
        "name": name,
        "quantity": quantity,
        "unit": unit,
        "expires_at": expires_at,
    }
