"""Supabase repository for inventory items."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from supabase import Client

from pantry_tracker.domain.inventory import FoodItem, QuantityChange, name_key
from pantry_tracker.services.inventory import FoodItemRepository

_TABLE = "food_items"
_COLUMNS = "id, user_id, name, quantity, unit, expires_at"
_UPDATE_QUANTITIES_RPC = "update_food_item_quantities"


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase implementation for inventory items.

    Rows carry a ``name_key`` column holding the case-folded name so that
    lookups by name stay case-insensitive without relying on collation. The
    table and the quantity update function are defined in
    ``supabase/migrations``; ``(user_id, name_key)`` is unique there.
    """

    client: Client

    def get_item(self, user_id: UUID, item_id: UUID) -> FoodItem | None:
        """Return an item owned by the user, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def list_items(self, user_id: UUID, offset: int, limit: int) -> list[FoodItem]:
        """Return a page of items ordered by name."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("name", desc=False)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def list_available(self, user_id: UUID) -> list[FoodItem]:
        """Return items with a positive quantity ordered by name."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gt("quantity", 0)
            .order("name", desc=False)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def list_by_names(self, user_id: UUID, names: list[str]) -> list[FoodItem]:
        """Return items whose names match case-insensitively."""
        keys = sorted({name_key(name) for name in names})
        if not keys:
            return []
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .in_("name_key", keys)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Create an item row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert({"user_id": str(user_id), **_serialize(payload)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return _parse_item(response.data[0])

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> FoodItem:
        """Update an item row owned by the user and return it."""
        response = (
            self.client.table(_TABLE)
            .update(_serialize(payload))
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food item")
        return _parse_item(response.data[0])

    def update_quantities(self, changes: list[QuantityChange]) -> None:
        """Write only the quantities, in one guarded database call.

        The function updates rows whose quantity still equals the previous
        value and raises, rolling back every row, when any change matches no
        row. Deleted or concurrently modified items are never recreated or
        overwritten.
        """
        if not changes:
            return
        rows = [
            {
                "id": str(change.item_id),
                "user_id": str(change.user_id),
                "previous_quantity": str(change.previous_quantity),
                "quantity": str(change.new_quantity),
            }
            for change in changes
        ]
        response = self.client.rpc(_UPDATE_QUANTITIES_RPC, {"items": rows}).execute()
        if response.data != len(rows):
            raise RuntimeError(
                f"Failed to update inventory quantities: {response.data} of "
                f"{len(rows)} items updated"
            )

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete an item row owned by the user."""
        self.client.table(_TABLE).delete().eq("id", str(item_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _serialize(payload: dict[str, object]) -> dict[str, object]:
    row = dict(payload)
    if "name" in row:
        row["name_key"] = name_key(str(row["name"]))
    if isinstance(row.get("quantity"), Decimal):
        row["quantity"] = str(row["quantity"])
    expires_at = row.get("expires_at")
    if isinstance(expires_at, datetime):
        row["expires_at"] = expires_at.isoformat()
    return row


def _parse_item(row: dict[str, object]) -> FoodItem:
    expires_raw = row.get("expires_at")
    return FoodItem(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        quantity=Decimal(str(row.get("quantity", 0))),
        unit=str(row.get("unit") or ""),
        expires_at=(
            datetime.fromisoformat(expires_raw)
            if isinstance(expires_raw, str) and expires_raw
            else None
        ),
    )
