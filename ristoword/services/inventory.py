"""
Inventory Service

Storeroom products and signed quantity adjustments. Stock is allowed to
go negative; the storeroom reconciles it by hand.
"""

import logging
from typing import Any, Optional

from ristoword.models import InventoryItem
from ristoword.schemas import InventoryItemCreate
from ristoword.services.coercion import is_truthy, parse_id, to_number
from ristoword.services.collection import JsonCollection
from ristoword.services.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class InventoryService:
    """Inventory operations over a persisted collection."""

    def __init__(self, collection: JsonCollection[InventoryItem]):
        self.collection = collection

    def create(self, data: InventoryItemCreate) -> InventoryItem:
        """
        Add a product. A missing or non-numeric quantity starts at 0.

        Raises:
            ValidationError: If name or unit is missing
        """
        if not is_truthy(data.name) or not is_truthy(data.unit):
            raise ValidationError("Name and unit are required")

        item = self.collection.append({
            "name": data.name,
            "unit": data.unit,
            "quantity": to_number(data.quantity),
        })

        logger.info(f"Inventory item #{item.id} added: {item.name} ({item.quantity} {item.unit})")
        return item

    def list_items(self) -> list[InventoryItem]:
        return self.collection.all()

    def get(self, raw_id: str) -> InventoryItem:
        item = self._find(raw_id)
        if item is None:
            raise NotFoundError("Inventory item", raw_id)
        return item

    def adjust(self, raw_id: str, delta: Any) -> InventoryItem:
        """
        Add ``delta`` to the quantity; a non-numeric delta counts as 0.

        Raises:
            NotFoundError: If no item has this ID
        """
        amount = to_number(delta)

        def apply(item: InventoryItem) -> None:
            item.quantity = to_number(item.quantity + amount)

        item_id = parse_id(raw_id)
        item = None
        if item_id is not None:
            item = self.collection.update(item_id, apply)
        if item is None:
            raise NotFoundError("Inventory item", raw_id)

        logger.info(f"Inventory item #{item.id} adjusted by {amount}: now {item.quantity} {item.unit}")
        return item

    def _find(self, raw_id: str) -> Optional[InventoryItem]:
        item_id = parse_id(raw_id)
        if item_id is None:
            return None
        return self.collection.find(item_id)
