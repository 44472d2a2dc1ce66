"""
Order Service

Creates orders for the floor staff and applies the two mutations the
kitchen and cashier are allowed to make: status changes and the paid flag.
"""

import logging
from typing import Any, Optional

from ristoword.models import DEFAULT_ORDER_STATUS, Order, utc_timestamp
from ristoword.schemas import OrderCreate
from ristoword.services.coercion import is_truthy, parse_id
from ristoword.services.collection import JsonCollection
from ristoword.services.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("table", "covers", "waiter")


class OrderService:
    """Order operations over a persisted collection."""

    def __init__(self, collection: JsonCollection[Order]):
        self.collection = collection

    def create(self, data: OrderCreate) -> Order:
        """
        Create an order with default status and ``paid=False``.

        Raises:
            ValidationError: If table, covers or waiter is missing
        """
        missing = [name for name in REQUIRED_FIELDS if not is_truthy(getattr(data, name))]
        if missing:
            raise ValidationError(f"Missing order data: {', '.join(missing)}")

        order = self.collection.append({
            "table": data.table,
            "covers": data.covers,
            "area": data.area,
            "waiter": data.waiter,
            "status": DEFAULT_ORDER_STATUS,
            "created_at": utc_timestamp(),
            "paid": False,
        })

        logger.info(f"Order #{order.id} created (table {order.table}, waiter {order.waiter})")
        return order

    def list_orders(self, status: Optional[str] = None, paid: Optional[bool] = None) -> list[Order]:
        """All orders, optionally filtered by exact status and paid flag."""
        orders = self.collection.all()
        if status is not None:
            orders = [o for o in orders if o.status == status]
        if paid is not None:
            orders = [o for o in orders if o.paid == paid]
        return orders

    def get(self, raw_id: str) -> Order:
        order = self._find(raw_id)
        if order is None:
            raise NotFoundError("Order", raw_id)
        return order

    def set_status(self, raw_id: str, status: Any) -> Order:
        """Replace the status with whatever the client sent."""
        def apply(order: Order) -> None:
            order.status = status

        order = self._update(raw_id, apply)
        logger.info(f"Order #{order.id} status -> {order.status}")
        return order

    def set_paid(self, raw_id: str, paid: Any) -> Order:
        """Mark the order paid or unpaid; ``paid`` is coerced to a boolean."""
        flag = is_truthy(paid)

        def apply(order: Order) -> None:
            order.paid = flag

        order = self._update(raw_id, apply)
        logger.info(f"Order #{order.id} marked {'paid' if flag else 'unpaid'}")
        return order

    def _find(self, raw_id: str) -> Optional[Order]:
        order_id = parse_id(raw_id)
        if order_id is None:
            return None
        return self.collection.find(order_id)

    def _update(self, raw_id: str, mutator) -> Order:
        order_id = parse_id(raw_id)
        order = None
        if order_id is not None:
            order = self.collection.update(order_id, mutator)
        if order is None:
            raise NotFoundError("Order", raw_id)
        return order
