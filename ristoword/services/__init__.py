"""
                        Services Module

Business logic behind the HTTP routes.

Services:
    - collection: JSON-file backed record collections
    - orders: order creation, status and payment flag
    - inventory: storeroom items and stock adjustments
"""

from ristoword.services.collection import JsonCollection
from ristoword.services.exceptions import NotFoundError, RistowordError, ValidationError
from ristoword.services.inventory import InventoryService
from ristoword.services.orders import OrderService

__all__ = [
    "JsonCollection",
    "OrderService",
    "InventoryService",
    "RistowordError",
    "ValidationError",
    "NotFoundError",
]
