"""
Pydantic Schemas for Request/Response Bodies

Request bodies accept any JSON value per field. Presence checks and
number coercion happen in the service layer so that a missing field
yields a 400 with a readable message instead of a 422.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from ristoword.models import OrderArea


# =============================================================================
# ORDER REQUESTS
# =============================================================================

class OrderCreate(BaseModel):
    """Request schema for creating a new order."""
    table: Optional[Any] = Field(None, examples=[5])
    covers: Optional[Any] = Field(None, examples=[2])
    area: Optional[Any] = Field(None, examples=[a.value for a in OrderArea])
    waiter: Optional[Any] = Field(None, examples=["Luca"])


class OrderStatusUpdate(BaseModel):
    status: Optional[Any] = Field(None, examples=["pronto"])


class OrderPaidUpdate(BaseModel):
    paid: Optional[Any] = Field(None, examples=[True])


# =============================================================================
# INVENTORY REQUESTS
# =============================================================================

class InventoryItemCreate(BaseModel):
    """Request schema for adding a storeroom product."""
    name: Optional[Any] = Field(None, examples=["Farina"])
    unit: Optional[Any] = Field(None, examples=["kg"])
    quantity: Optional[Any] = Field(None, examples=[10])


class InventoryAdjust(BaseModel):
    delta: Optional[Any] = Field(None, examples=[-3])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None
