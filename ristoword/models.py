"""
Record Models

Pydantic models for the two persisted record types. Field names on disk
and on the wire follow the JSON files (``createdAt``); Python code uses
snake_case through aliases.

Records are deliberately loose: values for table, covers, area, waiter
and status are stored exactly as clients sent them.
"""

import enum
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_ORDER_STATUS = "in_preparazione"

Number = Union[int, float]


class OrderArea(str, enum.Enum):
    """Serving zones an order can come from."""
    SALA = "sala"
    PIZZERIA = "pizzeria"
    BAR = "bar"


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Record(BaseModel):
    """Base class for anything stored in a JSON collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., ge=1)

    def to_json(self) -> dict[str, Any]:
        """Serialize using wire names."""
        return self.model_dump(mode="json", by_alias=True)


class Order(Record):
    """
    A table order.

    Only ``status`` and ``paid`` change after creation.
    """
    table: Any
    covers: Any
    area: Optional[Any] = None
    waiter: Any
    status: Optional[Any] = DEFAULT_ORDER_STATUS
    created_at: str = Field(default_factory=utc_timestamp, alias="createdAt")
    paid: bool = False


class InventoryItem(Record):
    """A storeroom product; quantity may go negative."""
    name: Any
    unit: Any
    quantity: Number = 0
