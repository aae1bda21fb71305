"""Order models."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from food_ordering.services.menu.base import to_money, utc_now


class OrderStatus:
    """Conventional status values. The core accepts any non-empty string."""

    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"


class CamelModel(BaseModel):
    """Model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartLine(CamelModel):
    """Client-submitted (menu item id, quantity) pair."""

    menu_item_id: int
    quantity: int = 1


class OrderItem(CamelModel):
    """Order line with the name and price snapshotted at creation."""

    menu_item_id: int
    menu_item_name: str
    quantity: int
    price: Decimal

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Decimal:
        return to_money(value)

    @property
    def line_price(self) -> Decimal:
        return self.price * self.quantity


class Order(CamelModel):
    """Order with its items. ``id`` is None until a repository assigns it."""

    id: Optional[int] = None
    created_at: datetime = Field(default_factory=utc_now)
    status: str = OrderStatus.PENDING
    total: Decimal = Decimal("0.00")
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    delivery_address: Optional[str] = None
    items: List[OrderItem] = []

    @field_validator("total", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> Decimal:
        return to_money(value)

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite and older data files hand back naive timestamps
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
