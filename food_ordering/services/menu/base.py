"""Menu provider interface."""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


CENTS = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Coerce a price to a two-digit Decimal."""
    if not isinstance(value, Decimal):
        # str() first so 12.99 stays 12.99 instead of its binary expansion
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int
    name: str
    description: str = ""
    price: Decimal
    category: str = ""
    image_url: str = ""
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Decimal:
        return to_money(value)


class MenuProvider(ABC):
    """Abstract base class for menu providers."""

    @abstractmethod
    async def load_items(self) -> List[MenuItem]:
        """Load every menu item from the underlying source."""
        pass
