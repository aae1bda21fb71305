"""Order repository interface."""
from abc import ABC, abstractmethod
from typing import List, Optional

from food_ordering.core.errors import StorageUnavailableError
from food_ordering.services.ordering.models import Order


class OrderRepository(ABC):
    """Abstract base class for order storage backends.

    Orders handed out by a repository are copies; changing them never
    changes what is stored.
    """

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """Persist a new order and return it with its assigned id."""
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get an order with its items, or None."""
        pass

    @abstractmethod
    async def list_all(self) -> List[Order]:
        """All orders, newest first."""
        pass

    @abstractmethod
    async def update_status(self, order_id: int, status: str) -> Optional[Order]:
        """Set the status of an order. Returns None if it does not exist."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        pass


def newest_first(orders: List[Order]) -> List[Order]:
    """Sort by creation time descending, newer ids first on ties."""
    return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)


class UnavailableOrderRepository(OrderRepository):
    """Stand-in used when the configured backend failed at startup."""

    def __init__(self, reason: str):
        self.reason = reason

    def _fail(self):
        raise StorageUnavailableError(f"Order storage unavailable: {self.reason}")

    async def create(self, order: Order) -> Order:
        self._fail()

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        self._fail()

    async def list_all(self) -> List[Order]:
        self._fail()

    async def update_status(self, order_id: int, status: str) -> Optional[Order]:
        self._fail()
