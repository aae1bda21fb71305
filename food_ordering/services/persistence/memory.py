"""In-memory order storage."""
import itertools
import threading
from typing import Dict, List, Optional

from food_ordering.services.ordering.models import Order
from food_ordering.services.persistence.base import OrderRepository, newest_first


class InMemoryStore:
    """Lock-protected order mapping and id counter.

    Build one per process and inject it; nothing here is module-level.
    """

    def __init__(self, start_id: int = 1):
        self._lock = threading.RLock()
        self._ids = itertools.count(start_id)
        self._orders: Dict[int, Order] = {}

    def insert(self, order: Order) -> Order:
        with self._lock:
            stored = order.model_copy(update={"id": next(self._ids)}, deep=True)
            self._orders[stored.id] = stored
            return stored.model_copy(deep=True)

    def get(self, order_id: int) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return order.model_copy(deep=True) if order else None

    def values(self) -> List[Order]:
        with self._lock:
            return [order.model_copy(deep=True) for order in self._orders.values()]

    def set_status(self, order_id: int, status: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            updated = order.model_copy(update={"status": status}, deep=True)
            self._orders[order_id] = updated
            return updated.model_copy(deep=True)


class InMemoryOrderRepository(OrderRepository):
    """Order repository without durability; state is lost on restart."""

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store if store is not None else InMemoryStore()

    async def create(self, order: Order) -> Order:
        return self.store.insert(order)

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        return self.store.get(order_id)

    async def list_all(self) -> List[Order]:
        return newest_first(self.store.values())

    async def update_status(self, order_id: int, status: str) -> Optional[Order]:
        return self.store.set_status(order_id, status)
