"""JSON file order storage.

The whole state (menu items, orders, next order id) lives in one JSON
document that is rewritten on every mutation::

    {"menuItems": [...], "orders": [{..., "items": [...]}], "nextOrderId": 3}

Every mutating call returns only after the document has been flushed and
fsynced, so a successful call survives a crash right after it. The document
is rewritten in place, though: a crash *during* the write can leave a
truncated file, which is reported as unavailable storage on the next start.
The same holds for a write that fails without crashing (a full disk, say):
the call raises and the in-memory state is left as it was, but the file on
disk may already be truncated until the next successful write replaces it.

Writes block on disk I/O, so the repository runs them in a worker thread;
the store's lock serializes them.
"""
import asyncio
import json
import logging
import os
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from food_ordering.core.errors import StorageUnavailableError
from food_ordering.services.menu.base import MenuItem, MenuProvider
from food_ordering.services.ordering.models import CamelModel, Order
from food_ordering.services.persistence.base import OrderRepository, newest_first

logger = logging.getLogger(__name__)


class StateDocument(CamelModel):
    """On-disk layout of the JSON store."""

    menu_items: List[MenuItem] = []
    orders: List[Order] = []
    next_order_id: int = 1


class JsonFileStore:
    """In-memory mirror of the JSON document, guarded by a re-entrant lock."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._menu_items: List[MenuItem] = []
        self._orders: Dict[int, Order] = {}
        self._next_order_id = 1

    @classmethod
    def open(cls, path: Union[str, Path], seed_items: Iterable[MenuItem] = ()) -> "JsonFileStore":
        """
        Load the document at ``path``, creating it when missing.

        ``seed_items`` populate the menu when the document has none.

        Raises:
            StorageUnavailableError: if the file exists but cannot be read
                or parsed. It is left untouched.
        """
        store = cls(path)
        store._load(list(seed_items))
        return store

    def _load(self, seed_items: List[MenuItem]) -> None:
        with self._lock:
            if not self.path.exists():
                logger.info(f"Creating data file {self.path} with {len(seed_items)} menu items")
                self._menu_items = seed_items
                self._commit({}, 1)
                return

            try:
                with self.path.open("r", encoding="utf-8") as handle:
                    data = json.load(handle, parse_float=Decimal)
                document = StateDocument.model_validate(data)
            except (OSError, ValueError) as e:
                raise StorageUnavailableError(
                    f"Could not read data file {self.path}: {type(e).__name__}: {e}"
                ) from e

            orders = {order.id: order for order in document.orders if order.id is not None}
            next_order_id = max([document.next_order_id] + [order_id + 1 for order_id in orders])
            self._menu_items = document.menu_items
            self._orders = orders
            self._next_order_id = next_order_id
            logger.info(
                f"Loaded data file {self.path} - {len(self._menu_items)} menu items, "
                f"{len(self._orders)} orders"
            )

            if not self._menu_items and seed_items:
                logger.info(f"Seeding {len(seed_items)} menu items into {self.path}")
                self._menu_items = seed_items
                self._commit(self._orders, self._next_order_id)

    @property
    def menu_items(self) -> List[MenuItem]:
        with self._lock:
            return list(self._menu_items)

    def insert(self, order: Order) -> Order:
        with self._lock:
            stored = order.model_copy(update={"id": self._next_order_id}, deep=True)
            orders = dict(self._orders)
            orders[stored.id] = stored
            self._commit(orders, self._next_order_id + 1)
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
            orders = dict(self._orders)
            orders[order_id] = order.model_copy(update={"status": status}, deep=True)
            self._commit(orders, self._next_order_id)
            return orders[order_id].model_copy(deep=True)

    def _commit(self, orders: Dict[int, Order], next_order_id: int) -> None:
        """Write the new state, then adopt it. A failed write changes nothing."""
        document = StateDocument(
            menu_items=self._menu_items,
            orders=list(orders.values()),
            next_order_id=next_order_id,
        )
        self._write(document.model_dump(by_alias=True))
        self._orders = orders
        self._next_order_id = next_order_id

    def _write(self, payload: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, default=self._default_serializer)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as e:
            logger.error(f"Failed to write data file {self.path}: {e}")
            raise StorageUnavailableError(f"Could not write data file {self.path}: {e}") from e

    @staticmethod
    def _default_serializer(value: Any) -> Any:
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, datetime):
            return value.isoformat()
        return str(value)


class JsonFileMenuProvider(MenuProvider):
    """Menu provider reading the ``menuItems`` of a JSON store."""

    def __init__(self, store: JsonFileStore):
        self.store = store

    async def load_items(self) -> List[MenuItem]:
        return self.store.menu_items


class JsonFileOrderRepository(OrderRepository):
    """Order repository persisting to a single JSON document."""

    def __init__(self, store: JsonFileStore):
        self.store = store

    async def create(self, order: Order) -> Order:
        return await asyncio.to_thread(self.store.insert, order)

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        return self.store.get(order_id)

    async def list_all(self) -> List[Order]:
        return newest_first(self.store.values())

    async def update_status(self, order_id: int, status: str) -> Optional[Order]:
        return await asyncio.to_thread(self.store.set_status, order_id, status)
