"""Relational order storage."""
import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlalchemy.orm import contains_eager, selectinload

from food_ordering.core.errors import StorageUnavailableError
from food_ordering.db.models import MenuItemRecord, OrderItemRecord, OrderRecord
from food_ordering.services.menu.base import MenuItem, MenuProvider
from food_ordering.services.ordering.models import Order
from food_ordering.services.persistence.base import OrderRepository

logger = logging.getLogger(__name__)


def _orders_with_items():
    """One row per order item, eagerly collected into ``OrderRecord.items``."""
    return (
        select(OrderRecord)
        .outerjoin(OrderRecord.items)
        .options(contains_eager(OrderRecord.items))
    )


def _to_order(record: OrderRecord) -> Order:
    return Order.model_validate(record, from_attributes=True)


class SqlMenuProvider(MenuProvider):
    """Menu provider reading the ``menu_items`` table."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def load_items(self) -> List[MenuItem]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(MenuItemRecord).order_by(MenuItemRecord.id)
                )
                return [
                    MenuItem.model_validate(record, from_attributes=True)
                    for record in result.scalars().all()
                ]
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Could not load menu items: {e}") from e


class SqlOrderRepository(OrderRepository):
    """Order repository backed by SQLAlchemy.

    Each call runs in its own session; isolation between concurrent calls is
    left to the database.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        engine: Optional[AsyncEngine] = None,
    ):
        self.session_factory = session_factory
        self.engine = engine

    async def create(self, order: Order) -> Order:
        """
        Insert an order and its items in a single transaction.

        The order row goes in first to obtain its id, then the item rows,
        then the total. Any failure rolls back all three.
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = OrderRecord(
                        created_at=order.created_at,
                        status=order.status,
                        total=0,
                        customer_name=order.customer_name,
                        customer_phone=order.customer_phone,
                        delivery_address=order.delivery_address,
                        items=[],
                    )
                    session.add(record)
                    await session.flush()

                    for item in order.items:
                        record.items.append(
                            OrderItemRecord(
                                order_id=record.id,
                                menu_item_id=item.menu_item_id,
                                menu_item_name=item.menu_item_name,
                                quantity=item.quantity,
                                price=item.price,
                            )
                        )
                    await session.flush()

                    record.total = order.total
                logger.debug(f"Created order {record.id} with {len(record.items)} items")
                return _to_order(record)
        except SQLAlchemyError as e:
            logger.error(f"Error creating order: {type(e).__name__}: {e}", exc_info=True)
            raise StorageUnavailableError(f"Could not create order: {e}") from e

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID with items."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    _orders_with_items()
                    .where(OrderRecord.id == order_id)
                    .order_by(OrderItemRecord.id)
                )
                record = result.unique().scalar_one_or_none()
                return _to_order(record) if record else None
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Could not load order {order_id}: {e}") from e

    async def list_all(self) -> List[Order]:
        """All orders with items, newest first, one entry per order."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    _orders_with_items().order_by(
                        desc(OrderRecord.created_at),
                        desc(OrderRecord.id),
                        OrderItemRecord.id,
                    )
                )
                return [_to_order(record) for record in result.unique().scalars().all()]
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Could not list orders: {e}") from e

    async def update_status(self, order_id: int, status: str) -> Optional[Order]:
        """Update order status."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = await session.get(
                        OrderRecord,
                        order_id,
                        options=[selectinload(OrderRecord.items)],
                    )
                    if record is None:
                        return None
                    record.status = status
                return _to_order(record)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Could not update order {order_id}: {e}") from e

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
