"""Order service."""
import logging
from typing import List, Optional, Sequence

from food_ordering.core.errors import OrderNotFoundError
from food_ordering.services.ordering.aggregator import OrderAggregator
from food_ordering.services.ordering.models import CartLine, Order
from food_ordering.services.persistence.base import OrderRepository

logger = logging.getLogger(__name__)


class OrderService:
    """Creates, fetches and advances orders."""

    def __init__(self, aggregator: OrderAggregator, repository: OrderRepository):
        self.aggregator = aggregator
        self.repository = repository

    async def create_order(
        self,
        cart_lines: Optional[Sequence[CartLine]],
        customer_name: Optional[str] = None,
        customer_phone: Optional[str] = None,
        delivery_address: Optional[str] = None,
    ) -> Order:
        """
        Price a cart and persist the resulting order.

        Raises:
            EmptyCartError: if the cart is missing or empty; nothing is stored
            StorageUnavailableError: if the backend could not store the order
        """
        order = self.aggregator.build(
            cart_lines,
            customer_name=customer_name,
            customer_phone=customer_phone,
            delivery_address=delivery_address,
        )
        created = await self.repository.create(order)
        logger.info(
            f"Order {created.id} created - {len(created.items)} items, total {created.total}"
        )
        return created

    async def get_order(self, order_id: int) -> Order:
        order = await self.repository.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def list_orders(self) -> List[Order]:
        return await self.repository.list_all()

    async def set_status(self, order_id: int, status: str) -> Order:
        """Set an order's status. Any status string is accepted."""
        order = await self.repository.update_status(order_id, status)
        if order is None:
            raise OrderNotFoundError(order_id)
        logger.info(f"Order {order_id} status set to {status!r}")
        return order
