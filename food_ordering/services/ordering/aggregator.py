"""Cart to order aggregation."""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from food_ordering.core.errors import EmptyCartError
from food_ordering.services.menu.base import to_money, utc_now
from food_ordering.services.menu.catalog import MenuCatalog
from food_ordering.services.ordering.models import CartLine, Order, OrderItem, OrderStatus

logger = logging.getLogger(__name__)


class OrderAggregator:
    """Turns cart lines into an unsaved Order priced from the catalog."""

    def __init__(
        self,
        catalog: MenuCatalog,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.catalog = catalog
        self.clock = clock

    def build(
        self,
        cart_lines: Optional[Sequence[CartLine]],
        customer_name: Optional[str] = None,
        customer_phone: Optional[str] = None,
        delivery_address: Optional[str] = None,
    ) -> Order:
        """
        Build an order from cart lines.

        Lines whose menu item is not in the catalog are dropped without
        error, so a cart of only unknown items yields an empty order with a
        zero total.

        Raises:
            EmptyCartError: if the cart is missing or has no lines
        """
        if not cart_lines:
            raise EmptyCartError()

        items = []
        total = Decimal("0.00")
        for line in cart_lines:
            menu_item = self.catalog.find(line.menu_item_id)
            if menu_item is None:
                logger.debug(f"Dropping cart line for unknown menu item {line.menu_item_id}")
                continue
            item = OrderItem(
                menu_item_id=menu_item.id,
                menu_item_name=menu_item.name,
                quantity=line.quantity,
                price=menu_item.price,
            )
            items.append(item)
            total += item.line_price

        return Order(
            created_at=self.clock(),
            status=OrderStatus.PENDING,
            total=to_money(total),
            customer_name=customer_name,
            customer_phone=customer_phone,
            delivery_address=delivery_address,
            items=items,
        )
