"""
Error classes for the ordering core.
"""


class OrderingError(Exception):
    """Base error for ordering operations."""
    pass


class EmptyCartError(OrderingError):
    """Cart was missing or had no lines."""

    def __init__(self, message: str = "Cart cannot be empty"):
        super().__init__(message)


class NotFoundError(OrderingError):
    """Requested entity does not exist."""
    pass


class MenuItemNotFoundError(NotFoundError):
    """Unknown menu item id on direct lookup."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Menu item {item_id} not found")


class OrderNotFoundError(NotFoundError):
    """Unknown order id."""

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class StorageUnavailableError(OrderingError):
    """Storage backend could not be reached or written."""
    pass
