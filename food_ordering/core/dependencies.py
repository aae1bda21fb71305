"""FastAPI dependencies."""
from fastapi import Depends, Request

from food_ordering.core.bootstrap import Storage
from food_ordering.services.menu.catalog import MenuCatalog
from food_ordering.services.ordering.service import OrderService


def get_storage(request: Request) -> Storage:
    """Get the storage built at startup."""
    return request.app.state.storage


def get_menu_catalog(storage: Storage = Depends(get_storage)) -> MenuCatalog:
    """Get menu catalog instance."""
    return storage.catalog


def get_order_service(storage: Storage = Depends(get_storage)) -> OrderService:
    """Get order service instance."""
    return storage.service
