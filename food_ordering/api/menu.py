"""Menu API endpoints."""
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from food_ordering.core.dependencies import get_menu_catalog
from food_ordering.core.errors import MenuItemNotFoundError
from food_ordering.services.menu.base import MenuItem
from food_ordering.services.menu.catalog import MenuCatalog


router = APIRouter()
logger = logging.getLogger(__name__)


class MenuItemResponse(BaseModel):
    """Menu item response model."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    name: str
    description: str = ""
    price: float
    category: str = ""
    image_url: str = ""
    created_at: datetime


def _to_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse.model_validate(item, from_attributes=True)


def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.get("/api/menu", response_model=List[MenuItemResponse])
async def get_menu(
    request: Request,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    """Get the full menu."""
    logger.info(f"[MENU] Request received - Client: {_client(request)}")
    items = catalog.list_all()
    logger.debug(f"[MENU] Returning {len(items)} items")
    return [_to_response(item) for item in items]


@router.get("/api/menu/categories", response_model=List[str])
async def get_categories(catalog: MenuCatalog = Depends(get_menu_catalog)):
    """Get distinct menu categories."""
    return catalog.list_categories()


@router.get("/api/menu/category/{category}", response_model=List[MenuItemResponse])
async def get_menu_by_category(
    category: str,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    """Get menu items in a category (case-insensitive)."""
    items = catalog.list_by_category(category)
    logger.debug(f"[MENU] Category '{category}' - {len(items)} items")
    return [_to_response(item) for item in items]


@router.get("/api/menu/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: int,
    request: Request,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    """Get a single menu item."""
    try:
        return _to_response(catalog.get(item_id))
    except MenuItemNotFoundError as e:
        logger.info(f"[MENU] {e} - Client: {_client(request)}")
        raise HTTPException(status_code=404, detail="Menu item not found")
