"""Order API endpoints."""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from food_ordering.core.dependencies import get_order_service
from food_ordering.core.errors import EmptyCartError, OrderNotFoundError, StorageUnavailableError
from food_ordering.services.ordering.models import CartLine, Order
from food_ordering.services.ordering.service import OrderService


router = APIRouter()
logger = logging.getLogger(__name__)


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CreateOrderRequest(ApiModel):
    """Order submission body."""
    cart_items: Optional[List[CartLine]] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    delivery_address: Optional[str] = None


class UpdateStatusRequest(ApiModel):
    """Status change body."""
    status: str = Field(..., min_length=1)


class OrderItemResponse(ApiModel):
    """Order item response model."""
    menu_item_id: int
    menu_item_name: str
    quantity: int
    price: float
    line_price: float


class OrderResponse(ApiModel):
    """Order response model."""
    id: int
    created_at: datetime
    status: str
    total: float
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    delivery_address: Optional[str] = None
    items: List[OrderItemResponse] = []


def _to_response(order: Order) -> OrderResponse:
    return OrderResponse.model_validate(order, from_attributes=True)


def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _unavailable(e: StorageUnavailableError) -> HTTPException:
    logger.error(f"[ORDERS] Storage unavailable - {e}")
    return HTTPException(status_code=503, detail="Order storage unavailable")


@router.post("/api/orders", response_model=OrderResponse, status_code=201)
async def create_order(
    payload: CreateOrderRequest,
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    """Submit a cart as a new order."""
    logger.info(
        f"[ORDERS] Create request - {len(payload.cart_items or [])} cart lines, "
        f"Client: {_client(request)}"
    )
    try:
        order = await service.create_order(
            payload.cart_items,
            customer_name=payload.customer_name,
            customer_phone=payload.customer_phone,
            delivery_address=payload.delivery_address,
        )
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise _unavailable(e)
    except Exception as e:
        logger.error(
            f"[ORDERS] Error creating order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=f"Error creating order: {str(e)}")
    return _to_response(order)


@router.get("/api/orders", response_model=List[OrderResponse])
async def list_orders(
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    """Get all orders, newest first."""
    logger.info(f"[ORDERS] List request - Client: {_client(request)}")
    try:
        orders = await service.list_orders()
    except StorageUnavailableError as e:
        raise _unavailable(e)
    except Exception as e:
        logger.error(
            f"[ORDERS] Error listing orders - Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=f"Error listing orders: {str(e)}")
    logger.info(f"[ORDERS] Found {len(orders)} orders")
    return [_to_response(order) for order in orders]


@router.get("/api/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
):
    """Get a single order with its items."""
    try:
        order = await service.get_order(order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except StorageUnavailableError as e:
        raise _unavailable(e)
    except Exception as e:
        logger.error(
            f"[ORDERS] Error fetching order {order_id} - Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=f"Error fetching order: {str(e)}")
    return _to_response(order)


@router.patch("/api/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    payload: UpdateStatusRequest,
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    """Move an order to a new status."""
    logger.info(
        f"[ORDERS] Status update - order: {order_id}, status: {payload.status!r}, "
        f"Client: {_client(request)}"
    )
    try:
        order = await service.set_status(order_id, payload.status)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except StorageUnavailableError as e:
        raise _unavailable(e)
    except Exception as e:
        logger.error(
            f"[ORDERS] Error updating order {order_id} - Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=f"Error updating order: {str(e)}")
    return _to_response(order)
