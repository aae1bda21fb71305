"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from food_ordering.core.bootstrap import build_storage
from food_ordering.core.config import settings
from food_ordering.core.logging import setup_logging
from food_ordering.api import health, menu, orders

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info(f"Starting {settings.restaurant_name} ordering API - backend: {settings.storage_backend}")
    app.state.storage = await build_storage(settings)
    yield
    # Shutdown
    await app.state.storage.close()


app = FastAPI(
    title="Food Ordering API",
    description="Menu, cart checkout and order status tracking",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(menu.router, tags=["menu"])
app.include_router(orders.router, tags=["orders"])


@app.get("/")
async def root():
    """API banner."""
    return {
        "message": f"{settings.restaurant_name} Food Ordering API",
        "version": "0.1.0",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("food_ordering.main:app", host=settings.host, port=settings.port)
