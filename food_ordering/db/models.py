"""Database models."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MenuItemRecord(Base):
    """Menu item model."""

    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(String(500), default="", nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False)
    image_url = Column(String(500), default="", nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class OrderRecord(Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    status = Column(String(50), default="pending", nullable=False)  # pending, preparing, ready, completed
    total = Column(Numeric(10, 2), default=0, nullable=False)
    customer_name = Column(String(200), nullable=True)
    customer_phone = Column(String(50), nullable=True)
    delivery_address = Column(String(500), nullable=True)

    # Relationships
    items = relationship(
        "OrderItemRecord",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItemRecord.id",
    )


class OrderItemRecord(Base):
    """Order item model."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Weak reference: the menu item may since have changed or been removed
    menu_item_id = Column(Integer, nullable=False)
    menu_item_name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship("OrderRecord", back_populates="items")
