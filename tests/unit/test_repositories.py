"""Contract tests run against every order repository backend."""
import asyncio
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from food_ordering.services.ordering.models import Order, OrderItem


def make_order(created_at=None, **kwargs) -> Order:
    items = [
        OrderItem(menu_item_id=1, menu_item_name="Margherita Pizza", quantity=2, price="12.99"),
        OrderItem(menu_item_id=7, menu_item_name="Coca Cola", quantity=1, price="2.99"),
    ]
    return Order(
        created_at=created_at or datetime.now(timezone.utc),
        total=sum(item.line_price for item in items),
        items=items,
        **kwargs,
    )


class TestOrderRepositoryContract:
    """Behaviour every backend must share."""

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, order_repository):
        """Test creating a new order."""
        order = await order_repository.create(make_order())

        assert order.id is not None
        assert order.status == "pending"
        assert order.total == Decimal("28.97")

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, order_repository):
        """Test retrieving order with items."""
        original = make_order(
            customer_name="Grace",
            customer_phone="555-0101",
            delivery_address="42 Harbour Rd",
        )
        created = await order_repository.create(original)

        fetched = await order_repository.get_by_id(created.id)

        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.total == Decimal("28.97")
        assert fetched.customer_name == "Grace"
        assert fetched.customer_phone == "555-0101"
        assert fetched.delivery_address == "42 Harbour Rd"
        assert [
            (i.menu_item_id, i.menu_item_name, i.quantity, i.price) for i in fetched.items
        ] == [
            (1, "Margherita Pizza", 2, Decimal("12.99")),
            (7, "Coca Cola", 1, Decimal("2.99")),
        ]

    @pytest.mark.asyncio
    async def test_empty_order_round_trip(self, order_repository):
        """An order with no items persists with a zero total."""
        created = await order_repository.create(Order())

        fetched = await order_repository.get_by_id(created.id)

        assert fetched.items == []
        assert fetched.total == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, order_repository):
        assert await order_repository.get_by_id(12345) is None

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, order_repository):
        ids = [(await order_repository.create(make_order())).id for _ in range(5)]

        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_list_all_newest_first(self, order_repository):
        base = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        oldest = await order_repository.create(make_order(created_at=base))
        newest = await order_repository.create(make_order(created_at=base + timedelta(minutes=10)))
        middle = await order_repository.create(make_order(created_at=base + timedelta(minutes=5)))

        orders = await order_repository.list_all()

        assert [o.id for o in orders] == [newest.id, middle.id, oldest.id]

    @pytest.mark.asyncio
    async def test_list_all_keeps_items_without_duplicates(self, order_repository):
        first = await order_repository.create(make_order())
        second = await order_repository.create(Order())

        orders = await order_repository.list_all()

        assert sorted(o.id for o in orders) == sorted([first.id, second.id])
        by_id = {o.id: o for o in orders}
        assert len(by_id[first.id].items) == 2
        assert by_id[second.id].items == []

    @pytest.mark.asyncio
    async def test_list_all_is_repeatable(self, order_repository):
        for _ in range(3):
            await order_repository.create(make_order())

        first = await order_repository.list_all()
        second = await order_repository.list_all()

        assert first == second

    @pytest.mark.asyncio
    async def test_update_status(self, order_repository):
        """Test changing an order's status."""
        created = await order_repository.create(make_order())

        updated = await order_repository.update_status(created.id, "preparing")

        assert updated.status == "preparing"
        assert updated.total == created.total
        assert updated.items == created.items
        fetched = await order_repository.get_by_id(created.id)
        assert fetched.status == "preparing"

    @pytest.mark.asyncio
    async def test_update_status_accepts_any_string(self, order_repository):
        """Statuses outside the usual set are stored as given."""
        created = await order_repository.create(make_order())

        updated = await order_repository.update_status(created.id, "out_for_delivery")

        assert updated.status == "out_for_delivery"

    @pytest.mark.asyncio
    async def test_update_status_last_write_wins(self, order_repository):
        created = await order_repository.create(make_order())

        await order_repository.update_status(created.id, "ready")
        await order_repository.update_status(created.id, "completed")

        assert (await order_repository.get_by_id(created.id)).status == "completed"

    @pytest.mark.asyncio
    async def test_update_status_missing_returns_none(self, order_repository):
        assert await order_repository.update_status(999, "ready") is None

    @pytest.mark.asyncio
    async def test_returned_orders_are_copies(self, order_repository):
        created = await order_repository.create(make_order())

        created.status = "tampered"
        created.items.clear()

        fetched = await order_repository.get_by_id(created.id)
        assert fetched.status == "pending"
        assert len(fetched.items) == 2

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, order_repository):
        results = await asyncio.gather(
            *(order_repository.create(make_order()) for _ in range(20))
        )

        ids = [order.id for order in results]
        assert len(set(ids)) == 20
        for order_id in ids:
            fetched = await order_repository.get_by_id(order_id)
            assert fetched.total == Decimal("28.97")
