# backend/modules/analytics/tests/conftest.py

import pytest
from datetime import datetime, timedelta

from modules.analytics.schemas.sales_summary_schemas import (
    Order,
    OrderItem,
    Product,
)


# Monday afternoon
FIXED_NOW = datetime(2026, 10, 19, 14, 30)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def today_at(fixed_now):
    """Build a timestamp on the fixed day, optionally shifted back some days"""

    def _at(hour: int, minute: int = 0, days_ago: int = 0) -> datetime:
        day = fixed_now - timedelta(days=days_ago)
        return day.replace(hour=hour, minute=minute, second=0, microsecond=0)

    return _at


@pytest.fixture
def make_order():
    """Factory for orders with sensible defaults"""
    counter = {"next": 1}

    def _make(
        when: datetime,
        status: str = "completed",
        total: float = 100.0,
        customer_name: str = "Alice",
        items=None,
        order_id=None,
    ) -> Order:
        if order_id is None:
            order_id = f"ord-{counter['next']}"
            counter["next"] += 1
        return Order(
            id=order_id,
            date=when,
            status=status,
            total=total,
            customer_name=customer_name,
            items=items or [],
        )

    return _make


@pytest.fixture
def sample_products():
    """Small restaurant catalog"""
    return [
        Product(id="p1", name="Margherita", category="Pizza", price=50.0, stock=5),
        Product(id="p2", name="Latte", category="Coffee", price=4.0, stock=50),
        Product(id="p3", name="Cheesecake", category="Dessert", price=8.0, stock=12),
        Product(id="p4", name="Tap Water", category="", price=0.0, stock=100),
    ]


@pytest.fixture
def margherita_item():
    def _item(quantity: int = 1, price: float = 50.0) -> OrderItem:
        return OrderItem(product_id="p1", name="Margherita", price=price, quantity=quantity)

    return _item


@pytest.fixture
def latte_item():
    def _item(quantity: int = 1, price: float = 4.0) -> OrderItem:
        return OrderItem(product_id="p2", name="Latte", price=price, quantity=quantity)

    return _item
