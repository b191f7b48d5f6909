# backend/modules/analytics/services/sales_data_sources.py

"""
Order and product collaborators consumed by the sales summary.

The aggregator only needs the two listing operations below; any object
providing them (an ORM repository, an HTTP client, the in-memory store used
by tests) can be injected.
"""

from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence, Union

from ..schemas.sales_summary_schemas import Order, Product

OrderRecord = Union[Order, Mapping[str, Any]]
ProductRecord = Union[Product, Mapping[str, Any]]


class OrderSource(Protocol):
    def list_orders(self) -> Sequence[OrderRecord]:
        ...


class ProductSource(Protocol):
    def list_products(self) -> Sequence[ProductRecord]:
        ...


class InMemorySalesDataSource:
    """Materialized orders and products held in process memory"""

    def __init__(
        self,
        orders: Optional[Iterable[OrderRecord]] = None,
        products: Optional[Iterable[ProductRecord]] = None,
    ):
        self._orders: List[OrderRecord] = list(orders or [])
        self._products: List[ProductRecord] = list(products or [])

    def list_orders(self) -> Sequence[OrderRecord]:
        return list(self._orders)

    def list_products(self) -> Sequence[ProductRecord]:
        return list(self._products)

    def add_order(self, order: OrderRecord) -> None:
        self._orders.append(order)
