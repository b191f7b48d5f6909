# backend/modules/analytics/schemas/sales_summary_schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional, List, Dict, Union
from datetime import datetime, date as date_type
from enum import Enum

from ..constants import (
    DEFAULT_NET_SALES_RATE,
    DEFAULT_DISCOUNT_RATE,
    DEFAULT_TAX_RATE,
    DEFAULT_SERVICE_CHARGE_RATE,
    DEFAULT_NET_TOTAL_RATE,
    DEFAULT_VOID_RATE,
    DEFAULT_VOID_TRANSFER_RATE,
    DEFAULT_TOTAL_OUTLETS,
    DEFAULT_DAILY_AVERAGE_DIVISORS,
    DEFAULT_TOP_PRODUCTS_LIMIT,
    DEFAULT_LOW_STOCK_THRESHOLD,
)


class SalesPeriod(str, Enum):
    """Reporting window selector"""

    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEK = "week"
    MONTH = "month"


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes as camelCase"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ========== Inputs ==========


class OrderItem(CamelModel):
    """Line item as supplied by the order collaborator"""

    product_id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class Order(CamelModel):
    """Order record consumed by the aggregator"""

    id: Union[int, str]
    date: datetime
    # Unknown statuses are accepted and excluded from every bucket
    status: str
    total: float = Field(..., ge=0)
    customer_name: Optional[str] = None
    items: List[OrderItem] = Field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class Product(CamelModel):
    """Catalog entry consumed by the aggregator"""

    id: Union[int, str]
    name: str
    category: Optional[str] = None
    price: float = 0.0
    stock: int = 0


class SalesSummaryRules(CamelModel):
    """
    Business-rule stand-ins used by the summary.

    The rates are flat proportions of gross amount until per-order
    tax/discount data is available.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    net_sales_rate: float = Field(DEFAULT_NET_SALES_RATE, ge=0)
    discount_rate: float = Field(DEFAULT_DISCOUNT_RATE, ge=0)
    tax_rate: float = Field(DEFAULT_TAX_RATE, ge=0)
    service_charge_rate: float = Field(DEFAULT_SERVICE_CHARGE_RATE, ge=0)
    net_total_rate: float = Field(DEFAULT_NET_TOTAL_RATE, ge=0)
    void_rate: float = Field(DEFAULT_VOID_RATE, ge=0)
    void_transfer_rate: float = Field(DEFAULT_VOID_TRANSFER_RATE, ge=0)
    total_outlets: int = Field(DEFAULT_TOTAL_OUTLETS, ge=0)
    daily_average_divisors: Dict[SalesPeriod, int] = Field(
        default_factory=lambda: {
            SalesPeriod(period): divisor
            for period, divisor in DEFAULT_DAILY_AVERAGE_DIVISORS.items()
        }
    )
    match_products_by_name: bool = True
    bound_yesterday_to_midnight: bool = False
    top_products_limit: int = Field(DEFAULT_TOP_PRODUCTS_LIMIT, ge=0)
    low_stock_threshold: int = Field(DEFAULT_LOW_STOCK_THRESHOLD, ge=0)

    @field_validator("daily_average_divisors", mode="after")
    @classmethod
    def validate_divisors(cls, v):
        missing = [period.value for period in SalesPeriod if period not in v]
        if missing:
            raise ValueError(f"daily_average_divisors missing periods: {missing}")
        if any(divisor <= 0 for divisor in v.values()):
            raise ValueError("daily_average_divisors must be positive")
        return v


class SalesSummaryRequest(CamelModel):
    """Ad-hoc summary over caller-supplied records"""

    period: SalesPeriod = SalesPeriod.TODAY
    # Raw records; malformed ones are skipped by the aggregator, not rejected here
    orders: List[Any] = Field(default_factory=list)
    products: List[Any] = Field(default_factory=list)


# ========== Outputs ==========


class CategorySales(CamelModel):
    """Revenue attributed to one product category"""

    name: str
    value: float = Field(description="Percentage of gross amount, one decimal")
    sales: float


class TrendPoint(CamelModel):
    """One calendar day of the 7-day trend"""

    name: str = Field(description="Weekday abbreviation")
    date: date_type
    sales: float
    orders: int


class HourlyBucket(CamelModel):
    """Orders placed today within one business hour"""

    hour: str
    orders: int


class TopProduct(CamelModel):
    """Catalog product ranked by revenue in the period"""

    product_id: Union[int, str]
    name: str
    category: str
    units: int
    revenue: float
    percentage: float
    stock: int
    stock_status: str


class SalesSummary(CamelModel):
    """Period-scoped sales summary, recomputed on every request"""

    period: SalesPeriod
    period_start: datetime
    period_end: datetime
    generated_at: datetime

    # Revenue figures
    gross_amount: float
    net_sales: float
    discounts: float
    tax: float
    charges: float
    rounding_amount: float
    net_total: float
    daily_average_sales: float

    # Volume
    quantity: int
    transaction_count: int
    voided_transactions: int
    voided_transfer_count: int
    cancelled_transaction_count: int

    # Averages
    average_value: float
    average_unit: float
    customer_average_value: float

    # Open orders
    open_order_quantity: int
    open_order_amount: float

    total_outlets: int

    category_breakdown: List[CategorySales] = Field(default_factory=list)
    sales_trend: List[TrendPoint] = Field(default_factory=list)
    hourly_sales: List[HourlyBucket] = Field(default_factory=list)
    top_products: List[TopProduct] = Field(default_factory=list)

    skipped_records: int = Field(
        0, description="Input records dropped because they failed validation"
    )
