# backend/modules/analytics/services/sales_summary_service.py

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from core.config import Settings

from ..constants import (
    ORDER_STATUS_PENDING,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_CANCELLED,
    TREND_WINDOW_DAYS,
    WEEKDAY_LABELS,
    BUSINESS_HOURS_START,
    BUSINESS_HOURS_END,
    UNCATEGORIZED_LABEL,
    PERCENTAGE_DECIMALS,
    STOCK_STATUS_LOW,
    STOCK_STATUS_GOOD,
)
from ..exceptions import DataQualityError
from ..schemas.sales_summary_schemas import (
    CategorySales,
    HourlyBucket,
    Order,
    OrderItem,
    Product,
    SalesPeriod,
    SalesSummary,
    SalesSummaryRules,
    TopProduct,
    TrendPoint,
)
from .period_resolver import (
    PeriodWindow,
    local_now,
    parse_period,
    resolve_period_window,
    to_local,
)
from .sales_data_sources import (
    OrderRecord,
    OrderSource,
    ProductRecord,
    ProductSource,
)

logger = logging.getLogger(__name__)

RoundingSource = Callable[[], float]


def no_rounding() -> float:
    """Default rounding adjustment; keeps summaries deterministic"""
    return 0.0


def safe_divide(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def percentage_of(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, PERCENTAGE_DECIMALS)


def format_hour_label(hour: int) -> str:
    """12-hour clock label: 0 -> 12AM, 9 -> 9AM, 12 -> 12PM, 21 -> 9PM"""
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}{suffix}"


def category_label(product: Product) -> str:
    return product.category or UNCATEGORIZED_LABEL


# ========== Input coercion ==========


def _record_id(record) -> object:
    if isinstance(record, (Order, Product)):
        return record.id
    try:
        return record.get("id")
    except AttributeError:
        return None


def coerce_orders(
    records: Iterable[OrderRecord], tz: Optional[tzinfo] = None
) -> Tuple[List[Order], int]:
    """
    Validate raw order records and express their dates in local time.

    Malformed records are logged and skipped. Returns the usable orders and
    the number skipped. Inputs are never mutated.
    """
    orders: List[Order] = []
    skipped = 0
    for record in records:
        try:
            order = record if isinstance(record, Order) else Order.model_validate(record)
            if order.date.tzinfo is not None:
                order = order.model_copy(update={"date": to_local(order.date, tz)})
        except (ValidationError, TypeError, OverflowError) as e:
            skipped += 1
            issue = DataQualityError("order", _record_id(record), str(e))
            logger.warning(issue.message)
            continue
        orders.append(order)
    return orders, skipped


def coerce_products(records: Iterable[ProductRecord]) -> Tuple[List[Product], int]:
    products: List[Product] = []
    skipped = 0
    for record in records:
        try:
            product = (
                record if isinstance(record, Product) else Product.model_validate(record)
            )
        except (ValidationError, TypeError, OverflowError) as e:
            skipped += 1
            issue = DataQualityError("product", _record_id(record), str(e))
            logger.warning(issue.message)
            continue
        products.append(product)
    return products, skipped


# ========== Product lookup ==========


class ProductCatalog:
    """
    Resolves order items to catalog products.

    Items are matched by product id. Matching by item name is a deprecated
    fallback kept for callers that only send names; it can be switched off
    with ``match_by_name``.
    """

    def __init__(self, products: Iterable[Product], match_by_name: bool = True):
        self.match_by_name = match_by_name
        self._by_id: Dict[str, Product] = {}
        self._by_name: Dict[str, Product] = {}
        for product in products:
            self._by_id.setdefault(str(product.id), product)
            self._by_name.setdefault(product.name, product)

    def lookup(self, item: OrderItem) -> Optional[Product]:
        if item.product_id is not None:
            product = self._by_id.get(str(item.product_id))
            if product is not None:
                return product

        if self.match_by_name and item.name:
            product = self._by_name.get(item.name)
            if product is not None:
                logger.debug(
                    "Matched item '%s' to product %s by name", item.name, product.id
                )
            return product

        return None


# ========== Partitioning ==========


@dataclass
class PartitionedOrders:
    """Orders in a window, split by lifecycle state"""

    completed: List[Order] = field(default_factory=list)
    pending: List[Order] = field(default_factory=list)
    cancelled: List[Order] = field(default_factory=list)


def partition_orders(orders: Iterable[Order], window: PeriodWindow) -> PartitionedOrders:
    buckets = PartitionedOrders()
    by_status = {
        ORDER_STATUS_COMPLETED: buckets.completed,
        ORDER_STATUS_PENDING: buckets.pending,
        ORDER_STATUS_CANCELLED: buckets.cancelled,
    }
    for order in orders:
        if not window.contains(order.date):
            continue
        bucket = by_status.get(order.status)
        if bucket is None:
            logger.debug("Order %s has unknown status '%s'", order.id, order.status)
            continue
        bucket.append(order)
    return buckets


# ========== Breakdowns ==========


def compute_category_breakdown(
    completed_orders: Iterable[Order],
    catalog: ProductCatalog,
    gross_amount: float,
) -> List[CategorySales]:
    """Attribute item revenue to product categories; unmatched items are dropped"""
    sales_by_category: Dict[str, float] = defaultdict(float)
    dropped = 0
    for order in completed_orders:
        for item in order.items:
            product = catalog.lookup(item)
            if product is None:
                dropped += 1
                continue
            sales_by_category[category_label(product)] += item.line_total

    if dropped:
        logger.debug("%d order items had no matching product", dropped)

    breakdown = [
        CategorySales(name=name, sales=sales, value=percentage_of(sales, gross_amount))
        for name, sales in sales_by_category.items()
    ]
    return sorted(breakdown, key=lambda entry: entry.sales, reverse=True)


def compute_sales_trend(orders: Iterable[Order], today: date) -> List[TrendPoint]:
    """
    Completed sales per day for the 7 days ending today, oldest first.

    Computed over every supplied order, independent of the reporting period.
    """
    days = [today - timedelta(days=offset) for offset in range(TREND_WINDOW_DAYS - 1, -1, -1)]
    sales: Dict[date, float] = {day: 0.0 for day in days}
    counts: Dict[date, int] = {day: 0 for day in days}

    for order in orders:
        if order.status != ORDER_STATUS_COMPLETED:
            continue
        day = order.date.date()
        if day in sales:
            sales[day] += order.total
            counts[day] += 1

    return [
        TrendPoint(
            name=WEEKDAY_LABELS[day.weekday()],
            date=day,
            sales=sales[day],
            orders=counts[day],
        )
        for day in days
    ]


def compute_hourly_sales(orders: Iterable[Order], today: date) -> List[HourlyBucket]:
    """Today's orders of any status per business hour; other hours are ignored"""
    counts: Dict[int, int] = {
        hour: 0 for hour in range(BUSINESS_HOURS_START, BUSINESS_HOURS_END + 1)
    }
    for order in orders:
        if order.date.date() != today:
            continue
        if order.date.hour in counts:
            counts[order.date.hour] += 1

    return [
        HourlyBucket(hour=format_hour_label(hour), orders=count)
        for hour, count in counts.items()
    ]


def compute_top_products(
    completed_orders: Iterable[Order],
    catalog: ProductCatalog,
    rules: SalesSummaryRules,
) -> List[TopProduct]:
    units: Dict[str, int] = defaultdict(int)
    revenue: Dict[str, float] = defaultdict(float)
    products: Dict[str, Product] = {}
    total_revenue = 0.0

    for order in completed_orders:
        for item in order.items:
            total_revenue += item.line_total
            product = catalog.lookup(item)
            if product is None:
                continue
            key = str(product.id)
            products[key] = product
            units[key] += item.quantity
            revenue[key] += item.line_total

    ranked = sorted(
        (key for key in products if revenue[key] > 0),
        key=lambda key: revenue[key],
        reverse=True,
    )[: rules.top_products_limit]

    return [
        TopProduct(
            product_id=products[key].id,
            name=products[key].name,
            category=category_label(products[key]),
            units=units[key],
            revenue=revenue[key],
            percentage=percentage_of(revenue[key], total_revenue),
            stock=products[key].stock,
            stock_status=(
                STOCK_STATUS_LOW
                if products[key].stock < rules.low_stock_threshold
                else STOCK_STATUS_GOOD
            ),
        )
        for key in ranked
    ]


# ========== Aggregation ==========


def compute_sales_summary(
    orders: Iterable[OrderRecord],
    products: Iterable[ProductRecord],
    period: Union[SalesPeriod, str],
    *,
    now: Optional[datetime] = None,
    rules: Optional[SalesSummaryRules] = None,
    rounding: Optional[RoundingSource] = None,
    tz: Optional[tzinfo] = None,
) -> SalesSummary:
    """
    Build the sales summary for a reporting period.

    Args:
        orders: order records (models or mappings)
        products: catalog records (models or mappings)
        period: today, yesterday, week or month
        now: current time; defaults to the clock in ``tz``
        rules: business-rule rates and limits
        rounding: zero-argument callable for the rounding adjustment
        tz: reporting timezone; None means the host's local zone

    Raises:
        InvalidPeriodError: if ``period`` is not a known selector
    """
    period = parse_period(period)
    rules = rules or SalesSummaryRules()
    rounding = rounding or no_rounding
    now = local_now(tz) if now is None else to_local(now, tz)

    window = resolve_period_window(
        period, now, bound_yesterday_to_midnight=rules.bound_yesterday_to_midnight
    )

    all_orders, skipped_orders = coerce_orders(orders, tz)
    catalog_products, skipped_products = coerce_products(products)
    catalog = ProductCatalog(catalog_products, match_by_name=rules.match_products_by_name)

    buckets = partition_orders(all_orders, window)
    completed = buckets.completed

    gross_amount = sum(order.total for order in completed)
    quantity = sum(order.item_count for order in completed)
    transaction_count = len(completed)
    unique_customers = len({order.customer_name for order in completed})

    summary = SalesSummary(
        period=period,
        period_start=window.start,
        period_end=window.end,
        generated_at=now,
        gross_amount=gross_amount,
        net_sales=gross_amount * rules.net_sales_rate,
        discounts=gross_amount * rules.discount_rate,
        tax=gross_amount * rules.tax_rate,
        charges=gross_amount * rules.service_charge_rate,
        rounding_amount=rounding(),
        net_total=gross_amount * rules.net_total_rate,
        daily_average_sales=safe_divide(
            gross_amount, rules.daily_average_divisors[period]
        ),
        quantity=quantity,
        transaction_count=transaction_count,
        voided_transactions=math.floor(transaction_count * rules.void_rate),
        voided_transfer_count=math.floor(transaction_count * rules.void_transfer_rate),
        cancelled_transaction_count=len(buckets.cancelled),
        average_value=safe_divide(gross_amount, transaction_count),
        average_unit=safe_divide(quantity, transaction_count),
        customer_average_value=safe_divide(gross_amount, unique_customers),
        open_order_quantity=len(buckets.pending),
        open_order_amount=sum(order.total for order in buckets.pending),
        total_outlets=rules.total_outlets,
        category_breakdown=compute_category_breakdown(completed, catalog, gross_amount),
        sales_trend=compute_sales_trend(all_orders, now.date()),
        hourly_sales=compute_hourly_sales(all_orders, now.date()),
        top_products=compute_top_products(completed, catalog, rules),
        skipped_records=skipped_orders + skipped_products,
    )

    logger.info(
        "Computed %s sales summary: %d orders in window, gross %.2f",
        period.value,
        transaction_count + len(buckets.pending) + len(buckets.cancelled),
        gross_amount,
    )
    return summary


def build_summary_rules(settings: Settings) -> SalesSummaryRules:
    """Translate analytics_* settings into summary rules"""
    return SalesSummaryRules(
        net_sales_rate=settings.analytics_net_sales_rate,
        discount_rate=settings.analytics_discount_rate,
        tax_rate=settings.analytics_tax_rate,
        service_charge_rate=settings.analytics_service_charge_rate,
        net_total_rate=settings.analytics_net_total_rate,
        void_rate=settings.analytics_void_rate,
        void_transfer_rate=settings.analytics_void_transfer_rate,
        total_outlets=settings.analytics_total_outlets,
        daily_average_divisors=settings.analytics_daily_average_divisors,
        match_products_by_name=settings.analytics_match_products_by_name,
        bound_yesterday_to_midnight=settings.analytics_bound_yesterday_to_midnight,
        top_products_limit=settings.analytics_top_products_limit,
        low_stock_threshold=settings.analytics_low_stock_threshold,
    )


class SalesSummaryService:
    """Recomputes the sales summary from injected order and product sources"""

    def __init__(
        self,
        order_source: OrderSource,
        product_source: ProductSource,
        rules: Optional[SalesSummaryRules] = None,
        rounding: Optional[RoundingSource] = None,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.order_source = order_source
        self.product_source = product_source
        self.rules = rules or SalesSummaryRules()
        self.rounding = rounding
        self.tz = tz
        self.clock = clock
        self.last_summary: Optional[SalesSummary] = None

    def compute_summary(self, period: Union[SalesPeriod, str]) -> SalesSummary:
        """Pull the current orders and products and summarize them"""
        try:
            summary = compute_sales_summary(
                self.order_source.list_orders(),
                self.product_source.list_products(),
                period,
                now=self.clock() if self.clock else None,
                rules=self.rules,
                rounding=self.rounding,
                tz=self.tz,
            )
        except Exception as e:
            logger.error(f"Error computing sales summary for period {period}: {e}")
            raise

        self.last_summary = summary
        return summary
