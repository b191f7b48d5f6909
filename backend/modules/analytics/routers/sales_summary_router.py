# backend/modules/analytics/routers/sales_summary_router.py

from fastapi import APIRouter, Depends, Query
import logging

from core.config import Settings, get_settings
from core.exceptions import ServiceError, ValidationError

from ..exceptions import AnalyticsBaseException, handle_analytics_exception
from ..schemas.sales_summary_schemas import (
    SalesPeriod,
    SalesSummary,
    SalesSummaryRequest,
)
from ..services.sales_data_sources import InMemorySalesDataSource
from ..services.sales_summary_service import (
    SalesSummaryService,
    build_summary_rules,
    compute_sales_summary,
)

router = APIRouter(prefix="/analytics", tags=["Analytics & Reporting"])
logger = logging.getLogger(__name__)

# Populated by the order/product collaborators; overridden in tests
sales_data_source = InMemorySalesDataSource()


def get_sales_data_source() -> InMemorySalesDataSource:
    return sales_data_source


def get_sales_summary_service(
    settings: Settings = Depends(get_settings),
    data_source: InMemorySalesDataSource = Depends(get_sales_data_source),
) -> SalesSummaryService:
    return SalesSummaryService(
        order_source=data_source,
        product_source=data_source,
        rules=build_summary_rules(settings),
        tz=settings.reporting_tz,
    )


@router.get("/sales-summary", response_model=SalesSummary)
async def get_sales_summary(
    period: SalesPeriod = Query(SalesPeriod.TODAY, description="Reporting period"),
    service: SalesSummaryService = Depends(get_sales_summary_service),
):
    """
    Get the sales summary for the dashboard.

    Scalar metrics, category breakdown and top products cover the selected
    period. The 7-day trend and hourly histogram always cover the last 7 days
    and today respectively.
    """
    try:
        return service.compute_summary(period)

    except AnalyticsBaseException as e:
        raise ValidationError(detail=handle_analytics_exception(e), error_code=e.error_code)
    except Exception as e:
        logger.error(f"Error getting sales summary: {e}")
        raise ServiceError(detail="Failed to compute sales summary")


@router.post("/sales-summary/compute", response_model=SalesSummary)
async def compute_sales_summary_for_records(
    request: SalesSummaryRequest,
    settings: Settings = Depends(get_settings),
):
    """Summarize orders and products supplied in the request body."""
    try:
        return compute_sales_summary(
            request.orders,
            request.products,
            request.period,
            rules=build_summary_rules(settings),
            tz=settings.reporting_tz,
        )

    except AnalyticsBaseException as e:
        raise ValidationError(detail=handle_analytics_exception(e), error_code=e.error_code)
    except Exception as e:
        logger.error(f"Error computing sales summary from request: {e}")
        raise ServiceError(detail="Failed to compute sales summary")
