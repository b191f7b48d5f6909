# backend/modules/analytics/routers/__init__.py

from .sales_summary_router import router as sales_summary_router

__all__ = ["sales_summary_router"]
