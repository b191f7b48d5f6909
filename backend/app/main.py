import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.exceptions import register_exception_handlers

# ========== Analytics & Reporting ==========
from modules.analytics.routers import sales_summary_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application with the analytics routes mounted."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Sales summary and dashboard analytics for restaurant POS",
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    register_exception_handlers(app)

    app.include_router(sales_summary_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        return {"status": "healthy", "environment": settings.environment}

    logger.info("Application created (environment=%s)", settings.environment)
    return app


app = create_app()
