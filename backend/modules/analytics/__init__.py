# backend/modules/analytics/__init__.py

"""
Analytics Module - Sales Summary & Dashboard Aggregation

Turns the current order list and product catalog into a period-scoped
business summary for the dashboard and report views.

Key Features:
- Gross, net and placeholder tax/discount/charge figures
- Transaction, void, cancellation and open-order counts
- Revenue breakdown by product category
- Fixed 7-day sales trend and today's hourly order histogram
- Top products by revenue

Components:
- Schemas: Pydantic models for orders, products and the summary
- Services: Period resolution, data sources and the aggregation engine
- Routers: FastAPI endpoint for the dashboard
- Tests: pytest coverage of the engine and endpoint
"""

__version__ = "1.0.0"
