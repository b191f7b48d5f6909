# backend/modules/analytics/constants.py

"""
Constants for analytics module.

Centralizes the default business-rule values used by the sales summary.
Every value here can be overridden through core.config settings.
"""

# Order lifecycle states
ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_COMPLETED = "completed"
ORDER_STATUS_CANCELLED = "cancelled"

# Placeholder proportions of gross amount (not derived from order data)
DEFAULT_NET_SALES_RATE = 0.90  # 10% goes to various deductions
DEFAULT_DISCOUNT_RATE = 0.05  # 5% average discount
DEFAULT_TAX_RATE = 0.10  # 10% tax
DEFAULT_SERVICE_CHARGE_RATE = 0.02  # 2% service charge
DEFAULT_NET_TOTAL_RATE = 0.97  # after all adjustments

# Placeholder void ratios of the completed transaction count
DEFAULT_VOID_RATE = 0.02
DEFAULT_VOID_TRANSFER_RATE = 0.01

# Outlets (single-location stub)
DEFAULT_TOTAL_OUTLETS = 3

# Fixed divisors for daily average sales, not actual elapsed days
DEFAULT_DAILY_AVERAGE_DIVISORS = {
    "today": 1,
    "yesterday": 1,
    "week": 7,
    "month": 30,
}

# Period lengths
WEEK_PERIOD_DAYS = 7
MONTH_PERIOD_MONTHS = 1

# Trend series
TREND_WINDOW_DAYS = 7
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Hourly histogram (inclusive)
BUSINESS_HOURS_START = 9
BUSINESS_HOURS_END = 21

# Category breakdown
UNCATEGORIZED_LABEL = "Uncategorized"
PERCENTAGE_DECIMALS = 1

# Top products
DEFAULT_TOP_PRODUCTS_LIMIT = 10
DEFAULT_LOW_STOCK_THRESHOLD = 10
STOCK_STATUS_LOW = "Low"
STOCK_STATUS_GOOD = "Good"

# Error Messages
ERROR_MESSAGES = {
    "invalid_period": "Invalid period '{period}'. Expected one of: {allowed}.",
    "invalid_record": "Skipping malformed {record_type} record {record_id}: {reason}",
}
