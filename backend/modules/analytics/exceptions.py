# backend/modules/analytics/exceptions.py

"""
Custom exceptions for analytics module.

Provides specific exception types for better error handling and debugging.
"""

from typing import Optional, Dict, Any, Sequence

from .constants import ERROR_MESSAGES


class AnalyticsBaseException(Exception):
    """Base exception for all analytics errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidPeriodError(AnalyticsBaseException, ValueError):
    """Raised when a reporting period selector is not recognized"""

    def __init__(self, period: Any, allowed: Sequence[str]):
        message = ERROR_MESSAGES["invalid_period"].format(
            period=period, allowed=", ".join(allowed)
        )
        details = {
            "period": str(period),
            "allowed": list(allowed)
        }
        super().__init__(message, "INVALID_PERIOD", details)


class DataQualityError(AnalyticsBaseException):
    """Describes an input record that could not be used"""

    def __init__(
        self,
        record_type: str,
        record_id: Any,
        reason: str
    ):
        message = ERROR_MESSAGES["invalid_record"].format(
            record_type=record_type, record_id=record_id, reason=reason
        )
        details = {
            "record_type": record_type,
            "record_id": record_id,
            "reason": reason
        }
        super().__init__(message, "DATA_QUALITY_ERROR", details)


# Error handler utility
def handle_analytics_exception(exc: AnalyticsBaseException) -> Dict[str, Any]:
    """Convert analytics exception to API response format"""
    return {
        "error": {
            "code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    }
