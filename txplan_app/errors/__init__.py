"""
Error classification for the treatment plan builder.

Data quality errors describe bad input that callers can correct; system
failures describe contract violations by the calling code.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    LineItemIndexError,
    LedgerFieldError,
    StateTransitionError,
    DeliveryError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "LineItemIndexError",
    "LedgerFieldError",
    "StateTransitionError",
    "DeliveryError",
]
