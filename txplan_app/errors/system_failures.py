"""
System failure error classifications for contract violations.

These exceptions represent programmer errors in the calling code, such as
indexing a line item that does not exist or editing a finalized draft.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class LineItemIndexError(SystemFailureError, IndexError):
    """Line item index outside the current ledger."""

    def __init__(self, message: str, index: Optional[int] = None,
                 size: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.size = size


class LedgerFieldError(SystemFailureError, KeyError):
    """Write to a line item field that is not externally settable."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class StateTransitionError(SystemFailureError):
    """Operation not allowed in the current lifecycle state."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class DeliveryError(SystemFailureError):
    """Plan delivery boundary misconfigured."""

    def __init__(self, message: str, delivery_method: Optional[str] = None,
                 plan_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.delivery_method = delivery_method
        self.plan_id = plan_id
