"""Base classes for plan delivery to the persistence boundary."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

import structlog

if TYPE_CHECKING:
    from ..plan.draft import PlanDraft


class DeliveryStatus(Enum):
    """Plan delivery status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """Result of a delivery attempt."""
    status: DeliveryStatus
    message: Optional[str] = None
    plan_id: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is DeliveryStatus.SUCCESS


class PlanDelivery(ABC):
    """
    Base class for plan delivery mechanisms.

    Delivery is fire-and-forget from the core's point of view: a failing
    handler is logged and reported in the DeliveryResult, never raised.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"plan.delivery.{name}")
        self._delivery_count = 0
        self._error_count = 0

    @abstractmethod
    def _deliver_save(self, plan: "PlanDraft") -> None:
        """Hand a finalized plan to the destination."""
        pass

    @abstractmethod
    def _deliver_cancel(self) -> None:
        """Signal that the draft was discarded."""
        pass

    def save(self, plan: "PlanDraft") -> DeliveryResult:
        """Deliver a saved plan, containing any handler failure."""
        try:
            self._deliver_save(plan)
        except Exception as e:
            self._error_count += 1
            self.logger.error(
                "Plan save delivery failed",
                delivery_name=self.name,
                plan_id=plan.id,
                error=str(e)
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"Save handler error: {e}",
                plan_id=plan.id,
                error=e
            )

        self._delivery_count += 1
        self.logger.info("Plan delivered", delivery_name=self.name, plan_id=plan.id)
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message="Plan saved", plan_id=plan.id)

    def cancel(self) -> DeliveryResult:
        """Deliver a cancellation, containing any handler failure."""
        try:
            self._deliver_cancel()
        except Exception as e:
            self._error_count += 1
            self.logger.error(
                "Plan cancel delivery failed",
                delivery_name=self.name,
                error=str(e)
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"Cancel handler error: {e}",
                error=e
            )

        self._delivery_count += 1
        self.logger.info("Plan cancellation delivered", delivery_name=self.name)
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message="Plan cancelled")

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
            "success_rate": (
                self._delivery_count / (self._delivery_count + self._error_count)
                if (self._delivery_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self):
        """Reset delivery statistics."""
        self._delivery_count = 0
        self._error_count = 0
