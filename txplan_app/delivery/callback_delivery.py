"""Callback-based plan delivery (onSave / onCancel)."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Optional

from ..errors import DeliveryError
from .base import PlanDelivery

if TYPE_CHECKING:
    from ..plan.draft import PlanDraft


class CallbackPlanDelivery(PlanDelivery):
    """Hands the finalized draft to caller-supplied callables."""

    def __init__(
        self,
        on_save: Callable[["PlanDraft"], None],
        on_cancel: Optional[Callable[[], None]] = None,
        name: str = "callback"
    ):
        if not callable(on_save):
            raise DeliveryError(
                "on_save must be callable",
                delivery_method="callback"
            )
        super().__init__(name)
        self.on_save = on_save
        self.on_cancel = on_cancel

    def _deliver_save(self, plan: "PlanDraft") -> None:
        self.on_save(plan)

    def _deliver_cancel(self) -> None:
        if self.on_cancel is not None:
            self.on_cancel()
