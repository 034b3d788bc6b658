"""Standard output plan delivery mechanism."""

import json
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, TextIO

from ..utils.currency import format_currency
from .base import PlanDelivery

if TYPE_CHECKING:
    from ..plan.draft import PlanDraft


@dataclass(frozen=True)
class StdoutDeliveryConfig:
    """Configuration for stdout delivery."""
    format: str = "json"  # json, pretty
    include_timestamp: bool = True


class StdoutPlanDelivery(PlanDelivery):
    """Prints saved plans to stdout."""

    def __init__(
        self,
        config: Optional[StdoutDeliveryConfig] = None,
        stream: Optional[TextIO] = None,
        name: str = "stdout"
    ):
        super().__init__(name)
        self.config = config or StdoutDeliveryConfig()
        self.stream = stream

    def _write(self, text: str) -> None:
        print(text, file=self.stream or sys.stdout, flush=True)

    def _deliver_save(self, plan: "PlanDraft") -> None:
        self._write(self._format_plan(plan))

    def _deliver_cancel(self) -> None:
        if self.config.format == "pretty":
            self._write(f"[{datetime.now(timezone.utc).isoformat()}] PLAN CANCELLED")
        else:
            self._write(json.dumps({"event": "cancelled"}))

    def _format_plan(self, plan: "PlanDraft") -> str:
        """Format plan for stdout output."""
        if self.config.format == "pretty":
            output = (
                f"[{datetime.now(timezone.utc).isoformat()}] PLAN SAVED: {plan.id} -> "
                f"{plan.status.label} ({len(plan.line_items)} items, "
                f"total {format_currency(plan.total_cost, symbol=plan.config.currency.symbol)})"
            )
            return output

        payload = plan.to_payload()
        if self.config.include_timestamp:
            payload["stdoutTimestamp"] = datetime.now(timezone.utc).isoformat()
        return json.dumps(payload, ensure_ascii=False)
