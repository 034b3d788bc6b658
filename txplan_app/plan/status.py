"""Treatment plan status values."""

from enum import Enum
from typing import Any

from ..errors import MalformedDataError


class PlanStatus(str, Enum):
    """Treatment plan statuses."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        """Display label, e.g. "IN PROGRESS"."""
        return self.value.replace("_", " ").upper()

    @classmethod
    def parse(cls, value: Any) -> "PlanStatus":
        """
        Parse a status, accepting hyphenated and mixed-case spellings.

        Raises:
            MalformedDataError: If the value is not a known status
        """
        if isinstance(value, cls):
            return value

        text = str(value or "").strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(text)
        except ValueError as e:
            raise MalformedDataError(
                f"Unknown plan status: {value!r}",
                raw_data=str(value),
                expected_format=" | ".join(s.value for s in cls)
            ) from e
