"""
Calendar-date and identifier helpers for plan drafts.

Plan dates are calendar dates without a time component, stored as ISO
strings. Plan identifiers are generated client-side when a new plan is saved.
"""

import time
import uuid
from datetime import date, datetime
from typing import Any, Optional

from ..errors import MalformedDataError


def today_iso(today: Optional[date] = None) -> str:
    """
    Get today's date as an ISO string.

    Args:
        today: Optional date to use instead of the local calendar date

    Returns:
        Date string in YYYY-MM-DD format
    """
    return (today or date.today()).isoformat()


def normalize_iso_date(value: Any, allow_empty: bool = False) -> str:
    """
    Normalize a date-like value to an ISO calendar-date string.

    Args:
        value: date, datetime or YYYY-MM-DD string
        allow_empty: Accept None or a blank string, returning ""

    Returns:
        Date string in YYYY-MM-DD format, or "" when empty and allowed

    Raises:
        MalformedDataError: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = "" if value is None else str(value).strip()
    if not text:
        if allow_empty:
            return ""
        raise MalformedDataError(
            "Date is required",
            raw_data=text,
            expected_format="YYYY-MM-DD"
        )

    # Persisted plans may carry full timestamps; keep the calendar date.
    candidate = text.split("T", 1)[0]
    try:
        return date.fromisoformat(candidate).isoformat()
    except ValueError as e:
        raise MalformedDataError(
            f"Invalid date: {text}",
            raw_data=text,
            expected_format="YYYY-MM-DD"
        ) from e


def generate_plan_id(prefix: str = "plan_", now_ms: Optional[int] = None) -> str:
    """
    Generate a client-side plan identifier.

    The millisecond timestamp keeps identifiers roughly time-ordered; the
    random suffix keeps two saves within the same millisecond distinct.

    Args:
        prefix: Identifier prefix
        now_ms: Optional epoch milliseconds, defaults to wall-clock time

    Returns:
        Identifier such as "plan_1760659200000_3f2a9c1b"
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{prefix}{now_ms}_{uuid.uuid4().hex[:8]}"
