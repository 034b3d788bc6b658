"""
Input parsers for catalog records and line item edits.

Interactive edits are forgiving: a cost field that receives text which does
not start with a number is coerced to zero, the way a numeric text box reads
its leading digits. Catalog records are parsed strictly and raise data
quality errors instead.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..errors import MalformedDataError, MissingDataError
from ..utils.currency import MONEY_PLACES, to_money
from .models import TreatmentCategory

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_LEADING_NUMBER_RE = re.compile(rf"^\s*({_NUMBER})")
_FULL_NUMBER_RE = re.compile(rf"^\s*({_NUMBER})\s*$")


def _coerce_decimal(value: Any, strict: bool = False) -> Optional[Decimal]:
    """
    Read a Decimal out of user or payload input.

    Returns None when no number can be read.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        return value if value.is_finite() else None

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return Decimal(str(value))

    pattern = _FULL_NUMBER_RE if strict else _LEADING_NUMBER_RE
    match = pattern.match(str(value))
    if not match:
        return None

    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def parse_amount(value: Any, places: int = MONEY_PLACES, strict: bool = False) -> Decimal:
    """
    Parse a non-negative money amount.

    Args:
        value: Number or text entered for a cost field
        places: Fixed-point decimal places
        strict: Raise instead of coercing to zero

    Returns:
        Fixed-point Decimal amount; zero for non-numeric or negative input

    Raises:
        MalformedDataError: In strict mode, for non-numeric or negative input
    """
    amount = _coerce_decimal(value, strict=strict)

    if amount is not None and amount >= 0:
        try:
            return to_money(amount, places)
        except InvalidOperation:
            amount = None

    if strict:
        raise MalformedDataError(
            f"Invalid amount: {value!r}",
            raw_data=str(value),
            expected_format="non-negative decimal"
        )

    return to_money(0, places)


def parse_quantity(value: Any, min_quantity: int = 1, max_quantity: int = 20) -> int:
    """
    Parse a quantity, truncating fractions and clamping to the bounds.

    Non-numeric input reads as zero and therefore clamps to min_quantity.
    The clamp runs on the Decimal, so a huge exponent never becomes a huge int.
    """
    amount = _coerce_decimal(value)
    if amount is None:
        amount = Decimal(0)
    amount = max(Decimal(min_quantity), min(Decimal(max_quantity), amount))
    return int(amount)


def parse_text(value: Any) -> str:
    """Parse a free-text field; None becomes an empty string."""
    if value is None:
        return ""
    return str(value)


def parse_doctor_ids(value: Any) -> tuple[str, ...]:
    """
    Parse assigned doctor references.

    Accepts a list of ids or a list of doctor records carrying "_id" or "id".
    """
    if not value:
        return ()

    if isinstance(value, (str, bytes)):
        raise MalformedDataError(
            "assignedDoctors must be a list",
            raw_data=str(value),
            expected_format="list of doctor ids"
        )

    ids = []
    for entry in value:
        if isinstance(entry, dict):
            doctor_id = entry.get("_id", entry.get("id"))
        else:
            doctor_id = entry
        if doctor_id is None or str(doctor_id) == "":
            raise MissingDataError(
                "Doctor reference without an id",
                data_type="doctor",
                field="id"
            )
        ids.append(str(doctor_id))

    return tuple(ids)


def parse_category_record(record: dict[str, Any]) -> TreatmentCategory:
    """
    Parse a catalog record into a TreatmentCategory.

    Accepts both API field names (_id, baseCost) and snake_case names
    (id, base_cost).

    Raises:
        MissingDataError: If the id, name or base cost is missing
        MalformedDataError: If the record is not a mapping or the base cost is invalid
    """
    if not isinstance(record, dict):
        raise MalformedDataError(
            "Category record must be a mapping",
            raw_data=str(record)[:200],
            expected_format="mapping"
        )

    category_id = record.get("_id", record.get("id"))
    if category_id is None or str(category_id).strip() == "":
        raise MissingDataError("Category record missing id", data_type="category", field="id")

    name = record.get("name")
    if name is None or str(name).strip() == "":
        raise MissingDataError(
            "Category record missing name",
            data_type="category",
            field="name",
            context={"category_id": str(category_id)}
        )

    raw_cost = record.get("baseCost", record.get("base_cost"))
    if raw_cost is None:
        raise MissingDataError(
            "Category record missing base cost",
            data_type="category",
            field="baseCost",
            context={"category_id": str(category_id)}
        )

    description = record.get("description")
    if description is not None:
        description = str(description).strip() or None

    return TreatmentCategory(
        id=str(category_id),
        name=str(name).strip(),
        base_cost=parse_amount(raw_cost, strict=True),
        description=description,
    )
