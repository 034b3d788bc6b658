"""
Fixed-point money and currency display helpers.

Amounts are held as Decimal quantized to MONEY_PLACES with ROUND_HALF_UP, so
line and plan totals are exact sums. Display follows the en-IN convention:
the last three integer digits are grouped together, then groups of two
(1,00,000).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..data.models import CostLineItem

MONEY_PLACES = 2
DEFAULT_SYMBOL = "₹"
ZERO = Decimal("0.00")


def to_money(value: Any, places: int = MONEY_PLACES) -> Decimal:
    """
    Quantize a numeric value to a fixed-point money amount.

    Args:
        value: Decimal, int, float or numeric string
        places: Number of decimal places to keep

    Returns:
        Decimal rounded half-up to the given number of places
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)

    return ",".join(groups + [tail])


def format_currency(
    amount: Any,
    decimals: Optional[int] = None,
    symbol: str = DEFAULT_SYMBOL
) -> str:
    """
    Format an amount with a currency symbol prefix and en-IN grouping.

    Args:
        amount: Amount to format
        decimals: Fixed number of decimal places; None shows the fraction
            only when it is non-zero
        symbol: Currency symbol prefix

    Returns:
        Formatted string such as "₹1,00,000" or "₹1,500.50"
    """
    places = MONEY_PLACES if decimals is None else decimals
    value = to_money(amount, places)

    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):f}".partition(".")
    if decimals is None:
        fraction = fraction.rstrip("0")

    text = f"{sign}{symbol}{_group_indian(whole)}"
    if fraction:
        text += f".{fraction}"
    return text


def format_cost_breakdown(item: "CostLineItem", symbol: str = DEFAULT_SYMBOL) -> str:
    """Render a line item's cost formula, e.g. "₹1,500 × 3 + ₹200"."""
    return (
        f"{format_currency(item.base_cost, symbol=symbol)} × {item.quantity} "
        f"+ {format_currency(item.material_cost, symbol=symbol)}"
    )
