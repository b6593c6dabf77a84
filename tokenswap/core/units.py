"""Conversion between human-denominated token amounts and base units."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext
from typing import Union

DEFAULT_DECIMALS = 18

# uint256 needs 78 significant digits
_PRECISION = 80

AmountLike = Union[Decimal, int, str, float]


def _to_decimal(amount: AmountLike) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    try:
        # floats go through str() so 0.1 stays 0.1
        return Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid amount: {amount!r}") from exc


def to_base_units(amount: AmountLike, decimals: int = DEFAULT_DECIMALS) -> int:
    """Convert a human amount (e.g. ``0.1`` WETH) to integer base units.

    Digits beyond ``decimals`` are truncated.
    """
    value = _to_decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = value * (Decimal(10) ** decimals)
        return int(scaled.quantize(Decimal(1), rounding=ROUND_DOWN))


def from_base_units(amount: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Convert integer base units back to a human amount."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(int(amount)) / (Decimal(10) ** decimals)


def format_amount(amount: Decimal) -> str:
    """Render an amount without exponent notation or trailing zeros."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
