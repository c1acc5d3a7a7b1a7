"""
Human amount parsing and conversion to base units.

Amounts are handled as decimal.Decimal end to end. Scaling by 10**decimals is
exact; an amount with more fractional digits than the asset supports is
rejected rather than truncated.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from typing import Any

from transfer_blink.core.exceptions import AmountOutOfRange

U64_MAX = 2**64 - 1

# Wide enough for any u64 value scaled by up to 255 decimals; any rounding raises
_CONTEXT = decimal.Context(
    prec=400,
    traps=[decimal.InvalidOperation, decimal.Overflow, decimal.Inexact, decimal.Rounded],
)


def parse_amount(raw: Any) -> Decimal:
    """
    Parse a caller-supplied amount (str, int, float or Decimal) into a positive Decimal.

    Floats go through their shortest repr, so 0.1 parses as Decimal("0.1").
    Raises AmountOutOfRange for booleans, non-numeric text, NaN/Infinity, zero and negatives.
    """
    if isinstance(raw, bool) or raw is None:
        raise AmountOutOfRange(f"Amount must be a number, got {raw!r}")
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(repr(raw)) if isinstance(raw, float) else Decimal(raw)
    elif isinstance(raw, str):
        text = raw.strip().replace("_", "")
        if not text:
            raise AmountOutOfRange("Amount must not be empty")
        try:
            value = Decimal(text)
        except decimal.InvalidOperation as e:
            raise AmountOutOfRange(f"Amount is not a number: {raw!r}") from e
    else:
        raise AmountOutOfRange(f"Unsupported amount type {type(raw).__name__}")

    if not value.is_finite():
        raise AmountOutOfRange(f"Amount must be finite, got {raw!r}")
    if value <= 0:
        raise AmountOutOfRange(f"Amount must be greater than zero, got {raw!r}")
    return value


def normalize_amount(amount: Decimal, decimals: int) -> int:
    """
    Convert a human amount to base units: amount * 10**decimals, exactly.

    Raises AmountOutOfRange if the result is not a whole number of base units,
    is zero, or does not fit in a u64.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    try:
        scaled = amount.scaleb(decimals, context=_CONTEXT)
        integral = scaled.to_integral_value(rounding=decimal.ROUND_DOWN, context=_CONTEXT)
    except (decimal.Inexact, decimal.Rounded) as e:
        raise AmountOutOfRange(f"Amount {amount} cannot be represented exactly with {decimals} decimal places") from e
    except decimal.DecimalException as e:
        raise AmountOutOfRange(f"Amount {amount} is out of range") from e
    if scaled != integral:
        raise AmountOutOfRange(
            f"Amount {amount} has more than {decimals} decimal places"
        )
    if integral <= 0:
        raise AmountOutOfRange(f"Amount must be greater than zero, got {amount}")
    if integral > U64_MAX:
        raise AmountOutOfRange(f"Amount {amount} exceeds the maximum transferable value")
    return int(integral)


def to_ui_amount(raw: int, decimals: int) -> Decimal:
    """Convert base units back to the human amount (inverse of normalize_amount)."""
    return Decimal(raw).scaleb(-decimals, context=_CONTEXT)
