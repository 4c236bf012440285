"""Fixed-point amount parsing and formatting.

Amounts are stored as integer counts of 1/10,000ths of a currency unit.
Text is converted with :class:`decimal.Decimal` in both directions so no
binary floating point is involved.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from .models import AMOUNT_MAX, AMOUNT_SCALE

_QUANTUM = Decimal(1).scaleb(-4)
_MAX_ADJUSTED = len(str(AMOUNT_MAX))


def parse_amount(raw: str | None) -> int | None:
    """Parse decimal text into fixed-point units.

    Returns ``None`` when ``raw`` is missing or blank. Digits beyond the fourth
    decimal place are truncated toward zero (``"1.23456"`` -> ``12345``).

    Raises ``ValueError`` for non-numeric, non-finite, negative or
    out-of-range values.
    """

    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None

    try:
        d = Decimal(s)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {raw!r}") from exc
    if not d.is_finite():
        raise ValueError(f"invalid amount: {raw!r}")
    if d < 0:
        raise ValueError(f"amount must not be negative: {raw!r}")
    # Bound the exponent before any context arithmetic can overflow.
    if d and d.adjusted() > _MAX_ADJUSTED:
        raise ValueError(f"amount out of range: {raw!r}")

    units = int(d.quantize(_QUANTUM, rounding=ROUND_DOWN) * AMOUNT_SCALE)
    if units > AMOUNT_MAX:
        raise ValueError(f"amount out of range: {raw!r}")
    return units


def format_amount(units: int) -> str:
    # Exactly four decimals, ASCII dot, no exponent notation.
    d = (Decimal(units) / AMOUNT_SCALE).quantize(_QUANTUM)
    return f"{d:.4f}"


__all__ = ["parse_amount", "format_amount"]
