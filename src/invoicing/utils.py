"""Utility helpers shared across invoicing modules."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

Number = int | float | str | Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Number | None, *, default: Decimal = ZERO) -> Decimal:
    """Convert the provided value to :class:`~decimal.Decimal`.

    Floats go through their shortest ``repr`` so ``100.50`` becomes
    ``Decimal("100.5")`` rather than the binary expansion. ``None`` and empty
    strings return ``default``; anything else that does not parse raises
    :class:`ValueError`.
    """

    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))

    text = str(value).strip()
    if not text:
        return default

    try:
        return Decimal(text)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc


def quantize(value: Decimal, places: int = 2) -> Decimal:
    """Round ``value`` half-up to ``places`` decimal places."""

    exponent = Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


def parse_date(value: date | datetime | str, *, utc: bool = False) -> date:
    """Return the calendar date of ``value``, dropping any time of day.

    Timestamps carrying an offset are first converted to the local zone, or
    to UTC when ``utc`` is set; naive timestamps are taken as they are.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc if utc else None)
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        raise ValueError("Empty date")
    # ``2026-03-01T10:00:00Z`` style timestamps come straight from JSON payloads.
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return date.fromisoformat(text[:10])
    return parse_date(parsed, utc=utc)


__all__ = ["HUNDRED", "Number", "ZERO", "parse_date", "quantize", "to_decimal"]
