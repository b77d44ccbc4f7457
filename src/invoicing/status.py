"""Derived overdue rule for invoices."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Mapping

from .models import Invoice, InvoiceStatus
from .utils import parse_date


def today_for(policy: str = "local") -> date:
    """Return the current calendar date under ``policy`` (``local`` or ``utc``)."""

    if policy == "utc":
        return datetime.now(timezone.utc).date()
    if policy == "local":
        return datetime.now().date()
    raise ValueError(f"Unknown time zone policy: {policy!r}")


def _status_and_due_date(
    invoice: Invoice | Mapping[str, Any], utc: bool
) -> tuple[str, date]:
    if isinstance(invoice, Invoice):
        return invoice.status.value, invoice.due_date
    status = invoice["status"]
    if isinstance(status, InvoiceStatus):
        status = status.value
    return str(status), parse_date(invoice["due_date"], utc=utc)


def is_overdue(
    invoice: Invoice | Mapping[str, Any],
    *,
    today: date | datetime | None = None,
    policy: str = "local",
) -> bool:
    """Return ``True`` when the due date has passed and the invoice is unpaid.

    Only calendar dates are compared, taken in the zone named by ``policy``
    (``local`` or ``utc``). When ``today`` is omitted the clock is read on
    every call under that policy. The result is advisory: nothing is
    written back.
    """

    utc = policy == "utc"
    status, due_date = _status_and_due_date(invoice, utc)
    if status == InvoiceStatus.PAID.value:
        return False

    current = today_for(policy) if today is None else parse_date(today, utc=utc)
    return due_date < current


__all__ = ["is_overdue", "today_for"]
