"""Invoice totals engine and the tooling built around it.

The pricing functions live in :mod:`invoicing.calculator` and the overdue
rule in :mod:`invoicing.status`; both are pure and can be called from any
request handler or UI preview.
"""

from .calculator import (
    apply_discount,
    calculate_invoice_totals,
    calculate_tax,
    calculate_total,
    round_totals,
    sum_line_items,
)
from .models import (
    Discount,
    DiscountKind,
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
)
from .status import is_overdue

__all__ = [
    "Discount",
    "DiscountKind",
    "Invoice",
    "InvoiceDraft",
    "InvoiceStatus",
    "InvoiceTotals",
    "LineItem",
    "apply_discount",
    "calculate_invoice_totals",
    "calculate_tax",
    "calculate_total",
    "is_overdue",
    "round_totals",
    "sum_line_items",
]
