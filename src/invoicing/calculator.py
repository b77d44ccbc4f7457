"""Invoice totals engine.

Pure functions turning line items plus discount and tax parameters into
subtotal, discount amount, tax amount and total. Every helper works on
:class:`~decimal.Decimal` and applies no intermediate rounding; use
:func:`round_totals` when the amounts are about to be stored.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable, Mapping

from .models import Discount, DiscountKind, InvoiceDraft, InvoiceTotals, LineItem
from .utils import HUNDRED, ZERO, Number, quantize, to_decimal


def sum_line_items(items: Iterable[LineItem]) -> Decimal:
    """Return the sum of ``quantity * rate`` over ``items`` (``0`` when empty)."""

    return sum((item.amount for item in items), ZERO)


def apply_discount(
    amount: Number,
    kind: DiscountKind | str | None = None,
    value: Number | None = None,
) -> Decimal:
    """Return the discount granted on ``amount``.

    A missing ``kind``, a missing ``value`` or a zero ``value`` yields ``0``.
    Percentage discounts are ``amount * value / 100``; fixed discounts return
    ``value`` unchanged, even when it exceeds ``amount``.

    Raises
    ------
    InvalidDiscountKind
        If ``kind`` is set to something other than ``percentage``/``fixed``.
    """

    discount = Discount.from_fields(kind, value)
    if discount is None:
        return ZERO
    if discount.kind is DiscountKind.PERCENTAGE:
        return to_decimal(amount) * discount.value / HUNDRED
    return discount.value


def calculate_tax(amount: Number, tax_rate: Number) -> Decimal:
    """Return ``amount * tax_rate / 100``; the rate is not range-checked."""

    return to_decimal(amount) * to_decimal(tax_rate) / HUNDRED


def calculate_total(
    subtotal: Number,
    tax_rate: Number,
    discount_kind: DiscountKind | str | None = None,
    discount_value: Number | None = None,
) -> InvoiceTotals:
    """Price an invoice whose subtotal is already known.

    The discount is taken off first and tax is charged on what remains.
    """

    subtotal = to_decimal(subtotal)
    discount_amount = apply_discount(subtotal, discount_kind, discount_value)
    after_discount = subtotal - discount_amount
    tax_amount = calculate_tax(after_discount, tax_rate)
    total = after_discount + tax_amount

    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total=total,
    )


def calculate_invoice_totals(draft: InvoiceDraft | Mapping[str, Any]) -> InvoiceTotals:
    """Price a new invoice from its line items, tax rate and discount.

    ``draft`` may also be a request payload mapping; see
    :meth:`InvoiceDraft.from_mapping`.
    """

    if not isinstance(draft, InvoiceDraft):
        draft = InvoiceDraft.from_mapping(draft)
    subtotal = sum_line_items(draft.line_items)
    return calculate_total(
        subtotal,
        draft.tax_rate,
        draft.discount_kind,
        draft.discount_value,
    )


def round_totals(totals: InvoiceTotals, places: int = 2) -> InvoiceTotals:
    """Round each amount half-up to ``places`` decimals for storage.

    Fields are rounded independently, so the rounded total can differ by one
    unit in the last place from ``subtotal - discount + tax`` of the rounded
    parts.
    """

    return replace(
        totals,
        subtotal=quantize(totals.subtotal, places),
        discount_amount=quantize(totals.discount_amount, places),
        tax_amount=quantize(totals.tax_amount, places),
        total=quantize(totals.total, places),
    )


__all__ = [
    "apply_discount",
    "calculate_invoice_totals",
    "calculate_tax",
    "calculate_total",
    "round_totals",
    "sum_line_items",
]
