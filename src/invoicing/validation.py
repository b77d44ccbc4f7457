"""Optional range checks for invoice drafts.

The totals engine accepts any number it is given. These checks are only run
when strict mode is enabled in :class:`~invoicing.config.EngineSettings`.
"""

from __future__ import annotations

from .errors import InvalidRange
from .models import DiscountKind, InvoiceDraft
from .utils import HUNDRED, ZERO


def validate_draft(draft: InvoiceDraft) -> None:
    """Raise :class:`InvalidRange` on the first out-of-range value in ``draft``."""

    for index, item in enumerate(draft.line_items):
        if item.quantity < ZERO:
            raise InvalidRange(f"line_items[{index}].quantity", item.quantity, "must not be negative")
        if item.rate < ZERO:
            raise InvalidRange(f"line_items[{index}].rate", item.rate, "must not be negative")

    if not ZERO <= draft.tax_rate <= HUNDRED:
        raise InvalidRange("tax_rate", draft.tax_rate, "must be between 0 and 100")

    if draft.discount_value is not None:
        if draft.discount_value < ZERO:
            raise InvalidRange("discount_value", draft.discount_value, "must not be negative")
        if draft.discount_kind is DiscountKind.PERCENTAGE and draft.discount_value > HUNDRED:
            raise InvalidRange("discount_value", draft.discount_value, "percentage above 100")


__all__ = ["validate_draft"]
