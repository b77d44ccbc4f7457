"""Value objects exchanged between the totals engine and its callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Sequence

from .errors import InvalidDiscountKind
from .utils import ZERO, Number, to_decimal


class DiscountKind(str, Enum):
    """How a discount value is interpreted."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"

    @classmethod
    def parse(cls, value: "DiscountKind | str") -> "DiscountKind":
        """Return the member matching ``value`` or raise :class:`InvalidDiscountKind`."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidDiscountKind(value) from exc


class InvoiceStatus(str, Enum):
    """Lifecycle states of a stored invoice."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    PAID = "paid"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class LineItem:
    """One billable row on an invoice."""

    description: str
    quantity: Decimal
    rate: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_decimal(self.quantity))
        object.__setattr__(self, "rate", to_decimal(self.rate))

    @property
    def amount(self) -> Decimal:
        return self.quantity * self.rate

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "LineItem":
        return cls(
            description=str(payload.get("description", "")),
            quantity=payload["quantity"],
            rate=payload["rate"],
        )


@dataclass(frozen=True)
class Discount:
    """A well-formed discount: both the kind and a non-zero value are present."""

    kind: DiscountKind
    value: Decimal

    @classmethod
    def from_fields(
        cls, kind: DiscountKind | str | None, value: Number | None
    ) -> "Discount | None":
        """Collapse the two optional payload fields into a single option.

        A missing kind, a missing value, a zero value or NaN all mean "no
        discount" and return ``None``. The kind is only checked once a
        usable value is present.
        """

        if not kind or value is None:
            return None
        amount = to_decimal(value)
        if not amount or amount.is_nan():
            return None
        return cls(DiscountKind.parse(kind), amount)


@dataclass(frozen=True)
class InvoiceDraft:
    """Inputs needed to price an invoice."""

    line_items: Sequence[LineItem]
    tax_rate: Decimal = ZERO
    discount_kind: DiscountKind | str | None = None
    discount_value: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "line_items", tuple(self.line_items))
        object.__setattr__(self, "tax_rate", to_decimal(self.tax_rate))
        if self.discount_value is not None:
            object.__setattr__(self, "discount_value", to_decimal(self.discount_value))
        # An unusable kind is kept as given; it only matters once a value is set.
        discount = self.discount
        if discount is not None:
            object.__setattr__(self, "discount_kind", discount.kind)

    @property
    def discount(self) -> Discount | None:
        return Discount.from_fields(self.discount_kind, self.discount_value)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "InvoiceDraft":
        """Build a draft from a create/update request payload.

        ``discount_type`` is accepted as an alias of ``discount_kind``.
        """

        kind = payload.get("discount_kind", payload.get("discount_type"))
        return cls(
            line_items=[LineItem.from_mapping(item) for item in payload.get("line_items", [])],
            tax_rate=payload.get("tax_rate"),
            discount_kind=kind or None,
            discount_value=payload.get("discount_value"),
        )


@dataclass(frozen=True)
class InvoiceTotals:
    """Computed amounts for one invoice."""

    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal

    def as_cells(self) -> list[Decimal]:
        return [self.subtotal, self.discount_amount, self.tax_amount, self.total]


@dataclass(frozen=True)
class Invoice:
    """Stored invoice record as handed out by a repository."""

    id: str
    invoice_number: str
    client_id: str
    issue_date: date
    due_date: date
    status: InvoiceStatus
    line_items: tuple[LineItem, ...]
    tax_rate: Decimal
    totals: InvoiceTotals
    payment_terms: str = ""
    discount_kind: DiscountKind | str | None = None
    discount_value: Decimal | None = None
    notes: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def draft(self) -> InvoiceDraft:
        """Pricing inputs of this invoice."""

        return InvoiceDraft(
            line_items=self.line_items,
            tax_rate=self.tax_rate,
            discount_kind=self.discount_kind,
            discount_value=self.discount_value,
        )


__all__ = [
    "Discount",
    "DiscountKind",
    "Invoice",
    "InvoiceDraft",
    "InvoiceStatus",
    "InvoiceTotals",
    "LineItem",
]
