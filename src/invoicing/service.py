"""Invoice workflows built on the totals engine and a repository."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Iterable

from .calculator import calculate_invoice_totals, round_totals
from .config import EngineSettings
from .errors import InvoicingError
from .models import (
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
)
from .repository import InvoiceFilters, InvoiceRepository
from .status import is_overdue, today_for
from .utils import parse_date, to_decimal
from .validation import validate_draft

LOGGER = logging.getLogger("invoicing.service")

_PRICING_FIELDS = frozenset({"line_items", "tax_rate", "discount_kind", "discount_value"})
_UPDATABLE_FIELDS = _PRICING_FIELDS | {
    "client_id",
    "issue_date",
    "due_date",
    "payment_terms",
    "notes",
    "status",
}


class InvoiceService:
    """Create, update and list invoices with engine-computed totals."""

    def __init__(
        self,
        repository: InvoiceRepository,
        settings: EngineSettings | None = None,
    ) -> None:
        self.repository = repository
        self.settings = settings or EngineSettings()

    def price(self, draft: InvoiceDraft) -> InvoiceTotals:
        """Return the storable (rounded) totals for ``draft``."""

        if self.settings.strict:
            validate_draft(draft)
        totals = calculate_invoice_totals(draft)
        return round_totals(totals, self.settings.currency_places)

    def create(
        self,
        client_id: str,
        draft: InvoiceDraft,
        *,
        issue_date: date | str,
        due_date: date | str,
        payment_terms: str = "",
        notes: str = "",
    ) -> Invoice:
        issue = parse_date(issue_date)
        totals = self.price(draft)
        invoice = Invoice(
            id=self.repository.next_id(),
            invoice_number=self._next_invoice_number(issue.year),
            client_id=client_id,
            issue_date=issue,
            due_date=parse_date(due_date),
            status=InvoiceStatus.DRAFT,
            line_items=tuple(draft.line_items),
            tax_rate=draft.tax_rate,
            totals=totals,
            payment_terms=payment_terms,
            discount_kind=draft.discount_kind,
            discount_value=draft.discount_value,
            notes=notes,
        )
        LOGGER.info("Created invoice %s total=%s", invoice.invoice_number, totals.total)
        return self.repository.insert(invoice)

    def get(self, invoice_id: str) -> Invoice:
        return self.repository.get(invoice_id)

    def delete(self, invoice_id: str) -> None:
        self.repository.delete(invoice_id)
        LOGGER.info("Deleted invoice %s", invoice_id)

    def update(self, invoice_id: str, **changes: Any) -> Invoice:
        """Apply a partial update, re-pricing when pricing inputs change.

        Status changes are stored as requested; whether a transition makes
        sense is up to the caller.
        """

        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown invoice fields: {sorted(unknown)}")

        invoice = self.repository.get(invoice_id)
        values = _normalise_changes(changes)
        updated = replace(invoice, updated_at=datetime.now(), **values)

        if _PRICING_FIELDS & set(values):
            draft = updated.draft
            updated = replace(
                updated, discount_kind=draft.discount_kind, totals=self.price(draft)
            )
            LOGGER.debug("Re-priced invoice %s total=%s", invoice_id, updated.totals.total)

        return self.repository.update(updated)

    def list_invoices(
        self,
        filters: InvoiceFilters | None = None,
        *,
        today: date | None = None,
    ) -> list[Invoice]:
        """Return matching invoices, marking past-due ones as overdue.

        Each past-due invoice is written back once and then re-read. When the
        write fails the stored record is returned unchanged.
        """

        current = today or today_for(self.settings.timezone_policy)
        refreshed: list[Invoice] = []
        for invoice in self.repository.list(filters):
            if invoice.status is not InvoiceStatus.OVERDUE and is_overdue(
                invoice, today=current, policy=self.settings.timezone_policy
            ):
                invoice = self._mark_overdue(invoice)
            refreshed.append(invoice)
        return refreshed

    def _mark_overdue(self, invoice: Invoice) -> Invoice:
        try:
            self.update(invoice.id, status=InvoiceStatus.OVERDUE)
            return self.repository.get(invoice.id)
        except InvoicingError as exc:
            LOGGER.warning("Could not mark invoice %s as overdue: %s", invoice.id, exc)
            return invoice

    def _next_invoice_number(self, year: int) -> str:
        taken = {invoice.invoice_number for invoice in self.repository.list()}
        sequence = len(taken) + 1
        while f"INV-{year}-{sequence:04d}" in taken:
            sequence += 1
        return f"INV-{year}-{sequence:04d}"


def _normalise_changes(changes: dict[str, Any]) -> dict[str, Any]:
    values = dict(changes)
    if "line_items" in values:
        values["line_items"] = tuple(
            item if isinstance(item, LineItem) else LineItem.from_mapping(item)
            for item in values["line_items"]
        )
    if "tax_rate" in values:
        values["tax_rate"] = to_decimal(values["tax_rate"])
    if "discount_value" in values and values["discount_value"] is not None:
        values["discount_value"] = to_decimal(values["discount_value"])
    if "status" in values:
        values["status"] = InvoiceStatus(values["status"])
    for key in ("issue_date", "due_date"):
        if key in values:
            values[key] = parse_date(values[key])
    return values


def build_invoices(
    service: InvoiceService, payloads: Iterable[dict[str, Any]]
) -> list[Invoice]:
    """Create one invoice per request payload through ``service``."""

    created = []
    for payload in payloads:
        invoice = service.create(
            str(payload.get("client_id", "")),
            InvoiceDraft.from_mapping(payload),
            issue_date=payload["issue_date"],
            due_date=payload["due_date"],
            payment_terms=str(payload.get("payment_terms", "")),
            notes=str(payload.get("notes", "")),
        )
        status = payload.get("status")
        if status and status != InvoiceStatus.DRAFT.value:
            invoice = service.update(invoice.id, status=status)
        created.append(invoice)
    return created


__all__ = ["InvoiceService", "build_invoices"]
