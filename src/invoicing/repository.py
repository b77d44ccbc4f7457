"""Storage abstraction for invoices.

The engine never touches storage; callers receive a repository and pass the
records they fetch through the pure functions in :mod:`invoicing.calculator`
and :mod:`invoicing.status`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Protocol

from .errors import InvoiceNotFound
from .models import Invoice, InvoiceStatus


@dataclass(frozen=True)
class InvoiceFilters:
    """Criteria accepted by :meth:`InvoiceRepository.list`."""

    status: InvoiceStatus | str | None = None
    client_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None

    def __post_init__(self) -> None:
        if self.status is not None:
            object.__setattr__(self, "status", InvoiceStatus(self.status))

    def matches(self, invoice: Invoice) -> bool:
        if self.status is not None and invoice.status is not self.status:
            return False
        if self.client_id is not None and invoice.client_id != self.client_id:
            return False
        if self.start_date is not None and invoice.issue_date < self.start_date:
            return False
        if self.end_date is not None and invoice.issue_date > self.end_date:
            return False
        return True


class InvoiceRepository(Protocol):
    """Operations the service layer needs from a store."""

    def get(self, invoice_id: str) -> Invoice:
        """Return the invoice or raise :class:`InvoiceNotFound`."""

    def list(self, filters: InvoiceFilters | None = None) -> list[Invoice]:
        """Return matching invoices, most recent issue date first."""

    def insert(self, invoice: Invoice) -> Invoice:
        """Store a new invoice and return it."""

    def update(self, invoice: Invoice) -> Invoice:
        """Replace the stored invoice with the same id and return it."""

    def delete(self, invoice_id: str) -> None:
        """Remove the invoice or raise :class:`InvoiceNotFound`."""

    def next_id(self) -> str:
        """Return an unused invoice id."""


class InMemoryInvoiceRepository:
    """Dictionary backed :class:`InvoiceRepository` used by tests and the CLI."""

    def __init__(self, invoices: Iterable[Invoice] = ()) -> None:
        self._invoices: dict[str, Invoice] = {}
        self._sequence = 0
        for invoice in invoices:
            self.insert(invoice)

    def __len__(self) -> int:
        return len(self._invoices)

    def get(self, invoice_id: str) -> Invoice:
        try:
            return self._invoices[invoice_id]
        except KeyError as exc:
            raise InvoiceNotFound(invoice_id) from exc

    def list(self, filters: InvoiceFilters | None = None) -> list[Invoice]:
        filters = filters or InvoiceFilters()
        found = [invoice for invoice in self._invoices.values() if filters.matches(invoice)]
        return sorted(found, key=lambda invoice: invoice.issue_date, reverse=True)

    def insert(self, invoice: Invoice) -> Invoice:
        if invoice.id in self._invoices:
            raise ValueError(f"Duplicate invoice id: {invoice.id}")
        self._invoices[invoice.id] = invoice
        self._sequence += 1
        return invoice

    def update(self, invoice: Invoice) -> Invoice:
        if invoice.id not in self._invoices:
            raise InvoiceNotFound(invoice.id)
        self._invoices[invoice.id] = invoice
        return invoice

    def delete(self, invoice_id: str) -> None:
        if self._invoices.pop(invoice_id, None) is None:
            raise InvoiceNotFound(invoice_id)

    def next_id(self) -> str:
        candidate = self._sequence + 1
        while str(candidate) in self._invoices:
            candidate += 1
        return str(candidate)


__all__ = ["InMemoryInvoiceRepository", "InvoiceFilters", "InvoiceRepository"]
