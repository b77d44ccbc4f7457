"""Exception hierarchy shared across the invoicing package."""

from __future__ import annotations


class InvoicingError(Exception):
    """Base class for every error raised by :mod:`invoicing`."""


class InvalidDiscountKind(InvoicingError, ValueError):
    """Raised when a discount kind is neither ``percentage`` nor ``fixed``."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown discount kind: {kind!r}")
        self.kind = kind


class InvalidRange(InvoicingError, ValueError):
    """Raised by strict validation when a value falls outside its range."""

    def __init__(self, field: str, value: object, message: str) -> None:
        super().__init__(f"{field}={value!r}: {message}")
        self.field = field
        self.value = value


class InvoiceNotFound(InvoicingError, LookupError):
    """Raised when the repository has no invoice with the requested id."""

    def __init__(self, invoice_id: str) -> None:
        super().__init__(f"Invoice not found: {invoice_id}")
        self.invoice_id = invoice_id


class DraftLoaderError(InvoicingError, RuntimeError):
    """Raised when an invoice payload file cannot be parsed."""


class ConfigError(InvoicingError, RuntimeError):
    """Raised when the engine configuration cannot be loaded."""


__all__ = [
    "ConfigError",
    "DraftLoaderError",
    "InvalidDiscountKind",
    "InvalidRange",
    "InvoiceNotFound",
    "InvoicingError",
]
