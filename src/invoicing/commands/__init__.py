"""Command implementations exposed through :mod:`invoicing.cli`."""

__all__ = ["report", "totals"]
