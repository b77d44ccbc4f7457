"""Aggregate stored invoices and build Excel reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook

from .models import Invoice, InvoiceStatus, InvoiceTotals


@dataclass
class Totals:
    """Running sums of invoice amounts."""

    count: int = 0
    subtotal: Decimal = field(default_factory=lambda: Decimal("0"))
    discount_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    tax_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    total: Decimal = field(default_factory=lambda: Decimal("0"))

    def add(self, totals: InvoiceTotals) -> None:
        self.count += 1
        self.subtotal += totals.subtotal
        self.discount_amount += totals.discount_amount
        self.tax_amount += totals.tax_amount
        self.total += totals.total


@dataclass
class ReportData:
    """Aggregated figures for a set of invoices."""

    totals_by_status: dict[InvoiceStatus, Totals]
    overall_totals: Totals
    outstanding_totals: Totals
    invoices: list[Invoice]


def aggregate_invoices(invoices: Iterable[Invoice]) -> ReportData:
    """Group ``invoices`` by status; outstanding means anything not paid or draft."""

    totals_by_status: dict[InvoiceStatus, Totals] = {}
    overall = Totals()
    outstanding = Totals()
    listed: list[Invoice] = []

    for invoice in invoices:
        totals_by_status.setdefault(invoice.status, Totals()).add(invoice.totals)
        overall.add(invoice.totals)
        if invoice.status not in (InvoiceStatus.PAID, InvoiceStatus.DRAFT):
            outstanding.add(invoice.totals)
        listed.append(invoice)

    return ReportData(
        totals_by_status=totals_by_status,
        overall_totals=overall,
        outstanding_totals=outstanding,
        invoices=listed,
    )


def default_report_destination(source: Path) -> Path:
    return source.with_name(f"{source.stem}_report.xlsx")


def _totals_row(label: str, totals: Totals) -> list[object]:
    return [
        label,
        totals.count,
        totals.subtotal,
        totals.discount_amount,
        totals.tax_amount,
        totals.total,
    ]


def write_excel_report(data: ReportData, destination: Path) -> None:
    """Write a summary sheet and a per-invoice sheet to ``destination``."""

    destination.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    summary_ws = workbook.active
    summary_ws.title = "Summary"
    summary_ws.append(["Status", "Invoices", "Subtotal", "Discount", "Tax", "Total"])

    for status in InvoiceStatus:
        if status in data.totals_by_status:
            summary_ws.append(_totals_row(status.value, data.totals_by_status[status]))

    summary_ws.append([])
    summary_ws.append(_totals_row("Outstanding", data.outstanding_totals))
    summary_ws.append(_totals_row("Overall", data.overall_totals))

    invoices_ws = workbook.create_sheet(title="Invoices")
    invoices_ws.append(
        [
            "Number",
            "Client",
            "Issue date",
            "Due date",
            "Status",
            "Subtotal",
            "Discount",
            "Tax",
            "Total",
        ]
    )
    for invoice in data.invoices:
        invoices_ws.append(
            [
                invoice.invoice_number,
                invoice.client_id,
                invoice.issue_date,
                invoice.due_date,
                invoice.status.value,
                *invoice.totals.as_cells(),
            ]
        )

    workbook.save(destination)


__all__ = [
    "ReportData",
    "Totals",
    "aggregate_invoices",
    "default_report_destination",
    "write_excel_report",
]
