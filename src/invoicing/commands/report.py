"""Generate an Excel report with invoice totals per status."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

from ..config import load_settings
from ..errors import InvoicingError
from ..loaders import load_payloads
from ..logging import configure_logging
from ..repository import InMemoryInvoiceRepository
from ..reporting import aggregate_invoices, default_report_destination, write_excel_report
from ..service import InvoiceService, build_invoices

LOGGER = logging.getLogger("invoicing.commands.report")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Build invoices from a JSON file, mark past-due ones as overdue "
            "and write an Excel report of the totals."
        )
    )
    parser.add_argument("invoices", type=Path, help="JSON file with invoice payloads")
    parser.add_argument("--output", type=Path, help="Workbook destination")
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        help="Reference date (YYYY-MM-DD) for the overdue check",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_dir)
    service = InvoiceService(InMemoryInvoiceRepository(), settings)

    try:
        build_invoices(service, load_payloads(args.invoices))
    except (InvoicingError, KeyError, ValueError) as exc:
        LOGGER.error("Could not load invoices from %s: %s", args.invoices, exc)
        print(f"error: {exc}")
        return 1

    data = aggregate_invoices(service.list_invoices(today=args.today))
    destination = args.output or default_report_destination(args.invoices)
    write_excel_report(data, destination)
    print(f"Invoice report saved to: {destination}")

    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
