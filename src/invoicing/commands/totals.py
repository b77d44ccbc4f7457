"""Print the totals of the invoice payloads stored in a JSON file."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from ..calculator import calculate_invoice_totals, round_totals
from ..config import load_settings
from ..errors import InvoicingError
from ..loaders import load_drafts
from ..logging import ExcelLogger, ExcelLoggerConfig, configure_logging
from ..validation import validate_draft

LOGGER = logging.getLogger("invoicing.commands.totals")

COLUMNS = ("draft", "subtotal", "discount", "tax", "total")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute subtotal, discount, tax and total for invoice drafts."
    )
    parser.add_argument("drafts", type=Path, help="JSON file with one or more invoice payloads")
    parser.add_argument(
        "--places",
        type=int,
        default=None,
        help="Round amounts to this many decimals (default: unrounded)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject negative amounts and tax rates outside 0-100",
    )
    parser.add_argument("--excel", type=Path, help="Also write the totals to this workbook")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    if args.strict:
        settings = replace(settings, strict=True)
    configure_logging(settings.log_dir)

    try:
        drafts = load_drafts(args.drafts)
        rows = []
        for index, draft in enumerate(drafts, start=1):
            if settings.strict:
                validate_draft(draft)
            totals = calculate_invoice_totals(draft)
            if args.places is not None:
                totals = round_totals(totals, args.places)
            rows.append([index, *totals.as_cells()])
    except InvoicingError as exc:
        LOGGER.error("Could not compute totals for %s: %s", args.drafts, exc)
        print(f"error: {exc}")
        return 1

    print("\t".join(COLUMNS))
    for row in rows:
        print("\t".join(str(cell) for cell in row))

    if args.excel:
        ExcelLogger(ExcelLoggerConfig(columns=COLUMNS, filename=str(args.excel))).write_rows(rows)
        print(f"Totals saved to: {args.excel}")

    LOGGER.info("Computed totals for %d draft(s) from %s", len(rows), args.drafts)
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
