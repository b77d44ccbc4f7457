"""Logging helpers: rotating application log and Excel tabular logs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Protocol, Sequence

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_FILENAME = "invoicing.log"


def configure_logging(log_dir: Path, level: int = logging.INFO) -> logging.Logger:
    """Attach a rotating file handler to the ``invoicing`` logger once."""

    log_dir.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger("invoicing")
    if not logger.handlers:
        handler = RotatingFileHandler(
            log_dir / LOG_FILENAME,
            maxBytes=1_000_000,
            backupCount=5,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False

    logging.captureWarnings(True)
    return logger


class RowLike(Protocol):
    """Rows that know how to serialise themselves as spreadsheet cells."""

    def as_cells(self) -> Iterable[object]:
        """Return the ordered cell values."""


@dataclass(slots=True)
class ExcelLoggerConfig:
    """Configuration used by :class:`ExcelLogger`."""

    columns: Sequence[str]
    filename: str = "invoice-totals.xlsx"
    sheet_title: str = "Totals"


class ExcelLogger:
    """Write rows to an Excel workbook with :mod:`openpyxl`.

    Every call to :meth:`write_rows` creates a fresh workbook holding the
    header from :class:`ExcelLoggerConfig` followed by the rows.
    """

    def __init__(self, config: ExcelLoggerConfig) -> None:
        self.config = config

    def write_rows(self, rows: Iterable[RowLike | Iterable[object]]) -> Path:
        """Persist ``rows`` and return the workbook path."""

        from openpyxl import Workbook

        destination = Path(self.config.filename)
        destination.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.config.sheet_title

        if self.config.columns:
            worksheet.append(list(self.config.columns))

        for row in rows:
            if hasattr(row, "as_cells"):
                cells = list(row.as_cells())  # type: ignore[union-attr]
            else:
                cells = list(row)  # type: ignore[arg-type]
            worksheet.append(cells)

        workbook.save(destination)
        return destination


__all__ = [
    "ExcelLogger",
    "ExcelLoggerConfig",
    "LOG_FORMAT",
    "RowLike",
    "configure_logging",
]
