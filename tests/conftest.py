from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    """Keep config lookups and log files inside the test's temp directory."""

    from invoicing import config

    monkeypatch.delenv("INVOICING_CONFIG_PATH", raising=False)
    monkeypatch.delenv("INVOICING_TIMEZONE", raising=False)
    monkeypatch.delenv("INVOICING_STRICT", raising=False)
    monkeypatch.setattr(config, "_CACHED_SETTINGS", None)
    monkeypatch.chdir(tmp_path)

    yield

    logger = logging.getLogger("invoicing")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
