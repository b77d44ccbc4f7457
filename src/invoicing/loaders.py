"""Read invoice request payloads from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import DraftLoaderError, InvoicingError
from .models import InvoiceDraft


def load_payloads(path: Path) -> list[dict[str, Any]]:
    """Return the invoice payloads stored in ``path``.

    The file holds either a single JSON object or a list of objects.
    """

    if not path.exists():
        raise DraftLoaderError(f"Invoice file '{path}' not found")

    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise DraftLoaderError(f"Invoice file '{path}' is not valid JSON") from exc

    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise DraftLoaderError(f"Invoice file '{path}' must hold an object or a list of objects")
    return payload


def load_drafts(path: Path) -> list[InvoiceDraft]:
    """Return one :class:`InvoiceDraft` per payload in ``path``."""

    drafts = []
    for index, payload in enumerate(load_payloads(path)):
        try:
            drafts.append(InvoiceDraft.from_mapping(payload))
        except KeyError as exc:
            raise DraftLoaderError(f"Invoice #{index} is missing {exc}") from exc
        except InvoicingError:
            raise
        except (TypeError, ValueError) as exc:
            raise DraftLoaderError(f"Invoice #{index} is malformed: {exc}") from exc
    return drafts


__all__ = ["load_drafts", "load_payloads"]
