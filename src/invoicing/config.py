"""Runtime configuration for the invoicing engine and its tooling."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ConfigError

_CONFIG_ENV_VAR = "INVOICING_CONFIG_PATH"
_TIMEZONE_ENV_VAR = "INVOICING_TIMEZONE"
_STRICT_ENV_VAR = "INVOICING_STRICT"

TIMEZONE_POLICIES = ("local", "utc")
DEFAULT_LOG_DIR = Path("work") / "logs"


@dataclass(frozen=True)
class EngineSettings:
    """Settings consumed by the service layer and the CLI."""

    currency_places: int = 2
    timezone_policy: str = "local"
    strict: bool = False
    log_dir: Path = DEFAULT_LOG_DIR

    def __post_init__(self) -> None:
        if self.timezone_policy not in TIMEZONE_POLICIES:
            raise ConfigError(
                f"timezone_policy must be one of {TIMEZONE_POLICIES}, "
                f"got {self.timezone_policy!r}"
            )
        if self.currency_places < 0:
            raise ConfigError("currency_places cannot be negative")


_CACHED_SETTINGS: tuple[Path | None, float, EngineSettings] | None = None


def _resolve_config_path() -> Path | None:
    candidate = os.getenv(_CONFIG_ENV_VAR)
    if candidate:
        return Path(candidate)
    return None


def _parse_bool(text: str) -> bool:
    return text.strip().lower() in {"1", "true", "yes", "on"}


def _load_settings_from_disk(path: Path) -> EngineSettings:
    if not path.exists():
        raise ConfigError(f"Config file '{path}' not found")

    with path.open("r", encoding="utf-8") as handle:
        try:
            payload: dict[str, Any] = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config file '{path}' is not valid JSON") from exc

    strict = payload.get("strict", False)
    if isinstance(strict, str):
        strict = _parse_bool(strict)

    try:
        return EngineSettings(
            currency_places=int(payload.get("currency_places", 2)),
            timezone_policy=str(payload.get("timezone_policy", "local")),
            strict=bool(strict),
            log_dir=Path(payload.get("log_dir", DEFAULT_LOG_DIR)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Config file '{path}' has invalid values") from exc


def _apply_environment(settings: EngineSettings) -> EngineSettings:
    timezone_policy = os.getenv(_TIMEZONE_ENV_VAR)
    if timezone_policy:
        settings = replace(settings, timezone_policy=timezone_policy.strip().lower())
    strict = os.getenv(_STRICT_ENV_VAR)
    if strict:
        settings = replace(settings, strict=_parse_bool(strict))
    return settings


def load_settings(force_reload: bool = False) -> EngineSettings:
    """Load settings from ``$INVOICING_CONFIG_PATH`` with caching.

    Environment overrides are applied on every call and are not cached.
    """

    global _CACHED_SETTINGS

    path = _resolve_config_path()
    mtime = path.stat().st_mtime if path is not None and path.exists() else 0.0

    if not force_reload and _CACHED_SETTINGS:
        cached_path, cached_mtime, cached_settings = _CACHED_SETTINGS
        if cached_path == path and cached_mtime == mtime:
            return _apply_environment(cached_settings)

    settings = _load_settings_from_disk(path) if path is not None else EngineSettings()
    _CACHED_SETTINGS = (path, mtime, settings)
    return _apply_environment(settings)


__all__ = ["DEFAULT_LOG_DIR", "EngineSettings", "TIMEZONE_POLICIES", "load_settings"]
