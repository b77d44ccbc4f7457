from __future__ import annotations

import json
from pathlib import Path

import pytest

from invoicing.config import EngineSettings, load_settings
from invoicing.errors import ConfigError


def test_defaults_without_config_file() -> None:
    assert load_settings() == EngineSettings()


def test_loads_json_config(tmp_path, monkeypatch) -> None:
    path = tmp_path / "invoicing.json"
    path.write_text(
        json.dumps({"currency_places": 3, "timezone_policy": "utc", "strict": True, "log_dir": "out"}),
        encoding="utf-8",
    )
    monkeypatch.setenv("INVOICING_CONFIG_PATH", str(path))

    settings = load_settings(force_reload=True)

    assert settings == EngineSettings(
        currency_places=3, timezone_policy="utc", strict=True, log_dir=Path("out")
    )


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("INVOICING_TIMEZONE", "UTC")
    monkeypatch.setenv("INVOICING_STRICT", "yes")

    settings = load_settings()

    assert settings.timezone_policy == "utc"
    assert settings.strict is True


def test_settings_are_cached(tmp_path, monkeypatch) -> None:
    path = tmp_path / "invoicing.json"
    path.write_text(json.dumps({"currency_places": 4}), encoding="utf-8")
    monkeypatch.setenv("INVOICING_CONFIG_PATH", str(path))

    assert load_settings() is load_settings()


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"timezone_policy": "mars"}), json.dumps({"currency_places": "x"})],
)
def test_invalid_config_raises(tmp_path, monkeypatch, content: str) -> None:
    path = tmp_path / "invoicing.json"
    path.write_text(content, encoding="utf-8")
    monkeypatch.setenv("INVOICING_CONFIG_PATH", str(path))

    with pytest.raises(ConfigError):
        load_settings(force_reload=True)


def test_missing_config_file_raises(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("INVOICING_CONFIG_PATH", str(tmp_path / "missing.json"))

    with pytest.raises(ConfigError):
        load_settings()


@pytest.mark.parametrize(("raw", "expected"), [("false", False), ("no", False), ("true", True), (True, True), (0, False)])
def test_strict_flag_from_config_file(tmp_path, monkeypatch, raw, expected) -> None:
    path = tmp_path / "invoicing.json"
    path.write_text(json.dumps({"strict": raw}), encoding="utf-8")
    monkeypatch.setenv("INVOICING_CONFIG_PATH", str(path))

    assert load_settings(force_reload=True).strict is expected
