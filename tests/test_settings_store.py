from pathlib import Path
import json

from marina_billing.config import build_settings, load_settings
from marina_billing.domain.models import LocationKind
from marina_billing.infrastructure.parsing.boat_csv import ParseMode
from marina_billing.infrastructure.storage.settings_store import load_overrides, save_overrides


def test_save_and_load_overrides(tmp_path: Path):
    path = tmp_path / "marina_settings.json"
    saved = save_overrides(
        {"Capacity": 50, "monthly_rates": {"Trailor": "30", "dock": 1}, "parse_mode": "STRICT", "bogus": 1},
        path=path,
    )

    assert saved == {"capacity": 50, "monthly_rates": {"trailer": 30.0}, "parse_mode": "strict"}
    assert json.loads(path.read_text()) == saved
    assert load_overrides(path=path) == saved


def test_missing_or_malformed_file_gives_no_overrides(tmp_path: Path):
    assert load_overrides(path=tmp_path / "absent.json") == {}

    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_overrides(path=path) == {}


def test_build_settings_defaults():
    settings = build_settings({}, environ={})

    assert settings.capacity == 120
    assert settings.parse_mode is ParseMode.LEGACY
    assert settings.autosave is False
    assert settings.monthly_rates[LocationKind.SLIP] == 12.50


def test_load_settings_applies_file_overrides(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("MARINA_CAPACITY", raising=False)
    monkeypatch.delenv("MARINA_LOG_LEVEL", raising=False)
    path = tmp_path / "marina_settings.json"
    save_overrides({"capacity": None, "autosave": True, "monthly_rates": {"land": 15}}, path=path)

    settings = load_settings(path)

    assert settings.capacity is None
    assert settings.autosave is True
    assert settings.monthly_rates[LocationKind.LAND] == 15.0
    assert settings.monthly_rates[LocationKind.SLIP] == 12.50


def test_environment_overrides_file():
    settings = build_settings(
        {"capacity": 10, "log_level": "INFO"},
        environ={"MARINA_CAPACITY": "25", "MARINA_LOG_LEVEL": "debug"},
    )

    assert settings.capacity == 25
    assert settings.log_level == "DEBUG"


def test_zero_capacity_in_file_means_unbounded(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("MARINA_CAPACITY", raising=False)
    path = tmp_path / "marina_settings.json"
    save_overrides({"capacity": 0}, path=path)

    assert load_settings(path).capacity is None
