"""Tests for settings loading."""

from pathlib import Path

from sports_venues.config.settings import AppSettings, load_settings


def test_defaults(monkeypatch):
    for name in ("COORDINATES_PATH", "OUTPUT_PATH", "LOG_LEVEL", "REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    settings = AppSettings(_env_file=None)
    assert settings.coordinates_path == Path("data/venueCoordinates.csv")
    assert settings.output_path == Path("data/venues.csv")
    assert settings.request_timeout == 30.0


def test_paths_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("COORDINATES_PATH", str(tmp_path / "coords.csv"))
    monkeypatch.setenv("OUTPUT_PATH", str(tmp_path / "venues.csv"))
    settings = AppSettings(_env_file=None)
    assert settings.coordinates_path == tmp_path / "coords.csv"
    assert settings.output_path == tmp_path / "venues.csv"


def test_invalid_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert load_settings().log_level == "INFO"


def test_log_level_upper_cased(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert load_settings().log_level == "DEBUG"
