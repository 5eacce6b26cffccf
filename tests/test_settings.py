from pathlib import Path

import pytest
from pydantic import ValidationError

from flightbrief.location.models import Coordinates, LocationFix
from flightbrief.settings.application import PACKAGE_DIR, ApplicationSettings
from flightbrief.settings.user import UserSettings


def test_defaults() -> None:
    cfg = UserSettings(api_key="test-key-abc")
    assert cfg.request_timeout == 10
    assert cfg.device_fix is None
    assert cfg.fallback == Coordinates(40.7128, -74.0060, is_fallback=True)
    assert cfg.player_command[0] == "mpg123"


def test_device_fix() -> None:
    cfg = UserSettings(api_key="test-key-abc", lat=55.7558, lon=37.6173)
    assert cfg.device_fix == LocationFix(55.7558, 37.6173)


def test_lat_without_lon_is_rejected() -> None:
    with pytest.raises(ValidationError, match="together"):
        UserSettings(api_key="test-key-abc", lat=10.0)


@pytest.mark.parametrize("field, value", [("lat", 91), ("lon", -181), ("fallback_lat", -90.5)])
def test_out_of_range_coordinates_rejected(field: str, value: float) -> None:
    data = {"api_key": "test-key-abc", "lat": 0.0, "lon": 0.0, field: value}
    with pytest.raises(ValidationError):
        UserSettings(**data)


def test_short_api_key_rejected() -> None:
    with pytest.raises(ValidationError):
        UserSettings(api_key="short")


def test_load_interpolates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OWM_API_KEY", "key-from-environment")
    path = tmp_path / "config.yaml"
    path.write_text('api_key: "${OWM_API_KEY}"\nfallback_lat: 51.5074\nfallback_lon: -0.1278\n')

    cfg = UserSettings.load(path)

    assert cfg.api_key == "key-from-environment"
    assert cfg.fallback == Coordinates(51.5074, -0.1278, is_fallback=True)


def test_load_from_env_variable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text('api_key: "test_api_key"\n')
    monkeypatch.setenv("FLIGHTBRIEF_CONFIG", str(path))
    assert UserSettings.load().api_key == "test_api_key"


def test_load_missing_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLIGHTBRIEF_CONFIG", str(tmp_path / "nope.yaml"))
    with pytest.raises(FileNotFoundError):
        UserSettings.load()


def test_load_invalid_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("api_key: short\n")
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        UserSettings.load(path)


def test_application_paths(tmp_path: Path) -> None:
    cfg = UserSettings(api_key="test-key-abc", preferences_file=tmp_path / "p.yaml")
    paths = ApplicationSettings(cfg).paths
    assert paths.templates_dir == PACKAGE_DIR / "templates"
    assert paths.sounds_dir == PACKAGE_DIR / "sounds"
    assert paths.preferences_file == tmp_path / "p.yaml"
    assert (paths.templates_dir / paths.briefing_template).exists()
