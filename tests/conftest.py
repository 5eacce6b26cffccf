from pathlib import Path
from typing import Any, Callable
from unittest.mock import Mock

import pytest

from flightbrief.settings.user import UserSettings


@pytest.fixture
def config(tmp_path: Path) -> UserSettings:
    return UserSettings(
        api_key="test_api_key",
        lat=55.7558,
        lon=37.6173,
        request_timeout=5,
        sounds_dir=tmp_path / "sounds",
        preferences_file=tmp_path / "preferences.yaml",
    )


@pytest.fixture
def weather_body() -> dict[str, Any]:
    return {
        "coord": {"lon": 37.6173, "lat": 55.7558},
        "weather": [
            {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}
        ],
        "main": {"temp": 18.4, "feels_like": 17.9, "pressure": 1016, "humidity": 61},
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 250},
        "name": "Moscow",
        "cod": 200,
    }


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Factory for mocked requests responses."""

    def _make(status_code: int = 200, body: Any = None, text: str = "") -> Mock:
        resp = Mock()
        resp.status_code = status_code
        resp.text = text
        if isinstance(body, Exception):
            resp.json.side_effect = body
        else:
            resp.json.return_value = body
        return resp

    return _make
