import asyncio
import math
from typing import Any, Callable
from unittest.mock import Mock, patch

import pytest
import requests

from flightbrief.location.models import Coordinates
from flightbrief.settings.user import UserSettings
from flightbrief.weather.api import API_URL, AsyncWeatherClient, WeatherAPI
from flightbrief.weather.errors import (
    AuthenticationError,
    InvalidRequestError,
    NetworkError,
    ParseError,
    ServerError,
    WeatherErrorKind,
)
from flightbrief.weather.models import WeatherCategory

MOSCOW = Coordinates(55.7558, 37.6173)


@pytest.fixture
def api(config: UserSettings) -> WeatherAPI:
    return WeatherAPI(config)


def test_fetch_reading_success(
    api: WeatherAPI, weather_body: dict[str, Any], make_response: Callable[..., Mock]
) -> None:
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(200, weather_body)
        reading = api.fetch_reading(MOSCOW)

    assert reading.category is WeatherCategory.CLEAR
    assert reading.city_name == "Moscow"
    assert reading.visibility_label == "10+ Km"

    args, kwargs = mock_get.call_args
    assert args == (API_URL,)
    assert kwargs["timeout"] == 5
    assert kwargs["params"] == {
        "lat": "55.7558",
        "lon": "37.6173",
        "appid": "test_api_key",
        "units": "metric",
    }


def test_params_are_four_decimals(api: WeatherAPI) -> None:
    params = api.build_params(Coordinates(40.712812345, -74.00601))
    assert params["lat"] == "40.7128"
    assert params["lon"] == "-74.0060"


def test_server_error(api: WeatherAPI, make_response: Callable[..., Mock]) -> None:
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(500, ValueError("no json"), text="oops")
        with pytest.raises(ServerError) as exc_info:
            api.fetch_reading(MOSCOW)

    assert exc_info.value.code == 500
    assert exc_info.value.kind is WeatherErrorKind.SERVER_ERROR
    assert "OpenWeather internal error" in str(exc_info.value)


def test_invalid_key_uses_server_message(
    api: WeatherAPI, make_response: Callable[..., Mock]
) -> None:
    body = {"cod": 401, "message": "Invalid API key."}
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(401, body)
        with pytest.raises(AuthenticationError) as exc_info:
            api.fetch_reading(MOSCOW)

    assert str(exc_info.value) == "[401] Invalid API key."


def test_invalid_json(api: WeatherAPI, make_response: Callable[..., Mock]) -> None:
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(200, ValueError("Expecting value"), text="<html>")
        with pytest.raises(ParseError) as exc_info:
            api.fetch_reading(MOSCOW)

    assert exc_info.value.kind is WeatherErrorKind.DECODE_ERROR
    assert isinstance(exc_info.value.original_error, ValueError)


def test_schema_mismatch(
    api: WeatherAPI, weather_body: dict[str, Any], make_response: Callable[..., Mock]
) -> None:
    del weather_body["wind"]
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(200, weather_body)
        with pytest.raises(ParseError, match="schema mismatch"):
            api.fetch_reading(MOSCOW)


def test_network_error(api: WeatherAPI) -> None:
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        mock_get.side_effect = requests.ConnectionError("Name or service not known")
        with pytest.raises(NetworkError) as exc_info:
            api.fetch_reading(MOSCOW)

    assert exc_info.value.kind is WeatherErrorKind.NETWORK_UNREACHABLE
    assert isinstance(exc_info.value.original_error, requests.ConnectionError)


@pytest.mark.parametrize(
    "coordinates",
    [
        Coordinates(91.0, 0.0),
        Coordinates(0.0, -180.5),
        Coordinates(math.nan, 0.0),
        Coordinates(0.0, math.inf),
    ],
)
def test_invalid_coordinates_make_no_request(api: WeatherAPI, coordinates: Coordinates) -> None:
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        with pytest.raises(InvalidRequestError):
            api.fetch_reading(coordinates)
    mock_get.assert_not_called()


def test_missing_api_key_makes_no_request(config: UserSettings) -> None:
    api = WeatherAPI(config.model_copy(update={"api_key": ""}))
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        with pytest.raises(InvalidRequestError, match="API key"):
            api.fetch_reading(MOSCOW)
    mock_get.assert_not_called()


def test_explicit_timeout_overrides_settings(config: UserSettings) -> None:
    assert WeatherAPI(config, timeout=1.5).timeout == 1.5
    assert WeatherAPI(config).timeout == 5


def test_async_client_runs_fetch(
    api: WeatherAPI, weather_body: dict[str, Any], make_response: Callable[..., Mock]
) -> None:
    client = AsyncWeatherClient(api)
    with patch("flightbrief.weather.api.requests.get") as mock_get:
        mock_get.return_value = make_response(200, weather_body)
        reading = asyncio.run(client.fetch(MOSCOW))

    assert reading.city_name == "Moscow"
    mock_get.assert_called_once()
