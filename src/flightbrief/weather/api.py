"""Weather API client for the OpenWeather current-weather endpoint."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Final, Protocol, runtime_checkable

import requests
from pydantic import ValidationError

from flightbrief.location.models import Coordinates
from flightbrief.settings.user import UserSettings

from .errors import InvalidRequestError, NetworkError, ParseError, WeatherAPIError
from .models import CurrentWeatherResponse, WeatherReading

logger: Final = logging.getLogger(__name__)

API_URL: Final = "https://api.openweathermap.org/data/2.5/weather"

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check lat/lon or parameters",
    401: "Invalid or missing API key",
    403: "Account blocked / key revoked",
    404: "Coordinates returned no data",
    429: "Rate limit exceeded",
    500: "OpenWeather internal error",
    502: "Bad gateway at OpenWeather",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class WeatherAPI:
    """OpenWeather client performing one round trip per call.

    Transforms the raw JSON body into a ``WeatherReading``. Every failure
    is raised as a ``WeatherAPIError`` subclass; there is no internal retry,
    the caller decides what a failure means.
    """

    def __init__(self, config: UserSettings, timeout: float | None = None) -> None:
        """Initialize the weather API client.

        Args:
            config: User settings carrying the API key
            timeout: Timeout for API requests in seconds (default: from settings)
        """
        self.config = config
        self.timeout = timeout if timeout is not None else config.request_timeout

    def build_params(self, coordinates: Coordinates) -> dict[str, str]:
        """Build query parameters for a request.

        Raises:
            InvalidRequestError: If the coordinates or API key are unusable
        """
        lat, lon = coordinates.latitude, coordinates.longitude
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidRequestError(f"Non-finite coordinates: {lat}, {lon}")
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            raise InvalidRequestError(f"Coordinates out of range: {lat}, {lon}")
        if not self.config.api_key:
            raise InvalidRequestError("Missing API key")

        lat_q, lon_q = coordinates.as_query()
        return {
            "lat": lat_q,
            "lon": lon_q,
            "appid": self.config.api_key,
            "units": "metric",
        }

    def fetch_reading(self, coordinates: Coordinates) -> WeatherReading:
        """Retrieve current weather for the given coordinates.

        Returns:
            Validated WeatherReading

        Raises:
            InvalidRequestError: When the request cannot be built
            NetworkError: When network connectivity issues occur
            WeatherAPIError: For any non-200 status (ServerError for 5xx)
            ParseError: When the body is not valid JSON or fails validation
        """
        params = self.build_params(coordinates)
        logger.debug("Requesting weather for %s, %s", params["lat"], params["lon"])

        try:
            resp = requests.get(API_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Weather API network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        if resp.status_code != 200:
            raise self._status_error(resp)

        try:
            raw: Any = resp.json()
            reading = CurrentWeatherResponse.model_validate(raw).to_reading()
        except ValueError as exc:
            # pydantic's ValidationError is a ValueError as well
            kind = "schema mismatch" if isinstance(exc, ValidationError) else "invalid JSON"
            logger.error("Weather API %s: %s", kind, exc)
            logger.debug("Response body: %s", resp.text)
            raise ParseError(f"Could not decode weather response ({kind})", exc) from exc

        logger.info(
            "Weather loaded: %.1f°C, %s, %s",
            reading.temperature_celsius,
            reading.category.value,
            reading.city_name,
        )
        return reading

    @staticmethod
    def _status_error(resp: requests.Response) -> WeatherAPIError:
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if "message" not in body:
            body = {**body, "message": HTTP_ERROR_MAP.get(resp.status_code, resp.text)}
        logger.error("Weather API error: %s - %s", resp.status_code, body["message"])
        return WeatherAPIError.from_response(body, resp.status_code)


@runtime_checkable
class WeatherClient(Protocol):
    """Suspending weather fetch used by the briefing orchestrator."""

    async def fetch(self, coordinates: Coordinates) -> WeatherReading:
        """Fetch a reading or raise a WeatherAPIError."""
        ...


class AsyncWeatherClient:
    """Runs the blocking ``WeatherAPI`` call in a worker thread."""

    def __init__(self, api: WeatherAPI) -> None:
        self.api = api

    async def fetch(self, coordinates: Coordinates) -> WeatherReading:
        return await asyncio.to_thread(self.api.fetch_reading, coordinates)
