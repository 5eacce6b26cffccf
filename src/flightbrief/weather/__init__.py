"""Weather package - holds the API client, models, and custom errors."""

from .api import AsyncWeatherClient, WeatherAPI, WeatherClient
from .errors import (
    InvalidRequestError,
    NetworkError,
    ParseError,
    ServerError,
    WeatherAPIError,
    WeatherErrorKind,
)
from .models import CurrentWeatherResponse, WeatherCategory, WeatherReading

# Define what gets imported with: from flightbrief.weather import *
__all__ = [
    "AsyncWeatherClient",
    "CurrentWeatherResponse",
    "InvalidRequestError",
    "NetworkError",
    "ParseError",
    "ServerError",
    "WeatherAPI",
    "WeatherAPIError",
    "WeatherCategory",
    "WeatherClient",
    "WeatherErrorKind",
    "WeatherReading",
]
