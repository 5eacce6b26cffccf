"""Typed models for OpenWeather current-weather responses.

Only the fields the briefing uses are modelled; the wire models are
converted into an immutable ``WeatherReading`` right after validation.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

# ─────────────────────────── categories ──────────────────────────────────────


class WeatherCategory(Enum):
    """Closed set of condition kinds reported in ``weather[].main``."""

    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    DRIZZLE = "Drizzle"
    THUNDERSTORM = "Thunderstorm"
    SNOW = "Snow"
    MIST = "Mist"
    SMOKE = "Smoke"
    HAZE = "Haze"
    DUST = "Dust"
    FOG = "Fog"
    SAND = "Sand"
    ASH = "Ash"
    SQUALL = "Squall"
    TORNADO = "Tornado"
    UNKNOWN = "Unknown"

    @classmethod
    def from_condition(cls, condition: str | None) -> WeatherCategory:
        """Map a server condition string to a category.

        Matching is exact and case-sensitive; anything unrecognised becomes
        ``UNKNOWN`` rather than failing the whole reading.
        """
        for category in cls:
            if category.value == condition:
                return category
        return cls.UNKNOWN

    @property
    def label(self) -> str:
        """Human-readable label shown next to the precipitation row."""
        return _LABELS.get(self, self.value)


_LABELS: dict[WeatherCategory, str] = {
    WeatherCategory.CLOUDS: "Cloudy",
    WeatherCategory.SAND: "Sandstorm",
    WeatherCategory.ASH: "Volcanic Ash",
}


# ─────────────────────────── domain reading ──────────────────────────────────


class WeatherReading(BaseModel):
    """Immutable snapshot of the conditions used for one briefing."""

    model_config = ConfigDict(frozen=True)

    temperature_celsius: float
    wind_speed_kmh: float
    category: WeatherCategory
    description: str = ""
    visibility_label: str
    city_name: str

    @classmethod
    def default(cls) -> WeatherReading:
        """Reading shown before the first successful fetch."""
        return cls(
            temperature_celsius=22.0,
            wind_speed_kmh=5.0,
            category=WeatherCategory.CLEAR,
            description="",
            visibility_label="10+ Km",
            city_name="Moscow",
        )


# ─────────────────────────── wire models ─────────────────────────────────────


class MainBlock(BaseModel):
    """``main`` block of the response."""

    temp: float


class Condition(BaseModel):
    """One entry of the ``weather`` array."""

    main: str
    description: str


class Wind(BaseModel):
    """``wind`` block of the response."""

    speed: float


class CurrentWeatherResponse(BaseModel):
    """Weather data container parsed from the current-weather endpoint.

    Validation fails on any missing or mistyped field, so a reading is
    either complete or not produced at all.
    """

    METRES_PER_KM: ClassVar[int] = 1000

    main: MainBlock
    weather: list[Condition]
    visibility: int = Field(..., ge=0)
    wind: Wind
    name: str

    @property
    def primary_condition(self) -> Condition | None:
        """First weather condition or None if the list is empty."""
        return self.weather[0] if self.weather else None

    @property
    def visibility_label(self) -> str:
        """Visibility in whole kilometres, e.g. ``"10+ Km"``."""
        return f"{self.visibility // self.METRES_PER_KM}+ Km"

    def to_reading(self) -> WeatherReading:
        """Convert the validated body into a ``WeatherReading``."""
        condition = self.primary_condition
        return WeatherReading(
            temperature_celsius=self.main.temp,
            wind_speed_kmh=self.wind.speed,
            category=WeatherCategory.from_condition(condition.main if condition else None),
            description=condition.description if condition else "",
            visibility_label=self.visibility_label,
            city_name=self.name,
        )
