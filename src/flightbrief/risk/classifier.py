"""Operational risk signals derived from a weather reading.

Every signal is a lookup in a rule table keyed by weather category. A rule
either yields a constant or compares the wind speed against a threshold
with a strict ``>``; categories missing from a table fall through to that
table's default. The functions are pure and total over every
``WeatherCategory`` and wind speed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Mapping, TypeVar

from flightbrief.weather.models import WeatherCategory as W
from flightbrief.weather.models import WeatherReading

T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[T]):
    """``above`` when wind > threshold, else ``otherwise``."""

    otherwise: T
    threshold: float | None = None
    above: T | None = None

    def apply(self, wind_speed: float) -> T:
        if self.threshold is not None and wind_speed > self.threshold:
            return self.above  # type: ignore[return-value]
        return self.otherwise


def _table(*rows: tuple[tuple[W, ...], Rule[T]]) -> dict[W, Rule[T]]:
    return {category: rule for categories, rule in rows for category in categories}


def _lookup(table: Mapping[W, Rule[T]], default: T, category: W, wind_speed: float) -> T:
    rule = table.get(category)
    return rule.apply(wind_speed) if rule else default


class CongestionLevel(Enum):
    """Runway congestion level."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    MINIMAL = "Minimal"


class Severity(Enum):
    """Colour band of a delay-factor status."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class DelayFactor:
    """One row of the delay screen."""

    title: str
    status: str
    severity: Severity


# ─────────────────────────── rule tables ─────────────────────────────────────

SEVERE = (W.THUNDERSTORM, W.TORNADO, W.SQUALL)

WAITING_TIME: dict[W, Rule[str]] = _table(
    (SEVERE, Rule("45+ min")),
    ((W.RAIN, W.DRIZZLE, W.SNOW), Rule("30 min")),
    ((W.FOG, W.MIST, W.HAZE, W.SMOKE), Rule("25 min")),
    ((W.CLOUDS,), Rule("15 min", 10, "20 min")),
    ((W.CLEAR,), Rule("10 min", 15, "15 min")),
)
WAITING_TIME_DEFAULT = "20 min"

RUNWAY_CONGESTION: dict[W, Rule[CongestionLevel]] = _table(
    ((*SEVERE, W.SNOW), Rule(CongestionLevel.HIGH)),
    ((W.RAIN, W.DRIZZLE, W.FOG, W.MIST, W.HAZE), Rule(CongestionLevel.MEDIUM)),
    ((W.CLOUDS,), Rule(CongestionLevel.LOW, 10, CongestionLevel.MEDIUM)),
    ((W.CLEAR,), Rule(CongestionLevel.MINIMAL, 15, CongestionLevel.LOW)),
)
RUNWAY_CONGESTION_DEFAULT = CongestionLevel.LOW

DELAY_PROBABILITY: dict[W, Rule[bool]] = _table(
    ((*SEVERE, W.SNOW, W.RAIN, W.FOG), Rule(True)),
    ((W.DRIZZLE, W.MIST, W.HAZE), Rule(False, 8, True)),
    ((W.CLOUDS,), Rule(False, 12, True)),
    ((W.CLEAR,), Rule(False, 20, True)),
)
DELAY_PROBABILITY_DEFAULT = False

_HIGH_RISK = ("High Risk", Severity.HIGH)
_MEDIUM = ("Medium", Severity.MEDIUM)
_LOW = ("Low", Severity.LOW)
_NORMAL = ("Normal", Severity.LOW)

WEATHER_STATUS: dict[W, Rule[tuple[str, Severity]]] = _table(
    (SEVERE, Rule(_HIGH_RISK)),
    ((W.SNOW, W.RAIN, W.FOG), Rule(_MEDIUM)),
    ((W.CLOUDS, W.DRIZZLE, W.MIST, W.HAZE), Rule(_LOW, 10, _MEDIUM)),
    ((W.CLEAR,), Rule(_NORMAL)),
)

# Airport congestion reuses the runway table; the delay screen labels the
# medium level "Middle".
CONGESTION_STATUS: dict[CongestionLevel, tuple[str, Severity]] = {
    CongestionLevel.HIGH: ("High", Severity.HIGH),
    CongestionLevel.MEDIUM: ("Middle", Severity.MEDIUM),
    CongestionLevel.LOW: ("Low", Severity.LOW),
    CongestionLevel.MINIMAL: ("Minimal", Severity.LOW),
}

DELAY_LEVEL: dict[W, Rule[tuple[str, Severity]]] = _table(
    ((*SEVERE, W.SNOW, W.RAIN, W.FOG), Rule(("High", Severity.HIGH))),
    ((W.DRIZZLE, W.MIST, W.HAZE), Rule(_LOW, 8, _MEDIUM)),
    ((W.CLOUDS,), Rule(_LOW, 12, _MEDIUM)),
    ((W.CLEAR,), Rule(_LOW, 20, _MEDIUM)),
)

# ─────────────────────────── signals ─────────────────────────────────────────


def waiting_time(category: W, wind_speed: float) -> str:
    """Expected ground waiting time."""
    return _lookup(WAITING_TIME, WAITING_TIME_DEFAULT, category, wind_speed)


def runway_congestion(category: W, wind_speed: float) -> CongestionLevel:
    """Expected runway congestion."""
    return _lookup(RUNWAY_CONGESTION, RUNWAY_CONGESTION_DEFAULT, category, wind_speed)


def delay_probability(category: W, wind_speed: float) -> bool:
    """Whether delays are likely."""
    return _lookup(DELAY_PROBABILITY, DELAY_PROBABILITY_DEFAULT, category, wind_speed)


def weather_conditions_factor(category: W, wind_speed: float) -> DelayFactor:
    status, severity = _lookup(WEATHER_STATUS, _NORMAL, category, wind_speed)
    return DelayFactor("Weather conditions", status, severity)


def airport_congestion_factor(category: W, wind_speed: float) -> DelayFactor:
    status, severity = CONGESTION_STATUS[runway_congestion(category, wind_speed)]
    return DelayFactor("Airport congestion", status, severity)


def delay_probability_factor(category: W, wind_speed: float) -> DelayFactor:
    status, severity = _lookup(DELAY_LEVEL, _LOW, category, wind_speed)
    return DelayFactor("Probability of delays on the route", status, severity)


@dataclass(frozen=True)
class RiskAssessment:
    """All risk signals for one reading."""

    waiting_time: str
    runway_congestion: CongestionLevel
    delay_probability: bool
    weather_conditions: DelayFactor
    airport_congestion: DelayFactor
    probability_of_delays: DelayFactor

    @property
    def delay_factors(self) -> tuple[DelayFactor, DelayFactor, DelayFactor]:
        return (self.weather_conditions, self.airport_congestion, self.probability_of_delays)


class RiskClassifier:
    """Stateless facade bundling every signal for a reading."""

    def assess(self, reading: WeatherReading) -> RiskAssessment:
        category, wind = reading.category, reading.wind_speed_kmh
        return RiskAssessment(
            waiting_time=waiting_time(category, wind),
            runway_congestion=runway_congestion(category, wind),
            delay_probability=delay_probability(category, wind),
            weather_conditions=weather_conditions_factor(category, wind),
            airport_congestion=airport_congestion_factor(category, wind),
            probability_of_delays=delay_probability_factor(category, wind),
        )
