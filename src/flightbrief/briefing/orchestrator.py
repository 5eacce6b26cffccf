"""Asynchronous coordinator for one briefing view.

The orchestrator composes three independently changing inputs (location,
reachability, sound settings) into a single published ``BriefingState``.
Every trigger re-runs the whole sequence; when triggers overlap, the one
initiated last wins, regardless of which fetch completes first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Final

from flightbrief.audio.coordinator import AmbientSoundCoordinator
from flightbrief.location.providers import LocationProvider
from flightbrief.location.resolver import LocationResolver
from flightbrief.reachability import ReachabilityMonitor, ReachabilityProvider
from flightbrief.weather.api import WeatherClient
from flightbrief.weather.errors import WeatherAPIError
from flightbrief.weather.models import WeatherReading

logger: Final = logging.getLogger(__name__)

NO_NETWORK_MESSAGE: Final = "No internet connection. Please check your connection and try again."
FETCH_FAILED_MESSAGE: Final = "Failed to load weather data. Please try again later."


class BriefingPhase(Enum):
    """Lifecycle of the most recently initiated trigger."""

    IDLE = "idle"
    LOADING = "loading"
    SETTLED = "settled"
    FAILED = "failed"


class Trigger(Enum):
    """Upstream events that start a refresh."""

    ACTIVATION = "activation"
    LOCATION_CHANGED = "location_changed"
    RETRY = "retry"


@dataclass(frozen=True)
class BriefingState:
    """Snapshot published to subscribers.

    ``reading`` is the last known good reading; it survives failures so the
    presentation can decide what to show.
    """

    phase: BriefingPhase = BriefingPhase.IDLE
    reading: WeatherReading = WeatherReading.default()
    error_message: str | None = None
    generation: int = 0
    location_is_fallback: bool = False

    @property
    def is_loading(self) -> bool:
        return self.phase is BriefingPhase.LOADING

    @property
    def has_error(self) -> bool:
        return self.phase is BriefingPhase.FAILED


Subscriber = Callable[[BriefingState], None]


class BriefingOrchestrator:
    """Drives location resolution, weather fetches and ambient sound.

    Each trigger captures a generation number. Only the result of the
    current generation is written to the state; results of superseded
    fetches are computed but dropped. Instances share no mutable state.
    """

    def __init__(
        self,
        client: WeatherClient,
        location_provider: LocationProvider,
        reachability: ReachabilityProvider,
        resolver: LocationResolver | None = None,
        sound: AmbientSoundCoordinator | None = None,
        initial_reading: WeatherReading | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            client: Suspending weather client
            location_provider: Source of permission, fix and error
            reachability: Latest network reachability value
            resolver: Fallback policy (default: New York fallback)
            sound: Ambient sound coordinator, if sound is wanted
            initial_reading: Reading shown before the first fetch
        """
        self.client = client
        self.location_provider = location_provider
        self.reachability = reachability
        self.resolver = resolver or LocationResolver()
        self.sound = sound
        self._generation = 0
        self._state = BriefingState(reading=initial_reading or WeatherReading.default())
        self._subscribers: list[Subscriber] = []

    # ── publish / subscribe ──────────────────────────────────────────────
    @property
    def state(self) -> BriefingState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for every new state.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, state: BriefingState) -> None:
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("Briefing subscriber %r failed", callback)

    # ── triggers ─────────────────────────────────────────────────────────
    async def activate(self) -> BriefingState:
        """The briefing view became visible."""
        return await self.refresh(Trigger.ACTIVATION)

    async def on_location_changed(self) -> BriefingState:
        """The location provider reported a new fix or permission."""
        return await self.refresh(Trigger.LOCATION_CHANGED)

    async def retry(self) -> BriefingState:
        """The user asked to try again."""
        return await self.refresh(Trigger.RETRY)

    def on_reachability_changed(self, satisfied: bool) -> None:
        """Record a reachability change; the next trigger sees it."""
        if isinstance(self.reachability, ReachabilityMonitor):
            self.reachability.update(satisfied)

    async def refresh(self, trigger: Trigger) -> BriefingState:
        """Run one full trigger sequence.

        Returns:
            The published state after this trigger settled, or the current
            state if a newer trigger superseded it
        """
        self._generation += 1
        generation = self._generation
        logger.info("Briefing refresh #%d (%s)", generation, trigger.value)

        self._publish(
            replace(
                self._state,
                phase=BriefingPhase.LOADING,
                error_message=None,
                generation=generation,
            )
        )

        try:
            offline = not self.reachability.is_reachable()
            if not offline:
                snapshot = self.location_provider.snapshot()
                coordinates = self.resolver.resolve_snapshot(snapshot)
                reading = await self.client.fetch(coordinates)
        except WeatherAPIError as err:
            if self._is_current(generation):
                logger.error(
                    "Weather fetch failed (%s, %s): %s", err.kind.value, err.code, err.message
                )
                self._fail(FETCH_FAILED_MESSAGE)
            return self._state
        except Exception:
            if self._is_current(generation):
                logger.exception("Unexpected error while loading weather")
                self._fail(FETCH_FAILED_MESSAGE)
            return self._state

        if offline:
            logger.warning("No internet connection, skipping weather fetch")
            self._fail(NO_NETWORK_MESSAGE)
            return self._state

        if not self._is_current(generation):
            return self._state

        self._publish(
            BriefingState(
                phase=BriefingPhase.SETTLED,
                reading=reading,
                generation=generation,
                location_is_fallback=coordinates.is_fallback,
            )
        )
        if self.sound is not None:
            self.sound.on_weather_changed(reading.category)
        return self._state

    def _is_current(self, generation: int) -> bool:
        if generation == self._generation:
            return True
        logger.debug(
            "Dropping result of refresh #%d, superseded by #%d", generation, self._generation
        )
        return False

    def _fail(self, message: str) -> None:
        self._publish(
            replace(self._state, phase=BriefingPhase.FAILED, error_message=message)
        )
        if self.sound is not None:
            self.sound.stop()
