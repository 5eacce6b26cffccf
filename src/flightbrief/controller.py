"""Core controller wiring the briefing components together."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Final

from flightbrief.audio.coordinator import AmbientSoundCoordinator
from flightbrief.audio.player import ProcessAudioOutput
from flightbrief.audio.protocols import AudioOutput, SoundPreference
from flightbrief.briefing.orchestrator import BriefingOrchestrator, BriefingState
from flightbrief.briefing.render import BriefingContextBuilder, TemplateRenderer
from flightbrief.location.providers import LocationProvider, StaticLocationProvider
from flightbrief.location.resolver import LocationResolver
from flightbrief.reachability import (
    HttpReachabilityProbe,
    ReachabilityMonitor,
    create_reachability_probe,
)
from flightbrief.risk.classifier import RiskClassifier
from flightbrief.settings.application import ApplicationSettings
from flightbrief.settings.preferences import PreferenceStore
from flightbrief.settings.user import UserSettings
from flightbrief.weather.api import AsyncWeatherClient, WeatherAPI, WeatherClient

TEST_CONFIG_YAML = """\
api_key: "test_api_key"
lat: 55.7558
lon: 37.6173
request_timeout: 5
"""

logger: Final = logging.getLogger(__name__)


class BriefingApp:
    """Main controller for the briefing application.

    Owns one instance of every collaborator for an app session:

    - configuration and the persisted preference store
    - the audio channel and the sound coordinator that owns it
    - location, reachability and weather providers
    - the briefing orchestrator and its renderer

    Every collaborator can be injected, which is how tests and the CLI
    swap in simulated location or network conditions.
    """

    def __init__(
        self,
        settings: UserSettings,
        weather_client: WeatherClient | None = None,
        location_provider: LocationProvider | None = None,
        reachability: ReachabilityMonitor | None = None,
        probe: HttpReachabilityProbe | None = None,
        audio_output: AudioOutput | None = None,
        preferences: SoundPreference | None = None,
        renderer: TemplateRenderer | None = None,
        debug: bool = False,
    ) -> None:
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        self.config = settings
        self.settings = ApplicationSettings(settings)
        paths = self.settings.paths

        self.preferences = preferences or PreferenceStore(paths.preferences_file)
        self.sound = AmbientSoundCoordinator(
            audio_output or ProcessAudioOutput(paths.sounds_dir, settings.player_command),
            preferences=self.preferences,
        )

        self.reachability = reachability or ReachabilityMonitor()
        self.probe = probe if probe is not None else create_reachability_probe(
            settings.reachability_url
        )

        self.orchestrator = BriefingOrchestrator(
            client=weather_client or AsyncWeatherClient(WeatherAPI(settings)),
            location_provider=location_provider or StaticLocationProvider(settings.device_fix),
            reachability=self.reachability,
            resolver=LocationResolver(settings.fallback),
            sound=self.sound,
        )
        self.classifier = RiskClassifier()
        self.context_builder = BriefingContextBuilder(self.classifier)
        self.renderer = renderer or TemplateRenderer(paths.templates_dir, paths.briefing_template)

    @classmethod
    def from_config(cls, config_path: Path | None = None, **kwargs) -> BriefingApp:
        """Load settings from YAML and build the app."""
        return cls(UserSettings.load(config_path), **kwargs)

    def render(self, state: BriefingState | None = None) -> str:
        """Render a state (default: the current one) as text."""
        state = state or self.orchestrator.state
        context = self.context_builder.build(state, self.classifier.assess(state.reading))
        return self.renderer.render_briefing(**context)

    def brief_once(self) -> BriefingState:
        """Probe the network if configured, then run one activation."""
        if self.probe is not None:
            self.probe.refresh(self.reachability)
        return asyncio.run(self.orchestrator.activate())

    def shutdown(self) -> None:
        """Release the audio channel."""
        self.sound.stop()
