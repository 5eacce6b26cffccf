"""Pilot briefing CLI application.

This module provides the command-line interface for the briefing:
a one-shot weather briefing with derived risk signals, the global
ambient-sound switch, and configuration utilities.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from flightbrief.controller import BriefingApp
from flightbrief.location.models import LocationFix, PermissionStatus
from flightbrief.location.providers import StaticLocationProvider
from flightbrief.reachability import ReachabilityMonitor
from flightbrief.settings.application import ApplicationSettings
from flightbrief.settings.preferences import PreferenceStore
from flightbrief.settings.user import UserSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Pilot weather briefing CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
sound_app = typer.Typer(help="Ambient sound switch")
app.add_typer(config_app, name="config")
app.add_typer(sound_app, name="sound")

logger: Final = logging.getLogger(__name__)

CONFIG_OPTION = typer.Option(..., "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")
LAT_OPTION = typer.Option(None, "--lat", help="Override the device latitude")
LON_OPTION = typer.Option(None, "--lon", help="Override the device longitude")
DENIED_OPTION = typer.Option(False, "--denied", help="Simulate denied location access")
OFFLINE_OPTION = typer.Option(False, "--offline", help="Simulate an unreachable network")
HOLD_OPTION = typer.Option(
    False, "--hold", help="Keep the ambient sound playing until Ctrl+C"
)


def _location_provider(
    settings: UserSettings, lat: float | None, lon: float | None, denied: bool
) -> StaticLocationProvider:
    if denied:
        return StaticLocationProvider(None, PermissionStatus.DENIED)
    if lat is not None and lon is not None:
        return StaticLocationProvider(LocationFix(lat, lon))
    return StaticLocationProvider(settings.device_fix)


@app.command()
def brief(
    config: Path = CONFIG_OPTION,
    lat: float | None = LAT_OPTION,
    lon: float | None = LON_OPTION,
    denied: bool = DENIED_OPTION,
    offline: bool = OFFLINE_OPTION,
    hold: bool = HOLD_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Fetch the weather once and print the briefing."""
    if (lat is None) != (lon is None):
        typer.secho("--lat and --lon must be given together", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    try:
        settings = UserSettings.load(config)
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if offline:
        settings = settings.model_copy(update={"reachability_url": None})

    briefing = BriefingApp(
        settings,
        location_provider=_location_provider(settings, lat, lon, denied),
        reachability=ReachabilityMonitor(initial=not offline),
        debug=debug,
    )
    state = briefing.brief_once()
    typer.echo(briefing.render(state))

    try:
        if hold and briefing.sound.state.current_sound_id:
            typer.echo("Playing ambient sound - press Ctrl+C to stop")
            while True:
                time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        briefing.shutdown()

    if state.has_error:
        raise typer.Exit(code=1)


# ───────────────────────── sound sub-commands ────────────────────────────────
def _preferences(config: Path) -> PreferenceStore:
    try:
        settings = UserSettings.load(config)
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    return PreferenceStore(ApplicationSettings(settings).paths.preferences_file)


@sound_app.command("on")
def sound_on(config: Path = CONFIG_OPTION) -> None:
    """Enable ambient sounds; they resume with the next briefing."""
    _preferences(config).set_sounds_enabled(True)
    typer.echo("Ambient sounds enabled")


@sound_app.command("off")
def sound_off(config: Path = CONFIG_OPTION) -> None:
    """Disable ambient sounds."""
    _preferences(config).set_sounds_enabled(False)
    typer.echo("Ambient sounds disabled")


@sound_app.command("status")
def sound_status(config: Path = CONFIG_OPTION) -> None:
    """Print the current ambient sound setting."""
    enabled = _preferences(config).sounds_enabled
    typer.echo(f"Ambient sounds {'enabled' if enabled else 'disabled'}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "api_key": typer.prompt("OpenWeather API key", hide_input=True),
            "fallback_lat": float(typer.prompt("Fallback latitude", default="40.7128")),
            "fallback_lon": float(typer.prompt("Fallback longitude", default="-74.0060")),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(
        yaml.safe_dump(cfg.model_dump(mode="json", exclude_none=True), sort_keys=False),
        encoding="utf-8",
    )
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
