"""Location types shared by the resolver, providers and weather client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PermissionStatus(Enum):
    """Location permission as reported by the platform provider."""

    UNDETERMINED = "undetermined"
    DENIED = "denied"
    RESTRICTED = "restricted"
    AUTHORIZED = "authorized"

    @property
    def is_blocked(self) -> bool:
        """True when the user or policy refused location access."""
        return self in (PermissionStatus.DENIED, PermissionStatus.RESTRICTED)


class LocationErrorKind(Enum):
    """Most recent error reported by the location provider."""

    LOCATION_UNKNOWN = "location_unknown"  # temporary, provider keeps trying
    DENIED = "denied"
    OTHER = "other"


@dataclass(frozen=True)
class LocationFix:
    """A single geolocation reading."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Coordinates:
    """Coordinates chosen for a weather query."""

    latitude: float
    longitude: float
    is_fallback: bool = False

    def as_query(self) -> tuple[str, str]:
        """Latitude/longitude formatted with four decimals for the request."""
        return f"{self.latitude:.4f}", f"{self.longitude:.4f}"


@dataclass(frozen=True)
class LocationSnapshot:
    """Everything the provider currently knows, read at trigger time."""

    permission: PermissionStatus = PermissionStatus.UNDETERMINED
    fix: LocationFix | None = None
    error: LocationErrorKind | None = None
