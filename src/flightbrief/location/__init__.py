"""Location package - provider interface and the fallback resolver."""

from .models import (
    Coordinates,
    LocationErrorKind,
    LocationFix,
    LocationSnapshot,
    PermissionStatus,
)
from .providers import LocationProvider, MutableLocationProvider, StaticLocationProvider
from .resolver import DEFAULT_FALLBACK, LocationResolver

__all__ = [
    "DEFAULT_FALLBACK",
    "Coordinates",
    "LocationErrorKind",
    "LocationFix",
    "LocationProvider",
    "LocationResolver",
    "LocationSnapshot",
    "MutableLocationProvider",
    "PermissionStatus",
    "StaticLocationProvider",
]
