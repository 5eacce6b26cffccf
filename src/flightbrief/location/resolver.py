"""Decide which coordinates a weather fetch should use."""

from __future__ import annotations

import logging
from typing import Final

from flightbrief.location.models import (
    Coordinates,
    LocationErrorKind,
    LocationFix,
    LocationSnapshot,
    PermissionStatus,
)

logger: Final = logging.getLogger(__name__)

COORDINATE_PRECISION: Final = 4

# New York City, used whenever no usable fix exists
DEFAULT_FALLBACK: Final = Coordinates(40.7128, -74.0060, is_fallback=True)


class LocationResolver:
    """Pure decision function from provider state to query coordinates.

    The resolver never performs I/O and never raises: every combination of
    permission, fix and error yields a usable coordinate pair, so a briefing
    is never blocked waiting for the first fix.
    """

    def __init__(self, fallback: Coordinates = DEFAULT_FALLBACK) -> None:
        self.fallback = Coordinates(fallback.latitude, fallback.longitude, is_fallback=True)

    def resolve(
        self,
        permission: PermissionStatus,
        last_fix: LocationFix | None,
        last_error: LocationErrorKind | None = None,
    ) -> Coordinates:
        """Return the coordinates to query.

        Args:
            permission: Current permission status
            last_fix: Most recent location fix, if any
            last_error: Most recent provider error, if any

        Returns:
            The fix rounded to four decimals, or the fallback location
        """
        if permission.is_blocked:
            logger.info("Location access %s, using fallback location", permission.value)
            return self.fallback

        if last_fix is not None:
            return Coordinates(
                round(last_fix.latitude, COORDINATE_PRECISION),
                round(last_fix.longitude, COORDINATE_PRECISION),
            )

        if last_error is LocationErrorKind.LOCATION_UNKNOWN:
            logger.info("Location temporarily unknown, using fallback location")
        else:
            logger.info(
                "No location fix yet (permission %s), using fallback location",
                permission.value,
            )
        return self.fallback

    def resolve_snapshot(self, snapshot: LocationSnapshot) -> Coordinates:
        """Resolve directly from a provider snapshot."""
        return self.resolve(snapshot.permission, snapshot.fix, snapshot.error)
