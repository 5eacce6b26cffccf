"""Location provider interface consumed by the briefing orchestrator."""

from __future__ import annotations

import logging
import threading
from typing import Final, Protocol, runtime_checkable

from flightbrief.location.models import (
    LocationErrorKind,
    LocationFix,
    LocationSnapshot,
    PermissionStatus,
)

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class LocationProvider(Protocol):
    """Protocol for anything that can report the current location state."""

    def snapshot(self) -> LocationSnapshot:
        """Return permission, most recent fix and most recent error."""
        ...


class StaticLocationProvider:
    """Provider with a fixed state, typically built from configuration."""

    def __init__(
        self,
        fix: LocationFix | None = None,
        permission: PermissionStatus | None = None,
    ) -> None:
        if permission is None:
            permission = PermissionStatus.AUTHORIZED if fix else PermissionStatus.UNDETERMINED
        self._snapshot = LocationSnapshot(permission=permission, fix=fix)

    def snapshot(self) -> LocationSnapshot:
        return self._snapshot


class MutableLocationProvider:
    """Provider the host pushes platform callbacks into.

    Mirrors the platform delegate: a new fix clears the last error, a
    failure keeps the last fix.
    """

    def __init__(self, permission: PermissionStatus = PermissionStatus.UNDETERMINED) -> None:
        self._lock = threading.Lock()
        self._snapshot = LocationSnapshot(permission=permission)

    def snapshot(self) -> LocationSnapshot:
        with self._lock:
            return self._snapshot

    def update_permission(self, permission: PermissionStatus) -> None:
        """Record a permission change."""
        with self._lock:
            error = LocationErrorKind.DENIED if permission.is_blocked else self._snapshot.error
            self._snapshot = LocationSnapshot(permission, self._snapshot.fix, error)
        logger.debug("Location permission changed to %s", permission.value)

    def update_fix(self, fix: LocationFix) -> None:
        """Record a new fix and clear the last error."""
        with self._lock:
            self._snapshot = LocationSnapshot(self._snapshot.permission, fix, None)
        logger.debug("New location fix: %.4f, %.4f", fix.latitude, fix.longitude)

    def report_error(self, error: LocationErrorKind) -> None:
        """Record a provider failure."""
        with self._lock:
            self._snapshot = LocationSnapshot(self._snapshot.permission, self._snapshot.fix, error)
        logger.debug("Location provider error: %s", error.value)
