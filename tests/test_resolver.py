import pytest

from flightbrief.location import (
    DEFAULT_FALLBACK,
    Coordinates,
    LocationErrorKind,
    LocationFix,
    LocationResolver,
    LocationSnapshot,
    MutableLocationProvider,
    PermissionStatus,
    StaticLocationProvider,
)


@pytest.fixture
def resolver() -> LocationResolver:
    return LocationResolver()


@pytest.mark.parametrize("permission", [PermissionStatus.DENIED, PermissionStatus.RESTRICTED])
def test_blocked_permission_uses_fallback(
    resolver: LocationResolver, permission: PermissionStatus
) -> None:
    coords = resolver.resolve(permission, LocationFix(51.5074, -0.1278))
    assert (coords.latitude, coords.longitude) == (40.7128, -74.0060)
    assert coords.is_fallback is True


def test_fix_is_rounded_to_four_decimals(resolver: LocationResolver) -> None:
    coords = resolver.resolve(PermissionStatus.AUTHORIZED, LocationFix(55.755826, 37.617299))
    assert coords == Coordinates(55.7558, 37.6173)
    assert coords.is_fallback is False


@pytest.mark.parametrize(
    "error", [LocationErrorKind.LOCATION_UNKNOWN, LocationErrorKind.OTHER, None]
)
def test_missing_fix_uses_fallback(
    resolver: LocationResolver, error: LocationErrorKind | None
) -> None:
    assert resolver.resolve(PermissionStatus.AUTHORIZED, None, error) == DEFAULT_FALLBACK


def test_undetermined_with_fix_uses_fix(resolver: LocationResolver) -> None:
    coords = resolver.resolve(PermissionStatus.UNDETERMINED, LocationFix(1.23456, 2.34567))
    assert coords == Coordinates(1.2346, 2.3457)


def test_custom_fallback_is_marked() -> None:
    resolver = LocationResolver(Coordinates(48.8566, 2.3522))
    coords = resolver.resolve(PermissionStatus.DENIED, None)
    assert coords == Coordinates(48.8566, 2.3522, is_fallback=True)


def test_resolve_snapshot(resolver: LocationResolver) -> None:
    snapshot = LocationSnapshot(PermissionStatus.AUTHORIZED, LocationFix(10.0, 20.0))
    assert resolver.resolve_snapshot(snapshot) == Coordinates(10.0, 20.0)


def test_static_provider_permission_follows_fix() -> None:
    assert StaticLocationProvider(LocationFix(1.0, 2.0)).snapshot().permission is (
        PermissionStatus.AUTHORIZED
    )
    assert StaticLocationProvider().snapshot().permission is PermissionStatus.UNDETERMINED


def test_mutable_provider_tracks_callbacks() -> None:
    provider = MutableLocationProvider(PermissionStatus.AUTHORIZED)
    provider.report_error(LocationErrorKind.LOCATION_UNKNOWN)
    assert provider.snapshot().error is LocationErrorKind.LOCATION_UNKNOWN

    provider.update_fix(LocationFix(3.0, 4.0))
    snapshot = provider.snapshot()
    assert snapshot.fix == LocationFix(3.0, 4.0)
    assert snapshot.error is None

    provider.update_permission(PermissionStatus.DENIED)
    snapshot = provider.snapshot()
    assert snapshot.permission is PermissionStatus.DENIED
    assert snapshot.error is LocationErrorKind.DENIED
    assert snapshot.fix == LocationFix(3.0, 4.0)
