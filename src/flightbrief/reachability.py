"""Network reachability providers consumed at trigger time."""

from __future__ import annotations

import logging
import threading
import urllib.parse
from typing import Final, Protocol, runtime_checkable

import requests
from requests.exceptions import RequestException

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class ReachabilityProvider(Protocol):
    """Protocol for determining whether the network path is satisfied."""

    def is_reachable(self) -> bool:
        """Return the most recent reachability value."""
        ...


class ReachabilityMonitor:
    """Holds the latest path-satisfied value pushed by the platform monitor.

    Updates may arrive from any thread; readers always see the most
    recent value.
    """

    def __init__(self, initial: bool = True) -> None:
        self._lock = threading.Lock()
        self._reachable = initial

    def is_reachable(self) -> bool:
        with self._lock:
            return self._reachable

    def update(self, satisfied: bool) -> None:
        """Record a new path status."""
        with self._lock:
            changed = self._reachable != satisfied
            self._reachable = satisfied
        if changed:
            logger.info("Network connection %s", "available" if satisfied else "unavailable")


class AlwaysReachable:
    """Provider that always reports a reachable network."""

    def is_reachable(self) -> bool:
        return True


class HttpReachabilityProbe:
    """Checks an HTTP endpoint and pushes the result into a monitor.

    Probing blocks, so it runs before a trigger rather than inside one.
    """

    def __init__(self, url: str, timeout: float = 3.0) -> None:
        """Initialize with URL to probe.

        Args:
            url: URL answered with a HEAD request
            timeout: Timeout for HTTP request in seconds
        """
        parsed = urllib.parse.urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {url}")

        self.url = url
        self.timeout = timeout

    def check(self) -> bool:
        """True if the endpoint answered at all, whatever the status."""
        try:
            requests.head(self.url, timeout=self.timeout)
        except RequestException as exc:
            logger.debug("reachability: probe failed (%s)", exc)
            return False
        return True

    def refresh(self, monitor: ReachabilityMonitor) -> bool:
        """Probe once and record the result in ``monitor``."""
        reachable = self.check()
        monitor.update(reachable)
        return reachable


def create_reachability_probe(url: str | None = "") -> HttpReachabilityProbe | None:
    """Create a probe based on configuration.

    Args:
        url: URL to probe (empty means no probing, the network is assumed up)

    Returns:
        An HttpReachabilityProbe, or None when no URL is configured
    """
    if not url:
        return None
    return HttpReachabilityProbe(url)
