"""Producing application version lookup."""

from __future__ import annotations

from importlib import metadata
from typing import Protocol


class AppVersionLookup(Protocol):
    """Best-effort lookup of the running application's version."""

    def lookup(self) -> str | None:
        """Return version string, or None when it cannot be determined."""
        ...


class DistributionVersionLookup:
    """Resolve version from installed distribution metadata."""

    def __init__(self, distribution: str) -> None:
        """Create lookup for one distribution name.

        Args:
            distribution: Installed distribution name, e.g. ``prefbackup``.
        """
        self._distribution = distribution

    def lookup(self) -> str | None:
        """Return installed distribution version, or None if not installed."""
        try:
            version = metadata.version(self._distribution)
        except metadata.PackageNotFoundError:
            return None
        return version or None


class StaticVersionLookup:
    """Fixed version lookup, e.g. for embedding applications and tests."""

    def __init__(self, version: str | None) -> None:
        """Create lookup returning a fixed value.

        Args:
            version: Version to report, or ``None`` for unavailable.
        """
        self._version = version

    def lookup(self) -> str | None:
        """Return configured version."""
        return self._version
