"""Unit tests for app version lookup."""

from __future__ import annotations

from importlib import metadata

import pytest
from _pytest.monkeypatch import MonkeyPatch

from prefbackup.environment import DistributionVersionLookup, StaticVersionLookup


@pytest.mark.unit
def test_distribution_lookup_returns_installed_version() -> None:
    """Installed distribution resolves to its metadata version."""
    lookup = DistributionVersionLookup("pytest")

    assert lookup.lookup() == metadata.version("pytest")


@pytest.mark.unit
def test_distribution_lookup_missing_distribution_is_none() -> None:
    """Unknown distribution yields None instead of raising."""
    lookup = DistributionVersionLookup("definitely-not-installed-dist-xyz")

    assert lookup.lookup() is None


@pytest.mark.unit
def test_distribution_lookup_empty_version_is_none(monkeypatch: MonkeyPatch) -> None:
    """Blank metadata version is treated as unavailable."""
    monkeypatch.setattr(metadata, "version", lambda name: "")

    assert DistributionVersionLookup("anything").lookup() is None


@pytest.mark.unit
def test_static_lookup_returns_configured_value() -> None:
    """Static lookup returns its fixed value."""
    assert StaticVersionLookup("2.1").lookup() == "2.1"
    assert StaticVersionLookup(None).lookup() is None
