"""Shared fixtures for depbump tests."""

import pytest

from constants import Constants


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo any Constants tweaks made by config loading or CLI overrides."""
    saved = {k: v for k, v in vars(Constants).items() if k.isupper()}
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)


class FakeSource:
    """In-memory stand-in for the registry client."""

    def __init__(self, versions=None, error=None):
        self.versions = versions or {}
        self.error = error
        self.calls = []

    def lookup_versions(self, group, artifact):
        self.calls.append((group, artifact))
        if self.error is not None:
            raise self.error
        return set(self.versions.get(f"{group}:{artifact}", ()))


@pytest.fixture
def fake_source_factory():
    """Build FakeSource instances inside tests."""
    return FakeSource
