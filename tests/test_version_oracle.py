"""Tests for the newer-minor version oracle."""

from common.errors import RegistryError
from versioning.models import LookupOutcome
from versioning.oracle import VersionOracle


def test_filters_major_and_shape(fake_source_factory):
    """Other majors and non-canonical registry entries are ignored."""
    source = fake_source_factory({"g:a": {"2.1.0", "2.2.0", "3.0.0", "bad-version"}})
    oracle = VersionOracle(source)

    assert oracle.find_newer_minor("g", "a", "2.1.0") == "2.2.0"


def test_requires_strictly_greater_minor(fake_source_factory):
    source = fake_source_factory({"g:a": {"2.1.0", "2.1.5", "2.0.9"}})
    oracle = VersionOracle(source)

    result = oracle.lookup("g", "a", "2.1.0")

    assert result.outcome is LookupOutcome.UP_TO_DATE
    assert result.version is None
    assert oracle.find_newer_minor("g", "a", "2.1.0") is None


def test_picks_highest_eligible(fake_source_factory):
    source = fake_source_factory({"g:a": {"1.3.0", "1.10.2", "1.9.9", "1.11.0-RC1", "1.12"}})
    oracle = VersionOracle(source)

    assert oracle.find_newer_minor("g", "a", "1.2.7") == "1.10.2"


def test_single_part_version_skips_lookup(fake_source_factory):
    source = fake_source_factory({"g:a": {"2.0.0"}})
    oracle = VersionOracle(source)

    assert oracle.find_newer_minor("g", "a", "1") is None
    assert oracle.lookup("g", "a", "1").outcome is LookupOutcome.SKIPPED
    assert source.calls == []


def test_placeholder_skips_lookup(fake_source_factory):
    source = fake_source_factory({"g:a": {"2.0.0"}})
    oracle = VersionOracle(source)

    assert oracle.find_newer_minor("g", "a", "${some.version}") is None
    assert source.calls == []


def test_lookup_failure_becomes_none(fake_source_factory):
    source = fake_source_factory(error=RegistryError("boom"))
    oracle = VersionOracle(source)

    result = oracle.lookup("g", "a", "1.0.0")

    assert result.outcome is LookupOutcome.LOOKUP_FAILED
    assert "boom" in result.error
    assert oracle.find_newer_minor("g", "a", "1.0.0") is None


def test_unparseable_current_version_is_a_failure(fake_source_factory):
    source = fake_source_factory({"g:a": {"1.2.0"}})
    oracle = VersionOracle(source)

    assert oracle.lookup("g", "a", "x.1.0").outcome is LookupOutcome.LOOKUP_FAILED
    assert source.calls == []


def test_memoizes_successful_lookups(fake_source_factory):
    source = fake_source_factory({"g:a": {"1.2.0"}})
    oracle = VersionOracle(source)

    assert oracle.find_newer_minor("g", "a", "1.0.0") == "1.2.0"
    assert oracle.find_newer_minor("g", "a", "1.0.0") == "1.2.0"
    assert source.calls == [("g", "a")]

    oracle.clear()
    oracle.find_newer_minor("g", "a", "1.0.0")
    assert len(source.calls) == 2


def test_failures_are_not_memoized(fake_source_factory):
    source = fake_source_factory(error=RegistryError("down"))
    oracle = VersionOracle(source)

    oracle.find_newer_minor("g", "a", "1.0.0")
    oracle.find_newer_minor("g", "a", "1.0.0")

    assert len(source.calls) == 2
