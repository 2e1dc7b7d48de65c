"""Newer-minor-version lookup for a single dependency."""

from __future__ import annotations

import logging
import re
import threading
from typing import Dict, Optional, Protocol, Set, Tuple

from .models import LookupOutcome, OracleResult, is_placeholder
from .ordering import pick_best, sort_key

_CANONICAL_VERSION = re.compile(r"\d+\.\d+\.\d+", re.ASCII)


class VersionSource(Protocol):
    """Anything able to list the published versions of a coordinate."""

    def lookup_versions(self, group: str, artifact: str) -> Set[str]:
        ...


class VersionOracle:
    """Find the best newer version sharing the current major version.

    Only registry versions of the exact shape ``MAJOR.MINOR.PATCH`` are
    eligible, with the same major and a strictly greater minor than the current
    version. Every failure (network, payload, unparseable current version) is
    reported as "no upgrade".
    """

    def __init__(self, source: VersionSource, logger: Optional[logging.Logger] = None):
        self.source = source
        self.logger = logger or logging.getLogger(__name__)
        self._memo: Dict[Tuple[str, str, str], OracleResult] = {}
        self._memo_lock = threading.Lock()

    def find_newer_minor(self, group: str, artifact: str, current_version: str) -> Optional[str]:
        """Return the newer minor version to move to, or None."""
        return self.lookup(group, artifact, current_version).version

    def lookup(self, group: str, artifact: str, current_version: str) -> OracleResult:
        """Like find_newer_minor but keeps "up to date" apart from "failed"."""
        if is_placeholder(current_version):
            return OracleResult(LookupOutcome.SKIPPED, error="placeholder version")
        parts = current_version.split(".")
        if len(parts) < 2:
            return OracleResult(LookupOutcome.SKIPPED, error="version has fewer than two parts")

        key = (group, artifact, current_version)
        with self._memo_lock:
            cached = self._memo.get(key)
        if cached is not None:
            return cached

        try:
            current_major = int(parts[0])
            current_minor = int(parts[1])
            published = self.source.lookup_versions(group, artifact)
            newer = [
                v for v in published
                if isinstance(v, str) and _CANONICAL_VERSION.fullmatch(v)
                and int(v.split(".")[0]) == current_major
                and int(v.split(".")[1]) > current_minor
            ]
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self.logger.warning(
                "Error fetching version for %s:%s -> %s", group, artifact, exc
            )
            return OracleResult(LookupOutcome.LOOKUP_FAILED, error=str(exc))

        if newer:
            self.logger.info(
                "Found newer minor versions: %s for %s:%s",
                sorted(newer, key=sort_key), group, artifact,
            )
        best = pick_best(newer)
        result = (
            OracleResult(LookupOutcome.UPGRADE, version=best)
            if best is not None
            else OracleResult(LookupOutcome.UP_TO_DATE)
        )
        with self._memo_lock:
            self._memo[key] = result
        return result

    def clear(self) -> None:
        """Forget memoized lookups."""
        with self._memo_lock:
            self._memo.clear()
