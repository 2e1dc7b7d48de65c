"""Common contract for build file processors.

A processor owns one build file format. It knows the file name to look for,
how to load a file, how to find the dependency declarations in it and how to
render the updated file. Looking up versions, deciding, logging and writing
the ``.updated`` sibling are shared here so every format behaves the same.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from constants import BuildSystem, Constants
from versioning.models import Declaration, FileResult, LookupOutcome, UpgradeDecision
from versioning.oracle import VersionOracle
from .discovery import find_files


class FormatProcessor(ABC):
    """Extract, decide, rewrite and persist for one build file format."""

    build_system: BuildSystem

    def __init__(
        self,
        oracle: VersionOracle,
        *,
        root: str = ".",
        suffix: Optional[str] = None,
        write_unchanged: Optional[bool] = None,
        exclude_dirs: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.oracle = oracle
        self.root = root
        self.suffix = suffix or Constants.UPDATED_SUFFIX
        self.write_unchanged = (
            Constants.WRITE_UNCHANGED if write_unchanged is None else write_unchanged
        )
        self.exclude_dirs = list(exclude_dirs) if exclude_dirs is not None else None
        self.logger = logger or logging.getLogger(type(self).__module__)

    @property
    def name(self) -> str:
        """Display name, e.g. "Gradle"."""
        return self.build_system.name.title()

    @abstractmethod
    def file_pattern(self) -> str:
        """Exact file name this processor handles."""

    @abstractmethod
    def load(self, path: str) -> Any:
        """Read ``path`` into the format's working document."""

    @abstractmethod
    def extract(self, document: Any) -> List[Declaration]:
        """Return the eligible declarations found in ``document``."""

    @abstractmethod
    def render(self, document: Any, decisions: List[UpgradeDecision]) -> str:
        """Apply ``decisions`` and return the full new file content."""

    def find_files(self) -> List[str]:
        files = find_files(self.file_pattern(), self.root, self.exclude_dirs, log=self.logger)
        self.logger.info("Found %d %s files.", len(files), self.file_pattern())
        return files

    def output_path_for(self, path: str) -> str:
        return f"{path}{self.suffix}"

    def decide(self, declaration: Declaration) -> UpgradeDecision:
        """Ask the oracle about one declaration and log the outcome."""
        coordinate = declaration.coordinate
        current = declaration.current_version
        if declaration.is_placeholder:
            self.logger.info("Skipping %s: version %s is a placeholder.", coordinate, current)
            return UpgradeDecision(declaration, None, LookupOutcome.SKIPPED)

        result = self.oracle.lookup(coordinate.group, coordinate.artifact, current)
        if result.outcome is LookupOutcome.UPGRADE and result.version != current:
            self.logger.info("Updating %s from %s to %s", coordinate, current, result.version)
            return UpgradeDecision(declaration, result.version, LookupOutcome.UPGRADE)

        if result.outcome is LookupOutcome.LOOKUP_FAILED:
            self.logger.error("Skipping %s: version lookup failed (%s).", coordinate, result.error)
        elif result.outcome is LookupOutcome.SKIPPED:
            self.logger.info("Skipping %s: %s.", coordinate, result.error)
        else:
            self.logger.info(
                "Skipping %s as no newer minor version found or already up-to-date.", coordinate
            )
        outcome = LookupOutcome.UP_TO_DATE if result.outcome is LookupOutcome.UPGRADE else result.outcome
        return UpgradeDecision(declaration, None, outcome)

    def process(self, path: str) -> FileResult:
        """Update one build file; errors are logged and recorded, never raised."""
        result = FileResult(path=path, build_system=self.build_system.value)
        try:
            document = self.load(path)
            result.decisions = [self.decide(d) for d in self.extract(document)]
            if not result.upgrades and not self.write_unchanged:
                self.logger.info("No updates needed for %s", path)
                return result
            output_path = self.output_path_for(path)
            self.persist(output_path, self.render(document, result.decisions))
            result.output_path = output_path
            self.logger.info("Updated file %s and saved as %s", path, output_path)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self.logger.error("Error updating file %s: %s", path, exc)
            result.error = str(exc)
        return result

    def persist(self, output_path: str, content: str) -> None:
        with open(output_path, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
