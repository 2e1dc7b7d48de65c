"""Gradle build.gradle support.

Dependencies are found as single-quoted ``'group:artifact:version'`` string
literals anywhere in the file. Only the version inside a matched literal is
ever replaced; every other character of the file is copied as is.
"""
from __future__ import annotations

import re
from typing import List, Sequence

from constants import BuildSystem, Constants
from versioning.models import Coordinate, Declaration, UpgradeDecision
from .base import FormatProcessor

DEPENDENCY_PATTERN = re.compile(r"'([A-Za-z0-9_.\-]+):([A-Za-z0-9_.\-]+):([0-9.]+)'")


def extract(content: str) -> List[Declaration]:
    """Return one Declaration per dependency literal, in file order."""
    return [
        Declaration(
            coordinate=Coordinate(match.group(1), match.group(2)),
            current_version=match.group(3),
            location=match.span(),
        )
        for match in DEPENDENCY_PATTERN.finditer(content)
    ]


def format_literal(coordinate: Coordinate, version: str) -> str:
    return f"'{coordinate.group}:{coordinate.artifact}:{version}'"


def rewrite(content: str, decisions: Sequence[UpgradeDecision]) -> str:
    """Rebuild ``content`` in one pass, swapping in chosen versions.

    ``decisions`` must refer to spans from ``extract(content)``, ordered and
    non-overlapping.
    """
    pieces = []
    cursor = 0
    for decision in decisions:
        start, end = decision.declaration.location
        if start < cursor or end < start:
            raise ValueError(f"Declaration span {start}:{end} overlaps or is out of order")
        pieces.append(content[cursor:start])
        if decision.changed:
            pieces.append(format_literal(decision.declaration.coordinate, decision.chosen_version))
        else:
            pieces.append(content[start:end])
        cursor = end
    pieces.append(content[cursor:])
    return "".join(pieces)


class GradleProcessor(FormatProcessor):
    """Processor for build.gradle files."""

    build_system = BuildSystem.GRADLE

    def file_pattern(self) -> str:
        return Constants.BUILD_GRADLE_FILE

    def load(self, path: str) -> str:
        with open(path, "r", encoding="utf-8", newline="") as fh:
            return fh.read()

    def extract(self, document: str) -> List[Declaration]:
        return extract(document)

    def render(self, document: str, decisions: List[UpgradeDecision]) -> str:
        return rewrite(document, decisions)
