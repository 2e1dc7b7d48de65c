"""Data models for dependency declarations and upgrade decisions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


PLACEHOLDER_MARKER = "${"

# Integer decomposition of a dotted version string, used for ordering only.
VersionTuple = Tuple[int, ...]


class LookupOutcome(Enum):
    """Why a declaration did or did not get a new version."""
    UPGRADE = "upgrade"
    UP_TO_DATE = "up_to_date"
    LOOKUP_FAILED = "lookup_failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Coordinate:
    """Identity of a dependency independent of its version."""
    group: str
    artifact: str

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}"


@dataclass
class Declaration:
    """One occurrence of a coordinate and version inside a build file.

    ``location`` is format specific: a ``(start, end)`` span for text formats or
    the ``<version>`` element for tree formats.
    """
    coordinate: Coordinate
    current_version: str
    location: Any

    @property
    def is_placeholder(self) -> bool:
        """True when the version is an unresolved property reference."""
        return is_placeholder(self.current_version)


@dataclass
class OracleResult:
    """Three-valued lookup outcome; ``version`` is set only for UPGRADE."""
    outcome: LookupOutcome
    version: Optional[str] = None
    error: Optional[str] = None


@dataclass
class UpgradeDecision:
    """Decision for one declaration; ``chosen_version`` is None when unchanged."""
    declaration: Declaration
    chosen_version: Optional[str]
    outcome: LookupOutcome = LookupOutcome.UP_TO_DATE

    @property
    def changed(self) -> bool:
        return (
            self.chosen_version is not None
            and self.chosen_version != self.declaration.current_version
        )


@dataclass
class FileResult:
    """Outcome of processing one build file."""
    path: str
    build_system: str
    decisions: List[UpgradeDecision] = field(default_factory=list)
    output_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def upgrades(self) -> List[UpgradeDecision]:
        return [d for d in self.decisions if d.changed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "buildSystem": self.build_system,
            "outputPath": self.output_path,
            "error": self.error,
            "decisions": [
                {
                    "coordinate": str(d.declaration.coordinate),
                    "currentVersion": d.declaration.current_version,
                    "chosenVersion": d.chosen_version,
                    "outcome": d.outcome.value,
                }
                for d in self.decisions
            ],
        }


@dataclass
class RunSummary:
    """Aggregate of every file processed in one run."""
    files: List[FileResult] = field(default_factory=list)

    def add(self, result: FileResult) -> None:
        self.files.append(result)

    def _count(self, outcome: LookupOutcome) -> int:
        return sum(1 for f in self.files for d in f.decisions if d.outcome == outcome)

    @property
    def files_found(self) -> int:
        return len(self.files)

    @property
    def files_written(self) -> int:
        return sum(1 for f in self.files if f.output_path)

    @property
    def files_failed(self) -> int:
        return sum(1 for f in self.files if f.error)

    @property
    def upgrades(self) -> int:
        return sum(len(f.upgrades) for f in self.files)

    @property
    def up_to_date(self) -> int:
        return self._count(LookupOutcome.UP_TO_DATE)

    @property
    def lookup_failures(self) -> int:
        return self._count(LookupOutcome.LOOKUP_FAILED)

    @property
    def skipped(self) -> int:
        return self._count(LookupOutcome.SKIPPED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filesFound": self.files_found,
            "filesWritten": self.files_written,
            "filesFailed": self.files_failed,
            "upgrades": self.upgrades,
            "upToDate": self.up_to_date,
            "lookupFailures": self.lookup_failures,
            "skipped": self.skipped,
            "files": [f.to_dict() for f in self.files],
        }


def is_placeholder(version: Optional[str]) -> bool:
    """Return True if ``version`` contains an unresolved ``${...}`` reference."""
    return bool(version) and PLACEHOLDER_MARKER in version
