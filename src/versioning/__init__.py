"""Version ordering and newer-minor lookup."""

from .models import (
    Coordinate,
    Declaration,
    FileResult,
    LookupOutcome,
    OracleResult,
    RunSummary,
    UpgradeDecision,
    is_placeholder,
)
from .ordering import compare, parse_tuple, pick_best
from .oracle import VersionOracle

__all__ = [
    "Coordinate",
    "Declaration",
    "FileResult",
    "LookupOutcome",
    "OracleResult",
    "RunSummary",
    "UpgradeDecision",
    "is_placeholder",
    "compare",
    "parse_tuple",
    "pick_best",
    "VersionOracle",
]
