"""Ordering of dotted version strings.

Versions are compared as integer tuples rather than as strict semantic
versions: ``2.14.0 < 2.14.0.1 < 2.15``. Segments that are not plain
non-negative integers become ``-1`` so one odd segment does not discard the
whole string.
"""

import functools
from typing import Iterable, Optional

from .models import VersionTuple


def parse_tuple(version: str) -> VersionTuple:
    """Split ``version`` on dots, mapping non-numeric segments to -1."""
    parts = []
    for segment in version.split("."):
        parts.append(int(segment) if segment.isdigit() and segment.isascii() else -1)
    return tuple(parts)


def compare(a: VersionTuple, b: VersionTuple) -> int:
    """Return -1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``.

    Shared positions are compared left to right; when they are all equal the
    longer tuple wins.
    """
    for left, right in zip(a, b):
        if left != right:
            return -1 if left < right else 1
    if len(a) == len(b):
        return 0
    return -1 if len(a) < len(b) else 1


def _compare_strings(a: str, b: str) -> int:
    return compare(parse_tuple(a), parse_tuple(b))


sort_key = functools.cmp_to_key(_compare_strings)


def pick_best(candidates: Iterable[str]) -> Optional[str]:
    """Return the greatest version in ``candidates`` or None when empty."""
    pool = list(candidates)
    if not pool:
        return None
    return max(pool, key=sort_key)
