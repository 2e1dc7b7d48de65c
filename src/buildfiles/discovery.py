"""Locate build files under a project directory."""
from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

from constants import Constants

logger = logging.getLogger(__name__)


def find_files(
    file_name: str,
    root: str = ".",
    exclude_dirs: Optional[Iterable[str]] = None,
    log: Optional[logging.Logger] = None,
) -> List[str]:
    """Return every path under ``root`` whose final segment equals ``file_name``.

    Directories named in ``exclude_dirs`` (default Constants.EXCLUDE_DIRS) are
    not descended into. Traversal errors are logged and never raised; an
    unreadable tree yields an empty list.
    """
    log = log or logger
    excluded = set(Constants.EXCLUDE_DIRS if exclude_dirs is None else exclude_dirs)

    def _on_error(exc: OSError) -> None:
        log.warning("Error while searching for %s files: %s", file_name, exc)

    if not os.path.isdir(root):
        log.error("Error while searching for %s files: %s is not a directory", file_name, root)
        return []

    matches: List[str] = []
    try:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            dirnames[:] = sorted(d for d in dirnames if d not in excluded)
            if file_name in filenames:
                matches.append(os.path.join(dirpath, file_name))
    except OSError as exc:
        log.error("Error while searching for %s files: %s", file_name, exc)
        return []
    return sorted(matches)
