"""CLI configuration: config file loading and command-line overrides.

Kept apart from depbump.py so the entrypoint stays slim. Precedence is CLI
flags, then the config file, then the defaults on Constants.
"""

from __future__ import annotations

import logging

import yaml

from constants import Constants, _load_yaml_config, apply_config
from common.errors import ConfigError

logger = logging.getLogger(__name__)


def load_config(args) -> None:
    """Load the YAML config named by ``--config`` or found in a default location.

    Raises:
        ConfigError: the explicitly requested file is missing or invalid.
    """
    path = getattr(args, "CONFIG", None)
    try:
        cfg = _load_yaml_config(path)
        apply_config(cfg)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as exc:
        if path:
            raise ConfigError(f"Couldn't load config {path}: {exc}") from exc
        logger.warning("Ignoring invalid default config: %s", exc)


def apply_overrides(args) -> None:
    """Apply CLI overrides for registry and output tunables."""
    if getattr(args, "TIMEOUT", None) is not None:
        Constants.REQUEST_TIMEOUT = float(args.TIMEOUT)
    if getattr(args, "WORKERS", None) is not None:
        Constants.MAX_WORKERS = max(1, int(args.WORKERS))
    if getattr(args, "SUFFIX", None):
        Constants.UPDATED_SUFFIX = args.SUFFIX
    if getattr(args, "WRITE_UNCHANGED", False):
        Constants.WRITE_UNCHANGED = True
