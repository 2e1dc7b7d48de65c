"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2


class BuildSystem(Enum):
    """Build systems supported by the program.

    Args:
        Enum (string): Build systems supported by the program.
    """

    GRADLE = "gradle"
    MAVEN = "maven"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_MAVEN = "https://search.maven.org/solrsearch/select"
    REGISTRY_ROWS = 100
    # Solr core for the search API; "" queries artifacts, "gav" lists every version.
    REGISTRY_CORE = ""
    SUPPORTED_BUILD_SYSTEMS = [
        BuildSystem.GRADLE.value,
        BuildSystem.MAVEN.value,
    ]
    BUILD_GRADLE_FILE = "build.gradle"
    POM_XML_FILE = "pom.xml"
    UPDATED_SUFFIX = ".updated"
    WRITE_UNCHANGED = False
    EXCLUDE_DIRS = [".git", "node_modules", "build", "target", ".gradle"]
    MAX_WORKERS = 1
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 10  # Timeout in seconds for every registry request

    ENV_LOG_LEVEL = "DEPBUMP_LOG_LEVEL"
    ENV_CONFIG = "DEPBUMP_CONFIG"
    CONFIG_FILENAMES = ["depbump.yml", "depbump.yaml"]


logger = logging.getLogger(__name__)


def _default_config_paths():
    """Candidate config locations in precedence order."""
    paths = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        paths.append(env_path)
    paths.extend(os.path.join(os.getcwd(), name) for name in Constants.CONFIG_FILENAMES)
    home_dir = os.path.expanduser("~")
    paths.extend(
        os.path.join(home_dir, ".config", "depbump", name) for name in Constants.CONFIG_FILENAMES
    )
    return paths


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a YAML config file.

    With an explicit path the file must exist and parse; errors propagate to the
    caller. Without one, the first readable default location wins and problems
    are logged and ignored.
    """
    if path:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    for candidate in _default_config_paths():
        if not os.path.isfile(candidate):
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", candidate, exc)
            continue
        if isinstance(data, dict):
            logger.debug("Loaded config from %s", candidate)
            return data
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply a parsed config mapping onto Constants."""
    registry = cfg.get("registry") or {}
    if isinstance(registry, dict):
        if registry.get("url"):
            Constants.REGISTRY_URL_MAVEN = str(registry["url"])
        if registry.get("timeout") is not None:
            Constants.REQUEST_TIMEOUT = float(registry["timeout"])
        if registry.get("rows") is not None:
            Constants.REGISTRY_ROWS = int(registry["rows"])
        if registry.get("core") is not None:
            Constants.REGISTRY_CORE = str(registry["core"])

    output = cfg.get("output") or {}
    if isinstance(output, dict):
        if output.get("suffix"):
            Constants.UPDATED_SUFFIX = str(output["suffix"])
        if output.get("write_unchanged") is not None:
            Constants.WRITE_UNCHANGED = bool(output["write_unchanged"])

    run = cfg.get("run") or {}
    if isinstance(run, dict):
        if run.get("workers") is not None:
            Constants.MAX_WORKERS = max(1, int(run["workers"]))
        if isinstance(run.get("exclude_dirs"), list):
            Constants.EXCLUDE_DIRS = [str(d) for d in run["exclude_dirs"]]
