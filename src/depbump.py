"""depbump - minor version upgrader for Gradle and Maven builds.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import BuildSystem, Constants, ExitCodes
from common.errors import ConfigError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import apply_overrides, load_config
from registry.maven_central import MavenCentralClient
from updater import UpgradeOrchestrator, default_processors


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logging.getLogger().addHandler(file_handler)
        logging.info("Logging to file: %s", log_file)


def export_json(summary, path):
    """Exports the run summary to a JSON file.

    Args:
        summary (RunSummary): Result of the run.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(summary.to_dict(), file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)


def build_orchestrator(args):
    """Wire registry client, processors and orchestrator from settings."""
    client = MavenCentralClient()
    processors = default_processors(client, root=args.DIRECTORY)
    return UpgradeOrchestrator(processors)


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    _setup_logging(args)

    try:
        load_config(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value
    apply_overrides(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    orchestrator = build_orchestrator(args)
    selected = [BuildSystem(args.build_system)] if args.build_system else None
    if selected:
        logger.info("Updating %s projects...", args.build_system)
    summary = orchestrator.run(selected)

    if getattr(args, "OUTPUT", None):
        export_json(summary, args.OUTPUT)

    if summary.files_failed or summary.lookup_failures:
        logger.warning(
            "Completed with %d failed files and %d failed lookups; see log for details.",
            summary.files_failed, summary.lookup_failures,
        )
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
