"""Argument parsing functionality for depbump."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="depbump",
        description=(
            "depbump - Upgrade Gradle and Maven dependencies to the newest minor release"
        ),
        add_help=True,
    )

    parser.add_argument("build_system",
                        nargs="?",
                        help="Only update this build system (gradle or maven). Default: all.",
                        type=str.lower,
                        choices=Constants.SUPPORTED_BUILD_SYSTEMS)

    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Project directory to scan recursively (default: current directory)",
                        action="store",
                        type=str,
                        default=".")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write a JSON report of every decision to this path",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="Registry request timeout in seconds",
                        action="store",
                        type=float)
    parser.add_argument("--workers",
                        dest="WORKERS",
                        help="Number of build files processed in parallel (default: 1)",
                        action="store",
                        type=int)
    parser.add_argument("--suffix",
                        dest="SUFFIX",
                        help="Suffix appended to rewritten files (default: .updated)",
                        action="store",
                        type=str)
    parser.add_argument("--write-unchanged",
                        dest="WRITE_UNCHANGED",
                        help="Write the output file even when nothing was upgraded.",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
