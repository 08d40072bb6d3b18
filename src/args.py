"""Argument parsing functionality for distscout."""

import argparse
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="distscout",
        description=(
            "distscout - look up a Python project on a package index and pick a distribution"
        ),
        add_help=True,
    )

    parser.add_argument("project",
                        help="the name of the Python project to look up")
    parser.add_argument("version",
                        nargs="?",
                        metavar="VERSION",
                        help="release to look up; defaults to the greatest stable version")
    parser.add_argument("dist",
                        nargs="?",
                        metavar="DIST",
                        help="'sdist' or a compatibility tag such as py3-none-any; "
                             "defaults to the most widely installable wheel")

    parser.add_argument("--versions",
                        dest="VERSIONS",
                        help="list all versions of the project instead of its details",
                        action="store_true")
    parser.add_argument("--compatible",
                        dest="COMPATIBLE",
                        help="without DIST, pick the wheel this interpreter would install",
                        action="store_true")

    # Sections
    parser.add_argument("-s", "--summary",
                        dest="SUMMARY",
                        help="display the project's summary",
                        action="store_true")
    parser.add_argument("-l", "--license",
                        dest="LICENSE",
                        help="display the project's license",
                        action="store_true")
    parser.add_argument("-u", "--urls",
                        dest="URLS",
                        help="display the project's URLs",
                        action="store_true")
    parser.add_argument("-k", "--keywords",
                        dest="KEYWORDS",
                        help="display the project's keywords",
                        action="store_true")
    parser.add_argument("--classifiers",
                        dest="CLASSIFIERS",
                        help="display the project's classifiers",
                        action="store_true")
    parser.add_argument("-a", "--artifacts",
                        dest="ARTIFACTS",
                        help="display the project's artifact types; repeat up to 4 times for more detail",
                        action="count",
                        default=0)
    parser.add_argument("-d", "--dependencies",
                        dest="DEPENDENCIES",
                        help="display the project's dependencies",
                        action="store_true")
    parser.add_argument("-r", "--readme",
                        dest="README",
                        help="display the project's readme",
                        action="store_true")
    parser.add_argument("-p", "--packages",
                        dest="PACKAGES",
                        help="display the importable top-level names of the selected wheel",
                        action="store_true")
    parser.add_argument("-e", "--executables",
                        dest="EXECUTABLES",
                        help="display the executable commands of the selected wheel",
                        action="store_true")
    parser.add_argument("-v", "--verbose",
                        dest="VERBOSE",
                        help="display more project details; may be repeated",
                        action="count",
                        default=0)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="display fewer project details; twice shows only explicit sections",
                        action="count",
                        default=0)

    # Index, logging and configuration
    parser.add_argument("--index",
                        dest="INDEX",
                        help="base URL of the package index (default: https://pypi.org)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
