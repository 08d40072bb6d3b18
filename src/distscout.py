"""distscout - look up a Python project on a package index and pick a distribution.

    Returns:
        int: Exit code
"""
import logging
import sys
from typing import List, Optional

from packaging.version import InvalidVersion, Version

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes, load_config
from distribution import (
    SDIST_SELECTOR,
    CompatibilityTag,
    InvalidCompatibilityTag,
    InvalidName,
    NotFound,
    normalize_package_name,
)
from formatting import DisplayFields, format_package_version_details, format_package_versions
from package_inspect import InspectionError
from project import Project
from registry.pypi import RegistryError

logger = logging.getLogger(__name__)


def validate_args(args) -> None:
    """Check user input before any network request is made.

    Raises:
        InvalidName: If the project name is not a valid project name.
        InvalidVersion: If the version is not a PEP 440 version.
        InvalidCompatibilityTag: If the distribution is neither "sdist" nor a tag.
        ValueError: If --versions is combined with a version.
    """
    normalize_package_name(args.project)
    if args.VERSIONS and args.version is not None:
        raise ValueError("--versions cannot be combined with a version")
    if args.version is not None:
        Version(args.version)
    if args.dist is not None and args.dist != SDIST_SELECTOR:
        CompatibilityTag.from_string(args.dist)


def run(args) -> str:
    """Fetch what the arguments ask for and render it."""
    project = Project(
        args.project,
        version_selector=args.version,
        distribution_selector=args.dist,
        index=args.INDEX,
        compatible=args.COMPATIBLE,
    )
    fields = DisplayFields.from_args(args)
    if args.VERSIONS:
        return format_package_versions(project, fields)
    return format_package_version_details(project, fields)


def main(argv: Optional[List[str]] = None) -> None:
    """Main function of the program."""
    args = parse_args(argv)

    try:
        load_config(args.CONFIG)
    except (OSError, ValueError) as exc:
        configure_logging(args.LOG_LEVEL, args.LOG_FILE)
        logger.error("Cannot load configuration: %s", exc)
        sys.exit(ExitCodes.FILE_ERROR.value)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        validate_args(args)
    except (InvalidName, InvalidVersion, InvalidCompatibilityTag, ValueError) as exc:
        logger.error("Invalid input: %s", exc)
        sys.exit(ExitCodes.INVALID_INPUT.value)

    try:
        output = run(args)
    except NotFound as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.NOT_FOUND.value)
    except (RegistryError, InspectionError) as exc:
        logger.error("Index request failed: %s", exc)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)

    if output:
        print(output)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="main",
                outcome="success"
            )
        )
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
