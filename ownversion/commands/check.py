"""``ownversion check``: compare the project's version with the registry.

Typical usage::

    # Check the project in the current directory
    $ ownversion check

    # Machine-readable output
    $ ownversion check --format json

    # Fail CI when a newer release exists
    $ ownversion check --exit-code
"""

from __future__ import annotations

import sys
import click
import asyncio
from pathlib import Path
from typing import Optional

from ownversion.utils.logger import get_logger
from ownversion.constants import EXIT_FAILURE
from ownversion.context import pass_context, OwnVersionContext
from ownversion.utils.console import print_failure, print_result, print_result_json
from ownversion.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    PackageConfigError,
    RegistryLookupError,
)

logger = get_logger("commands.check")

CHECK_FAILURES = (ConfigNotFoundError, PackageConfigError, RegistryLookupError)


def describe_failure(exc: Exception) -> str:
    """Return the user-facing message for a failed check.

    Examples:
        >>> describe_failure(PackageConfigError("Current package version not found"))
        'Error in package configuration: Current package version not found'
    """
    if isinstance(exc, ConfigNotFoundError):
        return f"Could not find package configuration file. {exc}"
    if isinstance(exc, PackageConfigError):
        return f"Error in package configuration: {exc}"
    if isinstance(exc, RegistryLookupError):
        message = f"Error fetching data from the registry: {exc}"
        if exc.cause is not None:
            message += f" ({exc.cause})"
        return message
    return str(exc)


@click.command()
@click.option(
    "--project-dir",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory holding pyproject.toml or setup.cfg and its settings (default: cwd).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format.",
)
@click.option(
    "--exit-code",
    is_flag=True,
    help="Exit with status 1 when a newer version is available.",
)
@pass_context
def check(
    ctx: OwnVersionContext,
    project_dir: Optional[Path],
    output_format: str,
    exit_code: bool,
) -> None:
    """Check whether this project's version is the latest one published.

    \b
    Exit codes:
      0  up to date (or outdated without --exit-code)
      1  outdated with --exit-code, or the check failed
    """
    try:
        ctx.load_settings(project_dir)
    except ConfigError as exc:
        print_failure(str(exc))
        sys.exit(EXIT_FAILURE)

    checker = ctx.make_checker(project_dir)

    try:
        result = asyncio.run(checker.check_version())
    except CHECK_FAILURES as exc:
        logger.debug("Version check failed", exc_info=True)
        print_failure(describe_failure(exc))
        sys.exit(EXIT_FAILURE)

    if output_format.lower() == "json":
        print_result_json(result)
    else:
        print_result(result)

    if exit_code and not result.is_up_to_date:
        sys.exit(EXIT_FAILURE)
