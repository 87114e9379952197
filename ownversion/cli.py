"""
Command-line interface for ownversion.

The ``ownversion`` group records the global options (settings file,
registry overrides), sets up logging and terminal output, and dispatches
to ``ownversion check``, which loads the settings for its project.
:func:`main` turns every outcome into a process exit code.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import click

from ownversion.__version__ import __version__
from ownversion.context import OwnVersionContext
from ownversion.exceptions import OwnVersionError
from ownversion.utils.logger import configure_logging, get_logger
from ownversion.utils.console import print_failure, print_notice, reset_consoles
from ownversion.constants import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_OK,
)

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="OWNVERSION_CONFIG",
    help="Configuration file (default: ownversion.toml or [tool.ownversion]).",
)
@click.option(
    "--registry-url",
    envvar="OWNVERSION_REGISTRY_URL",
    default=None,
    help="Registry JSON API URL template containing {package}.",
)
@click.option(
    "--timeout",
    type=int,
    envvar="OWNVERSION_TIMEOUT",
    default=None,
    help="Registry request timeout in seconds.",
)
@click.option(
    "--verify-ssl/--no-verify-ssl",
    default=None,
    help="Verify the registry's TLS certificate.",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug).",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="OWNVERSION_COLOR",
    help="Enable or disable colored output.",
)
@click.version_option(
    version=__version__,
    prog_name="ownversion",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    registry_url: Optional[str],
    timeout: Optional[int],
    verify_ssl: Optional[bool],
    verbose: int,
    color: bool,
) -> None:
    """ownversion: is this project's version the latest one on PyPI?

    \b
    Examples:
      ownversion check
      ownversion check --format json
      ownversion --registry-url https://test.pypi.org/pypi/{package}/json check
      ownversion -v check --exit-code
    """
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reset_consoles()
    configure_logging(verbose, color=color)

    ctx.obj = OwnVersionContext(
        config_path=config_path,
        overrides={
            "registry_url": registry_url,
            "timeout": timeout,
            "verify_ssl": verify_ssl,
        },
        verbose=verbose,
        color=color,
    )
    logger.debug("ownversion v%s", __version__)


from ownversion.commands.check import check  # noqa: E402

cli.add_command(check)


def _system_exit_code(exc: SystemExit) -> int:
    if exc.code is None:
        return EXIT_OK
    if isinstance(exc.code, int):
        return exc.code
    # sys.exit("message") prints the message and fails
    print_failure(str(exc.code))
    return EXIT_FAILURE


def main() -> int:
    """Run the CLI and return its exit code.

    Returns:
        0 when the check succeeded, 1 when it failed (or the project is
        outdated under ``--exit-code``), 2 for usage errors, 130 when
        interrupted.
    """
    try:
        cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_notice("Operation cancelled by user")
        return EXIT_INTERRUPTED
    except SystemExit as exc:
        return _system_exit_code(exc)
    except OwnVersionError as exc:
        # Raised by a collaborator, e.g. an unreadable pyproject.toml
        print_failure(str(exc))
        logger.debug("Error details: %s", exc.details or "<none>", exc_info=True)
        return EXIT_FAILURE
    except Exception as exc:
        print_failure(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
