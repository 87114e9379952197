"""
Executable module for ownversion.

Running ``python -m ownversion`` is equivalent to running ``ownversion``.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a CLI that cannot be imported (usually a missing dependency)."""
    sys.stderr.write("ownversion CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from ownversion.__version__ import __version__

        sys.stderr.write(f"ownversion version: {__version__}\n")
    except ImportError:
        sys.stderr.write("ownversion version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entrypoint for ``python -m ownversion``; returns the CLI exit code."""
    try:
        # Imported lazily so a broken dependency yields a readable message
        from ownversion.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
