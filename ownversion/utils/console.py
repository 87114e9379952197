"""
Terminal rendering of version check outcomes, built on Rich.

Results go to stdout so they can be piped (``--format json``); failures
and notices go to stderr. Diagnostic output belongs to
:mod:`ownversion.utils.logger`.

Every line is assembled from :class:`rich.text.Text` segments, so package
names or versions containing square brackets are never read as markup.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, Mapping

from rich.text import Text
from rich.theme import Theme
from rich.console import Console

from ownversion.models.result import CheckResult
from ownversion.utils.version_utils import get_update_type

OWNVERSION_THEME = Theme(
    {
        "status.ok": "bold green",
        "status.outdated": "bold yellow",
        "status.error": "bold red",
        "version.current": "cyan",
        "version.latest": "bold cyan",
        "update.major": "bold red",
        "update.minor": "yellow",
        "update.patch": "green",
        "update.update": "green",
        "update.unknown": "dim",
    }
)

OK_PREFIX = "[OK]"
OUTDATED_PREFIX = "[WARNING]"
ERROR_PREFIX = "[ERROR]"

# One console per stream, keyed by ``stderr``
_consoles: Dict[bool, Console] = {}
_lock = threading.Lock()


def _color_enabled(stream: Any) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, OSError):
        return False


def _console(*, stderr: bool = False) -> Console:
    console = _consoles.get(stderr)
    if console is None:
        with _lock:
            console = _consoles.get(stderr)
            if console is None:
                stream = sys.stderr if stderr else sys.stdout
                console = Console(
                    theme=OWNVERSION_THEME,
                    stderr=stderr,
                    no_color=not _color_enabled(stream),
                    highlight=False,
                    soft_wrap=True,
                )
                _consoles[stderr] = console
    return console


def reset_consoles() -> None:
    """Forget the cached consoles so the next output re-reads the environment."""
    with _lock:
        _consoles.clear()


def render_result(result: CheckResult) -> Text:
    """Build the one-line text summary of *result*.

    Examples:
        >>> render_result(CheckResult(True, "1.2.3", "1.2.3")).plain
        "[OK] Version '1.2.3' is up to date."
    """
    current = result.current_version or ""
    if result.is_up_to_date:
        return Text.assemble(
            (OK_PREFIX, "status.ok"),
            " Version '",
            (current, "version.current"),
            "' is up to date.",
        )

    latest = result.latest_version or ""
    update_type = get_update_type(current, latest)
    return Text.assemble(
        (OUTDATED_PREFIX, "status.outdated"),
        " Current version '",
        (current, "version.current"),
        "' is outdated, please upgrade to '",
        (latest, "version.latest"),
        "' (",
        (update_type, f"update.{update_type}"),
        " update).",
    )


def print_result(result: CheckResult) -> None:
    """Print the text summary of *result* to stdout."""
    _console().print(render_result(result))


def print_result_json(result: CheckResult) -> None:
    """Print *result* as a JSON document to stdout."""
    print_json(result.to_json())


def print_json(data: Mapping[str, Any]) -> None:
    _console().print_json(data=dict(data))


def print_failure(message: str) -> None:
    """Print an ``[ERROR]`` line to stderr."""
    _console(stderr=True).print(Text.assemble((ERROR_PREFIX, "status.error"), " ", message))


def print_notice(message: str) -> None:
    """Print a ``[WARNING]`` line to stderr."""
    _console(stderr=True).print(
        Text.assemble((OUTDATED_PREFIX, "status.outdated"), " ", message)
    )
