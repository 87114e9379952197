"""
Utility helpers for ownversion.

- :mod:`~ownversion.utils.console`: Rich rendering of check results and failures
- :mod:`~ownversion.utils.logger`: ``ownversion`` logger namespace and CLI logging setup
- :mod:`~ownversion.utils.http`: single-attempt async HTTP client
- :mod:`~ownversion.utils.version_utils`: PEP 440 parsing and comparison
"""

from __future__ import annotations

from ownversion.utils.logger import (
    configure_logging,
    get_logger,
    level_for_verbosity,
    reset_logging,
)
from ownversion.utils.version_utils import (
    get_update_type,
    is_at_least,
    parse_version,
)
from ownversion.utils.http import HTTPClient
from ownversion.utils.console import (
    print_failure,
    print_notice,
    print_result,
    print_result_json,
    render_result,
    reset_consoles,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "level_for_verbosity",
    "reset_logging",
    # Versions
    "get_update_type",
    "is_at_least",
    "parse_version",
    # HTTP
    "HTTPClient",
    # Console
    "print_failure",
    "print_notice",
    "print_result",
    "print_result_json",
    "render_result",
    "reset_consoles",
]
