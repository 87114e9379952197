"""
Centralized constants for ownversion.

This module defines immutable configuration values used across ownversion,
including registry endpoints, network settings, project metadata file
names, and logging formats. All values are intended to be treated as
read-only.
"""

from typing import Final

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "ownversion/{version} (+https://pypi.org/project/ownversion/)"

# ---------------------------------------------------------------------------
# PyPI endpoints
# ---------------------------------------------------------------------------

#: URL template for the PyPI JSON API. Must contain ``{package}``.
PYPI_JSON_API: Final[str] = "https://pypi.org/pypi/{package}/json"

#: Placeholder every registry URL template has to provide.
REGISTRY_URL_PLACEHOLDER: Final[str] = "{package}"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 10

#: Default for TLS certificate verification.
DEFAULT_VERIFY_SSL: Final[bool] = True

# ---------------------------------------------------------------------------
# Project metadata discovery
# ---------------------------------------------------------------------------

#: PEP 518 / PEP 621 project file.
PYPROJECT_FILE: Final[str] = "pyproject.toml"

#: setuptools declarative configuration file.
SETUP_CFG_FILE: Final[str] = "setup.cfg"

# ---------------------------------------------------------------------------
# Tool configuration
# ---------------------------------------------------------------------------

#: Dedicated configuration file name.
CONFIG_FILE_NAME: Final[str] = "ownversion.toml"

#: Table name used in both ``ownversion.toml`` and ``[tool.*]`` of pyproject.
CONFIG_SECTION: Final[str] = "ownversion"

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading metadata files.
MAX_FILE_SIZE: Final[int] = 1024 * 1024  # 1 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ---------------------------------------------------------------------------
# CLI exit codes
# ---------------------------------------------------------------------------

#: Check succeeded (up to date, or outdated without ``--exit-code``).
EXIT_OK: Final[int] = 0

#: Check failed, or the project is outdated and ``--exit-code`` was given.
EXIT_FAILURE: Final[int] = 1

#: Interrupted with Ctrl+C.
EXIT_INTERRUPTED: Final[int] = 130
