"""Configuration file loader for ownversion.

Handles discovery, loading, parsing, and validation of the tool's own
settings. Supports two formats:

- ``ownversion.toml``: settings under ``[ownversion]`` table
- ``pyproject.toml``: settings under ``[tool.ownversion]`` table

Discovery order:

1. Explicit path from ``--config`` or ``OWNVERSION_CONFIG``
2. ``ownversion.toml`` in the project directory (default: cwd)
3. ``pyproject.toml`` there with a ``[tool.ownversion]`` section

Values given on the command line are layered on top with
:func:`apply_overrides`.

Example (``pyproject.toml``)::

    [tool.ownversion]
    registry_url = "https://test.pypi.org/pypi/{package}/json"
    timeout = 5
    verify_ssl = true
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional
from dataclasses import asdict, dataclass, field, replace

from ownversion.exceptions import ConfigError
from ownversion.utils.logger import get_logger
from ownversion.constants import (
    CONFIG_FILE_NAME,
    CONFIG_SECTION,
    DEFAULT_TIMEOUT,
    DEFAULT_VERIFY_SSL,
    PYPI_JSON_API,
    PYPROJECT_FILE,
    REGISTRY_URL_PLACEHOLDER,
)

logger = get_logger("config")


@dataclass
class OwnVersionConfig:
    """Settings that control how the latest version is looked up.

    Every field has a default; a missing or empty section yields defaults.

    Attributes:
        registry_url: JSON API URL template; ``{package}`` is replaced by
            the package name.
        timeout: Registry request timeout in seconds.
        verify_ssl: Verify TLS certificates of the registry.
        source_path: File the settings came from, ``None`` for defaults.
    """

    registry_url: str = PYPI_JSON_API
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = DEFAULT_VERIFY_SSL

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """User-facing options only, for debug output."""
        options = asdict(self)
        del options["source_path"]
        return options


def discover_config_file(
    explicit_path: Optional[Path] = None, *, base_dir: Optional[Path] = None
) -> Optional[Path]:
    """Locate the settings file.

    An explicit path wins and must exist. Otherwise ``ownversion.toml`` in
    ``base_dir`` (default: the working directory) is used, then a
    ``pyproject.toml`` there that has a ``[tool.ownversion]`` table.
    Returns ``None`` when neither applies.

    Raises:
        ConfigError: ``explicit_path`` does not point at a file.
    """
    if explicit_path is not None:
        path = explicit_path.resolve()
        if not path.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Settings file given explicitly: %s", path)
        return path

    base = base_dir if base_dir is not None else Path.cwd()
    candidates = (
        (base / CONFIG_FILE_NAME, Path.is_file),
        (base / PYPROJECT_FILE, _pyproject_has_section),
    )
    for candidate, applies in candidates:
        if applies(candidate):
            logger.debug("Discovered settings in %s", candidate)
            return candidate

    logger.debug("No settings file in %s", base)
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Whether ``path`` is a readable pyproject.toml with ``[tool.ownversion]``.

    Unparseable files count as having no section; the metadata reader
    reports them on its own.
    """
    if not path.is_file():
        return False
    try:
        tool = _read_toml(path).get("tool")
    except ConfigError:
        return False
    return isinstance(tool, dict) and CONFIG_SECTION in tool


def _section_of(raw: Mapping[str, Any], path: Path) -> Any:
    if path.name == PYPROJECT_FILE:
        tool = raw.get("tool")
        return tool.get(CONFIG_SECTION) if isinstance(tool, dict) else None
    return raw.get(CONFIG_SECTION)


def load_config(
    config_path: Optional[Path] = None, *, base_dir: Optional[Path] = None
) -> OwnVersionConfig:
    """Read and validate the settings, falling back to defaults.

    ``config_path`` skips discovery; otherwise the files in ``base_dir`` are
    searched (see :func:`discover_config_file`).

    Raises:
        ConfigError: The file is not valid TOML, the section is not a table,
            or it holds unknown keys or bad values.
    """
    path = discover_config_file(config_path, base_dir=base_dir)
    if path is None:
        return OwnVersionConfig()

    logger.info("Reading settings from %s", path)
    section = _section_of(_read_toml(path), path)

    if not section:
        logger.debug("%s has no [%s] settings", path.name, CONFIG_SECTION)
        return OwnVersionConfig(source_path=path)

    if not isinstance(section, dict):
        raise ConfigError(
            f"[{CONFIG_SECTION}] must be a table",
            config_path=str(path),
        )

    config = replace(_parse_section(section, config_path=str(path)), source_path=path)
    logger.debug("Effective settings: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _check_registry_url(value: Any, config_path: Optional[str]) -> str:
    if not isinstance(value, str):
        raise ConfigError(
            f"registry_url must be a string, got {type(value).__name__}",
            config_path=config_path,
            option="registry_url",
        )
    if REGISTRY_URL_PLACEHOLDER not in value:
        raise ConfigError(
            f"registry_url must contain the {REGISTRY_URL_PLACEHOLDER} placeholder",
            config_path=config_path,
            option="registry_url",
        )
    try:
        value.format(package="ownversion")
    except (KeyError, IndexError, ValueError) as exc:
        raise ConfigError(
            f"registry_url is not a valid template, only {REGISTRY_URL_PLACEHOLDER} "
            f"may appear in braces: {value}",
            config_path=config_path,
            option="registry_url",
        ) from exc
    return value


def _check_timeout(value: Any, config_path: Optional[str]) -> int:
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            f"timeout must be an integer, got {type(value).__name__}",
            config_path=config_path,
            option="timeout",
        )
    if value <= 0:
        raise ConfigError(
            f"timeout must be positive, got {value}",
            config_path=config_path,
            option="timeout",
        )
    return value


def _check_verify_ssl(value: Any, config_path: Optional[str]) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(
            f"verify_ssl must be a boolean, got {type(value).__name__}",
            config_path=config_path,
            option="verify_ssl",
        )
    return value


#: Validator per option; each returns the accepted value or raises ConfigError.
_OPTION_CHECKS: Dict[str, Callable[[Any, Optional[str]], Any]] = {
    "registry_url": _check_registry_url,
    "timeout": _check_timeout,
    "verify_ssl": _check_verify_ssl,
}


def _parse_section(
    section: Mapping[str, Any],
    *,
    config_path: str,
) -> OwnVersionConfig:
    """Build a config from the ``[ownversion]`` / ``[tool.ownversion]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types, or invalid values.
    """
    unknown = set(section) - set(_OPTION_CHECKS)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    values = {
        key: check(section[key], config_path)
        for key, check in _OPTION_CHECKS.items()
        if key in section
    }
    return OwnVersionConfig(**values)


def apply_overrides(config: OwnVersionConfig, **overrides: Any) -> OwnVersionConfig:
    """Return *config* with command-line values layered on top.

    ``None`` means "not given" and keeps the configured value. Overrides go
    through the same checks as file values.

    Example:
        >>> apply_overrides(OwnVersionConfig(), timeout=3).timeout
        3

    Raises:
        ConfigError: An override is not a known option or has an invalid value.
    """
    given = {key: value for key, value in overrides.items() if value is not None}
    if not given:
        return config

    unknown = set(given) - set(_OPTION_CHECKS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    values = {key: _OPTION_CHECKS[key](value, None) for key, value in given.items()}
    logger.debug("Command-line overrides: %s", values)
    return replace(config, **values)
