"""Project metadata reader for ownversion.

Reads the local package's name and version from the project's own
metadata files and returns them as :class:`ConfigRecord` objects, highest
precedence first:

1. ``pyproject.toml``: ``[project]`` table (PEP 621)
2. ``pyproject.toml``: ``[tool.poetry]`` table
3. ``setup.cfg``: ``[metadata]`` section

A table is reported whenever it exists, even if it lacks a name or a
version; deciding which record identifies the package is the job of
:func:`~ownversion.core.resolver.resolve_identity_record`.

Typical usage::

    reader = ProjectConfigReader(Path("path/to/project"))
    records = reader.read_records()
"""

from __future__ import annotations

import asyncio
import configparser
import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ownversion.exceptions import ProjectFileError
from ownversion.models.identity import ConfigRecord
from ownversion.utils.logger import get_logger
from ownversion.constants import MAX_FILE_SIZE, PYPROJECT_FILE, SETUP_CFG_FILE

logger = get_logger("project_config")


class ProjectConfigReader:
    """Reads package identity records from a project directory.

    Args:
        project_dir: Directory holding the project files. Defaults to the
            current working directory at read time.
    """

    def __init__(self, project_dir: Optional[Path] = None) -> None:
        self.project_dir = project_dir

    async def read_project_config(self) -> List[ConfigRecord]:
        """Async entry point used by the version check.

        The files are read in the default executor so the event loop keeps
        serving other tasks.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.read_records)

    def read_records(self) -> List[ConfigRecord]:
        """Read all metadata records, highest precedence first.

        Returns:
            Records in precedence order; empty when the files exist but
            declare no metadata tables.

        Raises:
            ProjectFileError: No metadata file exists, or a file cannot be
                read or parsed.
        """
        base = (self.project_dir or Path.cwd()).resolve()
        pyproject = base / PYPROJECT_FILE
        setup_cfg = base / SETUP_CFG_FILE

        if not pyproject.is_file() and not setup_cfg.is_file():
            raise ProjectFileError(
                f"No project metadata file found in {base}",
                file_path=str(base),
            )

        records: List[ConfigRecord] = []

        if pyproject.is_file():
            records.extend(_records_from_pyproject(pyproject))

        if setup_cfg.is_file():
            records.extend(_records_from_setup_cfg(setup_cfg))

        logger.debug("Read %d metadata record(s) from %s", len(records), base)
        return records


# ---------------------------------------------------------------------------
# pyproject.toml
# ---------------------------------------------------------------------------


def _records_from_pyproject(path: Path) -> List[ConfigRecord]:
    data = _read_toml(path)
    records: List[ConfigRecord] = []

    project = data.get("project")
    if isinstance(project, dict):
        records.append(_make_record(project, path, "project"))

    tool = data.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    if isinstance(poetry, dict):
        records.append(_make_record(poetry, path, "tool.poetry"))

    return records


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ProjectFileError: File too large, unreadable, or invalid TOML.
    """
    _check_size(path)

    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ProjectFileError(
            f"Invalid TOML in {path.name}: {exc}",
            file_path=str(path),
            original_error=exc,
        ) from exc
    except OSError as exc:
        raise ProjectFileError(
            f"Cannot read {path.name}: {exc}",
            file_path=str(path),
            original_error=exc,
        ) from exc


# ---------------------------------------------------------------------------
# setup.cfg
# ---------------------------------------------------------------------------


def _records_from_setup_cfg(path: Path) -> List[ConfigRecord]:
    _check_size(path)
    parser = configparser.ConfigParser(interpolation=None)

    try:
        with open(path, encoding="utf-8") as fh:
            parser.read_file(fh, source=str(path))
    except configparser.Error as exc:
        raise ProjectFileError(
            f"Invalid INI syntax in {path.name}: {exc}",
            file_path=str(path),
            original_error=exc,
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectFileError(
            f"Cannot read {path.name}: {exc}",
            file_path=str(path),
            original_error=exc,
        ) from exc

    if not parser.has_section("metadata"):
        return []

    return [_make_record(parser["metadata"], path, "metadata")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_size(path: Path) -> None:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ProjectFileError(
            f"Cannot read {path.name}: {exc}",
            file_path=str(path),
            original_error=exc,
        ) from exc

    if size > MAX_FILE_SIZE:
        raise ProjectFileError(
            f"{path.name} is too large ({size} bytes, limit {MAX_FILE_SIZE})",
            file_path=str(path),
        )


def _make_record(table: Mapping[str, Any], path: Path, section: str) -> ConfigRecord:
    return ConfigRecord(
        name=_string_field(table, "name"),
        version=_string_field(table, "version"),
        source=path,
        section=section,
    )


def _string_field(table: Mapping[str, Any], key: str) -> Optional[str]:
    """Return a stripped string value, or ``None`` for missing/non-string values."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None
