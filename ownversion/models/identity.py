"""
Package identity data models for ownversion.

These records flow through a single version check:

- :class:`ConfigRecord`: one metadata table read from a project file
- :class:`PackageIdentity`: the validated ``name`` + ``version`` pair
- :class:`RegistryMetadata`: what the registry reports for a package name

All of them are immutable and live only for the duration of one check.
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ConfigRecord:
    """
    One project metadata table that may describe the local package.

    A record is valid even when ``name`` or ``version`` is missing; the
    version check decides which record to use and whether it is complete.

    Attributes:
        name: Package name, if the table declares one.
        version: Package version, if the table declares one.
        source: File the record was read from.
        section: Table or section inside that file (``project``,
            ``tool.poetry``, ``metadata``).
    """

    name: Optional[str] = None
    version: Optional[str] = None
    source: Optional[Path] = None
    section: Optional[str] = None

    @property
    def location(self) -> Optional[str]:
        """Human-readable ``file[section]`` origin of the record."""
        if self.source is None:
            return self.section
        if self.section is None:
            return str(self.source)
        return f"{self.source}[{self.section}]"

    def __str__(self) -> str:
        where = self.location or "<unknown>"
        return f"{self.name or '<unnamed>'} {self.version or '<no version>'} ({where})"


@dataclass(frozen=True)
class PackageIdentity:
    """
    The resolved identity of the local package.

    Both fields are non-empty; instances are only built from a record that
    passed validation.
    """

    name: str
    version: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("PackageIdentity.name must be a non-empty string")
        if not self.version:
            raise ValueError("PackageIdentity.version must be a non-empty string")

    def __str__(self) -> str:
        return f"{self.name}=={self.version}"


@dataclass(frozen=True)
class RegistryMetadata:
    """
    Registry answer for one package name.

    Attributes:
        name: Package name as reported by the registry.
        latest_version: Latest published version, or ``None`` when the
            registry did not report one.
    """

    name: str
    latest_version: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "latest_version": self.latest_version}
