"""
Core functionality exports for ownversion.

    from ownversion.core import OwnVersionChecker, check_version
"""

from __future__ import annotations

from ownversion.core.registry import PyPIRegistryClient
from ownversion.core.resolver import resolve_identity_record
from ownversion.core.project_config import ProjectConfigReader
from ownversion.core.checker import (
    ConfigReader,
    OwnVersionChecker,
    RegistryClient,
    check_version,
)

__all__ = [
    "ConfigReader",
    "OwnVersionChecker",
    "ProjectConfigReader",
    "PyPIRegistryClient",
    "RegistryClient",
    "check_version",
    "resolve_identity_record",
]
