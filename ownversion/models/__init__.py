"""
Unified data model exports for ownversion.

Example:
    >>> from ownversion.models import CheckResult, ConfigRecord
"""

from __future__ import annotations

from ownversion.models.result import CheckResult
from ownversion.models.identity import ConfigRecord, PackageIdentity, RegistryMetadata

__all__ = [
    "CheckResult",
    "ConfigRecord",
    "PackageIdentity",
    "RegistryMetadata",
]
