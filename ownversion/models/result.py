"""
Version check result model for ownversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CheckResult:
    """
    Outcome of a successful version check.

    ``is_up_to_date`` is ``True`` when the current version is equal to or
    newer than the latest published version. Both version strings are
    kept exactly as they were read, without normalization.

    Attributes:
        is_up_to_date: Whether no newer release exists on the registry.
        current_version: Version declared by the local project.
        latest_version: Latest version published on the registry.
    """

    is_up_to_date: bool
    current_version: Optional[str] = None
    latest_version: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        """
        Return a JSON-serializable representation.

        Example:
            >>> CheckResult(True, "1.2.3", "1.2.3").to_json()
            {'is_up_to_date': True, 'current_version': '1.2.3', 'latest_version': '1.2.3'}
        """
        return {
            "is_up_to_date": self.is_up_to_date,
            "current_version": self.current_version,
            "latest_version": self.latest_version,
        }

    def __str__(self) -> str:
        if self.is_up_to_date:
            return f"{self.current_version} is up to date"
        return f"{self.current_version} is outdated (latest: {self.latest_version})"
