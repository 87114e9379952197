"""
ownversion: is the version of this project the latest one on PyPI?

ownversion reads the local package's name and version from
``pyproject.toml`` or ``setup.cfg``, looks up the latest version published
on PyPI, and tells you whether you are up to date::

    import asyncio
    from ownversion import check_version

    result = asyncio.run(check_version())
    if not result.is_up_to_date:
        print(f"{result.current_version} -> {result.latest_version}")

Failures are raised as :class:`ConfigNotFoundError`,
:class:`PackageConfigError` or :class:`RegistryLookupError`, all deriving
from :class:`OwnVersionError`.
"""

from __future__ import annotations

from ownversion.__version__ import __version__
from ownversion.models import CheckResult, ConfigRecord, RegistryMetadata
from ownversion.core import (
    OwnVersionChecker,
    ProjectConfigReader,
    PyPIRegistryClient,
    check_version,
)
from ownversion.exceptions import (
    ConfigNotFoundError,
    OwnVersionError,
    PackageConfigError,
    RegistryLookupError,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__license__ = "Apache-2.0"
__description__ = "Check whether a project's version is the latest one published on PyPI."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "check_version",
    "OwnVersionChecker",
    "ProjectConfigReader",
    "PyPIRegistryClient",
    "CheckResult",
    "ConfigRecord",
    "RegistryMetadata",
    "OwnVersionError",
    "ConfigNotFoundError",
    "PackageConfigError",
    "RegistryLookupError",
]
