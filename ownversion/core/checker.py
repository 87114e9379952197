"""Self version check for ownversion.

Answers "is the version declared by this project the latest one published
on the registry?" in one linear pass:

1. Read the project metadata records (:class:`ConfigReader`).
2. Select the record that names the package
   (:func:`~ownversion.core.resolver.resolve_identity_record`).
3. Validate that it declares both a name and a version.
4. Ask the registry for the latest version (:class:`RegistryClient`).
5. Compare both versions.

Every failure ends the check. The ones the check itself detects are raised
as exactly one of :class:`ConfigNotFoundError`, :class:`PackageConfigError`
or :class:`RegistryLookupError`; errors raised while reading the project
files propagate untouched.

Typical usage::

    from ownversion import check_version, RegistryLookupError

    try:
        result = await check_version()
    except RegistryLookupError as exc:
        print("PyPI lookup failed:", exc.cause)
    else:
        if not result.is_up_to_date:
            print(f"Upgrade {result.current_version} -> {result.latest_version}")

Collaborators are injected, which keeps tests free of disk and network
access::

    checker = OwnVersionChecker(
        config_reader=FakeReader([ConfigRecord(name="demo", version="1.0.0")]),
        registry_client=FakeRegistry(latest="1.1.0"),
    )
    result = await checker.check_version()
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from packaging.version import InvalidVersion, Version

from ownversion.core.registry import PyPIRegistryClient
from ownversion.core.resolver import resolve_identity_record
from ownversion.core.project_config import ProjectConfigReader
from ownversion.models.result import CheckResult
from ownversion.models.identity import ConfigRecord, PackageIdentity, RegistryMetadata
from ownversion.utils.logger import get_logger
from ownversion.utils.version_utils import is_at_least, parse_version
from ownversion.exceptions import (
    ConfigNotFoundError,
    PackageConfigError,
    RegistryLookupError,
)

logger = get_logger("checker")

CONFIG_NOT_FOUND_MESSAGE = "Could not find information of the current package"
NAME_NOT_FOUND_MESSAGE = "Current package name not found"
VERSION_NOT_FOUND_MESSAGE = "Current package version not found"
LOOKUP_FAILED_MESSAGE = "Could not determine latest version on the registry"


class ConfigReader(Protocol):
    """Source of project metadata records, highest precedence first."""

    async def read_project_config(self) -> Sequence[ConfigRecord]: ...


class RegistryClient(Protocol):
    """Source of the latest published version for a package name."""

    async def fetch_package_metadata(self, name: str) -> RegistryMetadata: ...


class OwnVersionChecker:
    """Checks the local package against its latest published release.

    The checker holds no per-check state, so one instance may serve any
    number of sequential or concurrent checks.

    Args:
        config_reader: Project metadata source. Defaults to a
            :class:`ProjectConfigReader` for the current working directory.
        registry_client: Registry lookup. Defaults to a
            :class:`PyPIRegistryClient` for pypi.org.
    """

    def __init__(
        self,
        config_reader: Optional[ConfigReader] = None,
        registry_client: Optional[RegistryClient] = None,
    ) -> None:
        self.config_reader: ConfigReader = (
            config_reader if config_reader is not None else ProjectConfigReader()
        )
        self.registry_client: RegistryClient = (
            registry_client if registry_client is not None else PyPIRegistryClient()
        )

    async def check_version(self) -> CheckResult:
        """Run the version check.

        Returns:
            :class:`CheckResult` with both version strings as read.

        Raises:
            ConfigNotFoundError: No metadata record names a package.
            PackageConfigError: The selected record lacks a name or version,
                or its version cannot be parsed.
            RegistryLookupError: The registry lookup failed (``cause`` set),
                reported no latest version (``cause`` is ``None``), or
                reported an unparseable one.
        """
        records = await self.config_reader.read_project_config()
        logger.debug("Config read: %d record(s)", len(records))

        record = resolve_identity_record(records)
        if record is None:
            logger.debug("Check failed: no record names a package")
            raise ConfigNotFoundError(CONFIG_NOT_FOUND_MESSAGE)

        identity = self._validate_record(record)
        logger.debug("Identity resolved: %s", identity)

        latest_version = await self._lookup_latest_version(identity.name)
        logger.debug("Registry queried: latest %s is %s", identity.name, latest_version)

        current, latest = self._parse_versions(identity, latest_version, record)
        result = CheckResult(
            is_up_to_date=is_at_least(current, latest),
            current_version=identity.version,
            latest_version=latest_version,
        )
        logger.debug("Compared: %s", result)
        return result

    # ------------------------------------------------------------------
    # Steps (private)
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_record(record: ConfigRecord) -> PackageIdentity:
        """Turn the selected record into a :class:`PackageIdentity`.

        The name is checked before the version.
        """
        if not record.name:
            raise PackageConfigError(
                NAME_NOT_FOUND_MESSAGE,
                field="name",
                source=record.location,
            )

        if not record.version:
            raise PackageConfigError(
                VERSION_NOT_FOUND_MESSAGE,
                package_name=record.name,
                field="version",
                source=record.location,
            )

        return PackageIdentity(name=record.name, version=record.version)

    async def _lookup_latest_version(self, name: str) -> str:
        try:
            metadata = await self.registry_client.fetch_package_metadata(name)
        except Exception as exc:
            logger.debug("Registry lookup for %s failed: %r", name, exc)
            raise RegistryLookupError(
                LOOKUP_FAILED_MESSAGE,
                package_name=name,
                cause=exc,
            ) from exc

        if not metadata.latest_version:
            logger.debug("Registry reported no latest version for %s", name)
            raise RegistryLookupError(LOOKUP_FAILED_MESSAGE, package_name=name)

        return metadata.latest_version

    @staticmethod
    def _parse_versions(
        identity: PackageIdentity,
        latest_version: str,
        record: ConfigRecord,
    ) -> Tuple[Version, Version]:
        try:
            current = parse_version(identity.version)
        except InvalidVersion as exc:
            raise PackageConfigError(
                f"Current package version '{identity.version}' is not a valid version",
                package_name=identity.name,
                field="version",
                source=record.location,
            ) from exc

        try:
            latest = parse_version(latest_version)
        except InvalidVersion as exc:
            raise RegistryLookupError(
                f"Registry reported an invalid latest version '{latest_version}'",
                package_name=identity.name,
                cause=exc,
            ) from exc

        return current, latest


async def check_version(
    *,
    config_reader: Optional[ConfigReader] = None,
    registry_client: Optional[RegistryClient] = None,
) -> CheckResult:
    """Check the local package against the registry.

    Shortcut for ``OwnVersionChecker(...).check_version()``; see
    :meth:`OwnVersionChecker.check_version` for results and errors.
    """
    checker = OwnVersionChecker(
        config_reader=config_reader,
        registry_client=registry_client,
    )
    return await checker.check_version()
