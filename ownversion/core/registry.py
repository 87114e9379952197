"""PyPI registry client for ownversion.

Looks up the latest published version of a package through the PyPI JSON
API (``/pypi/{package}/json``). The latest version is the ``info.version``
field of the response, i.e. the newest non-yanked release PyPI considers
current.

Typical usage::

    client = PyPIRegistryClient()
    metadata = await client.fetch_package_metadata("httpx")
    print(metadata.latest_version)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ownversion.utils.http import HTTPClient
from ownversion.utils.logger import get_logger
from ownversion.models.identity import RegistryMetadata
from ownversion.constants import DEFAULT_TIMEOUT, DEFAULT_VERIFY_SSL, PYPI_JSON_API

logger = get_logger("registry")


class PyPIRegistryClient:
    """Fetches package metadata from a PyPI-compatible JSON API.

    The client keeps no connection between calls: every lookup opens and
    closes its own :class:`HTTPClient`.

    Args:
        registry_url: URL template containing ``{package}``.
        timeout: Request timeout in seconds.
        verify_ssl: Whether to verify SSL certificates.
        user_agent: Custom User-Agent header value.
    """

    def __init__(
        self,
        *,
        registry_url: str = PYPI_JSON_API,
        timeout: int = DEFAULT_TIMEOUT,
        verify_ssl: bool = DEFAULT_VERIFY_SSL,
        user_agent: Optional[str] = None,
    ) -> None:
        self.registry_url = registry_url
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent

    def package_url(self, name: str) -> str:
        """Return the JSON API URL for *name*."""
        return self.registry_url.format(package=name)

    async def fetch_package_metadata(self, name: str) -> RegistryMetadata:
        """Fetch the registry's metadata for *name*.

        Args:
            name: Package name as declared by the local project.

        Returns:
            :class:`RegistryMetadata` whose ``latest_version`` is ``None``
            when the response carries no usable ``info.version``.

        Raises:
            PyPIError: The package does not exist on the registry.
            NetworkError: Transport failure, error status, or a body that
                is not a JSON object.
        """
        url = self.package_url(name)

        async with HTTPClient(
            timeout=self.timeout,
            verify_ssl=self.verify_ssl,
            user_agent=self.user_agent,
        ) as http:
            data = await http.get_json(url)

        metadata = _parse_metadata(name, data)
        logger.debug(
            "Registry reports latest version %s for %s",
            metadata.latest_version,
            metadata.name,
        )
        return metadata


def _parse_metadata(name: str, data: Dict[str, Any]) -> RegistryMetadata:
    """Extract name and latest version from a PyPI JSON response."""
    info = data.get("info")
    if not isinstance(info, dict):
        return RegistryMetadata(name=name)

    reported_name = info.get("name")
    if not isinstance(reported_name, str) or not reported_name.strip():
        reported_name = name

    latest = info.get("version")
    if not isinstance(latest, str) or not latest.strip():
        latest = None

    return RegistryMetadata(
        name=reported_name.strip(),
        latest_version=latest.strip() if latest else None,
    )
