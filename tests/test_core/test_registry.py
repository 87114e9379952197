from __future__ import annotations

from typing import Any, Dict
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from ownversion.models import RegistryMetadata
from ownversion.constants import PYPI_JSON_API
from ownversion.exceptions import NetworkError, PyPIError
from ownversion.core.registry import PyPIRegistryClient, _parse_metadata


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(
        status_code,
        json=payload,
        request=httpx.Request("GET", "https://pypi.org/pypi/demo/json"),
    )


@pytest.mark.unit
class TestPyPIRegistryClientInit:
    """Tests for PyPIRegistryClient configuration."""

    def test_default_values(self) -> None:
        client = PyPIRegistryClient()

        assert client.registry_url == PYPI_JSON_API
        assert client.timeout == 10
        assert client.verify_ssl is True
        assert client.user_agent is None

    def test_package_url_formats_template(self) -> None:
        client = PyPIRegistryClient(registry_url="https://mirror.local/{package}/json")

        assert client.package_url("demo") == "https://mirror.local/demo/json"


@pytest.mark.unit
class TestFetchPackageMetadata:
    """Tests for PyPIRegistryClient.fetch_package_metadata."""

    @pytest.mark.asyncio
    async def test_returns_latest_version(self) -> None:
        payload = {"info": {"name": "demo", "version": "1.4.0"}, "releases": {}}

        with patch.object(
            httpx.AsyncClient, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = json_response(200, payload)

            metadata = await PyPIRegistryClient().fetch_package_metadata("demo")

        assert metadata == RegistryMetadata(name="demo", latest_version="1.4.0")
        mock_request.assert_awaited_once()
        method, url = mock_request.call_args.args[:2]
        assert method == "GET"
        assert url == "https://pypi.org/pypi/demo/json"

    @pytest.mark.asyncio
    async def test_not_found_raises_pypi_error(self) -> None:
        with patch.object(
            httpx.AsyncClient, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = json_response(404, {"message": "Not Found"})

            with pytest.raises(PyPIError) as exc_info:
                await PyPIRegistryClient().fetch_package_metadata("missing")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_transport_error_raises_network_error(self) -> None:
        with patch.object(
            httpx.AsyncClient, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.side_effect = httpx.ConnectError("connection refused")

            with pytest.raises(NetworkError) as exc_info:
                await PyPIRegistryClient().fetch_package_metadata("demo")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_single_attempt_on_failure(self) -> None:
        with patch.object(
            httpx.AsyncClient, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = json_response(503, {"message": "unavailable"})

            with pytest.raises(NetworkError):
                await PyPIRegistryClient().fetch_package_metadata("demo")

        assert mock_request.await_count == 1

    @pytest.mark.asyncio
    async def test_missing_info_yields_no_latest_version(self) -> None:
        with patch.object(
            httpx.AsyncClient, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = json_response(200, {"releases": {}})

            metadata = await PyPIRegistryClient().fetch_package_metadata("demo")

        assert metadata.latest_version is None
        assert metadata.name == "demo"


@pytest.mark.unit
class TestParseMetadata:
    """Tests for _parse_metadata."""

    @pytest.mark.parametrize(
        "info, expected",
        [
            ({"name": "Demo", "version": "1.0.0"}, RegistryMetadata("Demo", "1.0.0")),
            ({"version": " 2.0.0 "}, RegistryMetadata("demo", "2.0.0")),
            ({"name": "", "version": ""}, RegistryMetadata("demo", None)),
            ({"name": None, "version": None}, RegistryMetadata("demo", None)),
            ({"version": 3}, RegistryMetadata("demo", None)),
        ],
        ids=["complete", "no-name", "blank", "null", "non-string"],
    )
    def test_info_variants(self, info: Dict[str, Any], expected: RegistryMetadata) -> None:
        assert _parse_metadata("demo", {"info": info}) == expected

    def test_info_not_a_mapping(self) -> None:
        assert _parse_metadata("demo", {"info": ["1.0.0"]}) == RegistryMetadata("demo")
