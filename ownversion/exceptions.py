"""
Exceptions raised by ownversion.

Everything derives from :class:`OwnVersionError`, which carries a message
and a ``details`` mapping rendered after the message by ``str()``.

A version check fails in one of three ways:

- :class:`ConfigNotFoundError`: no project metadata names a package
- :class:`PackageConfigError`: the package metadata is incomplete or invalid
- :class:`RegistryLookupError`: the latest version could not be obtained

The other classes come from the default collaborators (project file reader,
HTTP client, tool configuration). The check lets them through as they are.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

#: Number of response body characters kept in ``NetworkError.details``.
RESPONSE_PREVIEW = 200


def _present(**fields: Any) -> Dict[str, Any]:
    """Keep the keyword arguments whose value is not ``None``, in order."""
    return {key: value for key, value in fields.items() if value is not None}


class OwnVersionError(Exception):
    """Root of the ownversion exception tree.

    Args:
        message: What went wrong, phrased for the user.
        details: Extra key/value context; copied, never shared.
    """

    __slots__ = ("message", "details")

    def __init__(
        self, message: str, details: Optional[Mapping[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join("%s=%s" % item for item in self.details.items())
        return f"{self.message} ({context})"

    def __repr__(self) -> str:
        return "{}(message={!r}, details={!r})".format(
            type(self).__name__, self.message, self.details
        )


class ConfigNotFoundError(OwnVersionError):
    """No project metadata record carries a package name."""


class PackageConfigError(OwnVersionError):
    """The selected metadata record lacks a usable name or version.

    ``field`` is ``"name"`` or ``"version"``; ``source`` is the location the
    record was read from.
    """

    __slots__ = ("package_name", "field", "source")

    def __init__(
        self,
        message: str,
        *,
        package_name: Optional[str] = None,
        field: Optional[str] = None,
        source: Optional[str] = None,
    ) -> None:
        self.package_name = package_name
        self.field = field
        self.source = source
        super().__init__(
            message, _present(package=package_name, field=field, source=source)
        )


class RegistryLookupError(OwnVersionError):
    """The latest published version could not be determined.

    ``cause`` is the exception the registry client raised, or ``None`` when
    the registry answered without a latest version.
    """

    __slots__ = ("package_name", "cause")

    def __init__(
        self,
        message: str,
        *,
        package_name: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.package_name = package_name
        self.cause = cause
        super().__init__(message, _present(package=package_name))


class ProjectFileError(OwnVersionError):
    """A project metadata file is missing, unreadable or malformed."""

    __slots__ = ("file_path", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.file_path = file_path
        self.original_error = original_error
        reason = str(original_error) if original_error is not None else None
        super().__init__(message, _present(path=file_path, original_error=reason))


class ConfigError(OwnVersionError):
    """The ownversion settings (file or command line) are invalid.

    ``config_path`` is ``None`` when the bad value came from the command line.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        self.config_path = config_path
        self.option = option
        super().__init__(message, _present(path=config_path, option=option))


class NetworkError(OwnVersionError):
    """An HTTP request failed or returned an unusable answer.

    The full ``response_body`` is kept on the instance; ``details`` only
    holds its first :data:`RESPONSE_PREVIEW` characters.
    """

    __slots__ = ("url", "status_code", "response_body")

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        self.response_body = response_body

        preview = response_body
        if preview is not None and len(preview) > RESPONSE_PREVIEW:
            preview = preview[:RESPONSE_PREVIEW] + "..."
        super().__init__(
            message, _present(url=url, status_code=status_code, response=preview)
        )


class PyPIError(NetworkError):
    """The package index rejected a request, e.g. an unknown project (404)."""

    __slots__ = ("package_name",)

    def __init__(
        self, message: str, *, package_name: Optional[str] = None, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        self.package_name = package_name
        if package_name is not None:
            self.details["package"] = package_name
