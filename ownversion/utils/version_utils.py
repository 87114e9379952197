"""
Version comparison utilities for ownversion.

Versions are parsed with :mod:`packaging` (PEP 440), which orders plain
``MAJOR.MINOR.PATCH`` strings exactly like Semantic Versioning and also
accepts the pre-release, post-release, and local forms PyPI publishes.
"""

from __future__ import annotations

from typing import Tuple

from packaging.version import InvalidVersion, Version, parse


def parse_version(value: str) -> Version:
    """Parse a version string.

    Raises:
        InvalidVersion: *value* is not a valid PEP 440 version.

    Examples:
        >>> parse_version("1.2.3")
        <Version('1.2.3')>
    """
    parsed = parse(value)
    if not isinstance(parsed, Version):
        raise InvalidVersion(value)
    return parsed


def is_at_least(version: Version, other: Version) -> bool:
    """Return True if *version* is the same as or newer than *other*.

    Examples:
        >>> is_at_least(parse_version("2.0.0"), parse_version("1.9.9"))
        True
        >>> is_at_least(parse_version("1.2.0"), parse_version("1.3.0"))
        False
    """
    return version >= other


def get_update_type(current_version: str, latest_version: str) -> str:
    """Classify the gap between the current and the latest version.

    Returns:
        One of:
            - ``"same"``    : Versions are identical
            - ``"ahead"``   : Current version is newer than the latest release
            - ``"major"``   : Major version change available
            - ``"minor"``   : Minor version change available
            - ``"patch"``   : Patch-level change available
            - ``"update"``  : Newer release that differs only past the patch
            - ``"unknown"`` : Either version cannot be parsed

    Examples:
        >>> get_update_type("1.0.0", "2.0.0")
        'major'
        >>> get_update_type("1.2.3", "1.2.3")
        'same'
    """
    try:
        current = parse_version(current_version)
        latest = parse_version(latest_version)
    except InvalidVersion:
        return "unknown"

    if current == latest:
        return "same"

    if current > latest:
        return "ahead"

    current_release = _normalize_release(current)
    latest_release = _normalize_release(latest)

    for label, before, after in zip(
        ("major", "minor", "patch"), current_release, latest_release
    ):
        if before != after:
            return label

    # Pre-release -> release, post-releases, and the like
    return "update"


def _normalize_release(version: Version) -> Tuple[int, int, int]:
    """Pad or cut a version's release segment to (major, minor, patch)."""
    release = tuple(version.release[:3]) + (0,) * (3 - len(version.release[:3]))
    return release[0], release[1], release[2]
