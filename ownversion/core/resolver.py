"""Identity resolution for ownversion.

Picks the project metadata record that describes the local package.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ownversion.models.identity import ConfigRecord
from ownversion.utils.logger import get_logger

logger = get_logger("resolver")


def resolve_identity_record(
    records: Iterable[ConfigRecord],
) -> Optional[ConfigRecord]:
    """Return the first record that carries a non-empty package name.

    Records are scanned in the order supplied, so earlier records take
    precedence. Only the name decides; a selected record may still lack a
    version.

    Args:
        records: Metadata records, highest precedence first.

    Returns:
        The selected record, or ``None`` when no record names a package
        (including an empty sequence).

    Example::

        >>> resolve_identity_record([
        ...     ConfigRecord(version="1.0.0"),
        ...     ConfigRecord(name="demo"),
        ... ])
        ConfigRecord(name='demo', version=None, source=None, section=None)
    """
    for record in records:
        if record.name:
            logger.debug("Using package metadata from %s", record.location)
            return record

    return None
