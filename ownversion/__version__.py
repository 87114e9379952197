"""
ownversion version information.

Single source of truth for the package version, read by the packaging
backend, the ``--version`` flag, and the HTTP User-Agent header.
"""

from __future__ import annotations

__version__ = "0.1.0"
