"""
Per-invocation state of the ownversion CLI.

The ``ownversion`` group records the global options on an
:class:`OwnVersionContext` and hands it to its commands through
:data:`pass_context`. A command loads the settings for the project it
works on and asks the context for a ready-wired
:class:`~ownversion.core.checker.OwnVersionChecker`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import click

from ownversion.utils.logger import get_logger
from ownversion.config import OwnVersionConfig, apply_overrides, load_config
from ownversion.core import OwnVersionChecker, ProjectConfigReader, PyPIRegistryClient

logger = get_logger("context")


class OwnVersionContext:
    """State shared between the CLI group and its commands.

    Attributes:
        config: Effective settings; defaults until :meth:`load_settings`.
        config_path: Settings file given with ``--config``, if any.
        overrides: Registry options from the command line (``None`` = unset).
        verbose: ``-v`` count.
        color: Whether colored output was requested.
    """

    __slots__ = ("config", "config_path", "overrides", "verbose", "color")

    def __init__(
        self,
        config: Optional[OwnVersionConfig] = None,
        *,
        config_path: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        verbose: int = 0,
        color: bool = True,
    ) -> None:
        self.config = config if config is not None else OwnVersionConfig()
        self.config_path = config_path
        self.overrides = dict(overrides or {})
        self.verbose = verbose
        self.color = color

    def load_settings(self, project_dir: Optional[Path] = None) -> OwnVersionConfig:
        """Load the settings that apply to *project_dir* and keep them.

        Without ``--config`` the settings file is looked up in *project_dir*
        (default: working directory). Command-line overrides win over it.

        Raises:
            ConfigError: The settings file or an override is invalid.
        """
        loaded = load_config(self.config_path, base_dir=project_dir)
        self.config = apply_overrides(loaded, **self.overrides)
        logger.debug(
            "Settings: %s (from %s)",
            self.config.to_log_dict(),
            self.config.source_path or "defaults",
        )
        return self.config

    def registry_client(self) -> PyPIRegistryClient:
        """Registry client configured from the current settings."""
        return PyPIRegistryClient(
            registry_url=self.config.registry_url,
            timeout=self.config.timeout,
            verify_ssl=self.config.verify_ssl,
        )

    def make_checker(self, project_dir: Optional[Path] = None) -> OwnVersionChecker:
        """Checker for the project in *project_dir* (default: working directory)."""
        return OwnVersionChecker(
            config_reader=ProjectConfigReader(project_dir),
            registry_client=self.registry_client(),
        )


#: Click decorator injecting :class:`OwnVersionContext` into commands.
pass_context = click.make_pass_decorator(OwnVersionContext, ensure=True)
