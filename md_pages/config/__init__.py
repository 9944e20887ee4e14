"""Load and validate md_pages export configuration.

This subpackage parses an optional ``md-pages.yaml`` file, applies defaults,
and produces typed dataclasses (:class:`ExportConfig`,
:class:`ExportSettings`, :class:`NavigationSettings`) that the exporter
consumes. :func:`load_export_config` reads an explicit file;
:func:`discover_export_config` looks for one in a workspace root and falls
back to defaults.

Examples
--------
>>> from pathlib import Path
>>> from md_pages.config import discover_export_config
>>> config = discover_export_config(Path("docs"))  # doctest: +SKIP
>>> config.export.extensions  # doctest: +SKIP
('.md',)
"""

from .loader import discover_export_config, load_export_config
from .models import ConfigError, ExportConfig, ExportSettings, NavigationSettings

__all__ = [
    "ConfigError",
    "ExportConfig",
    "ExportSettings",
    "NavigationSettings",
    "discover_export_config",
    "load_export_config",
]
