"""Typed dataclasses describing md_pages export configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

from md_pages._constants import MARKDOWN_SUFFIX

DEFAULT_PLACEHOLDER_NAVIGATION = (
    "Export a folder to generate the file navigation in this panel."
)


class ConfigError(ValueError):
    """Raised when the export configuration is invalid."""


@dc.dataclass(slots=True)
class ExportSettings:
    """Options controlling how a single page is rendered and written."""

    extra_extensions: list[str] = dc.field(default_factory=list)
    output_dir: Path | None = None
    lang: str = "en"
    format_html: bool = True
    format_timeout: float = 10.0
    indent: int = 2
    max_workers: int = 8
    pygments_style: str = "default"
    placeholder_navigation: str = DEFAULT_PLACEHOLDER_NAVIGATION

    @property
    def extensions(self) -> tuple[str, ...]:
        """Return every file suffix treated as a Markdown document."""
        return (MARKDOWN_SUFFIX, *(ext for ext in self.extra_extensions if ext != MARKDOWN_SUFFIX))


@dc.dataclass(slots=True)
class NavigationSettings:
    """Presentation of the workspace file navigation panel."""

    title: str = "Documents"
    remark: str = ""
    folder_aliases: dict[str, str] = dc.field(default_factory=dict)
    exclude: list[str] = dc.field(default_factory=lambda: [".git", "node_modules"])


@dc.dataclass(slots=True)
class ExportConfig:
    """Complete configuration for page and workspace exports."""

    export: ExportSettings = dc.field(default_factory=ExportSettings)
    navigation: NavigationSettings = dc.field(default_factory=NavigationSettings)


__all__ = [
    "DEFAULT_PLACEHOLDER_NAVIGATION",
    "ConfigError",
    "ExportConfig",
    "ExportSettings",
    "NavigationSettings",
]
