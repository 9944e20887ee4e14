"""Load export configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from md_pages._constants import CONFIG_FILENAME

from .helpers import (
    _folder_aliases,
    _normalize_extensions,
    _optional_path,
    _positive_int,
    _positive_number,
    _string_list,
)
from .models import ConfigError, ExportConfig, ExportSettings, NavigationSettings


def load_export_config(path: Path) -> ExportConfig:
    """Load the YAML file describing export and navigation options.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (for example,
        ``md-pages.yaml``).

    Returns
    -------
    ExportConfig
        Parsed configuration with defaults applied to omitted keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If a section or value has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from md_pages.config import load_export_config
    >>> config = load_export_config(Path("md-pages.yaml"))  # doctest: +SKIP
    >>> config.navigation.title  # doctest: +SKIP
    'Documents'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent
    return ExportConfig(
        export=_build_export_settings(_section(raw, "export"), base_dir=base_dir),
        navigation=_build_navigation_settings(_section(raw, "navigation")),
    )


def discover_export_config(root: Path) -> ExportConfig:
    """Return the config stored in ``root``, or defaults when there is none."""
    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return load_export_config(candidate)
    return ExportConfig()


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` (empty when absent)."""
    value = raw.get(key) or {}
    match value:
        case dict():
            return value
        case _:
            msg = f"'{key}' must be a mapping."
            raise ConfigError(msg)


def _build_export_settings(
    payload: typ.Mapping[str, typ.Any], *, base_dir: Path
) -> ExportSettings:
    """Build ExportSettings from the ``export`` section."""
    base = ExportSettings()
    return ExportSettings(
        extra_extensions=_normalize_extensions(payload.get("extra_extensions")),
        output_dir=_optional_path(payload.get("output_dir"), base_dir=base_dir),
        lang=str(payload.get("lang", base.lang)),
        format_html=bool(payload.get("format_html", base.format_html)),
        format_timeout=_positive_number(
            payload.get("format_timeout"), key="format_timeout", default=base.format_timeout
        ),
        indent=_positive_int(payload.get("indent"), key="indent", default=base.indent),
        max_workers=_positive_int(
            payload.get("max_workers"), key="max_workers", default=base.max_workers
        ),
        pygments_style=str(payload.get("pygments_style", base.pygments_style)),
        placeholder_navigation=str(
            payload.get("placeholder_navigation", base.placeholder_navigation)
        ),
    )


def _build_navigation_settings(payload: typ.Mapping[str, typ.Any]) -> NavigationSettings:
    """Build NavigationSettings from the ``navigation`` section."""
    base = NavigationSettings()
    return NavigationSettings(
        title=str(payload.get("title", base.title)),
        remark=str(payload.get("remark", base.remark) or ""),
        folder_aliases=_folder_aliases(payload.get("folder_aliases")),
        exclude=_string_list(payload.get("exclude"), key="exclude", default=base.exclude),
    )


__all__ = ["discover_export_config", "load_export_config"]
