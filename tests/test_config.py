"""Tests for loading ``md-pages.yaml`` export configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from md_pages.config import (
    ConfigError,
    ExportConfig,
    discover_export_config,
    load_export_config,
)
from md_pages.config.models import DEFAULT_PLACEHOLDER_NAVIGATION


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "md-pages.yaml"
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_full_config_round_trip(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
export:
  extra_extensions: [markdown, .MDX, markdown]
  output_dir: site
  lang: ja
  format_html: false
  format_timeout: 2.5
  indent: 4
  max_workers: 3
  pygments_style: monokai
  placeholder_navigation: Single page export
navigation:
  title: Handbook
  remark: beta
  folder_aliases:
    /guides/setup/: Setup Guides
    api: API
  exclude: [drafts, "*.tmp"]
""",
    )

    config = load_export_config(path)

    export = config.export
    assert export.extensions == (".md", ".markdown", ".mdx")
    assert export.output_dir == tmp_path.resolve() / "site"
    assert export.lang == "ja"
    assert export.format_html is False
    assert export.format_timeout == pytest.approx(2.5)
    assert export.indent == 4
    assert export.max_workers == 3
    assert export.pygments_style == "monokai"
    assert export.placeholder_navigation == "Single page export"
    navigation = config.navigation
    assert navigation.title == "Handbook"
    assert navigation.remark == "beta"
    assert navigation.folder_aliases == {"guides/setup": "Setup Guides", "api": "API"}
    assert navigation.exclude == ["drafts", "*.tmp"]


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "md-pages.yaml"
    path.write_text("", encoding="utf-8")

    config = load_export_config(path)

    assert config == ExportConfig()
    assert config.export.extensions == (".md",)
    assert config.export.placeholder_navigation == DEFAULT_PLACEHOLDER_NAVIGATION
    assert config.navigation.exclude == [".git", "node_modules"]


def test_discover_falls_back_to_defaults(tmp_path: Path) -> None:
    assert discover_export_config(tmp_path) == ExportConfig()


def test_discover_reads_root_config(tmp_path: Path) -> None:
    _write_config(tmp_path, "navigation:\n  title: Found")

    assert discover_export_config(tmp_path).navigation.title == "Found"


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_export_config(tmp_path / "absent.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "- just\n- a list")

    with pytest.raises(TypeError, match="mapping"):
        load_export_config(path)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("export: [1, 2]", "'export' must be a mapping"),
        ("export:\n  format_timeout: -1", "'format_timeout' must be a positive number"),
        ("export:\n  format_timeout: soon", "'format_timeout' must be a positive number"),
        ("export:\n  indent: 1.5", "'indent' must be a whole number"),
        ("export:\n  max_workers: true", "'max_workers' must be a positive number"),
        ("export:\n  extra_extensions: 3", "'extra_extensions' must be a list"),
        ("navigation:\n  folder_aliases: [a]", "'folder_aliases' must map"),
        ("navigation:\n  exclude: drafts", "'exclude' must be a list"),
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, body: str, message: str) -> None:
    path = _write_config(tmp_path, body)

    with pytest.raises(ConfigError, match=message):
        load_export_config(path)


def test_absolute_output_dir_is_kept(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere"
    path = _write_config(tmp_path, f"export:\n  output_dir: {target}")

    assert load_export_config(path).export.output_dir == target
