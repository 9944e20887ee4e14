"""Tests for the ``md-pages`` command functions.

The Cyclopts commands are called directly so exit handling stays under test
control; ``SystemExit`` carries the exit status the console script would
return.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest

from md_pages import cli
from md_pages.notifications import LOG

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def _reset_logger() -> cabc.Iterator[None]:
    """Drop handlers attached by ``setup_logging`` during a test."""
    yield
    for handler in list(LOG.handlers):
        LOG.removeHandler(handler)
    LOG.setLevel(logging.NOTSET)
    LOG.propagate = True


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_app_registers_commands() -> None:
    assert cli.app["page"] is not None
    assert cli.app["workspace"] is not None


def test_page_command_prints_written_path(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write(tmp_path / "guide.md", "# Guide\n")

    cli.page(source, output_dir=tmp_path / "out")

    assert (tmp_path / "out" / "guide.html").is_file()
    assert capsys.readouterr().out.strip().startswith("wrote ")


def test_page_command_reads_config_from_workspace_root(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    _write(tmp_path / "md-pages.yaml", "export:\n  lang: fr\n  format_html: false\n")
    source = _write(tmp_path / "docs" / "guide.md", "# Guide\n")
    spy = mocker.spy(cli, "discover_export_config")

    cli.page(source, workspace_root=tmp_path)

    spy.assert_called_once_with(tmp_path)
    html = (tmp_path / "docs" / "guide.html").read_text(encoding="utf-8")
    assert '<html lang="fr">' in html


def test_page_command_missing_document_exits(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.page(tmp_path / "missing.md")

    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_workspace_command_exports_folder(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(tmp_path / "ws" / "index.md", "# Home\n")
    _write(tmp_path / "ws" / "guides" / "setup.md", "# Setup\n")
    config = _write(tmp_path / "custom.yaml", "export:\n  format_html: false\n")

    cli.workspace(tmp_path / "ws", output_dir=tmp_path / "site", config=config)

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert all(line.startswith("wrote ") for line in lines)
    assert (tmp_path / "site" / "guides" / "setup.html").is_file()
    assert (tmp_path / "site" / "index.html").is_file()


def test_workspace_command_exits_when_a_document_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(tmp_path / "ok.md", "# Fine\n")
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe")

    with pytest.raises(SystemExit) as excinfo:
        cli.workspace(tmp_path)

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "wrote " in captured.out
    assert "1 document(s) failed: bad.md" in captured.err


def test_workspace_command_without_documents_exits(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.workspace(tmp_path)

    assert excinfo.value.code == 1
    assert "No Markdown documents" in capsys.readouterr().err


def test_verbose_flag_configures_logging(tmp_path: Path) -> None:
    source = _write(tmp_path / "guide.md", "# Guide\n")

    cli.page(source, verbose=True)

    assert LOG.level == logging.INFO
    assert LOG.handlers
