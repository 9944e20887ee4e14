"""Cyclopts CLI entrypoint for exporting Markdown documents to HTML pages.

The ``md-pages`` console script renders a single document (``md-pages page``)
or every document under a folder (``md-pages workspace``) into self-contained
HTML files with an embedded table of contents and, for folders, a file
navigation menu.

Examples
--------
Export one document beside its source:

>>> from md_pages.cli import main
>>> main()  # doctest: +SKIP

Export a folder into a separate site directory:

>>> from md_pages.cli import app
>>> app(["workspace", "docs", "--output-dir", "site"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ExportConfig, discover_export_config, load_export_config
from .exporter import ExportError, PageExporter
from .notifications import Notifier, setup_logging

app = App(name="md-pages", config=cyclopts.config.Env("MD_PAGES_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(config: Path | None, search_root: Path) -> ExportConfig:
    """Load ``config`` when given, otherwise look for one in ``search_root``."""
    if config is not None:
        return load_export_config(config)
    return discover_export_config(search_root)


def _fail(message: str) -> typ.NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(1)


@app.command(help="Export one Markdown document to a self-contained HTML page.")
def page(
    path: typ.Annotated[Path, Parameter(help="Markdown document to export")],
    *,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Write the page into this folder", env_var="MD_PAGES_OUTPUT_DIR"),
    ] = None,
    workspace_root: typ.Annotated[
        Path | None,
        Parameter(
            help="Root for '/'-prefixed image paths", env_var="MD_PAGES_WORKSPACE_ROOT"
        ),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to md-pages.yaml", env_var="MD_PAGES_CONFIG")
    ] = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Export a single document and print the written path.

    Parameters
    ----------
    path : Path
        Markdown document to export.
    output_dir : Path or None, optional
        Folder receiving the page; defaults to the document's folder.
    workspace_root : Path or None, optional
        Root used for ``/``-prefixed image paths and for config discovery.
    config : Path or None, optional
        Explicit configuration file; otherwise ``md-pages.yaml`` is looked up
        in ``workspace_root`` (or the document's folder).
    verbose : bool, optional
        Log informational notices.
    debug : bool, optional
        Log debug output.

    Raises
    ------
    SystemExit
        With status 1 when the document cannot be exported.
    """
    setup_logging(verbose=verbose, debug=debug)
    export_config = _load_config(config, workspace_root or path.parent)
    exporter = PageExporter(export_config, notifier=Notifier())
    try:
        written = exporter.export_page(
            path, output_dir=output_dir, workspace_root=workspace_root
        )
    except ExportError as exc:
        _fail(str(exc))
    if written is None:
        _fail(f"could not export {_format_path(path)}")
    print(f"wrote {_format_path(written)}")


@app.command(help="Export every Markdown document under a folder with file navigation.")
def workspace(
    root: typ.Annotated[Path, Parameter(help="Workspace folder to export")] = Path(),
    *,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Mirror the pages into this folder", env_var="MD_PAGES_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to md-pages.yaml", env_var="MD_PAGES_CONFIG")
    ] = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Export a folder of documents and print each written path.

    Parameters
    ----------
    root : Path, optional
        Workspace folder; defaults to the current directory.
    output_dir : Path or None, optional
        Folder receiving the pages, mirroring the workspace layout.
    config : Path or None, optional
        Explicit configuration file; otherwise ``<root>/md-pages.yaml``.
    verbose : bool, optional
        Log informational notices.
    debug : bool, optional
        Log debug output.

    Raises
    ------
    SystemExit
        With status 1 when the export cannot start or any document failed.
    """
    setup_logging(verbose=verbose, debug=debug)
    export_config = _load_config(config, root)
    exporter = PageExporter(export_config, notifier=Notifier())
    try:
        report = exporter.export_workspace(root, output_dir=output_dir)
    except ExportError as exc:
        _fail(str(exc))
    for written in report.written:
        print(f"wrote {_format_path(written)}")
    if not report.ok:
        _fail(f"{len(report.failed)} document(s) failed: {', '.join(report.failed)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``md-pages`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
