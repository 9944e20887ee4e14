"""Export single documents or whole folders of Markdown to HTML pages.

:class:`PageExporter` is the entry point behind the CLI. ``export_page`` writes
one document beside its source (or into an output folder) with a placeholder
navigation panel. ``export_workspace`` discovers every document under a root,
builds the shared folder tree once, and renders each document with its own
navigation menu on a bounded thread pool. Failures inside one document's
pipeline are reported through the :class:`~md_pages.notifications.Notifier`
and never stop its siblings; only global preconditions raise
:class:`ExportError`.

Example
-------
>>> from pathlib import Path
>>> from md_pages.exporter import PageExporter
>>> exporter = PageExporter()
>>> report = exporter.export_workspace(Path("docs"))  # doctest: +SKIP
>>> [path.name for path in report.written]  # doctest: +SKIP
['index.html', 'setup.html']
"""

from __future__ import annotations

import concurrent.futures as cf
import dataclasses as dc
import fnmatch
import os
import re
import typing as typ
from pathlib import Path, PurePosixPath

from ._constants import FALLBACK_TITLE, HTML_SUFFIX
from .config import ExportConfig
from .generator import PageBuilder, SourceDocument
from .headings import document_title
from .navigation import FolderEntry, NavigationRenderer, build_folder_tree
from .notifications import Notifier

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TRAILING_EXTENSION_PATTERN = re.compile(r"\.\w+?$")
DRIVE_LETTER_PATTERN = re.compile(r"^([a-z]):\\")


class ExportError(RuntimeError):
    """Raised when an export cannot start (missing document, root, or files)."""


@dc.dataclass(slots=True)
class ExportReport:
    """Outcome of a workspace export.

    Attributes
    ----------
    written : list[Path]
        Pages written successfully, sorted by path.
    failed : list[str]
        Root-relative paths of documents whose pipeline failed.
    """

    written: list[Path] = dc.field(default_factory=list)
    failed: list[str] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return True when every document was exported."""
        return not self.failed


def derive_output_path(source: Path, output_dir: Path | None = None) -> Path:
    r"""Return the ``.html`` path written for ``source``.

    The trailing extension is replaced with ``.html`` (appended when the name
    has none) and a lowercase drive letter prefix is uppercased.

    >>> derive_output_path(Path("docs/guide.md")).as_posix()
    'docs/guide.html'
    >>> derive_output_path(Path("notes/README"), Path("site")).as_posix()
    'site/README.html'
    """
    target = output_dir / source.name if output_dir is not None else source
    text = TRAILING_EXTENSION_PATTERN.sub(HTML_SUFFIX, str(target))
    text = DRIVE_LETTER_PATTERN.sub(lambda match: f"{match.group(1).upper()}:\\", text)
    if not text.endswith(HTML_SUFFIX):
        text += HTML_SUFFIX
    return Path(text)


def is_document(path: Path, extensions: cabc.Iterable[str]) -> bool:
    """Return True when ``path`` has one of the Markdown ``extensions``."""
    return path.suffix.lower() in tuple(extensions)


def discover_documents(
    root: Path, *, extensions: cabc.Iterable[str], exclude: cabc.Iterable[str] = ()
) -> list[Path]:
    """Return every document under ``root``, sorted by root-relative path.

    Directories or files whose name matches an ``exclude`` glob are skipped.
    """
    suffixes = tuple(extensions)
    patterns = tuple(exclude)
    found: list[Path] = []
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if not _excluded(name, patterns)]
        for name in filenames:
            path = Path(current) / name
            if not _excluded(name, patterns) and is_document(path, suffixes):
                found.append(path)
    return sorted(found, key=lambda path: path.relative_to(root).as_posix())


def _excluded(name: str, patterns: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


class PageExporter:
    """Write exported HTML pages and report per-document outcomes."""

    def __init__(
        self,
        config: ExportConfig | None = None,
        *,
        notifier: Notifier | None = None,
        templates_dir: Path | None = None,
        formatter: cabc.Callable[[str], str] | None = None,
    ) -> None:
        """Initialize the exporter.

        Parameters
        ----------
        config : ExportConfig, optional
            Export options; defaults to :class:`ExportConfig` defaults.
        notifier : Notifier, optional
            Collects success, warning, and error notices.
        templates_dir : Path, optional
            Directory containing the Jinja templates.
        formatter : Callable[[str], str], optional
            HTML pretty printer passed to :class:`PageBuilder`.
        """
        self.config = config or ExportConfig()
        self.notifier = notifier or Notifier()
        self.builder = PageBuilder(
            self.config,
            notifier=self.notifier,
            templates_dir=templates_dir,
            formatter=formatter,
        )
        self.navigation = NavigationRenderer(
            title=self.config.navigation.title,
            remark=self.config.navigation.remark,
            templates_dir=templates_dir,
        )

    def export_page(
        self,
        path: Path,
        *,
        output_dir: Path | None = None,
        workspace_root: Path | None = None,
    ) -> Path | None:
        """Export one document without file navigation.

        Parameters
        ----------
        path : Path
            Markdown document to export.
        output_dir : Path, optional
            Folder receiving the page; defaults to the configured output folder
            or the document's own folder.
        workspace_root : Path, optional
            Root used to resolve ``/``-prefixed image paths.

        Returns
        -------
        Path | None
            Written page, or ``None`` when rendering or writing failed (an
            error notice is recorded).

        Raises
        ------
        ExportError
            If ``path`` is missing or is not a Markdown document.
        """
        if not path.is_file():
            msg = f"Markdown document '{path}' not found."
            raise ExportError(msg)
        if not is_document(path, self.config.export.extensions):
            allowed = ", ".join(self.config.export.extensions)
            msg = f"'{path}' is not a Markdown document ({allowed})."
            raise ExportError(msg)
        target_dir = output_dir or self.config.export.output_dir
        return self._export_document(
            path.resolve(),
            output_path=derive_output_path(path.resolve(), target_dir),
            workspace_root=workspace_root.resolve() if workspace_root else None,
        )

    def export_workspace(self, root: Path, *, output_dir: Path | None = None) -> ExportReport:
        """Export every document under ``root`` with a shared file navigation.

        Parameters
        ----------
        root : Path
            Workspace folder to scan recursively.
        output_dir : Path, optional
            Folder receiving the pages, mirroring the folder structure under
            ``root``; defaults to the configured output folder or writing each
            page beside its source.

        Returns
        -------
        ExportReport
            Written pages and the documents that failed.

        Raises
        ------
        ExportError
            If ``root`` is not a directory or holds no Markdown documents.
        """
        if not root.is_dir():
            msg = f"Workspace root '{root}' is not a directory."
            raise ExportError(msg)
        root = root.resolve()
        documents = discover_documents(
            root,
            extensions=self.config.export.extensions,
            exclude=self.config.navigation.exclude,
        )
        if not documents:
            msg = f"No Markdown documents found under '{root}'."
            raise ExportError(msg)

        relative_paths = [path.relative_to(root).as_posix() for path in documents]
        tree = build_folder_tree(
            relative_paths,
            lambda relative: self._title_for(root / relative),
            root_name=root.name,
            folder_aliases=self.config.navigation.folder_aliases,
        )
        target_dir = output_dir or self.config.export.output_dir

        report = ExportReport()
        workers = min(self.config.export.max_workers, len(relative_paths))
        with cf.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="md-pages") as pool:
            futures = {
                pool.submit(self._export_member, root, relative, tree, target_dir): relative
                for relative in relative_paths
            }
            for future in cf.as_completed(futures):
                written = future.result()
                if written is None:
                    report.failed.append(futures[future])
                else:
                    report.written.append(written)
        report.written.sort()
        report.failed.sort()
        return report

    def _export_member(
        self, root: Path, relative: str, tree: FolderEntry, output_dir: Path | None
    ) -> Path | None:
        """Render one workspace document; never raises."""
        try:
            navigation_html = self.navigation.render(tree, relative)
        except Exception as exc:  # noqa: BLE001 - failures stay inside this document
            self.notifier.error(f"{relative}: navigation could not be rendered ({exc})")
            return None
        source = root / relative
        target_dir = None
        if output_dir is not None:
            target_dir = output_dir / PurePosixPath(relative).parent
        return self._export_document(
            source,
            output_path=derive_output_path(source, target_dir),
            workspace_root=root,
            navigation_html=navigation_html,
        )

    def _export_document(
        self,
        source: Path,
        *,
        output_path: Path,
        workspace_root: Path | None,
        navigation_html: str | None = None,
    ) -> Path | None:
        """Read, render, and write ``source``; report instead of raising."""
        try:
            document = SourceDocument.read(source)
        except (OSError, UnicodeDecodeError) as exc:
            self.notifier.error(f"{source.name}: document could not be read ({exc})")
            return None

        title = document_title(document.text)
        try:
            page = self.builder.build(
                document,
                workspace_root=workspace_root,
                navigation_html=navigation_html,
            )
        except Exception as exc:  # noqa: BLE001 - failures stay inside this document
            self.notifier.error(f"{title}: HTML export failed ({exc})")
            return None

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(page.html, encoding="utf-8")
        except OSError as exc:
            self.notifier.error(f"{page.title}: HTML export failed ({exc})")
            return None
        self.notifier.success(f"{page.title}: exported to {output_path}")
        return output_path

    def _title_for(self, path: Path) -> str:
        """Return the title of ``path``, falling back when it cannot be read."""
        try:
            return document_title(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError):
            return FALLBACK_TITLE


__all__ = [
    "ExportError",
    "ExportReport",
    "PageExporter",
    "derive_output_path",
    "discover_documents",
    "is_document",
]
