"""Assemble one Markdown document into a self-contained HTML page.

:class:`PageBuilder` runs the per-document pipeline: it scans the text into
prose and code segments, builds the table of contents from prose headings,
swaps local images for placeholders, renders the Markdown, inlines the images
as data URIs, fills the ``export_page.jinja`` template, applies the final HTML
clean-ups, and pretty-prints the result with a timeout fallback.

Example
-------
>>> from pathlib import Path
>>> from md_pages.generator import PageBuilder, SourceDocument
>>> builder = PageBuilder()
>>> page = builder.build(SourceDocument(Path("/tmp/a.md"), "# Hello\\n"))
>>> page.title
'Hello'
"""

from __future__ import annotations

import typing as typ
from html import escape
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from md_pages.blocks import join_segments, scan_blocks
from md_pages.config import ExportConfig
from md_pages.headings import (
    build_heading_tree,
    collect_heading_lines,
    document_title,
    toc_entries,
)
from md_pages.images import ImageInliner
from md_pages.notifications import Notifier

from .formatter import format_with_fallback, prettify_html
from .models import RenderedPage, SourceDocument
from .postprocess import postprocess_html
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class PageBuilder:
    """Render source documents into complete, styled HTML pages."""

    def __init__(
        self,
        config: ExportConfig | None = None,
        *,
        notifier: Notifier | None = None,
        templates_dir: Path | None = None,
        formatter: cabc.Callable[[str], str] | None = None,
    ) -> None:
        """Initialize the builder with configuration and template context.

        Parameters
        ----------
        config : ExportConfig, optional
            Export options; defaults to :class:`ExportConfig` defaults.
        notifier : Notifier, optional
            Receives per-image and formatting warnings.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        formatter : Callable[[str], str], optional
            HTML pretty printer; defaults to BeautifulSoup ``prettify`` with the
            configured indent.
        """
        self.config = config or ExportConfig()
        self.notifier = notifier or Notifier()
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        settings = self.config.export
        self.renderer = HtmlContentRenderer(settings.pygments_style)
        self.formatter = formatter or (
            lambda html: prettify_html(html, indent=settings.indent)
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("export_page.jinja")
        self.toc_template = self.env.get_template("toc.jinja")

    def build(
        self,
        document: SourceDocument,
        *,
        workspace_root: Path | None = None,
        navigation_html: str | None = None,
    ) -> RenderedPage:
        """Render ``document`` into a :class:`RenderedPage`.

        Parameters
        ----------
        document : SourceDocument
            Markdown document to render.
        workspace_root : Path, optional
            Root used to resolve ``/``-prefixed image paths.
        navigation_html : str, optional
            File navigation markup; a placeholder note is shown when ``None``.

        Returns
        -------
        RenderedPage
            Title and HTML of the finished page.
        """
        title = document_title(document.text)
        segments = scan_blocks(document.text)
        tree = build_heading_tree(collect_heading_lines(segments, title))

        inliner = ImageInliner(document.path.parent, workspace_root)
        segments, references = inliner.rewrite(segments)
        content_html = self.renderer.markdown(join_segments(segments))
        content_html = inliner.resolve(
            content_html, references, notifier=self.notifier, title=title
        )

        settings = self.config.export
        has_navigation = navigation_html is not None
        if navigation_html is None:
            navigation_html = f"<p>{escape(settings.placeholder_navigation)}</p>"
        html = self.template.render(
            lang=settings.lang,
            title=title,
            content_html=content_html,
            toc_html=self.toc_template.render(items=toc_entries(tree)),
            navigation_html=navigation_html,
            has_navigation=has_navigation,
            pygments_css=self.renderer.stylesheet,
        )
        html = postprocess_html(html)
        if settings.format_html:
            html = format_with_fallback(
                html,
                self.formatter,
                timeout=settings.format_timeout,
                notifier=self.notifier,
                title=title,
            )
        return RenderedPage(title=title, html=html)


__all__ = ["PageBuilder"]
