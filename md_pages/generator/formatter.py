"""Pretty-print page HTML without ever blocking the write.

:func:`prettify_html` re-indents only the block structure of a page. Elements
holding text (paragraphs, list items, headings, table cells, code) are written
back exactly as parsed, so indentation never adds visible whitespace around
inline markup.

The formatter runs on a daemon thread and is given ``timeout`` seconds. When it
raises or overruns, a single warning is recorded and the unformatted HTML is
returned instead, so a pathological document still produces a page. An
overrunning thread is abandoned and does not keep the process alive.
"""

from __future__ import annotations

import threading
import typing as typ
from html import escape

from bs4 import BeautifulSoup, Doctype, NavigableString, Tag

from md_pages.notifications import sanitize_message

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from md_pages.notifications import Notifier


# Elements whose children are re-indented when every child is block level.
CONTAINER_TAGS = frozenset(
    {
        "html",
        "head",
        "body",
        "div",
        "section",
        "article",
        "aside",
        "nav",
        "header",
        "footer",
        "main",
        "blockquote",
        "ul",
        "ol",
        "dl",
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
    }
)
# Elements that may start their own line; non-containers are kept verbatim.
BLOCK_TAGS = CONTAINER_TAGS | frozenset(
    {
        "p",
        "li",
        "dt",
        "dd",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "pre",
        "hr",
        "th",
        "td",
        "caption",
        "figure",
        "details",
        "meta",
        "link",
        "title",
        "style",
        "script",
    }
)


def _is_blank(node: object) -> bool:
    return type(node) is NavigableString and not node.strip()


def _open_tag(tag: Tag) -> str:
    parts = [tag.name]
    for name, value in tag.attrs.items():
        text = " ".join(value) if isinstance(value, list) else str(value)
        parts.append(f'{name}="{escape(text, quote=True)}"')
    return f"<{' '.join(parts)}>"


def _can_indent(tag: Tag) -> bool:
    """Return True when ``tag``'s children can move to their own lines."""
    if tag.name not in CONTAINER_TAGS:
        return False
    for child in tag.children:
        if _is_blank(child):
            continue
        if not isinstance(child, Tag) or child.name not in BLOCK_TAGS:
            return False
    return True


def _format_node(node: object, depth: int, indent: int, lines: list[str]) -> None:
    pad = " " * (depth * indent)
    if isinstance(node, Doctype):
        lines.append(node.output_ready())
    elif isinstance(node, Tag) and _can_indent(node):
        lines.append(f"{pad}{_open_tag(node)}")
        for child in node.children:
            if not _is_blank(child):
                _format_node(child, depth + 1, indent, lines)
        lines.append(f"{pad}</{node.name}>")
    elif isinstance(node, Tag):
        lines.append(f"{pad}{node.decode()}")
    elif not _is_blank(node):
        lines.append(f"{pad}{node.output_ready()}")  # type: ignore[attr-defined]


def prettify_html(html: str, *, indent: int = 2) -> str:
    """Return ``html`` with its block structure re-indented.

    >>> prettify_html("<div><p>Use <b>this</b>.</p></div>").splitlines()
    ['<div>', '  <p>Use <b>this</b>.</p>', '</div>']
    """
    soup = BeautifulSoup(html, "html.parser")
    lines: list[str] = []
    for node in soup.contents:
        _format_node(node, 0, indent, lines)
    return "\n".join(lines) + "\n"


def format_with_fallback(
    html: str,
    formatter: cabc.Callable[[str], str],
    *,
    timeout: float,
    notifier: Notifier,
    title: str,
) -> str:
    """Format ``html`` with ``formatter``, degrading to the input on failure.

    Parameters
    ----------
    html : str
        Assembled page HTML.
    formatter : Callable[[str], str]
        Pretty printer; may raise or hang.
    timeout : float
        Seconds to wait for ``formatter`` before giving up.
    notifier : Notifier
        Receives one warning when formatting fails or times out.
    title : str
        Document title included in the warning.

    Returns
    -------
    str
        The formatted HTML, or ``html`` unchanged when formatting failed.
    """
    outcome: dict[str, typ.Any] = {}

    def _run() -> None:
        try:
            outcome["html"] = formatter(html)
        except Exception as exc:  # noqa: BLE001 - reported by the waiting thread
            outcome["error"] = exc

    worker = threading.Thread(target=_run, name="md-pages-format", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        notifier.warning(
            f"{title}: HTML formatting timed out after {timeout:g}s; "
            "writing unformatted output"
        )
        return html
    if "error" in outcome:
        exc = outcome["error"]
        detail = sanitize_message(str(exc)) or type(exc).__name__
        notifier.warning(
            f"{title}: HTML could not be formatted ({detail}); writing unformatted output"
        )
        return html
    return outcome["html"]


__all__ = ["format_with_fallback", "prettify_html"]
