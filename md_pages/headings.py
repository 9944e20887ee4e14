r"""Build the page-local table of contents from Markdown headings.

Heading lines are collected from prose segments only (see
:mod:`md_pages.blocks`), restricted to depths two to six, and prefixed with a
synthetic level-one entry for the document title. The flat list is folded into
an outline stored in a :class:`HeadingTree` arena: nodes live in one list and
refer to their children by index.

Example
-------
>>> from md_pages.headings import build_heading_tree
>>> tree = build_heading_tree(["# Title", "## A", "### A1", "## B"])
>>> [tree.nodes[i].text for i in tree.roots]
['Title']
>>> [child.text for child in tree.children(tree.roots[0])]
['A', 'B']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from urllib.parse import quote

from ._constants import FALLBACK_TITLE
from .blocks import Segment, prose_lines, scan_blocks

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TITLE_PATTERN = re.compile(r"^#{1,6} ")
TOC_HEADING_PATTERN = re.compile(r"^#{2,6} ")
MARKER_PATTERN = re.compile(r"^#+")
HTML_COMMENT_PATTERN = re.compile(r"<!--(.*?)-->")
MIN_TOC_LINES = 3
# Characters left alone by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dc.dataclass(slots=True)
class HeadingNode:
    """Single entry in the table of contents.

    Attributes
    ----------
    raw_line : str
        Heading line exactly as written, used as the link tooltip.
    level : int
        Number of leading ``#`` markers (1-6).
    text : str
        Heading text with markers stripped from both ends.
    slug : str
        Lowercase identifier with spaces replaced by hyphens.
    slug_encoded : str
        ``slug`` without backticks, percent-encoded for use in a fragment.
    children : list[int]
        Arena indices of the nested headings, in document order.
    """

    raw_line: str
    level: int
    text: str
    slug: str
    slug_encoded: str
    children: list[int] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class HeadingTree:
    """Arena of heading nodes plus the indices of the root entries."""

    nodes: list[HeadingNode] = dc.field(default_factory=list)
    roots: list[int] = dc.field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.roots)

    def add(self, node: HeadingNode) -> int:
        """Store ``node`` in the arena and return its handle."""
        self.nodes.append(node)
        return len(self.nodes) - 1

    def children(self, handle: int) -> list[HeadingNode]:
        """Return the child nodes of the node at ``handle``."""
        return [self.nodes[child] for child in self.nodes[handle].children]


def slugify(text: str) -> str:
    """Return the anchor slug for heading ``text``.

    >>> slugify("Foo Bar")
    'foo-bar'
    """
    return text.replace(" ", "-").lower()


def encode_slug(slug: str) -> str:
    """Strip backticks from ``slug`` and percent-encode it for a fragment."""
    return quote(slug.replace("`", ""), safe=_URI_COMPONENT_SAFE)


def parse_heading_line(line: str) -> HeadingNode:
    """Return a childless :class:`HeadingNode` for an ATX heading line."""
    marker = MARKER_PATTERN.match(line)
    level = len(marker.group(0)) if marker else 0
    text = line.strip("#").strip()
    slug = slugify(text)
    return HeadingNode(
        raw_line=line,
        level=level,
        text=text,
        slug=slug,
        slug_encoded=encode_slug(slug),
    )


def build_heading_tree(lines: cabc.Sequence[str]) -> HeadingTree:
    """Fold a flat list of heading lines into a :class:`HeadingTree`.

    Parameters
    ----------
    lines : Sequence[str]
        Heading lines in document order, the synthetic title line first.

    Returns
    -------
    HeadingTree
        Outline keyed by nesting level. Empty when ``lines`` holds fewer than
        three entries, since a title plus one heading does not warrant a
        contents panel.

    Notes
    -----
    A heading deeper than any open ancestor (``###`` before the first ``##``)
    attaches to the nearest shallower open heading instead of failing.
    """
    tree = HeadingTree()
    if len(lines) < MIN_TOC_LINES:
        return tree

    stack: list[int | None] = []
    for line in lines:
        node = parse_heading_line(line)
        if node.level < 1:
            continue
        handle = tree.add(node)
        if node.level == 1 or not stack:
            tree.roots.append(handle)
            stack = [None] * (node.level - 1) + [handle]
            continue

        parent = _nearest_open_ancestor(stack, node.level)
        if parent is None:
            tree.roots.append(handle)
        else:
            tree.nodes[parent].children.append(handle)
        del stack[node.level - 1 :]
        stack.extend([None] * (node.level - 1 - len(stack)))
        stack.append(handle)
    return tree


def _nearest_open_ancestor(stack: list[int | None], level: int) -> int | None:
    """Return the deepest stack entry shallower than ``level``."""
    for index in range(min(level - 2, len(stack) - 1), -1, -1):
        if stack[index] is not None:
            return stack[index]
    return None


def collect_heading_lines(segments: cabc.Iterable[Segment], title: str) -> list[str]:
    """Return the title line followed by every prose heading of depth 2-6."""
    headings = [line for line in prose_lines(segments) if TOC_HEADING_PATTERN.match(line)]
    return [f"# {title}", *headings]


def document_title(text: str) -> str:
    """Return the first ATX heading of ``text`` or the fallback title.

    HTML comments are removed and ``#`` markers stripped from both ends.
    Headings inside fenced code blocks are ignored.

    >>> document_title("intro\\n## <!-- draft --> Setup ##\\n")
    'Setup'
    >>> document_title("no headings here")
    'Untitled'
    """
    for line in prose_lines(scan_blocks(text)):
        if TITLE_PATTERN.match(line):
            cleaned = HTML_COMMENT_PATTERN.sub("", line)
            return cleaned.strip().strip("#").strip() or FALLBACK_TITLE
    return FALLBACK_TITLE


def toc_entries(tree: HeadingTree) -> list[dict[str, typ.Any]]:
    """Return nested template entries for ``tree`` in pre-order."""

    def _entry(handle: int, depth: int) -> dict[str, typ.Any]:
        node = tree.nodes[handle]
        return {
            "label": node.text,
            "href": f"#{node.slug_encoded}",
            "tooltip": node.raw_line,
            "level": depth,
            "children": [_entry(child, depth + 1) for child in node.children],
        }

    return [_entry(handle, 1) for handle in tree.roots]


__all__ = [
    "HeadingNode",
    "HeadingTree",
    "build_heading_tree",
    "collect_heading_lines",
    "document_title",
    "encode_slug",
    "parse_heading_line",
    "slugify",
    "toc_entries",
]
