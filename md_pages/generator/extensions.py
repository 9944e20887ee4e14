"""Markdown extensions for callout blocks and heading anchors.

``CalloutExtension`` turns ``:::tag label`` … ``:::`` regions into
``<blockquote class="callout callout-tag">`` elements whose body is still
parsed as Markdown (via ``md_in_html``). ``HeadingAnchorExtension`` gives every
heading an ``id`` derived from its text with the same slug rules used by the
table of contents, so TOC links land on the rendered headings.
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from md_pages.headings import slugify

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

CALLOUT_OPEN_PATTERN = re.compile(r"^[ \t]*(?P<run>:{3,})(?P<tag>[\w-]+)?[ \t]*(?P<label>.*?)\s*$")
CALLOUT_CLOSE_PATTERN = re.compile(r"^[ \t]*:{3,}\s*$")
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
STASH_PLACEHOLDER_PATTERN = re.compile("\x02wzxhzdk:\\d+\x03")
MESSAGE_TAG = "message"


class CalloutExtension(Extension):
    """Render colon-fenced callouts as Markdown-bearing block quotes."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the callout preprocessor between fenced code and raw HTML."""
        md.preprocessors.register(CalloutPreprocessor(md), "md_pages_callouts", 22)


class CalloutPreprocessor(Preprocessor):
    """Rewrite callout delimiters into ``markdown="1"`` block quotes."""

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with callout openers and closers replaced by HTML."""
        output: list[str] = []
        depth = 0
        for line in lines:
            if depth and CALLOUT_CLOSE_PATTERN.match(line):
                depth -= 1
                output.extend(["", "</blockquote>", ""])
                continue
            opener = CALLOUT_OPEN_PATTERN.match(line)
            if opener and not CALLOUT_CLOSE_PATTERN.match(line):
                depth += 1
                output.extend(["", *self._open_tag(opener), ""])
                continue
            output.append(line)
        output.extend(["", "</blockquote>", ""] * depth)
        return output

    @staticmethod
    def _open_tag(match: re.Match[str]) -> list[str]:
        tag = (match.group("tag") or "note").lower()
        label = match.group("label") or ""
        classes = ["callout", f"callout-{tag}"]
        title: list[str] = []
        if tag == MESSAGE_TAG:
            classes.extend(word for word in label.split() if word)
        elif label:
            title = [f'<p class="callout-title">{escape(label)}</p>']
        class_attr = escape(" ".join(classes), quote=True)
        return [f'<blockquote class="{class_attr}" markdown="1">', *title]


class HeadingAnchorExtension(Extension):
    """Assign slug ids to rendered headings."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading-anchor treeprocessor after inline parsing."""
        md.treeprocessors.register(HeadingAnchorTreeprocessor(md), "md_pages_heading_ids", 15)


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Set ``id`` on headings that do not already carry one."""

    def run(self, root: Element) -> Element:
        """Walk ``root`` and add slug ids to heading elements."""
        for element in root.iter():
            if element.tag not in HEADING_TAGS or element.get("id"):
                continue
            text = STASH_PLACEHOLDER_PATTERN.sub("", "".join(element.itertext())).strip()
            if text:
                element.set("id", slugify(text).replace("`", ""))
        return root


__all__ = [
    "CalloutExtension",
    "CalloutPreprocessor",
    "HeadingAnchorExtension",
    "HeadingAnchorTreeprocessor",
]
