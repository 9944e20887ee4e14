r"""Split Markdown text into prose, fenced-code, and callout segments.

Headings and image references only count as document structure when they sit
in prose. This module performs a single pass over the document lines and
returns ordered :class:`Segment` values whose concatenation reproduces the
input byte for byte, so later stages can rewrite prose and leave code alone.

Delimiters are only recognised at the start of a line (after optional
indentation). A run of three or more backticks opens a fenced block, a run of
three or more colons opens a callout, and the first later line made of a run
of the same character closes it. Same-kind nesting is not tracked: the first
closer wins. An unterminated block runs to the end of the text.

Example
-------
>>> from md_pages.blocks import SegmentKind, join_segments, scan_blocks
>>> text = "# Doc\n```sh\n# not a heading\n```\ntail\n"
>>> [segment.kind for segment in scan_blocks(text)]
[<SegmentKind.PLAIN: 'plain'>, <SegmentKind.FENCED: 'fenced'>, <SegmentKind.PLAIN: 'plain'>]
>>> join_segments(scan_blocks(text)) == text
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

LINE_BREAK_PATTERN = re.compile(r"(?<=\n)")
OPENER_PATTERN = re.compile(r"^[ \t]*(?P<run>`{3,}|:{3,})(?P<tag>[^\r\n]*)")
BLOCK_KINDS = {"`": "FENCED", ":": "CALLOUT"}


class SegmentKind(enum.Enum):
    """Classification of a contiguous run of document text."""

    PLAIN = "plain"
    FENCED = "fenced"
    CALLOUT = "callout"

    @property
    def is_prose(self) -> bool:
        """Return True for segments that may contribute headings and images."""
        return self is not SegmentKind.FENCED


@dc.dataclass(frozen=True, slots=True)
class Segment:
    """Contiguous slice of the source document.

    Attributes
    ----------
    text : str
        Verbatim text of the slice, delimiter lines included for blocks.
    kind : SegmentKind
        Whether the slice is prose, a fenced code block, or a callout.
    tag : str
        Info string following the opening delimiter (``"python"`` for
        ```` ```python ````, ``"message alert"`` for ``:::message alert``).
        Empty for plain segments.
    """

    text: str
    kind: SegmentKind
    tag: str = ""


def split_lines(text: str) -> list[str]:
    """Split ``text`` after each ``\\n``, keeping line endings.

    Only ``\\n`` ends a line; form feeds and Unicode separators stay inside it.

    >>> split_lines("a\\r\\nb\\x0cc\\n")
    ['a\\r\\n', 'b\\x0cc\\n']
    """
    return [line for line in LINE_BREAK_PATTERN.split(text) if line]


def _is_closer(line: str, char: str) -> bool:
    """Return True when ``line`` is a bare run of 3+ ``char`` characters."""
    stripped = line.strip()
    return len(stripped) >= 3 and stripped == char * len(stripped)


def scan_blocks(text: str) -> list[Segment]:
    """Return the ordered segments of ``text``.

    Parameters
    ----------
    text : str
        Full document text.

    Returns
    -------
    list[Segment]
        Segments in document order. Joining their ``text`` values yields
        ``text`` exactly. An empty document produces an empty list.
    """
    segments: list[Segment] = []
    plain: list[str] = []
    block: list[str] = []
    open_char: str | None = None
    open_tag = ""

    for line in split_lines(text):
        if open_char is None:
            match = OPENER_PATTERN.match(line)
            if not match:
                plain.append(line)
                continue
            if plain:
                segments.append(Segment("".join(plain), SegmentKind.PLAIN))
                plain = []
            open_char = match.group("run")[0]
            open_tag = match.group("tag").strip()
            block = [line]
            continue

        block.append(line)
        if _is_closer(line, open_char):
            segments.append(_block_segment(block, open_char, open_tag))
            block = []
            open_char = None
            open_tag = ""

    if open_char is not None:
        segments.append(_block_segment(block, open_char, open_tag))
    elif plain:
        segments.append(Segment("".join(plain), SegmentKind.PLAIN))
    return segments


def _block_segment(lines: list[str], char: str, tag: str) -> Segment:
    return Segment("".join(lines), SegmentKind[BLOCK_KINDS[char]], tag)


def join_segments(segments: cabc.Iterable[Segment]) -> str:
    """Concatenate segment texts back into a document."""
    return "".join(segment.text for segment in segments)


def prose_lines(segments: cabc.Iterable[Segment]) -> cabc.Iterator[str]:
    """Yield the lines of every plain or callout segment, without line endings."""
    for segment in segments:
        if segment.kind.is_prose:
            for line in split_lines(segment.text):
                yield line.rstrip("\r\n")


__all__ = [
    "Segment",
    "SegmentKind",
    "join_segments",
    "prose_lines",
    "scan_blocks",
    "split_lines",
]
