"""Unit tests for the Markdown block scanner.

These tests pin down how ``md_pages.blocks.scan_blocks`` splits a document
into prose, fenced-code, and callout segments. They focus on the lossless
round trip (joining the segments reproduces the input exactly) and on the
delimiter rules: line-start openers, bare closers, and unterminated blocks.

Usage
-----
Run ``pytest tests/test_blocks.py -v``. No fixtures are required.
"""

from __future__ import annotations

import pytest

from md_pages.blocks import (
    Segment,
    SegmentKind,
    join_segments,
    prose_lines,
    scan_blocks,
    split_lines,
)

MIXED_DOCUMENT = (
    "# Guide\n"
    "Intro paragraph.\n\n"
    "```python\n"
    "# a comment, not a heading\n"
    "print('hi')\n"
    "```\n"
    ":::message alert\n"
    "Careful now.\n"
    ":::\n"
    "## Tail\r\n"
    "last line without newline"
)


@pytest.mark.parametrize(
    "text",
    [
        MIXED_DOCUMENT,
        "",
        "plain text only",
        "```\nunterminated fence\n## not a heading",
        "::::details Spoiler\nhidden\n::::\n",
        "  ```sh\n  indented fence\n  ```\n",
    ],
)
def test_segments_join_back_to_input(text: str) -> None:
    assert join_segments(scan_blocks(text)) == text


def test_mixed_document_segment_kinds() -> None:
    segments = scan_blocks(MIXED_DOCUMENT)

    assert [segment.kind for segment in segments] == [
        SegmentKind.PLAIN,
        SegmentKind.FENCED,
        SegmentKind.CALLOUT,
        SegmentKind.PLAIN,
    ]
    assert segments[1].tag == "python"
    assert segments[2].tag == "message alert"
    assert segments[2].text.endswith(":::\n")


def test_empty_document_has_no_segments() -> None:
    assert scan_blocks("") == []


def test_document_without_delimiters_is_one_plain_segment() -> None:
    text = "# Title\n\nSome `inline` code and a :: pair.\n"

    assert scan_blocks(text) == [Segment(text, SegmentKind.PLAIN)]


def test_unterminated_block_runs_to_end_of_text() -> None:
    text = "intro\n```js\nlet a = 1;\n## hidden heading\n"
    segments = scan_blocks(text)

    assert [segment.kind for segment in segments] == [SegmentKind.PLAIN, SegmentKind.FENCED]
    assert segments[-1].text == "```js\nlet a = 1;\n## hidden heading\n"


def test_delimiter_must_start_the_line() -> None:
    text = "Use ``` to open a fence.\n"

    assert [segment.kind for segment in scan_blocks(text)] == [SegmentKind.PLAIN]


def test_closer_must_match_opening_character() -> None:
    text = "```\n:::\nstill code\n```\nafter\n"
    segments = scan_blocks(text)

    assert segments[0].kind is SegmentKind.FENCED
    assert segments[0].text == "```\n:::\nstill code\n```\n"
    assert segments[1] == Segment("after\n", SegmentKind.PLAIN)


def test_prose_lines_skip_fenced_code() -> None:
    lines = list(prose_lines(scan_blocks(MIXED_DOCUMENT)))

    assert "# a comment, not a heading" not in lines
    assert "Careful now." in lines
    assert "## Tail" in lines


def test_split_lines_breaks_on_newline_only() -> None:
    text = "form\x0cfeed\nsep\x1carator\r\nlast"

    assert split_lines(text) == ["form\x0cfeed\n", "sep\x1carator\r\n", "last"]


def test_delimiter_after_form_feed_does_not_open_a_block() -> None:
    text = "x\x0c```\ncode\n"

    assert scan_blocks(text) == [Segment(text, SegmentKind.PLAIN)]


def test_prose_lines_keep_unicode_separators_inside_a_line() -> None:
    segments = scan_blocks("one\u2028## two\nthree\r\n")

    assert list(prose_lines(segments)) == ["one\u2028## two", "three"]
