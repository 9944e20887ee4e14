"""Unit tests for the table-of-contents heading tree.

The heading tree is built from prose headings only, keeps every heading
exactly once in document order, and tolerates level skips. The tests also
cover the slug rules shared with rendered heading ids and the document title
lookup used for page titles and navigation labels.
"""

from __future__ import annotations

import typing as typ

import pytest

from md_pages.blocks import scan_blocks
from md_pages.headings import (
    build_heading_tree,
    collect_heading_lines,
    document_title,
    encode_slug,
    slugify,
    toc_entries,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from md_pages.headings import HeadingNode, HeadingTree


def _walk(tree: HeadingTree) -> cabc.Iterator[tuple[int, HeadingNode]]:
    """Yield ``(depth, node)`` pairs in document order."""
    stack = [(1, handle) for handle in reversed(tree.roots)]
    while stack:
        depth, handle = stack.pop()
        node = tree.nodes[handle]
        yield depth, node
        stack.extend((depth + 1, child) for child in reversed(node.children))


def test_headings_inside_fenced_code_are_ignored() -> None:
    text = (
        "# Title\n"
        "## Install\n"
        "```sh\n"
        "## Not a heading\n"
        "```\n"
        "## Configure\n"
    )
    lines = collect_heading_lines(scan_blocks(text), "Title")

    assert lines == ["# Title", "## Install", "## Configure"]


def test_callout_headings_are_collected() -> None:
    text = ":::message\n## Inside callout\n:::\n"

    assert collect_heading_lines(scan_blocks(text), "Doc") == ["# Doc", "## Inside callout"]


def test_level_one_headings_are_not_collected() -> None:
    text = "# Title\n# Second top\n## Real\n####### seven\n"

    assert collect_heading_lines(scan_blocks(text), "Title") == ["# Title", "## Real"]


def test_tree_preserves_every_heading_in_order() -> None:
    lines = ["# Title", "## A", "### A1", "#### A1a", "## B", "### B1", "## C"]
    tree = build_heading_tree(lines)

    assert [node.raw_line for _depth, node in _walk(tree)] == lines
    assert [depth for depth, _node in _walk(tree)] == [1, 2, 3, 4, 2, 3, 2]


def test_skipped_level_attaches_to_nearest_shallower_heading() -> None:
    tree = build_heading_tree(["# T", "### deep", "## A", "#### deeper", "## B"])
    root = tree.roots[0]

    assert [node.text for node in tree.children(root)] == ["deep", "A", "B"]
    a_handle = tree.nodes[root].children[1]
    assert [node.text for node in tree.children(a_handle)] == ["deeper"]
    assert sorted(node.raw_line for _depth, node in _walk(tree)) == sorted(
        ["# T", "### deep", "## A", "#### deeper", "## B"]
    )


@pytest.mark.parametrize("lines", [[], ["# Title"], ["# Title", "## Only"]])
def test_fewer_than_three_lines_produce_empty_tree(lines: list[str]) -> None:
    tree = build_heading_tree(lines)

    assert not tree
    assert toc_entries(tree) == []


def test_toc_entries_carry_encoded_hrefs_and_tooltips() -> None:
    tree = build_heading_tree(["# Title", "## Café `config`", "### Next Step"])
    [root] = toc_entries(tree)
    [child] = root["children"]

    assert root["href"] == "#title"
    assert child["label"] == "Café `config`"
    assert child["href"] == "#caf%C3%A9-config"
    assert child["tooltip"] == "## Café `config`"
    assert child["level"] == 2
    assert child["children"][0]["href"] == "#next-step"


def test_slug_helpers() -> None:
    assert slugify("Getting Started") == "getting-started"
    assert encode_slug("a/b `c`") == "a%2Fb%20c"
    assert encode_slug("keep-_.!~*'()") == "keep-_.!~*'()"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("# Hello\nbody\n", "Hello"),
        ("preface\n### Deep first ###\n# Later\n", "Deep first"),
        ("## <!-- wip --> Draft\n", "Draft"),
        ("```md\n# Example\n```\n## Real\n", "Real"),
        ("no heading at all\n", "Untitled"),
        ("#\n", "Untitled"),
        ("intro\x0c# Not a title\n## Real\n", "Real"),
        ("", "Untitled"),
    ],
)
def test_document_title(text: str, expected: str) -> None:
    assert document_title(text) == expected
