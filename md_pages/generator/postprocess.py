"""Final clean-ups applied to assembled page HTML before it is written."""

from __future__ import annotations

import re

IMG_TAG_PATTERN = re.compile(r"<img\b[^>]*>")
IMG_ALT_PATTERN = re.compile(r'\balt="([^"]*)"')
IMG_TITLE_PATTERN = re.compile(r'\stitle="')
# Python-Markdown: <sup id="fnref-1"><a class="footnote-ref" href="#fn-1">1</a></sup>
SUP_FOOTNOTE_ID_PATTERN = re.compile(r'<sup id="(fnref[^"]*)"([^>]*)>')
# Reference links carrying the id themselves: <a href="#fn-1" id="fnref-1">
LINK_FOOTNOTE_ID_PATTERN = re.compile(
    r'<sup class="footnote-ref"><a href="#fn-([^"]+)" id="(fnref-[^"]+)"([^>]*)>'
)


def add_image_titles(html: str) -> str:
    """Copy each ``<img>`` tag's alt text into a ``title`` attribute.

    Images without alt text or with an explicit title are left unchanged.

    >>> add_image_titles('<img src="a.png" alt="Diagram">')
    '<img src="a.png" alt="Diagram" title="Diagram">'
    """

    def _repl(match: re.Match[str]) -> str:
        tag = match.group(0)
        if IMG_TITLE_PATTERN.search(tag):
            return tag
        alt = IMG_ALT_PATTERN.search(tag)
        if not alt or not alt.group(1):
            return tag
        return f'{tag[: alt.end()]} title="{alt.group(1)}"{tag[alt.end() :]}'

    return IMG_TAG_PATTERN.sub(_repl, html)


def detach_footnote_ids(html: str) -> str:
    """Move footnote reference ids into a preceding empty anchor span.

    The reference link keeps pointing at ``#fn-{id}`` while the ``fnref-{id}``
    target moves onto ``<span class="anchor-link">``, which the stylesheet
    offsets below the sticky headers.

    >>> detach_footnote_ids('<sup id="fnref-1"><a class="footnote-ref" href="#fn-1">1</a></sup>')
    '<span class="anchor-link" id="fnref-1"></span><sup><a class="footnote-ref" href="#fn-1">1</a></sup>'
    """
    html = SUP_FOOTNOTE_ID_PATTERN.sub(
        r'<span class="anchor-link" id="\1"></span><sup\2>', html
    )
    return LINK_FOOTNOTE_ID_PATTERN.sub(
        r'<span class="anchor-link" id="\2"></span>'
        r'<sup class="footnote-ref"><a href="#fn-\1"\3>',
        html,
    )


def postprocess_html(html: str) -> str:
    """Apply every final-HTML clean-up in order."""
    return detach_footnote_ids(add_image_titles(html))


__all__ = ["add_image_titles", "detach_footnote_ids", "postprocess_html"]
