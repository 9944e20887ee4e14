r"""Inline local images into rendered pages as base64 data URIs.

Rewriting happens in two passes around the Markdown renderer. Before rendering,
:meth:`ImageInliner.rewrite` swaps every local image reference found on its own
line in prose or callout segments for a placeholder path. After rendering,
:meth:`ImageInliner.resolve` reads each referenced file and replaces the
placeholder ``src`` attribute with a ``data:`` URI. Fenced code is never
touched, and references that already point at a placeholder are skipped so the
rewrite can run more than once.

Example
-------
>>> from pathlib import Path
>>> from md_pages.blocks import join_segments, scan_blocks
>>> from md_pages.images import ImageInliner
>>> inliner = ImageInliner(Path("/docs"))
>>> segments, refs = inliner.rewrite(scan_blocks("![logo](img/logo.png)\n"))
>>> join_segments(segments)
'![logo](./TOBE_BASE64_IMGPATH_img/logo.png_TO_BE_BASE64_IMGPATH)\n'
>>> refs[0].resolved_path
PosixPath('/docs/img/logo.png')
"""

from __future__ import annotations

import base64
import dataclasses as dc
import os
import re
import typing as typ
from html import escape
from pathlib import Path

from ._constants import IMAGE_PLACEHOLDER_PREFIX, IMAGE_PLACEHOLDER_TEMPLATE
from .blocks import split_lines

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .blocks import Segment
    from .notifications import Notifier

IMAGE_LINE_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)!\[(?P<alt>[^\]]*)\]\((?P<src>[^)\s]+)"
    r"(?:\s*=\s*(?P<width>\d*)x(?P<height>\d*))?\)(?P<trail>[ \t]*)$"
)
REMOTE_PREFIXES = ("http://", "https://", "data:image/", "data:application/")
MEDIA_SUBTYPES = {"svg": "svg+xml"}


@dc.dataclass(frozen=True, slots=True)
class ImageReference:
    """Local image scheduled for inlining.

    Attributes
    ----------
    original_src : str
        ``src`` exactly as written in the Markdown.
    alt_text : str
        Alt text of the first occurrence.
    resolved_path : Path
        Absolute filesystem path the image is read from.
    placeholder : str
        Placeholder path substituted for ``original_src`` before rendering.
    """

    original_src: str
    alt_text: str
    resolved_path: Path
    placeholder: str


def is_eligible(src: str) -> bool:
    """Return True when ``src`` is a local path that has not been rewritten."""
    return not src.startswith(REMOTE_PREFIXES) and not src.startswith(
        IMAGE_PLACEHOLDER_PREFIX
    )


def resolve_image_path(src: str, document_dir: Path, workspace_root: Path | None) -> Path:
    """Return the absolute path referenced by ``src``.

    Paths starting with ``/`` are taken relative to ``workspace_root`` (or the
    filesystem root when none is known); all others, including ``./`` and
    ``../`` forms, are relative to ``document_dir``.
    """
    if src.startswith("/"):
        base = workspace_root if workspace_root is not None else Path("/")
        joined = base / src.lstrip("/")
    else:
        joined = document_dir / src
    return Path(os.path.normpath(joined))


def data_uri(path: Path, payload: bytes) -> str:
    """Encode ``payload`` as a data URI whose subtype is ``path``'s extension."""
    ext = path.suffix.lstrip(".").lower()
    subtype = MEDIA_SUBTYPES.get(ext, ext)
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:image/{subtype};base64,{encoded}"


class ImageInliner:
    """Rewrite local image references and later inline their bytes."""

    def __init__(self, document_dir: Path, workspace_root: Path | None = None) -> None:
        """Initialize the inliner for one document.

        Parameters
        ----------
        document_dir : Path
            Directory containing the Markdown document.
        workspace_root : Path, optional
            Root used for ``/``-prefixed image paths.
        """
        self.document_dir = document_dir
        self.workspace_root = workspace_root

    def rewrite(
        self, segments: cabc.Sequence[Segment]
    ) -> tuple[list[Segment], list[ImageReference]]:
        """Return new segments with local images replaced by placeholders.

        Parameters
        ----------
        segments : Sequence[Segment]
            Output of :func:`md_pages.blocks.scan_blocks`.

        Returns
        -------
        tuple[list[Segment], list[ImageReference]]
            Rewritten segments (fenced segments are passed through untouched)
            and the distinct references in first-seen order.
        """
        references: dict[str, ImageReference] = {}
        rewritten: list[Segment] = []
        for segment in segments:
            if not segment.kind.is_prose:
                rewritten.append(segment)
                continue
            lines = [
                self._rewrite_line(line, references)
                for line in split_lines(segment.text)
            ]
            rewritten.append(dc.replace(segment, text="".join(lines)))
        return rewritten, list(references.values())

    def _rewrite_line(self, line: str, references: dict[str, ImageReference]) -> str:
        body = line.rstrip("\r\n")
        ending = line[len(body) :]
        match = IMAGE_LINE_PATTERN.match(body)
        if not match or not is_eligible(match.group("src")):
            return line
        src = match.group("src")
        alt = match.group("alt")
        if src not in references:
            references[src] = ImageReference(
                original_src=src,
                alt_text=alt,
                resolved_path=resolve_image_path(src, self.document_dir, self.workspace_root),
                placeholder=IMAGE_PLACEHOLDER_TEMPLATE.format(src=src),
            )
        placeholder = references[src].placeholder
        attrs = _size_attributes(match.group("width"), match.group("height"))
        return f"{match.group('indent')}![{alt}]({placeholder}){attrs}{match.group('trail')}{ending}"

    def resolve(
        self,
        html: str,
        references: cabc.Iterable[ImageReference],
        *,
        notifier: Notifier,
        title: str,
    ) -> str:
        """Replace placeholder ``src`` attributes in ``html`` with data URIs.

        Unreadable files produce one warning each and keep their placeholder,
        leaving a broken image rather than aborting the page.
        """
        for ref in references:
            try:
                payload = ref.resolved_path.read_bytes()
            except OSError:
                notifier.warning(f"{title}: image {ref.resolved_path} could not be read")
                continue
            replacement = f'src="{data_uri(ref.resolved_path, payload)}"'
            for candidate in {ref.placeholder, escape(ref.placeholder, quote=True)}:
                html = html.replace(f'src="{candidate}"', replacement)
        return html


def _size_attributes(width: str | None, height: str | None) -> str:
    """Return an ``attr_list`` suffix carrying a ``=WxH`` sizing annotation."""
    parts = []
    if width:
        parts.append(f'width="{width}"')
    if height:
        parts.append(f'height="{height}"')
    if not parts:
        return ""
    return "{: " + " ".join(parts) + " }"


__all__ = [
    "ImageInliner",
    "ImageReference",
    "data_uri",
    "is_eligible",
    "resolve_image_path",
]
