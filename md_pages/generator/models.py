"""Shared dataclasses used by the page export pipeline."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class SourceDocument:
    """Markdown document loaded from disk.

    Attributes
    ----------
    path : Path
        Absolute path of the document.
    text : str
        Full document text.
    """

    path: Path
    text: str

    @classmethod
    def read(cls, path: Path) -> SourceDocument:
        """Load ``path`` as UTF-8 text."""
        resolved = path.resolve()
        return cls(path=resolved, text=resolved.read_text(encoding="utf-8"))


@dc.dataclass(frozen=True, slots=True)
class RenderedPage:
    """Assembled page ready to be written.

    Attributes
    ----------
    title : str
        Document title used for the ``<title>`` element and notices.
    html : str
        Complete HTML document.
    """

    title: str
    html: str


__all__ = ["RenderedPage", "SourceDocument"]
