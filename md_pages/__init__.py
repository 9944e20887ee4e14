"""Export annotated Markdown documents to self-contained HTML pages.

This package exposes the CLI entry points used by the ``md-pages`` console
script to render a single document, or a whole folder with a shared file
navigation menu, into styled HTML with an embedded table of contents.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from md_pages import main
>>> main()  # doctest: +SKIP
>>> from md_pages import app
>>> app.name[0]
'md-pages'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
