"""Collect user-facing notices raised while exporting pages.

Every export call receives a :class:`Notifier`. Per-document and per-asset
problems are reported through it instead of raising, so a broken image or a
failed write never aborts sibling documents. Each notice is mirrored to the
``md_pages`` logger; the CLI decides how loudly that logger speaks.

Example
-------
>>> from md_pages.notifications import Notifier
>>> notifier = Notifier()
>>> notifier.warning("guide: image img/a.png could not be read")
>>> [notice.level for notice in notifier.notices]
['warning']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import threading
import typing as typ

LOG = logging.getLogger("md_pages")
CONTROL_SEQUENCE_PATTERN = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]|[\x00-\x08\x0b-\x1f\x7f]")
_LEVELS = {
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dc.dataclass(frozen=True, slots=True)
class Notice:
    """Single message surfaced to the user."""

    level: typ.Literal["success", "warning", "error"]
    message: str


class Notifier:
    """Thread-safe collector of :class:`Notice` records."""

    def __init__(self) -> None:
        self._notices: list[Notice] = []
        self._lock = threading.Lock()

    @property
    def notices(self) -> list[Notice]:
        """Return a snapshot of the notices recorded so far."""
        with self._lock:
            return list(self._notices)

    def of_level(self, level: str) -> list[Notice]:
        """Return the recorded notices whose level equals ``level``."""
        return [notice for notice in self.notices if notice.level == level]

    def success(self, message: str) -> None:
        self._record("success", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def _record(self, level: typ.Literal["success", "warning", "error"], message: str) -> None:
        with self._lock:
            self._notices.append(Notice(level, message))
        LOG.log(_LEVELS[level], message)


def sanitize_message(text: str) -> str:
    """Strip terminal control sequences from a diagnostic message."""
    return CONTROL_SEQUENCE_PATTERN.sub("", text).strip()


def _log_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    return logging.INFO if verbose else logging.WARNING


def setup_logging(*, verbose: bool = False, debug: bool = False) -> None:
    """Attach a stderr handler to the ``md_pages`` logger."""
    level = _log_level(verbose, debug)
    LOG.setLevel(level)
    LOG.propagate = False
    if not LOG.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        LOG.addHandler(handler)
    for handler in LOG.handlers:
        handler.setLevel(level)


__all__ = ["LOG", "Notice", "Notifier", "sanitize_message", "setup_logging"]
