"""Utility helpers shared by the md_pages configuration loader."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from .models import ConfigError


def _normalize_extensions(value: object) -> list[str]:
    """Return ``value`` as a list of lowercase suffixes with a leading dot."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split()
    if not isinstance(value, list):
        msg = "'extra_extensions' must be a list of file suffixes."
        raise ConfigError(msg)
    normalized: list[str] = []
    for item in value:
        text = str(item).strip().lower()
        if not text:
            continue
        suffix = text if text.startswith(".") else f".{text}"
        if suffix not in normalized:
            normalized.append(suffix)
    return normalized


def _positive_number(value: object, *, key: str, default: float) -> float:
    """Return ``value`` as a positive float, or ``default`` when unset."""
    if value is None:
        return default
    if isinstance(value, bool):
        msg = f"'{key}' must be a positive number."
        raise ConfigError(msg)
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"'{key}' must be a positive number."
        raise ConfigError(msg) from exc
    if number <= 0:
        msg = f"'{key}' must be a positive number."
        raise ConfigError(msg)
    return number


def _positive_int(value: object, *, key: str, default: int) -> int:
    """Return ``value`` as a positive integer, or ``default`` when unset."""
    number = _positive_number(value, key=key, default=default)
    if number != int(number):
        msg = f"'{key}' must be a whole number."
        raise ConfigError(msg)
    return int(number)


def _optional_path(value: object, *, base_dir: Path) -> Path | None:
    """Return ``value`` as a path resolved against ``base_dir``, or None."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else base_dir / path


def _folder_aliases(value: object) -> dict[str, str]:
    """Return folder aliases keyed by normalized POSIX folder path."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = "'folder_aliases' must map folder paths to display names."
        raise ConfigError(msg)
    aliases: dict[str, str] = {}
    for raw_key, raw_alias in value.items():
        key = PurePosixPath(str(raw_key).strip().strip("/")).as_posix()
        alias = str(raw_alias).strip()
        if key and key != "." and alias:
            aliases[key] = alias
    return aliases


def _string_list(value: object, *, key: str, default: list[str]) -> list[str]:
    """Return ``value`` as a list of non-empty strings."""
    if value is None:
        return list(default)
    if not isinstance(value, list):
        msg = f"'{key}' must be a list of strings."
        raise ConfigError(msg)
    return [text for text in (str(item).strip() for item in value) if text]


__all__ = [
    "_folder_aliases",
    "_normalize_extensions",
    "_optional_path",
    "_positive_int",
    "_positive_number",
    "_string_list",
]
