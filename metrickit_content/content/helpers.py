"""Utility helpers shared by the content loaders."""

from __future__ import annotations

import datetime as dt
import typing as typ

from .models import ContentError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _scalar_text(owner: str, field: str, value: object) -> str:
    """Return a YAML string or number scalar as text.

    Nulls, booleans and nested collections are rejected so a malformed
    literal never loads as the text ``"None"`` or ``"True"``.
    """
    match value:
        case bool() | None:
            pass
        case str() | int() | float():
            return str(value)
    msg = f"{owner} '{field}' must hold strings or numbers, got {value!r}."
    raise ContentError(msg)


def _string_tuple(owner: str, field: str, value: object | None) -> tuple[str, ...]:
    """Normalize a YAML list of scalars into a tuple of strings."""
    match value:
        case None:
            return ()
        case list() as items:
            return tuple(_scalar_text(owner, field, item) for item in items)
        case _:
            msg = f"{owner} '{field}' must be a list, got {type(value).__name__}."
            raise ContentError(msg)


def _string_mapping(owner: str, field: str, value: object | None) -> dict[str, str]:
    """Normalize a YAML mapping of scalars into a ``str -> str`` dict."""
    match value:
        case None:
            return {}
        case dict() as payload:
            return {
                _scalar_text(owner, field, key): _scalar_text(owner, field, item)
                for key, item in payload.items()
            }
        case _:
            msg = f"{owner} '{field}' must be a mapping, got {type(value).__name__}."
            raise ContentError(msg)


def _iso_date(value: dt.date | str | None) -> str | None:
    """Return ``value`` as an ISO date string.

    YAML resolves unquoted ``2026-01-05`` to a date; quoted values stay as
    authored.
    """
    match value:
        case dt.datetime():
            return value.date().isoformat()
        case dt.date():
            return value.isoformat()
        case str() as text:
            return text.strip() or None
        case _:
            return None


def _mapping_list(
    owner: str, field: str, value: object | None
) -> list[typ.Mapping[str, typ.Any]]:
    """Return ``value`` as a list of mappings, rejecting any other entry."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"{owner} '{field}' must be a list, got {type(value).__name__}."
        raise ContentError(msg)
    entries: list[typ.Mapping[str, typ.Any]] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            msg = f"{owner} '{field}' entry {index} must be a mapping."
            raise ContentError(msg)
        entries.append(entry)
    return entries


__all__ = [
    "_iso_date",
    "_mapping_list",
    "_optional_str",
    "_scalar_text",
    "_string_mapping",
    "_string_tuple",
]
