"""Utility helpers shared by the minisite configuration loader."""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

from .models import SiteConfigError, TaxonomyConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return the non-empty string stored under ``key`` or raise."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"Site configuration is missing '{key}'."
        raise SiteConfigError(msg)
    return value


def _normalize_base_url(value: str) -> str:
    """Validate an absolute http(s) URL and ensure it ends with a slash."""
    parsed = urlsplit(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        msg = f"base_url must be an absolute http(s) URL, got {value!r}."
        raise SiteConfigError(msg)
    return value if value.endswith("/") else f"{value}/"


def _build_taxonomies(value: object | None) -> list[TaxonomyConfig]:
    """Build taxonomy configs from names or ``{name = ...}`` tables."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = "taxonomies must be a list."
        raise SiteConfigError(msg)
    taxonomies: list[TaxonomyConfig] = []
    seen: set[str] = set()
    for entry in value:
        match entry:
            case str() as name:
                pass
            case {"name": str() as name}:
                pass
            case _:
                msg = f"Invalid taxonomy entry: {entry!r}."
                raise SiteConfigError(msg)
        name = name.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        taxonomies.append(TaxonomyConfig(name=name))
    return taxonomies


def _build_extra(value: object | None) -> dict[str, typ.Any]:
    """Return the free-form ``extra`` mapping, defaulting to empty."""
    if value is None:
        return {}
    if not isinstance(value, typ.Mapping):
        msg = "extra must be a mapping."
        raise SiteConfigError(msg)
    return dict(value)


__all__ = [
    "_build_extra",
    "_build_taxonomies",
    "_normalize_base_url",
    "_optional_str",
    "_require_str",
]
