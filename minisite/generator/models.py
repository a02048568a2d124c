"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
from pathlib import PurePosixPath  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(slots=True, frozen=True)
class PartialPage:
    """Page identity visible to shortcodes while its own body renders.

    Attributes
    ----------
    title : str
        Resolved page title.
    description : str
        Resolved page description; empty when not declared.
    date : datetime.date | None
        Publication date, if declared.
    permalink : str
        Absolute URL of the page; relative image links resolve against it.
    """

    title: str
    description: str
    date: dt.date | None
    permalink: str


@dc.dataclass(slots=True, frozen=True)
class Page:
    """Rendered page stored in the site index.

    Attributes
    ----------
    name : str
        Index key; the output path as a POSIX string.
    output_path : PurePosixPath
        Destination relative to the output directory.
    template : str
        Template that renders the page.
    title : str
        Page title.
    description : str
        Page description.
    date : datetime.date | None
        Publication date; undated pages are left out of date-sorted lists.
    permalink : str
        Absolute URL of the page.
    content : str
        Rendered HTML of the full body.
    summary : str | None
        Rendered HTML preceding the ``<!-- more -->`` marker, if present.
    taxonomies : dict[str, list[str]]
        Terms assigned to the page, keyed by taxonomy name.
    taxonomy_term : tuple[str, str] | None
        ``(taxonomy, term)`` identity of synthesized term pages.
    """

    name: str
    output_path: PurePosixPath
    template: str
    title: str
    description: str
    date: dt.date | None
    permalink: str
    content: str
    summary: str | None = None
    taxonomies: dict[str, list[str]] = dc.field(default_factory=dict)
    taxonomy_term: tuple[str, str] | None = None

    def has_term(self, taxonomy: str, term: str) -> bool:
        """Return whether the page is tagged with ``term`` under ``taxonomy``."""
        return term in self.taxonomies.get(taxonomy, ())


__all__ = ["Page", "PartialPage"]
