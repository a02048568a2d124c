"""Site-wide page index with section and taxonomy queries.

The :class:`SiteIndex` maps each page's output path to its :class:`Page`.
Content and taxonomy pages are inserted during the build; once every
insertion is done the index is frozen, after which it only answers queries.
Queries never mutate the index, so the render pass may run them from many
threads at once.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import PurePosixPath
from types import MappingProxyType

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .generator.models import Page


class FrozenIndexError(RuntimeError):
    """Raised when inserting into an index that has been frozen."""


@dc.dataclass(slots=True)
class Section:
    """Pages sharing an output-path prefix, newest first."""

    pages: list[Page]


def _date_key(page: Page) -> tuple[bool, dt.date]:
    """Sort key placing undated pages after every dated page when reversed."""
    return (page.date is not None, page.date or dt.date.min)


def sort_by_date(pages: cabc.Iterable[Page]) -> list[Page]:
    """Return ``pages`` ordered by date descending, undated pages last."""
    return sorted(pages, key=_date_key, reverse=True)


def section_prefix(path: str) -> str:
    """Return the directory prefix used to match pages in ``path``'s section.

    Examples
    --------
    >>> section_prefix("blog/index.html")
    'blog'
    >>> section_prefix("index.html")
    ''
    """
    parent = PurePosixPath(path).parent.as_posix()
    return "" if parent == "." else parent


class SiteIndex:
    """Mapping of page name to page, frozen once the build stops inserting."""

    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}
        self._term_pages: dict[tuple[str, str], Page] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, name: object) -> bool:
        return name in self._pages

    def __getitem__(self, name: str) -> Page:
        return self._pages[name]

    @property
    def pages(self) -> cabc.Mapping[str, Page]:
        """Return a read-only view of the indexed pages."""
        return MappingProxyType(self._pages)

    @property
    def frozen(self) -> bool:
        """Return whether the index still accepts insertions."""
        return self._frozen

    def insert(self, page: Page) -> None:
        """Store ``page`` under its name, replacing any page with that name.

        Raises
        ------
        FrozenIndexError
            If the index has already been frozen.
        """
        if self._frozen:
            msg = f"cannot insert {page.name!r}: site index is frozen"
            raise FrozenIndexError(msg)
        previous = self._pages.get(page.name)
        if previous is not None and previous.taxonomy_term is not None:
            self._term_pages.pop(previous.taxonomy_term, None)
        self._pages[page.name] = page
        if page.taxonomy_term is not None:
            self._term_pages[page.taxonomy_term] = page

    def freeze(self) -> None:
        """Stop accepting insertions for the rest of the build."""
        self._frozen = True

    def term_page(self, taxonomy: str, term: str) -> Page | None:
        """Return the synthesized listing page for ``term``, if one exists."""
        return self._term_pages.get((taxonomy, term))

    def dated_pages(self) -> list[Page]:
        """Return every dated page, newest first."""
        return sort_by_date(page for page in self._pages.values() if page.date)

    def section(self, path: str) -> Section:
        """Return the pages whose name starts with ``path``'s directory.

        Sections are not declared; membership is a plain string-prefix test
        against the parent directory of ``path``, so ``blog/index.html``
        selects every page under ``blog``.
        """
        prefix = section_prefix(path)
        members = [
            page for page in self._pages.values() if page.name.startswith(prefix)
        ]
        return Section(pages=sort_by_date(members))

    def tagged(
        self,
        taxonomy: str,
        term: str,
        pages: cabc.Iterable[Page] | None = None,
    ) -> list[Page]:
        """Return pages tagged with ``term`` under ``taxonomy``.

        Parameters
        ----------
        taxonomy : str
            Taxonomy name, such as ``tags``.
        term : str
            Term value to match exactly.
        pages : Iterable[Page], optional
            Candidate pages, in the order to preserve. Defaults to every
            indexed page sorted by date.
        """
        candidates = sort_by_date(self._pages.values()) if pages is None else pages
        return [page for page in candidates if page.has_term(taxonomy, term)]


__all__ = [
    "FrozenIndexError",
    "Section",
    "SiteIndex",
    "section_prefix",
    "sort_by_date",
]
