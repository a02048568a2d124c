"""Synthesize one listing page per distinct taxonomy term."""

from __future__ import annotations

import typing as typ

from ._constants import TAXONOMY_TEMPLATE
from .generator.models import Page
from .generator.paths import output_path, taxonomy_term_path, term_slugs

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig
    from .site import SiteIndex


def collect_terms(pages: cabc.Iterable[Page], taxonomy: str) -> set[str]:
    """Return the distinct terms assigned under ``taxonomy`` across ``pages``."""
    return {term for page in pages for term in page.taxonomies.get(taxonomy, ())}


def build_term_page(
    config: SiteConfig, taxonomy: str, term: str, slug: str
) -> Page:
    """Return the empty listing page for ``term`` stored under ``slug``."""
    template = TAXONOMY_TEMPLATE.format(taxonomy=taxonomy)
    destination = output_path(taxonomy_term_path(taxonomy, slug), template)
    name = destination.as_posix()
    return Page(
        name=name,
        output_path=destination,
        template=template,
        title=term,
        description="",
        date=None,
        permalink=config.make_permalink(name),
        content="",
        taxonomy_term=(taxonomy, term),
    )


def build_taxonomy_pages(index: SiteIndex, config: SiteConfig) -> list[Page]:
    """Insert a term page for every distinct term of each configured taxonomy.

    Must run after every content page is inserted and before the index is
    frozen. Every distinct term gets its own page, see
    :func:`~minisite.generator.paths.term_slugs`. A term page whose output
    path matches an existing content page replaces it.

    Returns
    -------
    list[Page]
        The synthesized term pages, sorted by taxonomy then term.
    """
    content_pages = list(index.pages.values())
    created: list[Page] = []
    for taxonomy in config.taxonomy_names:
        slugs = term_slugs(collect_terms(content_pages, taxonomy))
        for term in sorted(slugs):
            created.append(build_term_page(config, taxonomy, term, slugs[term]))
    for page in created:
        index.insert(page)
    return created


__all__ = ["build_taxonomy_pages", "build_term_page", "collect_terms"]
