"""Typed dataclasses describing minisite configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import urljoin

from minisite._constants import DEFAULT_TEMPLATE, INDEX_FILENAME


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True, frozen=True)
class TaxonomyConfig:
    """Classification axis declared by the site, such as ``tags``."""

    name: str


@dc.dataclass(slots=True)
class SiteConfig:
    """Site-wide settings shared by every page render.

    Attributes
    ----------
    title : str
        Site title exposed to templates as ``config.title``.
    base_url : str
        Absolute site URL, always ending with ``/``.
    taxonomies : list[TaxonomyConfig]
        Taxonomies for which term pages are generated.
    default_template : str
        Template used when a page does not declare one.
    highlight_theme : str
        Pygments style used for fenced code blocks.
    extra : dict[str, Any]
        Free-form values exposed to templates as ``config.extra``.
    """

    title: str
    base_url: str
    taxonomies: list[TaxonomyConfig] = dc.field(default_factory=list)
    default_template: str = DEFAULT_TEMPLATE
    highlight_theme: str = "monokai"
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def taxonomy_names(self) -> list[str]:
        """Return the configured taxonomy names in declaration order."""
        return [taxonomy.name for taxonomy in self.taxonomies]

    def get_taxonomy(self, name: str) -> TaxonomyConfig:
        """Return the taxonomy named ``name``.

        Raises
        ------
        SiteConfigError
            If no taxonomy with that name is configured.
        """
        for taxonomy in self.taxonomies:
            if taxonomy.name == name:
                return taxonomy
        msg = f"Taxonomy '{name}' is not configured."
        raise SiteConfigError(msg)

    def make_url(self, path: str) -> str:
        """Join ``path`` onto the site base URL."""
        return urljoin(self.base_url, path.strip())

    def make_permalink(self, output_path: str) -> str:
        """Return the permalink of a page written to ``output_path``.

        A trailing ``index.html`` is dropped so directory-style pages link
        to their folder.
        """
        if output_path.endswith(INDEX_FILENAME):
            output_path = output_path[: -len(INDEX_FILENAME)]
        return urljoin(self.base_url, output_path)


__all__ = ["SiteConfig", "SiteConfigError", "TaxonomyConfig"]
