"""Template-callable lookups backed by the frozen site index.

Templates call these as Jinja globals, for example::

    {% for post in get_section(path="blog/index.html").pages %}
    <a href="{{ get_taxonomy_url(kind="tags", name="rust") }}">rust</a>
    {{ config.extra.intro | markdown }}

Every function reads the index without mutating it; they are only bound
after the index is frozen.
"""

from __future__ import annotations

import typing as typ

from jinja2.exceptions import TemplateRuntimeError
from markupsafe import Markup

from ._constants import TAXONOMY_TEMPLATE
from .config import SiteConfigError
from .generator.paths import output_path, taxonomy_term_path, term_slugs

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .generator.models import Page
    from .generator.renderer import HtmlContentRenderer
    from .site import Section, SiteIndex


class SiteFunctions:
    """Bundle of template globals and filters bound to one site."""

    def __init__(
        self, index: SiteIndex, config: SiteConfig, renderer: HtmlContentRenderer
    ) -> None:
        self.index = index
        self.config = config
        self.renderer = renderer

    @property
    def globals(self) -> dict[str, typ.Callable[..., typ.Any]]:
        """Return the functions exposed as template globals."""
        return {
            "get_section": self.get_section,
            "get_taxonomy": self.get_taxonomy,
            "get_url": self.get_url,
            "get_taxonomy_url": self.get_taxonomy_url,
        }

    @property
    def filters(self) -> dict[str, typ.Callable[..., typ.Any]]:
        """Return the filters exposed to templates."""
        return {"markdown": self.markdown}

    def get_section(self, path: str) -> Section:
        """Return pages under the directory of ``path``, newest first."""
        return self.index.section(path)

    def get_taxonomy(self, kind: str, term: str) -> list[Page]:
        """Return pages tagged with ``term`` under taxonomy ``kind``."""
        return self.index.tagged(kind, term)

    def get_url(self, path: str) -> str:
        """Return the absolute URL of ``path`` on this site."""
        return self.config.make_url(path)

    def get_taxonomy_url(self, kind: str, name: str) -> str:
        """Return the permalink of the term page for ``name`` under ``kind``.

        Terms that were synthesized read the permalink from their page, so
        disambiguated slugs resolve correctly; other terms get the slug they
        would have on their own.
        """
        try:
            taxonomy = self.config.get_taxonomy(kind)
        except SiteConfigError as exc:
            msg = f"no such taxonomy {kind!r}"
            raise TemplateRuntimeError(msg) from exc
        term_page = self.index.term_page(taxonomy.name, name)
        if term_page is not None:
            return term_page.permalink
        slug = term_slugs([name])[name]
        template = TAXONOMY_TEMPLATE.format(taxonomy=taxonomy.name)
        destination = output_path(taxonomy_term_path(taxonomy.name, slug), template)
        return self.config.make_permalink(destination.as_posix())

    def markdown(self, value: str) -> Markup:
        """Render a markdown string from a template into HTML markup."""
        return Markup(self.renderer.markdown(str(value)))  # noqa: S704


__all__ = ["SiteFunctions"]
