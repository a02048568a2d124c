"""Jinja2 integration for page templates and shortcode templates.

:class:`TemplateEngine` owns the Jinja ``Environment`` used for the whole
build. It enumerates the loader's templates once to build the
:class:`~minisite.shortcodes.ShortCodeRegistry` and translates every Jinja
failure into :class:`~minisite.errors.TemplateRenderError` so the pipeline
only deals with its own error types.

Example
-------
>>> from jinja2 import DictLoader
>>> from minisite.templates import TemplateEngine
>>> engine = TemplateEngine(DictLoader({"shortcodes/note.html": "<em>{{ text }}</em>"}))
>>> "note" in engine.shortcodes
True
>>> engine.render("shortcodes/note.html", {"text": "hi"})
'<em>hi</em>'
"""

from __future__ import annotations

import typing as typ

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from .errors import TemplateRenderError
from .shortcodes import ShortCodeRegistry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .functions import SiteFunctions


class TemplateEngine:
    """Render named templates with a key-value context."""

    def __init__(self, loader: BaseLoader) -> None:
        """Initialize the Jinja environment around ``loader``.

        Parameters
        ----------
        loader : BaseLoader
            Jinja loader providing page and shortcode templates. The loader
            must support listing its templates.
        """
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.shortcodes = ShortCodeRegistry.from_template_names(self.template_names)

    @classmethod
    def from_directory(cls, templates_dir: Path) -> TemplateEngine:
        """Return an engine loading templates from ``templates_dir``."""
        return cls(FileSystemLoader(str(templates_dir)))

    @property
    def template_names(self) -> list[str]:
        """Return every template name the loader can provide."""
        return self.env.list_templates()

    def bind_site(self, functions: SiteFunctions) -> None:
        """Expose the site lookups and filters to every template.

        Call only once the site index is frozen; shortcodes rendered before
        that point cannot use the lookups.
        """
        self.env.globals.update(functions.globals)
        self.env.filters.update(functions.filters)

    def render(self, name: str, context: cabc.Mapping[str, typ.Any]) -> str:
        """Render template ``name`` with ``context``.

        Raises
        ------
        TemplateRenderError
            If the template is missing, fails to compile, references an
            undefined variable, or raises while rendering.
        """
        try:
            template = self.env.get_template(name)
            return template.render(**context)
        except (TemplateError, TypeError, ValueError) as exc:
            raise TemplateRenderError(name, str(exc)) from exc


__all__ = ["TemplateEngine"]
