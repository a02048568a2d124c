r"""Parse and render shortcode invocations embedded in markdown bodies.

A shortcode calls a template from the ``shortcodes/`` namespace with string
arguments::

    {{ note(text="hi", kind="warning") }}

Argument values cannot contain ``"``; there is no escape syntax. Markdown
that needs a literal ``{{`` cannot be authored alongside shortcodes.

Example
-------
>>> from minisite.shortcodes import parse_shortcode
>>> code = parse_shortcode('{{ note(text="hi") }}')
>>> code.name, code.arguments[0].value
('note', 'hi')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import PurePosixPath

from ._constants import SHORTCODE_CLOSE, SHORTCODE_NAMESPACE, SHORTCODE_OPEN
from .errors import ShortCodeSyntaxError, UnknownShortCodeError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .generator.models import PartialPage
    from .templates import TemplateEngine


@dc.dataclass(slots=True, frozen=True)
class Argument:
    """Named string argument passed to a shortcode."""

    name: str
    value: str


@dc.dataclass(slots=True, frozen=True)
class ShortCode:
    """Parsed invocation: template name plus ordered arguments."""

    name: str
    arguments: tuple[Argument, ...] = ()


class _Parser:
    """Recursive-descent parser over a single invocation span."""

    def __init__(self, source: str, base_offset: int) -> None:
        self.source = source
        self.base_offset = base_offset
        self.pos = 0

    def parse(self) -> ShortCode:
        self._literal(SHORTCODE_OPEN)
        name = self._identifier()
        self._literal("(")
        arguments: list[Argument] = []
        if not self._peek(")"):
            arguments.append(self._argument())
            while self._peek(","):
                self._literal(",")
                arguments.append(self._argument())
        self._literal(")")
        self._literal(SHORTCODE_CLOSE)
        if self.pos != len(self.source):
            self._fail("unexpected trailing input")
        return ShortCode(name=name, arguments=tuple(arguments))

    def _argument(self) -> Argument:
        name = self._identifier()
        self._literal("=")
        value = self._string()
        return Argument(name=name, value=value)

    def _identifier(self) -> str:
        start = self.pos
        while self.pos < len(self.source) and _is_ident_char(self.source[self.pos]):
            self.pos += 1
        if self.pos == start:
            self._fail("expected identifier")
        ident = self.source[start : self.pos]
        self._skip_spaces()
        return ident

    def _string(self) -> str:
        if not self.source.startswith('"', self.pos):
            self._fail("expected '\"'")
        start = self.pos + 1
        end = self.source.find('"', start)
        if end == -1:
            self.pos = len(self.source)
            self._fail("unterminated string")
        self.pos = end + 1
        self._skip_spaces()
        return self.source[start:end]

    def _literal(self, token: str) -> None:
        if not self.source.startswith(token, self.pos):
            self._fail(f"expected {token!r}")
        self.pos += len(token)
        self._skip_spaces()

    def _peek(self, token: str) -> bool:
        return self.source.startswith(token, self.pos)

    def _skip_spaces(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self.pos += 1

    def _fail(self, message: str) -> typ.NoReturn:
        consumed = len(self.source[: self.pos].encode("utf-8"))
        raise ShortCodeSyntaxError(message, self.base_offset + consumed)


def _is_ident_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def parse_shortcode(source: str, *, base_offset: int = 0) -> ShortCode:
    """Parse exactly one shortcode invocation spanning all of ``source``.

    Parameters
    ----------
    source : str
        Text from the ``{{`` open marker through the ``}}`` close marker.
    base_offset : int, optional
        Byte offset of ``source`` within the enclosing body, added to the
        offset reported on failure.

    Returns
    -------
    ShortCode
        The invocation name and its arguments in declaration order.

    Raises
    ------
    ShortCodeSyntaxError
        If ``source`` does not match the shortcode grammar.
    """
    return _Parser(source, base_offset).parse()


class ShortCodeRegistry:
    """Map shortcode names to the templates that render them.

    The registry is built once from the template engine's list of template
    names. Templates under ``shortcodes/`` register under their base name
    with the extension stripped; ``shortcodes/note.html`` answers to
    ``note``. When two templates share a base name the first one in sorted
    order wins.
    """

    def __init__(self, templates: cabc.Mapping[str, str] | None = None) -> None:
        self._templates: dict[str, str] = dict(templates or {})

    @classmethod
    def from_template_names(cls, names: cabc.Iterable[str]) -> ShortCodeRegistry:
        """Build a registry from every template name known to the engine."""
        templates: dict[str, str] = {}
        for template in sorted(names):
            if not template.startswith(SHORTCODE_NAMESPACE):
                continue
            relative = template[len(SHORTCODE_NAMESPACE) :]
            name = str(PurePosixPath(relative).with_suffix(""))
            templates.setdefault(name, template)
        return cls(templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def resolve(self, name: str) -> str:
        """Return the template registered for ``name``.

        Raises
        ------
        UnknownShortCodeError
            If no template is registered under ``name``.
        """
        try:
            return self._templates[name]
        except KeyError:
            raise UnknownShortCodeError(name) from None


def render_shortcode(
    shortcode: ShortCode, page: PartialPage, engine: TemplateEngine
) -> str:
    """Render ``shortcode`` through its registered template.

    Every argument becomes a string variable in the template context, and
    ``page`` is bound to the enclosing page (shadowing an argument of the
    same name).

    Raises
    ------
    UnknownShortCodeError
        If no ``shortcodes/`` template matches the invocation name.
    TemplateRenderError
        If the template engine fails while rendering.
    """
    template = engine.shortcodes.resolve(shortcode.name)
    context: dict[str, typ.Any] = {arg.name: arg.value for arg in shortcode.arguments}
    context["page"] = page
    return engine.render(template, context)


__all__ = [
    "Argument",
    "ShortCode",
    "ShortCodeRegistry",
    "parse_shortcode",
    "render_shortcode",
]
