r"""Interleave markdown rendering with shortcode rendering.

A body mixes plain markdown with ``{{ ... }}`` shortcode invocations. The
splicer scans the body once, tagging each contiguous slice as markdown or
shortcode, renders every slice in its own mode, and concatenates the results
in source order.

The scan is purely lexical: the first ``}}`` after a ``{{`` closes the
shortcode, and markdown cannot contain a literal ``{{``.

Example
-------
>>> from minisite.generator.splicer import split_content
>>> [(r.kind.value, r.start, r.end) for r in split_content("a {{ x() }} b")]
[('markdown', 0, 2), ('shortcode', 2, 11), ('markdown', 11, 13)]
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from minisite._constants import SHORTCODE_CLOSE, SHORTCODE_OPEN
from minisite.errors import UnterminatedShortCodeError
from minisite.shortcodes import parse_shortcode, render_shortcode

if typ.TYPE_CHECKING:
    from minisite.templates import TemplateEngine

    from .models import PartialPage
    from .renderer import HtmlContentRenderer


class RangeKind(enum.Enum):
    """Rendering mode of a content range."""

    MARKDOWN = "markdown"
    SHORTCODE = "shortcode"


@dc.dataclass(slots=True, frozen=True)
class ContentRange:
    """Half-open ``[start, end)`` slice of a body tagged with its mode."""

    kind: RangeKind
    start: int
    end: int

    def text(self, body: str) -> str:
        """Return the slice of ``body`` covered by this range."""
        return body[self.start : self.end]


def split_content(body: str) -> list[ContentRange]:
    """Partition ``body`` into markdown and shortcode ranges in source order.

    Raises
    ------
    UnterminatedShortCodeError
        If a ``{{`` open marker has no ``}}`` after it.
    """
    ranges: list[ContentRange] = []
    last = 0
    while (start := body.find(SHORTCODE_OPEN, last)) != -1:
        if start > last:
            ranges.append(ContentRange(RangeKind.MARKDOWN, last, start))
        close = body.find(SHORTCODE_CLOSE, start)
        if close == -1:
            msg = f"unterminated shortcode at character {start}"
            raise UnterminatedShortCodeError(msg)
        last = close + len(SHORTCODE_CLOSE)
        ranges.append(ContentRange(RangeKind.SHORTCODE, start, last))
    if last < len(body):
        ranges.append(ContentRange(RangeKind.MARKDOWN, last, len(body)))
    return ranges


class ContentPipeline:
    """Render bodies by splicing markdown and shortcode output together."""

    def __init__(self, renderer: HtmlContentRenderer, engine: TemplateEngine) -> None:
        self.renderer = renderer
        self.engine = engine

    def render(self, body: str, page: PartialPage) -> str:
        """Render ``body`` for ``page`` into a single HTML string.

        Raises
        ------
        UnterminatedShortCodeError
            If a shortcode is missing its close marker.
        ShortCodeSyntaxError
            If a shortcode invocation is malformed.
        UnknownShortCodeError
            If a shortcode has no registered template.
        TemplateRenderError
            If a shortcode template fails to render.
        HighlightError
            If a fenced code block cannot be highlighted.
        """
        return "".join(
            self._render_range(body, content_range, page)
            for content_range in split_content(body)
        )

    def _render_range(
        self, body: str, content_range: ContentRange, page: PartialPage
    ) -> str:
        text = content_range.text(body)
        if content_range.kind is RangeKind.MARKDOWN:
            return self.renderer.markdown(text, page)
        offset = len(body[: content_range.start].encode("utf-8"))
        shortcode = parse_shortcode(text, base_offset=offset)
        return render_shortcode(shortcode, page, self.engine)


__all__ = ["ContentPipeline", "ContentRange", "RangeKind", "split_content"]
