"""Exception hierarchy raised while turning content files into pages.

Every failure in the pipeline is fatal for the whole build, so callers only
need to catch :class:`SiteError`. Each subclass names one failure kind; the
``kind`` property exposes that name for reporting.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class SiteError(Exception):
    """Base class for errors raised while building a site."""

    @property
    def kind(self) -> str:
        """Return the failure kind used in user-facing reports."""
        return type(self).__name__


class MalformedInputError(SiteError):
    """Raised when a content file is not UTF-8 text or lacks frontmatter."""


class ContentReadError(SiteError):
    """Raised when a content file cannot be read from disk."""


class UnterminatedBlockError(SiteError):
    """Raised when a delimited block is missing its closing delimiter."""


class SchemaError(SiteError):
    """Raised when frontmatter cannot be deserialized into the expected shape."""


class ShortCodeSyntaxError(SiteError):
    """Raised when a shortcode invocation does not match the grammar.

    Attributes
    ----------
    offset : int
        UTF-8 byte offset, relative to the parsed body, where parsing failed.
    """

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} at byte {offset}")
        self.offset = offset


class UnterminatedShortCodeError(UnterminatedBlockError):
    """Raised when a shortcode open marker has no matching close marker."""


class UnknownShortCodeError(SiteError):
    """Raised when no ``shortcodes/`` template matches an invocation."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown shortcode {name!r}")
        self.name = name


class TemplateRenderError(SiteError):
    """Raised when the template engine fails to render a template."""

    def __init__(self, template: str, message: str) -> None:
        super().__init__(f"failed to render {template!r}: {message}")
        self.template = template


class HighlightError(SiteError):
    """Raised when the syntax highlighter fails on a code block."""


class ContentFileError(SiteError):
    """Wrap a pipeline error with the content file that triggered it."""

    def __init__(self, path: Path, error: SiteError) -> None:
        super().__init__(f"{path}: {error.kind}: {error}")
        self.path = path
        self.error = error

    @property
    def kind(self) -> str:
        """Report the kind of the wrapped error rather than the wrapper."""
        return self.error.kind


__all__ = [
    "ContentFileError",
    "ContentReadError",
    "HighlightError",
    "MalformedInputError",
    "SchemaError",
    "ShortCodeSyntaxError",
    "SiteError",
    "TemplateRenderError",
    "UnknownShortCodeError",
    "UnterminatedBlockError",
    "UnterminatedShortCodeError",
]
