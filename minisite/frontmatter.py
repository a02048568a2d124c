r"""Split content files into TOML frontmatter and a markdown body.

Content files open with a ``+++`` delimited TOML block describing the page,
followed by the markdown body::

    +++
    title = "Hello"
    date = 2024-05-01
    [taxonomies]
    tags = ["rust", "python"]
    +++
    Body text.

:func:`extract_frontmatter` parses the block into a :class:`FrontMatter`
and returns the remaining body; :func:`dump_frontmatter` writes one back.

Example
-------
>>> from minisite.frontmatter import extract_frontmatter
>>> meta, body = extract_frontmatter('+++\ntitle="Hello"\n+++\nworld')
>>> meta.title, body
('Hello', 'world')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import tomllib
import typing as typ

import msgspec
import tomlkit

from ._constants import FRONTMATTER_DELIMITER
from .errors import MalformedInputError, SchemaError, UnterminatedBlockError


@dc.dataclass(slots=True)
class FrontMatter:
    """Metadata declared at the top of a content file.

    Attributes
    ----------
    title : str | None
        Page title; defaults to the file stem when omitted.
    date : datetime.date | None
        Publication date used to order page listings.
    template : str | None
        Template overriding the site default.
    description : str | None
        Short description exposed to templates.
    taxonomies : dict[str, list[str]]
        Terms assigned to the page, keyed by taxonomy name.
    """

    title: str | None = None
    date: dt.date | None = None
    template: str | None = None
    description: str | None = None
    taxonomies: dict[str, list[str]] = dc.field(default_factory=dict)

    def resolve(self, default_title: str, default_template: str) -> PageMeta:
        """Return fully-populated page metadata with defaults applied."""
        return PageMeta(
            title=self.title if self.title is not None else default_title,
            date=self.date,
            template=self.template or default_template,
            description=self.description or "",
            taxonomies={name: list(terms) for name, terms in self.taxonomies.items()},
        )


@dc.dataclass(slots=True, frozen=True)
class PageMeta:
    """Frontmatter with every optional field resolved to a concrete value."""

    title: str
    date: dt.date | None
    template: str
    description: str
    taxonomies: dict[str, list[str]]


def extract_frontmatter(text: str) -> tuple[FrontMatter, str]:
    """Parse the leading frontmatter block of ``text``.

    Parameters
    ----------
    text : str
        Raw content file text.

    Returns
    -------
    tuple[FrontMatter, str]
        Parsed metadata and the body following the closing delimiter with
        leading whitespace removed.

    Raises
    ------
    MalformedInputError
        If ``text`` does not begin with the ``+++`` delimiter.
    UnterminatedBlockError
        If no closing delimiter follows the opening one.
    SchemaError
        If the block is not valid TOML or its fields have the wrong types.
    """
    if not text.startswith(FRONTMATTER_DELIMITER):
        msg = f"frontmatter must begin with {FRONTMATTER_DELIMITER!r} at the start"
        raise MalformedInputError(msg)

    start = len(FRONTMATTER_DELIMITER)
    end = text.find(FRONTMATTER_DELIMITER, start)
    if end == -1:
        msg = f"frontmatter is missing its closing {FRONTMATTER_DELIMITER!r}"
        raise UnterminatedBlockError(msg)

    block = text[start:end].strip()
    body = text[end + len(FRONTMATTER_DELIMITER) :].lstrip()
    return _decode(block), body


def dump_frontmatter(frontmatter: FrontMatter, body: str = "") -> str:
    """Serialize ``frontmatter`` as a delimited TOML block followed by ``body``."""
    document = tomlkit.document()
    for field in dc.fields(frontmatter):
        value = getattr(frontmatter, field.name)
        if value is None or value == {}:
            continue
        document[field.name] = value
    block = tomlkit.dumps(document).strip()
    parts = [FRONTMATTER_DELIMITER, block, FRONTMATTER_DELIMITER]
    return "\n".join(part for part in parts if part) + "\n" + body


def _decode(block: str) -> FrontMatter:
    """Deserialize a TOML block into a validated FrontMatter."""
    try:
        raw: dict[str, typ.Any] = tomllib.loads(block)
    except tomllib.TOMLDecodeError as exc:
        msg = f"invalid frontmatter TOML: {exc}"
        raise SchemaError(msg) from exc

    match raw.get("date"):
        case dt.datetime() as stamp:
            raw["date"] = stamp.date()
        case _:
            pass

    try:
        return msgspec.convert(raw, type=FrontMatter)
    except msgspec.ValidationError as exc:
        msg = f"invalid frontmatter: {exc}"
        raise SchemaError(msg) from exc


__all__ = ["FrontMatter", "PageMeta", "dump_frontmatter", "extract_frontmatter"]
