"""Helpers for rewriting relative image URLs to absolute permalinks."""

from __future__ import annotations

import typing as typ
from urllib.parse import urljoin, urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any


def is_absolute_url(target: str) -> bool:
    """Return whether ``target`` parses as an absolute URL with a scheme."""
    return bool(urlsplit(target).scheme)


def absolutize(target: str, base_url: str) -> str:
    """Resolve ``target`` against ``base_url`` unless it is already absolute."""
    if is_absolute_url(target):
        return target
    return urljoin(base_url, target)


class AbsoluteImageExtension(Extension):
    """Rewrite relative image sources against a page permalink.

    Summaries are embedded on other pages (listings, feeds), where a
    relative ``<img src="cat.png">`` would resolve against the wrong
    directory. Resolving every relative source against the page's own
    permalink keeps the image reachable wherever the HTML ends up.
    """

    def __init__(self, base_url: str) -> None:
        super().__init__()
        self.base_url = base_url

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the image treeprocessor on the Markdown instance."""
        processor = AbsoluteImageTreeprocessor(md, self.base_url)
        md.treeprocessors.register(processor, "minisite_absolute_images", 15)


class AbsoluteImageTreeprocessor(Treeprocessor):
    """Resolve relative ``img`` sources in the parsed markdown tree."""

    def __init__(self, md: Markdown, base_url: str) -> None:
        super().__init__(md)
        self.base_url = base_url

    def run(self, root: Element) -> Element:
        """Rewrite every relative ``src`` attribute on image elements."""
        for element in root.iter("img"):
            src = element.get("src")
            if src is not None:
                element.set("src", absolutize(src, self.base_url))
        return root


__all__ = [
    "AbsoluteImageExtension",
    "AbsoluteImageTreeprocessor",
    "absolutize",
    "is_absolute_url",
]
