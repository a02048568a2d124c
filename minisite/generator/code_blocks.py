"""Route fenced code blocks through the site highlighter.

The stock ``fenced_code`` extension hands code to ``codehilite`` with its own
Pygments settings. This preprocessor replaces it so every fenced block is
highlighted by the shared :class:`~minisite.generator.highlighter.Highlighter`
and the result is stashed as raw HTML, keeping markdown from touching it.

A fence with no closing line runs to the end of the text being rendered,
which for page bodies is the markdown between two shortcodes.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

if typ.TYPE_CHECKING:
    from markdown import Markdown

    from .highlighter import Highlighter
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Highlighter = typ.Any

FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<indent>[ ]{0,3})(?P<fence>`{3,}|~{3,})[ ]*(?P<info>[^\n`]*)(?:\n|\Z)"
    r"(?P<code>.*?)"
    r"(?:(?<=\n)(?P=indent)(?P<close>(?P=fence))[ ]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)
LANGUAGE_TOKEN_PATTERN = re.compile(r"[^\s,{}]+")


def fence_language(info: str) -> str:
    """Return the language token of a fence info string, or ``""``.

    Info strings such as ``rust,no_run`` or ``python title="x"`` carry extra
    attributes after the language; only the leading token is kept.
    """
    match = LANGUAGE_TOKEN_PATTERN.match(info.strip().lstrip("."))
    return match.group(0) if match else ""


def _dedent(code: str, indent: str) -> str:
    """Strip the fence indentation from each line of ``code``."""
    if not indent:
        return code
    return "".join(
        line[len(indent) :] if line.startswith(indent) else line.lstrip(" ")
        for line in code.splitlines(keepends=True)
    )


def _trim_trailing_blank_lines(code: str) -> str:
    """Drop the blank lines an unclosed block picks up at the end of the text."""
    code = code.rstrip("\n")
    return f"{code}\n" if code else ""


class HighlightedFenceExtension(Extension):
    """Highlight fenced code blocks with a shared highlighter."""

    def __init__(self, highlighter: Highlighter) -> None:
        super().__init__()
        self.highlighter = highlighter

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the fenced block preprocessor on the Markdown instance."""
        processor = HighlightedFencePreprocessor(md, self.highlighter)
        md.preprocessors.register(processor, "minisite_fenced_code", 25)


class HighlightedFencePreprocessor(Preprocessor):
    """Replace fenced blocks with placeholders for highlighted HTML."""

    def __init__(self, md: Markdown, highlighter: Highlighter) -> None:
        super().__init__(md)
        self.highlighter = highlighter

    def run(self, lines: list[str]) -> list[str]:
        """Highlight each fenced block and stash the resulting HTML."""
        text = "\n".join(lines)
        while match := FENCED_BLOCK_PATTERN.search(text):
            language = fence_language(match.group("info"))
            code = _dedent(match.group("code"), match.group("indent"))
            if match.group("close") is None:
                code = _trim_trailing_blank_lines(code)
            html = self.highlighter.highlight(language, code)
            placeholder = self.md.htmlStash.store(html)
            text = f"{text[: match.start()]}\n{placeholder}\n{text[match.end() :]}"
        return text.split("\n")


__all__ = [
    "FENCED_BLOCK_PATTERN",
    "HighlightedFenceExtension",
    "HighlightedFencePreprocessor",
    "fence_language",
]
