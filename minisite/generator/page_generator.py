"""Turn a single content file into a rendered :class:`Page`.

:class:`PageBuilder` runs the per-file pipeline: frontmatter extraction,
metadata defaulting, output path and permalink derivation, optional summary
rendering up to the ``<!-- more -->`` marker, and full content rendering via
:class:`~minisite.generator.splicer.ContentPipeline`. Each call touches only
its own file and the read-only site configuration, so builds may run it for
many files concurrently.

Example
-------
>>> from pathlib import Path, PurePosixPath
>>> builder = PageBuilder(config, pipeline)  # doctest: +SKIP
>>> page = builder.build(Path("content/blog/post.md"), PurePosixPath("blog/post.md"))  # doctest: +SKIP
>>> page.name  # doctest: +SKIP
'blog/post/index.html'
"""

from __future__ import annotations

import re
import typing as typ
from pathlib import PurePosixPath

from minisite._constants import SUMMARY_MARKER
from minisite.errors import ContentReadError, MalformedInputError
from minisite.frontmatter import extract_frontmatter

from .models import Page, PartialPage
from .paths import output_path

if typ.TYPE_CHECKING:
    from pathlib import Path

    from minisite.config import SiteConfig

    from .splicer import ContentPipeline

HTML_COMMENT_PATTERN = re.compile(r"<!--(.*?)-->", re.DOTALL)


def find_summary_marker(body: str) -> int | None:
    """Return the offset of the first ``<!-- more -->`` comment in ``body``.

    The comment content is compared after trimming whitespace and ignoring
    case, so ``<!--MORE-->`` and ``<!--  more  -->`` both qualify.
    """
    for match in HTML_COMMENT_PATTERN.finditer(body):
        if match.group(1).strip().lower() == SUMMARY_MARKER:
            return match.start()
    return None


class PageBuilder:
    """Build pages from content files for one site configuration."""

    def __init__(self, config: SiteConfig, pipeline: ContentPipeline) -> None:
        """Initialize the builder with site settings and a content pipeline.

        Parameters
        ----------
        config : SiteConfig
            Site configuration providing the base URL and default template.
        pipeline : ContentPipeline
            Pipeline used to render page bodies and summaries.
        """
        self.config = config
        self.pipeline = pipeline

    def build(self, source: Path, relative_path: PurePosixPath) -> Page:
        """Read ``source`` and render it into a page.

        Parameters
        ----------
        source : Path
            Content file on disk.
        relative_path : PurePosixPath
            Path of ``source`` relative to the content directory.

        Returns
        -------
        Page
            Rendered page keyed by its output path.

        Raises
        ------
        MalformedInputError
            If ``source`` is not valid UTF-8.
        ContentReadError
            If ``source`` cannot be read.
        SiteError
            Any frontmatter, shortcode, template, or highlighting failure.
        """
        try:
            text = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"content file is not UTF-8 text: {exc}"
            raise MalformedInputError(msg) from exc
        except OSError as exc:
            msg = f"cannot read content file: {exc}"
            raise ContentReadError(msg) from exc
        return self.build_from_text(text, relative_path)

    def build_from_text(self, text: str, relative_path: PurePosixPath) -> Page:
        """Render already-loaded content ``text`` located at ``relative_path``."""
        frontmatter, body = extract_frontmatter(text)
        meta = frontmatter.resolve(
            default_title=relative_path.stem,
            default_template=self.config.default_template,
        )
        destination = output_path(relative_path, meta.template)
        name = destination.as_posix()
        partial = PartialPage(
            title=meta.title,
            description=meta.description,
            date=meta.date,
            permalink=self.config.make_permalink(name),
        )

        summary = None
        marker = find_summary_marker(body)
        if marker is not None:
            summary = self.pipeline.render(body[:marker], partial)
        content = self.pipeline.render(body, partial)

        return Page(
            name=name,
            output_path=destination,
            template=meta.template,
            title=partial.title,
            description=partial.description,
            date=partial.date,
            permalink=partial.permalink,
            content=content,
            summary=summary,
            taxonomies=meta.taxonomies,
        )


__all__ = ["PageBuilder", "find_summary_marker"]
