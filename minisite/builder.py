"""High-level orchestration for building a whole site.

:class:`SiteBuilder` walks a site root laid out as::

    config.toml
    content/    markdown pages with frontmatter, plus image assets
    templates/  Jinja templates, shortcodes under templates/shortcodes/
    static/     files copied verbatim

and writes the rendered site into the output directory. The build runs in
strict phases: copy static files, render every content file into the
:class:`~minisite.site.SiteIndex`, synthesize taxonomy term pages, freeze
the index, then render every page through its template. Any error aborts the
build.

Example
-------
>>> from pathlib import Path
>>> from minisite.builder import SiteBuilder
>>> from minisite.config import load_site_config
>>> config = load_site_config(Path("site/config.toml"))  # doctest: +SKIP
>>> report = SiteBuilder(Path("site"), config).run()  # doctest: +SKIP
>>> report.written[0]  # doctest: +SKIP
PosixPath('site/public/index.html')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import shutil
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePosixPath

from ._constants import (
    ASSET_EXTENSIONS,
    CONTENT_DIR,
    DEFAULT_OUTPUT_DIR,
    STATIC_DIR,
    TEMPLATES_DIR,
)
from .errors import ContentFileError, SiteError
from .functions import SiteFunctions
from .generator import (
    ContentPipeline,
    Highlighter,
    HtmlContentRenderer,
    PageBuilder,
)
from .site import SiteIndex
from .taxonomies import build_taxonomy_pages
from .templates import TemplateEngine

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig
    from .generator.models import Page

T = typ.TypeVar("T")
R = typ.TypeVar("R")


@dc.dataclass(slots=True)
class BuildReport:
    """Files produced by a site build.

    Attributes
    ----------
    copied : list[Path]
        Static files and content assets copied into the output directory.
    written : list[Path]
        Rendered pages written into the output directory.
    """

    copied: list[Path] = dc.field(default_factory=list)
    written: list[Path] = dc.field(default_factory=list)


class SiteBuilder:
    """Render a site root into a static output directory."""

    def __init__(
        self,
        root: Path,
        config: SiteConfig,
        *,
        output_dir: Path | None = None,
        workers: int = 1,
        engine: TemplateEngine | None = None,
    ) -> None:
        """Initialize the builder with the site layout and configuration.

        Parameters
        ----------
        root : Path
            Site root containing ``content``, ``templates``, and ``static``.
        config : SiteConfig
            Parsed site configuration.
        output_dir : Path, optional
            Destination directory; defaults to ``root / "public"``. The
            directory is wiped at the start of every run.
        workers : int, optional
            Threads used to render content files and pages. ``1`` renders
            sequentially.
        engine : TemplateEngine, optional
            Template engine override; defaults to one loading ``templates``.
        """
        self.root = root
        self.config = config
        self.output_dir = output_dir or root / DEFAULT_OUTPUT_DIR
        self.workers = max(1, workers)
        self.content_dir = root / CONTENT_DIR
        self.static_dir = root / STATIC_DIR
        self.engine = engine or TemplateEngine.from_directory(root / TEMPLATES_DIR)
        self.renderer = HtmlContentRenderer(Highlighter(config.highlight_theme))
        self.page_builder = PageBuilder(
            config, ContentPipeline(self.renderer, self.engine)
        )
        self.index = SiteIndex()

    def run(self) -> BuildReport:
        """Build the site and return the files written.

        Returns
        -------
        BuildReport
            Copied assets and rendered pages, in processing order.

        Raises
        ------
        FileNotFoundError
            If the site has no ``content`` directory.
        ContentFileError
            If any content file or page fails to render; the error names the
            file and wraps the underlying failure.

        Notes
        -----
        Side effects include deleting and recreating the output directory.
        """
        if not self.content_dir.is_dir():
            msg = f"Content directory '{self.content_dir}' not found."
            raise FileNotFoundError(msg)

        report = BuildReport()
        self._clean_output_dir()
        report.copied.extend(self._copy_static_files())

        sources = sorted(path for path in self.content_dir.rglob("*") if path.is_file())
        for result in self._map(self._process_content_file, sources):
            match result:
                case Path():
                    report.copied.append(result)
                case None:
                    continue
                case page:
                    self.index.insert(page)

        build_taxonomy_pages(self.index, self.config)
        self.index.freeze()
        self.engine.bind_site(SiteFunctions(self.index, self.config, self.renderer))

        report.written.extend(self._render_pages())
        return report

    def _clean_output_dir(self) -> None:
        """Remove any previous output and recreate the directory."""
        if self.output_dir.exists():
            shutil.rmtree(self.output_dir)
        self.output_dir.mkdir(parents=True)

    def _copy_static_files(self) -> list[Path]:
        """Copy ``static`` into the output root, preserving relative paths."""
        if not self.static_dir.is_dir():
            return []
        return [
            self._copy_to_output(path, path.relative_to(self.static_dir))
            for path in sorted(self.static_dir.rglob("*"))
            if path.is_file()
        ]

    def _copy_to_output(self, source: Path, relative: Path) -> Path:
        destination = self.output_dir / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        return destination

    def _process_content_file(self, source: Path) -> Page | Path | None:
        """Render one content file, copy it as an asset, or skip it.

        Returns the copied destination for image assets, ``None`` for other
        ``_``-prefixed files, and the page for everything else. Images are
        copied even when ``_``-prefixed.
        """
        relative = source.relative_to(self.content_dir)
        if source.suffix.lstrip(".").lower() in ASSET_EXTENSIONS:
            return self._copy_to_output(source, relative)
        if source.name.startswith("_"):
            return None
        try:
            return self.page_builder.build(source, PurePosixPath(relative.as_posix()))
        except SiteError as exc:
            raise ContentFileError(source, exc) from exc

    def _render_pages(self) -> list[Path]:
        """Render every indexed page through its template."""
        dated = self.index.dated_pages()
        last_updated = dt.datetime.now(dt.UTC).isoformat(timespec="seconds")
        stylesheet = self.renderer.stylesheet

        def _render(page: Page) -> Path:
            listing = dated
            if page.taxonomy_term is not None:
                taxonomy, term = page.taxonomy_term
                listing = self.index.tagged(taxonomy, term, dated)
            context = {
                "config": self.config,
                "page": page,
                "pages": listing,
                "current_url": page.permalink,
                "last_updated": last_updated,
                "highlight_css": stylesheet,
            }
            destination = self.output_dir / page.output_path
            try:
                html = self.engine.render(page.template, context)
            except SiteError as exc:
                raise ContentFileError(destination, exc) from exc
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(html, encoding="utf-8")
            return destination

        pages = sorted(self.index.pages.values(), key=lambda page: page.name)
        return self._map(_render, pages)

    def _map(self, func: cabc.Callable[[T], R], items: list[T]) -> list[R]:
        """Apply ``func`` to ``items`` in order, on a thread pool if configured."""
        if self.workers == 1:
            return [func(item) for item in items]
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            return list(pool.map(func, items))


__all__ = ["BuildReport", "SiteBuilder"]
