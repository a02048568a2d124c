"""Shared fixtures for minisite tests.

The fixtures build the pipeline from in-memory Jinja templates
(``DictLoader``) so unit tests never touch the filesystem, and expose a
``write_site`` factory that lays out a complete site root under
``tmp_path`` for end-to-end builds.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from textwrap import dedent

import pytest
from jinja2 import DictLoader

from minisite.config import SiteConfig, TaxonomyConfig
from minisite.generator import (
    ContentPipeline,
    Highlighter,
    HtmlContentRenderer,
    PageBuilder,
    PartialPage,
)
from minisite.templates import TemplateEngine

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

BASE_URL = "https://example.com/"

UNIT_TEMPLATES: dict[str, str] = {
    "page.html": "{{ page.content | safe }}",
    "shortcodes/note.html": "<em>{{ text }}</em>",
    "shortcodes/figure.html": (
        '<figure data-page="{{ page.title }}">'
        '<img src="{{ src }}" alt="{{ caption }}"></figure>'
    ),
    "shortcodes/broken.html": "{{ missing_variable }}",
}

SITE_CONFIG_TOML = dedent(
    """
    title = "Fixture Site"
    base_url = "https://example.com"
    taxonomies = [{ name = "tags" }]

    [extra]
    tagline = "Notes on *things*"
    """
).lstrip()

SITE_TEMPLATES: dict[str, str] = {
    "templates/page.html": dedent(
        """
        <html><head><title>{{ page.title }} | {{ config.title }}</title></head>
        <body>
        <article>{{ page.content | safe }}</article>
        <ul class="pages">
        {% for p in pages %}
        <li><a href="{{ p.permalink }}">{{ p.title }}</a></li>
        {% endfor %}
        </ul>
        </body></html>
        """
    ).lstrip(),
    "templates/home.html": dedent(
        """
        <html><body>
        <header>{{ config.extra.tagline | markdown }}</header>
        <section class="blog">
        {% for p in get_section(path="blog/index.html").pages %}
        <article class="summary" data-name="{{ p.name }}">
        {% if p.summary %}{{ p.summary | safe }}{% endif %}
        </article>
        {% endfor %}
        </section>
        <a class="tag" href="{{ get_taxonomy_url(kind="tags", name="rust") }}">rust</a>
        </body></html>
        """
    ).lstrip(),
    "templates/tags/single.html": dedent(
        """
        <html><body>
        <h1>{{ page.title }}</h1>
        <ul class="tagged">
        {% for p in pages %}
        <li><a href="{{ p.permalink }}">{{ p.title }}</a></li>
        {% endfor %}
        </ul>
        </body></html>
        """
    ).lstrip(),
    "templates/shortcodes/note.html": '<aside class="note">{{ text }}</aside>',
}

SITE_CONTENT: dict[str, str | bytes] = {
    "content/index.md": '+++\ntitle = "Home"\ntemplate = "home.html"\n+++\nWelcome.\n',
    "content/blog/first.md": dedent(
        """
        +++
        title = "First post"
        date = 2024-05-01
        [taxonomies]
        tags = ["rust", "python"]
        +++
        Opening paragraph.

        <!-- more -->

        ![cat](cat.png)

        {{ note(text="remember this") }}

        ```python
        print("hello")
        ```
        """
    ).lstrip(),
    "content/blog/second.md": dedent(
        """
        +++
        title = "Second post"
        date = 2024-06-01
        [taxonomies]
        tags = ["rust"]
        +++
        Another post.
        """
    ).lstrip(),
    "content/blog/_draft.md": "this partial has no frontmatter at all",
    "content/blog/cat.png": b"\x89PNG\r\n\x1a\nfake",
    "static/style.css": "body { color: black; }\n",
}


@pytest.fixture
def site_config() -> SiteConfig:
    """Return a site configuration with a ``tags`` taxonomy."""
    return SiteConfig(
        title="Fixture Site",
        base_url=BASE_URL,
        taxonomies=[TaxonomyConfig(name="tags")],
    )


@pytest.fixture
def engine() -> TemplateEngine:
    """Return a template engine backed by in-memory templates."""
    return TemplateEngine(DictLoader(UNIT_TEMPLATES))


@pytest.fixture
def highlighter() -> Highlighter:
    """Return a default Pygments highlighter."""
    return Highlighter()


@pytest.fixture
def renderer(highlighter: Highlighter) -> HtmlContentRenderer:
    """Return a markdown renderer sharing the ``highlighter`` fixture."""
    return HtmlContentRenderer(highlighter)


@pytest.fixture
def pipeline(renderer: HtmlContentRenderer, engine: TemplateEngine) -> ContentPipeline:
    """Return a content pipeline over the unit templates."""
    return ContentPipeline(renderer, engine)


@pytest.fixture
def page_builder(site_config: SiteConfig, pipeline: ContentPipeline) -> PageBuilder:
    """Return a page builder for the fixture site."""
    return PageBuilder(site_config, pipeline)


@pytest.fixture
def partial_page() -> PartialPage:
    """Return the partial page of a post published under ``blog/post``."""
    return PartialPage(
        title="Post",
        description="",
        date=dt.date(2024, 5, 1),
        permalink=f"{BASE_URL}blog/post/",
    )


@pytest.fixture
def site_content() -> dict[str, str | bytes]:
    """Return the content and static files of the fixture site."""
    return dict(SITE_CONTENT)


@pytest.fixture
def write_site(
    tmp_path: Path,
) -> cabc.Callable[[cabc.Mapping[str, str | bytes]], Path]:
    """Return a factory that writes a site root from relative-path mappings.

    The site always receives ``config.toml`` and the fixture templates;
    callers pass content and static files (or overrides) as a mapping of
    relative path to text or bytes.
    """

    def _write(files: cabc.Mapping[str, str | bytes]) -> Path:
        root = tmp_path / "site"
        entries: dict[str, str | bytes] = {
            "config.toml": SITE_CONFIG_TOML,
            **SITE_TEMPLATES,
            **files,
        }
        for relative, payload in entries.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(payload, bytes):
                path.write_bytes(payload)
            else:
                path.write_text(payload, encoding="utf-8")
        return root

    return _write
