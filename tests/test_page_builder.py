"""Unit tests for building pages from content files."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import PurePosixPath

import pytest

from minisite.errors import (
    ContentReadError,
    MalformedInputError,
    UnknownShortCodeError,
)
from minisite.generator.page_generator import find_summary_marker
from minisite.generator.paths import (
    output_path,
    slugify,
    taxonomy_term_path,
    term_slugs,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from minisite.generator import HtmlContentRenderer, PageBuilder


@pytest.mark.parametrize(
    ("source", "template", "expected"),
    [
        ("blog/post.md", "page.html", "blog/post/index.html"),
        ("blog/index.md", "page.html", "blog/index.html"),
        ("index.md", "page.html", "index.html"),
        ("about.md", "layouts/wide.html", "about/index.html"),
        ("feed.md", "feed.xml", "feed.xml"),
        ("blog/rss.md", "rss.xml", "blog/rss.xml"),
        ("notes/raw.md", "raw", "notes/raw"),
    ],
)
def test_output_path_rules(source: str, template: str, expected: str) -> None:
    """Output paths follow the template extension."""
    result = output_path(PurePosixPath(source), template)

    assert result.as_posix() == expected, f"expected {expected!r}, got {result!r}"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("rust", "rust"),
        ("Rust Lang", "rust-lang"),
        ("Café à Paris", "cafe-a-paris"),
        ("v1.2", "v12"),
        ("  --C++-- ", "c"),
        ("a  b", "a-b"),
        ("日本語", "日本語"),
    ],
)
def test_slugify(value: str, expected: str) -> None:
    """Terms slugify to lowercase words separated by hyphens."""
    assert slugify(value) == expected


def test_taxonomy_term_path() -> None:
    """Term paths nest the slug under the taxonomy name."""
    assert taxonomy_term_path("tags", "rust-lang").as_posix() == "tags/rust-lang"


def test_term_slugs_keep_unique_slugs_plain() -> None:
    """Terms with a slug of their own keep it unchanged."""
    assert term_slugs(["Rust Lang", "日本語", "中文"]) == {
        "Rust Lang": "rust-lang",
        "日本語": "日本語",
        "中文": "中文",
    }


def test_term_slugs_disambiguate_collisions() -> None:
    """Case variants and punctuation-only differences get distinct slugs."""
    slugs = term_slugs(["Rust", "rust", "C", "C++", "python"])

    assert slugs["python"] == "python"
    assert len(set(slugs.values())) == len(slugs), f"slugs collide: {slugs!r}"
    assert slugs["Rust"].startswith("rust-")
    assert slugs["rust"].startswith("rust-")
    assert slugs["C"].startswith("c-")
    assert slugs["C++"].startswith("c-")


def test_term_slugs_ignore_order_and_duplicates() -> None:
    """The mapping depends only on the set of terms."""
    forward = term_slugs(["Rust", "rust", "rust", "go"])
    backward = term_slugs(["go", "rust", "Rust"])

    assert forward == backward


def test_term_slugs_never_empty() -> None:
    """Terms made only of punctuation still get a usable slug."""
    slugs = term_slugs(["++", "..", "!"])

    assert all(slugs.values()), f"empty slug in {slugs!r}"
    assert len(set(slugs.values())) == 3
    assert all("/" not in slug and slug != ".." for slug in slugs.values())


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("A <!-- more --> B", 2),
        ("A <!--MORE--> B", 2),
        ("A <!--\n  More\n--> B", 2),
        ("<!-- note --> A <!-- more -->", 16),
        ("A <!-- more than this --> B", None),
        ("no marker", None),
    ],
)
def test_find_summary_marker(body: str, expected: int | None) -> None:
    """Only comments whose trimmed content is ``more`` split the summary."""
    assert find_summary_marker(body) == expected


def test_build_derives_identity(page_builder: PageBuilder) -> None:
    """Name, output path, and permalink come from the source path."""
    page = page_builder.build_from_text(
        '+++\ntitle = "Hello"\ndate = 2024-01-02\n+++\nworld',
        PurePosixPath("blog/hello.md"),
    )

    assert page.name == "blog/hello/index.html"
    assert page.output_path == PurePosixPath("blog/hello/index.html")
    assert page.permalink == "https://example.com/blog/hello/"
    assert page.template == "page.html"
    assert page.title == "Hello"
    assert page.date == dt.date(2024, 1, 2)
    assert page.summary is None, "expected no summary without a marker"
    assert page.taxonomy_term is None


def test_build_defaults_title_to_file_stem(page_builder: PageBuilder) -> None:
    """Pages without a title use the file stem."""
    page = page_builder.build_from_text("+++\n+++\nbody", PurePosixPath("notes/todo.md"))

    assert page.title == "todo"
    assert page.description == ""


def test_build_uses_template_extension(page_builder: PageBuilder) -> None:
    """Non-HTML templates keep their own extension."""
    page = page_builder.build_from_text(
        '+++\ntemplate = "feed.xml"\n+++\n', PurePosixPath("feed.md")
    )

    assert page.name == "feed.xml"
    assert page.permalink == "https://example.com/feed.xml"


def test_index_page_permalink_is_base_url(page_builder: PageBuilder) -> None:
    """The root index links to the site base URL."""
    page = page_builder.build_from_text("+++\n+++\nhome", PurePosixPath("index.md"))

    assert page.name == "index.html"
    assert page.permalink == "https://example.com/"


def test_build_renders_summary_and_content(
    page_builder: PageBuilder, renderer: HtmlContentRenderer
) -> None:
    """Text before the marker renders into the summary; all of it into content."""
    page = page_builder.build_from_text(
        '+++\n+++\nA <!-- more --> B {{ note(text="hi") }}',
        PurePosixPath("post.md"),
    )

    assert page.summary == renderer.markdown("A "), (
        f"expected summary to render only 'A ', got {page.summary!r}"
    )
    expected_content = renderer.markdown("A <!-- more --> B ") + "<em>hi</em>"
    assert page.content == expected_content, f"unexpected content {page.content!r}"


def test_build_summary_resolves_images_against_page(
    page_builder: PageBuilder,
) -> None:
    """Summary images link absolutely so they survive embedding elsewhere."""
    page = page_builder.build_from_text(
        "+++\n+++\n![cat](cat.png)\n\n<!-- more -->\n\nRest.",
        PurePosixPath("blog/pets.md"),
    )

    assert page.summary is not None
    assert 'src="https://example.com/blog/pets/cat.png"' in page.summary
    assert "Rest" not in page.summary


def test_build_propagates_pipeline_errors(page_builder: PageBuilder) -> None:
    """Shortcode failures abort the page."""
    with pytest.raises(UnknownShortCodeError):
        page_builder.build_from_text("+++\n+++\n{{ ghost() }}", PurePosixPath("a.md"))


def test_build_reads_source_file(page_builder: PageBuilder, tmp_path: Path) -> None:
    """Building from disk reads the file as UTF-8."""
    source = tmp_path / "ünïcode.md"
    source.write_text('+++\ntitle = "Ünïcode"\n+++\nbody', encoding="utf-8")

    page = page_builder.build(source, PurePosixPath("ünïcode.md"))

    assert page.title == "Ünïcode"


def test_build_rejects_non_utf8_file(
    page_builder: PageBuilder, tmp_path: Path
) -> None:
    """Binary files surface as malformed input rather than a decode error."""
    source = tmp_path / "favicon.ico"
    source.write_bytes(b"\x00\xff\xfe\x89")

    with pytest.raises(MalformedInputError, match="not UTF-8"):
        page_builder.build(source, PurePosixPath("favicon.ico"))


def test_build_wraps_unreadable_file(
    page_builder: PageBuilder, tmp_path: Path
) -> None:
    """A path that cannot be read raises a site error."""
    with pytest.raises(ContentReadError):
        page_builder.build(tmp_path, PurePosixPath("missing.md"))


def test_build_rejects_missing_frontmatter(page_builder: PageBuilder) -> None:
    """Content files must start with frontmatter."""
    with pytest.raises(MalformedInputError):
        page_builder.build_from_text("no frontmatter", PurePosixPath("a.md"))
