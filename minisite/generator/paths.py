"""Output path and slug rules shared by content and taxonomy pages."""

from __future__ import annotations

import collections
import hashlib
import re
import typing as typ
from pathlib import PurePosixPath

from pymdownx.slugs import slugify as slugifier

from minisite._constants import INDEX_FILENAME

if typ.TYPE_CHECKING:
    import collections.abc as cabc

INDEX_STEM = "index"
HYPHEN_RUN = re.compile(r"-{2,}")

# NFKD splits accents into combining marks, which the slugifier drops.
_slugify_lower = slugifier(case="lower", normalize="NFKD")


def output_path(relative_path: PurePosixPath, template: str) -> PurePosixPath:
    """Return the output-relative destination of a page.

    The source extension is dropped. HTML templates produce pretty URLs:
    ``blog/post.md`` becomes ``blog/post/index.html`` and ``blog/index.md``
    collapses to ``blog/index.html``. Any other template extension is adopted
    verbatim, so ``feed.md`` rendered by ``feed.xml`` becomes ``feed.xml``.

    Examples
    --------
    >>> str(output_path(PurePosixPath("blog/post.md"), "page.html"))
    'blog/post/index.html'
    >>> str(output_path(PurePosixPath("index.md"), "page.html"))
    'index.html'
    >>> str(output_path(PurePosixPath("feed.md"), "feed.xml"))
    'feed.xml'
    """
    stripped = relative_path.with_suffix("")
    suffix = PurePosixPath(template).suffix
    if not suffix:
        return stripped
    if suffix == ".html":
        if stripped.name == INDEX_STEM:
            stripped = stripped.parent
        return stripped / INDEX_FILENAME
    return stripped.with_suffix(suffix)


def slugify(value: str) -> str:
    """Convert a string into a lowercase hyphen-separated URL slug.

    Accents are stripped and other letters, including non-Latin scripts,
    are kept, so distinct words in any script yield distinct slugs.

    Examples
    --------
    >>> slugify("Café à Paris")
    'cafe-a-paris'
    >>> slugify("日本語")
    '日本語'
    """
    slug = _slugify_lower(value, sep="-")
    return HYPHEN_RUN.sub("-", slug).strip("-")


def _term_digest(term: str) -> str:
    """Return a short stable hex digest identifying ``term``."""
    return hashlib.blake2s(term.encode("utf-8"), digest_size=4).hexdigest()


def term_slugs(terms: cabc.Iterable[str]) -> dict[str, str]:
    """Map each distinct term to a slug no other term in ``terms`` shares.

    Terms whose slugs collide (``Rust`` and ``rust``, ``C`` and ``C++``) or
    slugify to nothing get a digest of the exact term appended, so every
    distinct term keeps its own path. The result depends only on the set of
    terms, not on their order.

    Examples
    --------
    >>> term_slugs(["rust", "python"])
    {'python': 'python', 'rust': 'rust'}
    """
    groups: dict[str, list[str]] = collections.defaultdict(list)
    for term in sorted(set(terms)):
        groups[slugify(term)].append(term)
    slugs: dict[str, str] = {}
    for slug, members in groups.items():
        for term in members:
            if slug and len(members) == 1:
                slugs[term] = slug
            else:
                slugs[term] = "-".join(filter(None, (slug, _term_digest(term))))
    return slugs


def taxonomy_term_path(taxonomy: str, slug: str) -> PurePosixPath:
    """Return the source-style path of the term page stored under ``slug``."""
    return PurePosixPath(taxonomy) / slug


__all__ = ["output_path", "slugify", "taxonomy_term_path", "term_slugs"]
