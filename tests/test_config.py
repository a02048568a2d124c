"""Unit tests for loading the site configuration."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from minisite.config import (
    SiteConfig,
    SiteConfigError,
    TaxonomyConfig,
    find_config_file,
    load_site_config,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> Path:
    path.write_text(dedent(text).lstrip(), encoding="utf-8")
    return path


def test_load_toml_config(tmp_path: Path) -> None:
    """TOML configs populate every field and normalize the base URL."""
    path = _write(
        tmp_path / "config.toml",
        """
        title = "Example"
        base_url = "https://example.com/blog"
        taxonomies = [{ name = "tags" }, "categories", { name = "tags" }]
        default_template = "post.html"
        highlight_theme = "friendly"

        [extra]
        author = "Sam"
        """,
    )

    config = load_site_config(path)

    assert config.title == "Example"
    assert config.base_url == "https://example.com/blog/", (
        "expected the base URL to gain a trailing slash"
    )
    assert config.taxonomies == [TaxonomyConfig("tags"), TaxonomyConfig("categories")]
    assert config.default_template == "post.html"
    assert config.highlight_theme == "friendly"
    assert config.extra == {"author": "Sam"}


def test_load_yaml_config_with_defaults(tmp_path: Path) -> None:
    """YAML configs are accepted and optional fields fall back to defaults."""
    path = _write(
        tmp_path / "config.yaml",
        """
        title: Example
        base_url: https://example.com/
        taxonomies:
          - tags
        """,
    )

    config = load_site_config(path)

    assert config.taxonomy_names == ["tags"]
    assert config.default_template == "page.html"
    assert config.highlight_theme == "monokai"
    assert config.extra == {}


def test_local_overrides_base_url(tmp_path: Path) -> None:
    """Local builds preview against the loopback address."""
    path = _write(
        tmp_path / "config.toml",
        'title = "Example"\nbase_url = "https://example.com/"\n',
    )

    config = load_site_config(path, local=True)

    assert config.base_url == "http://127.0.0.1:1111/"


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ('title = "Example"\n', "base_url"),
        ('base_url = "https://example.com/"\n', "title"),
        ('title = "x"\nbase_url = "example.com"\n', "absolute"),
        ('title = "x"\nbase_url = "https://e.com/"\ntaxonomies = "tags"\n', "list"),
        ('title = "x"\nbase_url = "https://e.com/"\ntaxonomies = [1]\n', "taxonomy"),
        ('title = "x"\nbase_url = "https://e.com/"\nextra = 3\n', "extra"),
        ("title = \n", "Invalid TOML"),
    ],
)
def test_invalid_configs_raise(tmp_path: Path, text: str, message: str) -> None:
    """Missing or malformed fields are configuration errors."""
    path = _write(tmp_path / "config.toml", text)

    with pytest.raises(SiteConfigError, match=message):
        load_site_config(path)


def test_unsupported_suffix(tmp_path: Path) -> None:
    """Only TOML and YAML files are understood."""
    path = _write(tmp_path / "config.json", "{}")

    with pytest.raises(SiteConfigError, match="Unsupported"):
        load_site_config(path)


def test_yaml_must_be_mapping(tmp_path: Path) -> None:
    """A YAML document that is not a mapping is rejected."""
    path = _write(tmp_path / "config.yml", "- a\n- b\n")

    with pytest.raises(SiteConfigError, match="mapping"):
        load_site_config(path)


def test_missing_file(tmp_path: Path) -> None:
    """Loading a path that does not exist raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "config.toml")


def test_find_config_file_prefers_toml(tmp_path: Path) -> None:
    """``config.toml`` wins when several configuration files exist."""
    _write(tmp_path / "config.yaml", "title: x\n")
    toml_path = _write(tmp_path / "config.toml", 'title = "x"\n')

    assert find_config_file(tmp_path) == toml_path


def test_find_config_file_falls_back_to_yaml(tmp_path: Path) -> None:
    """YAML configs are found when no TOML file exists."""
    yml_path = _write(tmp_path / "config.yml", "title: x\n")

    assert find_config_file(tmp_path) == yml_path


def test_find_config_file_missing(tmp_path: Path) -> None:
    """A root without configuration raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="config.toml"):
        find_config_file(tmp_path)


@pytest.mark.parametrize(
    ("output_path", "expected"),
    [
        ("index.html", "https://example.com/"),
        ("blog/index.html", "https://example.com/blog/"),
        ("blog/post/index.html", "https://example.com/blog/post/"),
        ("feed.xml", "https://example.com/feed.xml"),
    ],
)
def test_make_permalink(output_path: str, expected: str) -> None:
    """Permalinks drop a trailing ``index.html``."""
    config = SiteConfig(title="x", base_url="https://example.com/")

    assert config.make_permalink(output_path) == expected


def test_get_taxonomy_unknown() -> None:
    """Unconfigured taxonomies raise a configuration error."""
    config = SiteConfig(title="x", base_url="https://example.com/")

    with pytest.raises(SiteConfigError, match="categories"):
        config.get_taxonomy("categories")
