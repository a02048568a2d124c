"""Load site configuration from TOML or YAML into typed dataclasses."""

from __future__ import annotations

import tomllib
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from minisite._constants import CONFIG_FILENAMES, DEFAULT_TEMPLATE, LOCAL_BASE_URL

from .helpers import (
    _build_extra,
    _build_taxonomies,
    _normalize_base_url,
    _optional_str,
    _require_str,
)
from .models import SiteConfig, SiteConfigError


def find_config_file(root: Path) -> Path:
    """Return the first configuration file present in ``root``.

    ``config.toml`` wins over ``config.yaml``, which wins over
    ``config.yml``.

    Raises
    ------
    FileNotFoundError
        If none of the candidate files exist.
    """
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    names = ", ".join(CONFIG_FILENAMES)
    msg = f"No configuration file ({names}) found in '{root}'."
    raise FileNotFoundError(msg)


def load_site_config(path: Path, *, local: bool = False) -> SiteConfig:
    """Load the site configuration describing URLs, taxonomies, and theming.

    Parameters
    ----------
    path : Path
        Filesystem path to ``config.toml`` or ``config.yaml``.
    local : bool, optional
        Replace the configured base URL with the local preview address
        ``http://127.0.0.1:1111/``.

    Returns
    -------
    SiteConfig
        Parsed site configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the file cannot be parsed, is not a mapping, or required fields
        are missing or invalid.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_site_config(Path("config.toml"))  # doctest: +SKIP
    >>> config.base_url  # doctest: +SKIP
    'https://example.com/'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    raw = _read_mapping(path)
    base_url = LOCAL_BASE_URL if local else _require_str(raw, "base_url")
    return SiteConfig(
        title=_require_str(raw, "title"),
        base_url=_normalize_base_url(base_url),
        taxonomies=_build_taxonomies(raw.get("taxonomies")),
        default_template=_optional_str(raw.get("default_template")) or DEFAULT_TEMPLATE,
        highlight_theme=_optional_str(raw.get("highlight_theme")) or "monokai",
        extra=_build_extra(raw.get("extra")),
    )


def _read_mapping(path: Path) -> dict[str, typ.Any]:
    """Parse ``path`` as TOML or YAML based on its suffix."""
    match path.suffix:
        case ".toml":
            try:
                with path.open("rb") as handle:
                    loaded: object = tomllib.load(handle)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in '{path}': {exc}"
                raise SiteConfigError(msg) from exc
        case ".yaml" | ".yml":
            loader = YAML(typ="safe")
            loader.version = (1, 2)
            try:
                with path.open("r", encoding="utf-8") as handle:
                    loaded = loader.load(handle) or {}
            except YAMLError as exc:
                msg = f"Invalid YAML in '{path}': {exc}"
                raise SiteConfigError(msg) from exc
        case suffix:
            msg = f"Unsupported configuration format '{suffix}' for '{path}'."
            raise SiteConfigError(msg)
    if not isinstance(loaded, dict):
        msg = "Top-level configuration structure must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded)


__all__ = ["find_config_file", "load_site_config"]
