"""Load and validate the site configuration for minisite builds.

This subpackage parses the site's ``config.toml`` (or ``config.yaml``),
validates the base URL and taxonomy declarations, and produces the typed
:class:`SiteConfig` that the generator and templates consume. The primary
entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from minisite.config import load_site_config
>>> site = load_site_config(Path("config.toml"))  # doctest: +SKIP
>>> site.make_permalink("blog/post/index.html")  # doctest: +SKIP
'https://example.com/blog/post/'
"""

from .loader import find_config_file, load_site_config
from .models import SiteConfig, SiteConfigError, TaxonomyConfig

__all__ = [
    "SiteConfig",
    "SiteConfigError",
    "TaxonomyConfig",
    "find_config_file",
    "load_site_config",
]
