"""Static-site content pipeline for markdown pages with shortcodes.

This package turns a tree of frontmatter-prefixed markdown files into a
site: it renders markdown and embedded shortcodes, indexes every page for
section and taxonomy listings, and renders each page through Jinja
templates. ``minisite build`` is the command-line entry point.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from minisite import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
