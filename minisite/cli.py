"""Cyclopts CLI entrypoint for building minisite static sites.

The ``minisite`` console script defined here renders a site root (content,
templates, static files, and ``config.toml``) into a static output
directory. Typical usage is ``minisite build`` inside the site root, or
``minisite build --local`` to preview against ``http://127.0.0.1:1111/``.

Examples
--------
Build the site in the current directory:

>>> from minisite.cli import main
>>> main()  # doctest: +SKIP

Build another site into a custom directory with four render threads:

>>> from minisite.cli import app
>>> app(["build", "site", "--output-dir", "dist", "--workers", "4"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_OUTPUT_DIR
from .builder import SiteBuilder
from .config import SiteConfigError, find_config_file, load_site_config
from .errors import ContentFileError, SiteError

app = App(name="minisite", config=cyclopts.config.Env("MINISITE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _describe(exc: Exception) -> str:
    """Return a one-line report naming the failing file and error kind."""
    if isinstance(exc, ContentFileError):
        return str(exc)
    if isinstance(exc, SiteError):
        return f"{exc.kind}: {exc}"
    return f"{type(exc).__name__}: {exc}"


@app.command(help="Render content, templates, and static files into a site.")
def build(
    path: typ.Annotated[Path, Parameter(help="Site root directory")] = Path(),
    *,
    output_dir: typ.Annotated[
        Path,
        Parameter(help="Output folder, relative to the site root"),
    ] = Path(DEFAULT_OUTPUT_DIR),
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to the site config (defaults to <root>/config.toml)"),
    ] = None,
    local: typ.Annotated[
        bool,
        Parameter(help="Use http://127.0.0.1:1111/ as the base URL"),
    ] = False,
    workers: typ.Annotated[
        int,
        Parameter(help="Threads used to render content and pages"),
    ] = 1,
) -> None:
    """Build the site rooted at ``path``.

    Parameters
    ----------
    path : Path, optional
        Site root containing ``content``, ``templates``, and ``static``;
        defaults to the current directory.
    output_dir : Path, optional
        Output folder; relative paths resolve against the site root.
    config : Path or None, optional
        Explicit configuration file; defaults to the first of
        ``config.toml``, ``config.yaml``, ``config.yml`` in the site root.
    local : bool, optional
        Replace the configured base URL with the local preview address.
    workers : int, optional
        Number of threads used to render content files and pages.

    Returns
    -------
    None
        Writes the site and prints each copied and written path.

    Raises
    ------
    SystemExit
        With status 1 when the configuration is invalid or any file fails to
        render; the first error is reported on stderr.
    """
    try:
        config_path = config or find_config_file(path)
        site_config = load_site_config(config_path, local=local)
        builder = SiteBuilder(
            path,
            site_config,
            output_dir=output_dir if output_dir.is_absolute() else path / output_dir,
            workers=workers,
        )
        report = builder.run()
    except (SiteError, SiteConfigError, FileNotFoundError) as exc:
        print(f"error: {_describe(exc)}", file=sys.stderr)
        raise SystemExit(1) from exc

    for copied in report.copied:
        print(f"copied {_format_path(copied)}")
    for written in report.written:
        print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `minisite` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
