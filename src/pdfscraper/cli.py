"""Typer-based command line interface.

The ``extract`` command reads a PDF, parses it with the configured engine and
either echoes the text to stdout or writes it through the I/O registry
(``.txt`` for text, ``.json`` for the whole result).

Exit codes
----------
0 success
3 I/O error (missing file, unsupported extension, filesystem issues)
4 configuration error
5 engine or document error
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from .config import ParseOptions, load_config
from .io import read_document, write_result
from .utils.errors import PdfScraperError, UnsupportedFormatError
from .utils.logging import configure_logging
from .walker import parse

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="pdfscraper",
    help="Extract text from PDF documents. Use 'pdfscraper extract' to run.",
)


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _apply_overrides(
    opts: ParseOptions,
    *,
    max_pages: int | None,
    engine: str | None,
) -> ParseOptions:
    """Return a copy of ``opts`` with CLI overrides applied."""

    new_opts = opts.model_copy(deep=True)
    if max_pages is not None:
        new_opts.max_pages = max_pages
    if engine is not None:
        new_opts.engine_version = engine
    return new_opts


@app.callback()
def main() -> None:
    """Entry point for the pdfscraper command group."""
    pass


@app.command()
def extract(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Input PDF file"
    ),
    out_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="Output file (.txt or .json); stdout when omitted"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    max_pages: Optional[int] = typer.Option(  # noqa: B008
        None, "--max-pages", help="Render at most this many pages (0 = all)"
    ),
    engine: Optional[str] = typer.Option(  # noqa: B008
        None, "--engine", help="Engine version [pypdf|pdfplumber|default]"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Extract the text of ``in_path``."""

    configure_logging(verbose)

    try:
        opts = load_config(config_path)
    except (ValidationError, Exception) as exc:  # pragma: no cover - diverse
        _safe_exit(4, str(exc).splitlines()[0])
    opts = _apply_overrides(opts, max_pages=max_pages, engine=engine)

    try:
        data = read_document(in_path)
    except (FileNotFoundError, UnsupportedFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    if verbose:
        typer.echo(f"Read {len(data)} bytes", err=True)

    try:
        result = parse(data, opts)
    except PdfScraperError as exc:
        _safe_exit(5, str(exc))
    if verbose:
        typer.echo(
            f"Rendered {result.numrender}/{result.numpages} pages with {result.version}",
            err=True,
        )
        for number, error in sorted(result.page_errors.items()):
            typer.echo(f"Page {number} failed: {error}", err=True)

    if out_path is None:
        typer.echo(result.text)
        return

    try:
        write_result(out_path, result)
    except (UnsupportedFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    if verbose:
        typer.echo(f"Wrote {out_path}", err=True)


if __name__ == "__main__":  # pragma: no cover
    app()
