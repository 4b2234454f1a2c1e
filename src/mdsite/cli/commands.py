"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.export import write_build
from mdsite.core.parse import discover_files
from mdsite.core.pipeline import BuildResult, assemble_site, run_build, run_stage
from mdsite.errors import MdsiteError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _require_path(path: str) -> None:
    if not Path(path).exists():
        _fail(f"Path not found: {path}")


def _build(path: str, settings: Settings) -> BuildResult:
    try:
        return run_build(path, settings)
    except MdsiteError as e:
        _fail("Build failed", e)


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to build")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include drafts in the build")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--degraded", help="Abort on any bad document, or skip it")] = None,
    speed: Annotated[Optional[int], typer.Option("--reading-speed", help="Words per minute")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Per-document worker threads")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Run the full pipeline and write page contexts, search index, and manifest."""
    settings = _settings(overrides={
        "output_dir": out, "include_drafts": drafts, "strict": strict,
        "reading_speed": speed, "workers": workers,
    }, verbose=verbose)
    _require_path(path)

    result = _build(path, settings)
    output_dir = Path(settings.output_dir)
    try:
        written = write_build(result, output_dir)
    except (OSError, ValueError) as e:
        _fail("Export failed", e)

    for identity, json_path in written:
        typer.echo(f"  {identity} -> {json_path}")
    for source, reason in result.excluded:
        typer.echo(f"  excluded: {source} ({reason})")
    typer.echo(
        f"Built {len(written)} page(s), {len(result.corpus)} in corpus, "
        f"{len(result.search)} searchable, to {output_dir}/"
    )


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to validate")],
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Validate every document without writing output. Exits 1 on any failure."""
    settings = _settings(verbose=verbose)
    _require_path(path)

    target = Path(path)
    root = target.parent if target.is_file() else target
    results = run_stage(discover_files(target), root, settings)
    failures = [r for r in results if r.error is not None]
    for r in failures:
        for problem in getattr(r.error, "problems", [r.error]):
            typer.echo(f"  {problem}", err=True)

    try:
        assemble_site(results, settings.model_copy(update={"strict": False}))
    except MdsiteError as e:
        _fail("Check failed", e)

    if failures:
        _fail(f"{len(failures)} of {len(results)} document(s) invalid")
    typer.echo(f"OK: {len(results)} document(s) valid")


def list_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to index")],
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include drafts")] = None,
    ):
    """List the corpus, newest first, with previous/next links."""
    settings = _settings(overrides={"include_drafts": drafts, "strict": False})
    _require_path(path)

    result = _build(path, settings)
    if not len(result.corpus):
        typer.echo("No published documents found.")
        raise typer.Exit(1)
    for doc in result.corpus:
        links = result.navigation[doc.identity]
        prev = links.previous.identity if links.previous else "-"
        nxt = links.next.identity if links.next else "-"
        typer.echo(f"{doc.published_at.date().isoformat()}  {doc.identity}  prev={prev} next={nxt}")
