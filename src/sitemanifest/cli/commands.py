"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from sitemanifest.config import Settings, load_config
from sitemanifest.core.errors import ManifestError
from sitemanifest.core.export import write_documents
from sitemanifest.core.models import Manifest
from sitemanifest.core.pipeline import run_build, run_export


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return settings


def _build(path: str, settings: Settings) -> Manifest:
    try:
        return run_build(path, settings)
    except ManifestError as e:
        _fail(f"{e.kind} in {e.path}" if e.path else e.kind, e.message)


def _echo_manifest(manifest: Manifest) -> None:
    """Print kept documents, discards and diagnostics, then a summary line."""
    for doc in manifest.documents:
        date = doc.date.isoformat() if doc.date else "page"
        typer.echo(f"  kept: {doc.identity_key} ({date}) <- {doc.path}")
    for entry in manifest.discarded:
        typer.echo(f"  {entry.reason.value}: {entry.path} (kept {entry.kept_path})")
    for diag in manifest.diagnostics:
        typer.echo(f"  {diag.error}: {diag.path}: {diag.message}", err=True)
    typer.echo(
        f"Manifest - "
        f"{len(manifest.documents)} document(s), "
        f"{len(manifest.discarded)} discarded, "
        f"{len(manifest.diagnostics)} diagnostic(s)"
    )


def build_cmd(
    path: Annotated[str, typer.Argument(help="Content file or directory")],
    out: Annotated[Optional[str], typer.Option("--out", help="Manifest JSON output path")] = None,
    lenient: Annotated[bool, typer.Option("--lenient", help="Exclude invalid documents instead of failing")] = False,
    precedence: Annotated[Optional[str], typer.Option("--precedence", help="Duplicate revision that wins: first or last")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Concurrent file reads")] = None,
    emit_dir: Annotated[Optional[str], typer.Option("--emit-dir", help="Also write canonical Markdown here")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Validate, deduplicate and order content into a manifest JSON file."""
    settings = _settings(overrides={
        "manifest_path": out, "precedence": precedence, "read_workers": workers,
        "strict": False if lenient else None,
    }, verbose=verbose)
    manifest = _build(path, settings)
    _echo_manifest(manifest)

    try:
        manifest_path, emitted = run_export(manifest, settings, Path(emit_dir) if emit_dir else None)
    except (OSError, ValueError) as e:
        _fail("Export failed", e)
    for key, md_path in emitted:
        typer.echo(f"  {key} -> {md_path}")
    typer.echo(f"Wrote manifest to {manifest_path}")


def check_cmd(
    path: Annotated[str, typer.Argument(help="Content file or directory")],
    precedence: Annotated[Optional[str], typer.Option("--precedence", help="Duplicate revision that wins: first or last")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Report every invalid document and discarded revision without writing anything."""
    settings = _settings(overrides={"strict": False, "precedence": precedence}, verbose=verbose)
    manifest = _build(path, settings)
    _echo_manifest(manifest)
    if manifest.diagnostics:
        raise typer.Exit(1)


def emit_cmd(
    path: Annotated[str, typer.Argument(help="Content file or directory")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    precedence: Annotated[Optional[str], typer.Option("--precedence", help="Duplicate revision that wins: first or last")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Write the canonical revision of every document as normalized Markdown."""
    settings = _settings(overrides={"output_dir": out, "precedence": precedence}, verbose=verbose)
    manifest = _build(path, settings)
    output_dir = Path(settings.output_dir)
    try:
        results = write_documents(manifest, output_dir)
    except (OSError, ValueError) as e:
        _fail("Export failed", e)
    for key, md_path in results:
        typer.echo(f"  {key} -> {md_path}")
    typer.echo(f"Emitted {len(results)} document(s) to {output_dir}/")
