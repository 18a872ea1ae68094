"""Pipeline step functions: ingest + build, and export orchestration"""

import logging
from pathlib import Path

from sitemanifest.config import Settings
from sitemanifest.core.export import write_documents, write_manifest
from sitemanifest.core.ingest import ingest
from sitemanifest.core.manifest import build_manifest
from sitemanifest.core.models import Manifest


logger = logging.getLogger(__name__)


def run_build(path: str, settings: Settings) -> Manifest:
    """Ingest path and build its manifest. Raises ManifestError on the first fatal failure."""
    sources = ingest(
        Path(path),
        workers=settings.read_workers,
        attempts=settings.read_attempts,
        backoff=settings.read_backoff,
        timeout=settings.read_timeout or None,
    )
    return build_manifest(
        sources,
        strict=settings.strict,
        precedence=settings.precedence,
        parser_config=settings.parser_config,
        excerpt_length=settings.excerpt_length,
        words_per_minute=settings.words_per_minute,
    )


def run_export(
    manifest: Manifest,
    settings: Settings,
    emit_dir: Path = None,
    ) -> tuple[Path, list[tuple[str, Path]]]:
    """Write the manifest JSON and, when emit_dir is given, canonical Markdown files."""
    manifest_path = write_manifest(manifest, Path(settings.manifest_path))
    logger.info("Wrote manifest to %s", manifest_path)
    emitted = write_documents(manifest, emit_dir) if emit_dir else []
    return manifest_path, emitted
