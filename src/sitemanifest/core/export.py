"""Export: manifest JSON and canonical Markdown files for the renderer"""

from pathlib import Path, PurePosixPath

from sitemanifest.core.frontmatter import render_document
from sitemanifest.core.models import Document, Manifest


def build_markdown(doc: Document) -> str:
    """Return the canonical source text (front matter block + body) for doc."""
    return render_document(doc.front_matter, doc.body)


def _relative_path(doc: Document) -> Path:
    rel = PurePosixPath(doc.path.replace("\\", "/"))
    if rel.is_absolute() or ".." in rel.parts:
        raise ValueError(f"{doc.path}: document path must be relative and stay inside the output directory")
    return Path(*rel.parts)


def write_manifest(manifest: Manifest, path: Path) -> Path:
    """Write manifest as indented JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(manifest.model_dump_json(indent=2), encoding="utf-8")
    return path


def write_documents(manifest: Manifest, output_dir: Path) -> list[tuple[str, Path]]:
    """Write one canonical Markdown file per document. Returns (identity_key, path) pairs.

    Output path mirrors the source path:
      output_dir / doc.path
    Absolute paths and paths containing ".." are rejected with ValueError
    so nothing is written outside output_dir.
    """
    targets = [(doc, output_dir / _relative_path(doc)) for doc in manifest.documents]
    results = []
    for doc, dest in targets:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(build_markdown(doc), encoding="utf-8")
        results.append((doc.identity_key, dest))
    return results
