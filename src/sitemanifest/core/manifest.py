"""Manifest assembly: parse, normalize, deduplicate and order a set of source documents"""

import logging
from typing import Iterable, Sequence, Union

from sitemanifest.core.errors import DocumentError
from sitemanifest.core.models import Diagnostic, Document, Manifest, RawDocument
from sitemanifest.core.normalize import identity_key, normalize
from sitemanifest.core.resolve import resolve_duplicates
from sitemanifest.core.summary import make_parser


logger = logging.getLogger(__name__)

Source = Union[RawDocument, tuple[str, str]]


def _as_raw(source: Source) -> RawDocument:
    if isinstance(source, RawDocument):
        return source
    path, raw_text = source
    return RawDocument(path=path, raw_text=raw_text)


def _diagnostic(error: DocumentError, path: str) -> Diagnostic:
    try:
        key = identity_key(path)
    except DocumentError:
        key = None
    return Diagnostic(path=path, error=error.kind, message=error.message, identity_key=key)


def sort_documents(documents: Iterable[Document]) -> list[Document]:
    """Dated documents newest first (ties by identity_key), then undated ones by identity_key."""
    documents = list(documents)
    dated = [d for d in documents if d.date is not None]
    undated = [d for d in documents if d.date is None]
    dated.sort(key=lambda d: d.identity_key)
    dated.sort(key=lambda d: d.date, reverse=True)
    return dated + sorted(undated, key=lambda d: d.identity_key)


def build_manifest(
    sources: Sequence[Source],
    *,
    strict: bool = True,
    precedence: str = "last",
    parser_config: str = "gfm-like",
    excerpt_length: int = 200,
    words_per_minute: int = 200,
    ) -> Manifest:
    """Build a Manifest from (path, raw_text) pairs; source_order is the sequence index.

    Strict mode raises the first DocumentError encountered in source order and
    returns nothing. Lenient mode excludes failing documents, logs them, and
    reports them in Manifest.diagnostics so no input disappears unexplained.
    """
    parser = make_parser(parser_config)
    documents: list[Document] = []
    diagnostics: list[Diagnostic] = []

    for order, source in enumerate(sources):
        raw = _as_raw(source)
        try:
            documents.append(normalize(raw, order, parser, excerpt_length, words_per_minute))
        except DocumentError as e:
            if strict:
                raise
            logger.warning("Excluding %s: %s", raw.path, e.message)
            diagnostics.append(_diagnostic(e, raw.path))

    kept, discarded = resolve_duplicates(documents, precedence)
    manifest = Manifest(
        documents=sort_documents(kept),
        discarded=discarded,
        diagnostics=diagnostics,
    )
    logger.info(
        "Built manifest: %d document(s), %d discarded, %d diagnostic(s)",
        len(manifest.documents), len(manifest.discarded), len(manifest.diagnostics),
    )
    return manifest
