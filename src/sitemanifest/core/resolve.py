"""Duplicate resolution: collapse revisions sharing an identity key to one canonical document"""

import logging
from typing import Iterable

from sitemanifest.core.models import DiscardedEntry, DiscardReason, Document, DuplicateGroup


logger = logging.getLogger(__name__)

PRECEDENCES = ("first", "last")


def group_documents(documents: Iterable[Document]) -> list[DuplicateGroup]:
    """Group by identity_key; groups in first-seen order, members by ascending source_order."""
    groups: dict[str, DuplicateGroup] = {}
    for doc in sorted(documents, key=lambda d: d.source_order):
        groups.setdefault(doc.identity_key, DuplicateGroup(doc.identity_key)).members.append(doc)
    return list(groups.values())


def resolve_group(group: DuplicateGroup, precedence: str = "last") -> tuple[Document, list[DiscardedEntry]]:
    """Select the canonical member of group and explain every other member.

    With precedence 'last' the highest source_order wins (later revisions
    supersede earlier ones); 'first' keeps the earliest. Members whose
    content_hash equals the canonical one are identical duplicates, the rest
    are superseded revisions.
    """
    if precedence not in PRECEDENCES:
        raise ValueError(f"precedence must be one of {PRECEDENCES}, got {precedence!r}")
    pick = max if precedence == "last" else min
    canonical = pick(group.members, key=lambda d: d.source_order)

    discarded = []
    for doc in group.members:
        if doc is canonical:
            continue
        if doc.content_hash == canonical.content_hash:
            reason = DiscardReason.identical_duplicate
            logger.debug("%s: identical duplicate of %s", doc.path, canonical.path)
        else:
            reason = DiscardReason.superseded_revision
            logger.info("%s: superseded by %s", doc.path, canonical.path)
        discarded.append(DiscardedEntry(
            identity_key=group.identity_key,
            path=doc.path,
            reason=reason,
            kept_path=canonical.path,
        ))
    return canonical, discarded


def resolve_duplicates(
    documents: Iterable[Document],
    precedence: str = "last",
    ) -> tuple[list[Document], list[DiscardedEntry]]:
    """Return (one document per identity_key, discarded entries) in first-seen group order."""
    kept: list[Document] = []
    discarded: list[DiscardedEntry] = []
    for group in group_documents(documents):
        canonical, dropped = resolve_group(group, precedence)
        kept.append(canonical)
        discarded.extend(dropped)
    return kept, discarded
