"""Unit tests for core/resolve.py"""

import pytest

from sitemanifest.core.models import DiscardReason, DuplicateGroup
from sitemanifest.core.resolve import group_documents, resolve_duplicates, resolve_group


def test_group_documents_orders_groups_and_members(make_doc):
    """Groups appear in first-seen order; members sorted by source_order."""
    docs = [make_doc("b", 2), make_doc("a", 1), make_doc("b", 0)]
    groups = group_documents(docs)
    assert [g.identity_key for g in groups] == ["b", "a"]
    assert [d.source_order for d in groups[0].members] == [0, 2]


def test_resolve_group_last_seen_wins(make_doc):
    group = DuplicateGroup("about", [make_doc("about", 0, body="v1"), make_doc("about", 1, body="v2")])
    canonical, discarded = resolve_group(group)
    assert canonical.source_order == 1
    assert len(discarded) == 1
    assert discarded[0].reason == DiscardReason.superseded_revision
    assert discarded[0].identity_key == "about"


def test_resolve_group_identical_duplicate(make_doc):
    group = DuplicateGroup("x", [
        make_doc("x", 0, path="a/x.md"),
        make_doc("x", 1, path="b/x.md"),
    ])
    canonical, discarded = resolve_group(group)
    assert canonical.path == "b/x.md"
    assert [(e.path, e.reason, e.kept_path) for e in discarded] == [
        ("a/x.md", DiscardReason.identical_duplicate, "b/x.md"),
    ]


def test_resolve_group_mixed_reasons(make_doc):
    """Members are compared with the canonical one, not with each other."""
    group = DuplicateGroup("x", [
        make_doc("x", 0, body="old"),
        make_doc("x", 1, body="new"),
        make_doc("x", 2, body="new"),
    ])
    canonical, discarded = resolve_group(group)
    assert canonical.source_order == 2
    assert [e.reason for e in discarded] == [
        DiscardReason.superseded_revision,
        DiscardReason.identical_duplicate,
    ]


def test_resolve_group_first_precedence(make_doc):
    group = DuplicateGroup("x", [make_doc("x", 0, body="v1"), make_doc("x", 1, body="v2")])
    canonical, discarded = resolve_group(group, precedence="first")
    assert canonical.source_order == 0
    assert discarded[0].reason == DiscardReason.superseded_revision


def test_resolve_group_single_member(make_doc):
    canonical, discarded = resolve_group(DuplicateGroup("x", [make_doc("x", 4)]))
    assert canonical.source_order == 4
    assert discarded == []


def test_resolve_group_rejects_unknown_precedence(make_doc):
    with pytest.raises(ValueError, match="precedence"):
        resolve_group(DuplicateGroup("x", [make_doc("x", 0)]), precedence="newest")


def test_resolve_duplicates(make_doc):
    docs = [make_doc("a", 0, body="1"), make_doc("b", 1), make_doc("a", 2, body="2"), make_doc("a", 3, body="2")]
    kept, discarded = resolve_duplicates(docs)
    assert [(d.identity_key, d.source_order) for d in kept] == [("a", 3), ("b", 1)]
    assert len(kept) + len(discarded) == len(docs)
    assert {e.reason for e in discarded} == {
        DiscardReason.superseded_revision, DiscardReason.identical_duplicate,
    }
