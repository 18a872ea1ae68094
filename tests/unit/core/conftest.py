"""Shared fixtures for core unit tests"""

import pytest

from sitemanifest.core.models import Document, FrontMatter
from sitemanifest.core.utils.hashing import sha256


POST_MD = """\
---
title: Building a Redis Lock
date: 2024-11-25
categories: [engineering]
tags: [redis, locking]
---

# Building a Redis Lock

Locks are **hard**.
"""

PAGE_MD = """\
---
title: About
permalink: /about/
layout: single
author_profile: true
toc: true
toc_sticky: true
---
I build backend systems.
"""


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Factory for Documents without going through the parser."""
    def _make(identity_key="post", source_order=0, body="Body", date=None, path=None, title="T"):
        return Document(
            identity_key=identity_key,
            path=path or f"{identity_key}.md",
            front_matter=FrontMatter(title=title, date=date),
            body=body,
            content_hash=sha256(f"{title}\n{date}\n{body}"),
            source_order=source_order,
        )
    return _make


@pytest.fixture(name="post_md")
def post_md_fixture():
    return POST_MD


@pytest.fixture(name="page_md")
def page_md_fixture():
    return PAGE_MD
