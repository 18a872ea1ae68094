"""Identity keys, content hashes, and RawDocument -> Document normalization"""

import re

import yaml
from markdown_it import MarkdownIt

from sitemanifest.core.errors import MissingRequiredField, UnresolvableIdentity
from sitemanifest.core.frontmatter import front_matter_data, parse_front_matter
from sitemanifest.core.models import Document, FrontMatter, RawDocument
from sitemanifest.core.summary import summarize
from sitemanifest.core.utils.hashing import sha256


DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-")
EXTENSION_RE = re.compile(r"\.[^.]*$")
POSTS_DIR = "_posts"


def identity_key(path: str) -> str:
    """Return the logical name of path: final segment without extension or date prefix, lowercased.

    '_posts/2024-11-25-Redis-Locks.md' -> 'redis-locks'. Revisions of one post
    filed under different dates share a key.
    """
    name = path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    name = EXTENSION_RE.sub("", name)
    key = DATE_PREFIX_RE.sub("", name).strip().lower()
    if not key:
        raise UnresolvableIdentity("path yields an empty identity key", path)
    return key


def is_post(path: str) -> bool:
    """True for dated posts: a YYYY-MM-DD- filename prefix or a file under a _posts directory."""
    parts = path.replace("\\", "/").split("/")
    return bool(DATE_PREFIX_RE.match(parts[-1])) or POSTS_DIR in parts[:-1]


def content_hash(front_matter: FrontMatter, body: str) -> str:
    """Stable digest of front matter + body for equality detection (not security)."""
    serialized = yaml.safe_dump(front_matter_data(front_matter), sort_keys=True, allow_unicode=True)
    return sha256(f"{serialized}\n{body}")


def normalize(
    raw: RawDocument,
    source_order: int,
    parser: MarkdownIt = None,
    excerpt_length: int = 200,
    words_per_minute: int = 200,
    ) -> Document:
    """Parse raw and attach identity key, content hash, source order and summary."""
    key = identity_key(raw.path)
    front_matter, body = parse_front_matter(raw.raw_text, raw.path)
    if front_matter.date is None and is_post(raw.path):
        raise MissingRequiredField("required field 'date' is missing for a post", raw.path)
    return Document(
        identity_key=key,
        path=raw.path,
        front_matter=front_matter,
        body=body,
        content_hash=content_hash(front_matter, body),
        source_order=source_order,
        summary=summarize(body, parser, excerpt_length, words_per_minute),
    )
