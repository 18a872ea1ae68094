"""Data models for the ingest -> resolve -> manifest pipeline"""

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FrontMatter(BaseModel):
    """Validated metadata block. Keys other than the core four live in `extra`, untouched."""
    model_config = ConfigDict(frozen=True)

    title:      str
    date:       Optional[dt.date] = None    # required for posts, absent for pages
    categories: list[str] = Field(default_factory=list)
    tags:       list[str] = Field(default_factory=list)
    extra:      dict[str, Any] = Field(default_factory=dict)   # permalink, layout, toc, ...


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int
    text:  str


class DocumentSummary(BaseModel):
    """Body-derived facts for the renderer; not part of the content hash."""
    model_config = ConfigDict(frozen=True)

    excerpt:    str = ""
    word_count: int = 0
    read_time:  int = 0                     # minutes
    headings:   list[Heading] = Field(default_factory=list)


class Document(BaseModel):
    """A parsed, normalized document. Unique by identity_key within a manifest."""
    model_config = ConfigDict(frozen=True)

    identity_key: str
    path:         str
    front_matter: FrontMatter
    body:         str                       # markdown with front matter stripped
    content_hash: str
    source_order: int                       # ingestion position; tie-break only
    summary:      DocumentSummary = Field(default_factory=DocumentSummary)

    @property
    def date(self) -> Optional[dt.date]:
        return self.front_matter.date


class DiscardReason(str, Enum):
    """Why a document was left out of the manifest in favor of another revision"""
    identical_duplicate = "identical-duplicate"
    superseded_revision = "superseded-revision"


class DiscardedEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity_key: str
    path:         str
    reason:       DiscardReason
    kept_path:    str                       # path of the canonical document


class Diagnostic(BaseModel):
    """A document excluded by a lenient run, with the error that excluded it."""
    model_config = ConfigDict(frozen=True)

    path:         str
    error:        str                       # error class name, e.g. MalformedFrontMatter
    message:      str
    identity_key: Optional[str] = None


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Manifest(BaseModel):
    """Validated, deduplicated, ordered documents handed to a renderer."""
    model_config = ConfigDict(frozen=True)

    documents:    tuple[Document, ...]
    discarded:    tuple[DiscardedEntry, ...] = ()
    diagnostics:  tuple[Diagnostic, ...] = ()
    generated_at: dt.datetime = Field(default_factory=_utcnow)

    def equivalent(self, other: "Manifest") -> bool:
        """Compare content, ignoring generated_at."""
        exclude = {"generated_at"}
        return self.model_dump(exclude=exclude) == other.model_dump(exclude=exclude)


@dataclass(frozen=True)
class RawDocument:
    """Source text as read from storage; not persisted."""
    path:     str
    raw_text: str


@dataclass
class DuplicateGroup:
    """Documents sharing an identity key, in discovery order; transient."""
    identity_key: str
    members:      list[Document] = field(default_factory=list)
