"""Front matter parsing and validation, plus the inverse serializer"""

import datetime as dt
import re
from typing import Any

import yaml

from sitemanifest.core.errors import MalformedFrontMatter, MissingRequiredField
from sitemanifest.core.models import FrontMatter


DELIMITER = "---"
CORE_KEYS = ("title", "date", "categories", "tags")
DATE_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:$|[T\s])")
_SCALARS = (str, int, float, bool, dt.date)


def _normalize_text(text: str) -> str:
    """Drop a leading BOM and convert CRLF/CR line endings to LF."""
    return text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")


def _split(text: str, path: str) -> tuple[str, str]:
    """Return (yaml_block, body); body is everything after the closing delimiter line."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\n") != DELIMITER:
        raise MalformedFrontMatter("missing opening '---' delimiter", path)
    for i in range(1, len(lines)):
        if lines[i].rstrip("\n") == DELIMITER:
            return "".join(lines[1:i]), "".join(lines[i + 1:])
    raise MalformedFrontMatter("missing closing '---' delimiter", path)


def _load_block(block: str, path: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(block)
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises ValueError for timestamps like 2024-13-45
        raise MalformedFrontMatter(f"invalid YAML front matter: {e}", path) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedFrontMatter(
            f"front matter must be key-value pairs, got {type(data).__name__}", path)
    return {str(k): v for k, v in data.items()}


def _coerce_title(value: Any, path: str) -> str:
    if value is None:
        raise MissingRequiredField("required field 'title' is missing", path)
    if not isinstance(value, _SCALARS):
        raise MalformedFrontMatter("'title' must be a scalar value", path)
    title = value.isoformat() if isinstance(value, dt.date) else str(value)
    if not title.strip():
        raise MissingRequiredField("required field 'title' is empty", path)
    return title


def _coerce_date(value: Any, path: str) -> dt.date | None:
    """Accept YAML dates/datetimes and ISO-like strings; datetimes keep their calendar date."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        m = DATE_PREFIX_RE.match(value.strip())
        if m:
            try:
                return dt.date.fromisoformat(m.group(1))
            except ValueError:
                pass
    raise MalformedFrontMatter(f"'date' is not a valid YYYY-MM-DD calendar date: {value!r}", path)


def _coerce_terms(key: str, value: Any, path: str) -> list[str]:
    """Return a deduplicated list of strings, first occurrence order kept."""
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    terms = []
    for item in items:
        if not isinstance(item, _SCALARS):
            raise MalformedFrontMatter(f"'{key}' must be a sequence of strings", path)
        term = item.isoformat() if isinstance(item, dt.date) else str(item)
        if term.strip():
            terms.append(term)
    return list(dict.fromkeys(terms))


def parse_front_matter(raw_text: str, path: str = "<string>") -> tuple[FrontMatter, str]:
    """Split raw_text into a validated FrontMatter and the markdown body.

    Raises MalformedFrontMatter when the delimiters are missing or the block is
    not a YAML mapping with well-typed values, and MissingRequiredField when
    title is absent or blank. A document with no front matter block is never
    treated as body-only.
    """
    block, body = _split(_normalize_text(raw_text), path)
    data = _load_block(block, path)
    front_matter = FrontMatter(
        title=_coerce_title(data.get("title"), path),
        date=_coerce_date(data.get("date"), path),
        categories=_coerce_terms("categories", data.get("categories"), path),
        tags=_coerce_terms("tags", data.get("tags"), path),
        extra={k: v for k, v in data.items() if k not in CORE_KEYS},
    )
    return front_matter, body


def front_matter_data(front_matter: FrontMatter) -> dict[str, Any]:
    """Return the front matter as an ordered mapping: core keys first, then passthrough keys."""
    data: dict[str, Any] = {"title": front_matter.title}
    if front_matter.date is not None:
        data["date"] = front_matter.date
    if front_matter.categories:
        data["categories"] = list(front_matter.categories)
    if front_matter.tags:
        data["tags"] = list(front_matter.tags)
    data.update(front_matter.extra)
    return data


def render_front_matter(front_matter: FrontMatter) -> str:
    """Serialize front matter to a delimited YAML block ending with a newline."""
    header = yaml.safe_dump(
        front_matter_data(front_matter),
        default_flow_style=False, allow_unicode=True, sort_keys=False,
    )
    return f"{DELIMITER}\n{header}{DELIMITER}\n"


def render_document(front_matter: FrontMatter, body: str) -> str:
    """Inverse of parse_front_matter: parsing the result yields (front_matter, body) again."""
    return render_front_matter(front_matter) + body
