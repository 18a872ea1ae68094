"""Body summaries from markdown-it tokens: excerpt, word count, read time, headings"""

import math

from markdown_it import MarkdownIt

from sitemanifest.core.models import DocumentSummary, Heading


ELLIPSIS = "…"


def make_parser(preset: str = "gfm-like") -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == "heading_open" and token.tag and token.tag[0] == "h" and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _inline_text(token) -> str:
    """Flatten an inline token to plain text (markup dropped, image alt text kept)."""
    parts = []
    for child in token.children or []:
        if child.type in ("text", "code_inline", "image"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return " ".join("".join(parts).split())


def _truncate(text: str, limit: int) -> str:
    """Cut text to at most limit chars on a word boundary, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    if limit <= 0:
        return ""
    head = text[:limit + 1]
    cut = head.rsplit(" ", 1)[0] if " " in head else text[:limit]
    return cut.rstrip() + ELLIPSIS


def summarize(
    body: str,
    parser: MarkdownIt = None,
    excerpt_length: int = 200,
    words_per_minute: int = 200,
    ) -> DocumentSummary:
    """Derive excerpt (first paragraph), word count, read time and heading outline from body."""
    tokens = (parser or make_parser()).parse(body)
    excerpt = None
    words = 0
    headings: list[Heading] = []
    level = None
    in_paragraph = False

    for tok in tokens:
        if tok.type == "heading_open":
            level = _heading_level(tok)
        elif tok.type == "paragraph_open":
            in_paragraph = True
        elif tok.type == "paragraph_close":
            in_paragraph = False
        elif tok.type == "inline":
            text = _inline_text(tok)
            words += len(text.split())
            if level is not None:
                headings.append(Heading(level=level, text=text))
                level = None
            elif in_paragraph and excerpt is None and text:
                excerpt = text

    return DocumentSummary(
        excerpt=_truncate(excerpt or "", excerpt_length),
        word_count=words,
        read_time=math.ceil(words / words_per_minute) if words else 0,
        headings=headings,
    )
