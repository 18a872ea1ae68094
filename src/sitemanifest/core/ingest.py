"""Content source: Markdown file discovery and concurrent reads with bounded retries"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path

from sitemanifest.core.errors import IngestionAborted, IOTransient, SourceUnreadable
from sitemanifest.core.models import RawDocument


logger = logging.getLogger(__name__)

MD_EXTENSIONS = (".md", ".markdown", ".mdx")
EXCLUDED_DIRS = {"_site", "node_modules"}   # generator output and vendored packages
PERMANENT_ERRORS = (FileNotFoundError, IsADirectoryError, NotADirectoryError, PermissionError)


def _skipped(rel: Path) -> bool:
    """True if any parent directory of rel is hidden or excluded."""
    return any(part.startswith(".") or part in EXCLUDED_DIRS for part in rel.parts[:-1])


def discover_files(path: Path, extensions: tuple[str, ...] = MD_EXTENSIONS) -> list[Path]:
    """Return Markdown files under path sorted by relative POSIX path, or [path] for a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in extensions else []
    if not path.is_dir():
        raise SourceUnreadable("no such file or directory", str(path))
    found = [
        p for p in path.rglob("*")
        if p.is_file() and p.suffix.lower() in extensions and not _skipped(p.relative_to(path))
    ]
    return sorted(found, key=lambda p: p.relative_to(path).as_posix())


def read_source(path: Path, attempts: int = 3, backoff: float = 0.1) -> str:
    """Read path as UTF-8, retrying transient OS errors with exponential backoff.

    Raises IOTransient once attempts are exhausted and SourceUnreadable for
    errors retrying cannot fix (missing file, permissions, invalid UTF-8).
    """
    for attempt in range(1, attempts + 1):
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SourceUnreadable(f"not valid UTF-8: {e}", str(path)) from e
        except PERMANENT_ERRORS as e:
            raise SourceUnreadable(e.strerror or str(e), str(path)) from e
        except OSError as e:
            if attempt >= attempts:
                raise IOTransient(f"read failed after {attempts} attempt(s): {e}", str(path)) from e
            delay = backoff * 2 ** (attempt - 1)
            logger.warning("Read of %s failed (attempt %d/%d), retrying in %.2fs: %s",
                           path, attempt, attempts, delay, e)
            time.sleep(delay)
    raise ValueError(f"attempts must be >= 1, got {attempts}")


def ingest(
    root: Path,
    *,
    workers: int = 4,
    attempts: int = 3,
    backoff: float = 0.1,
    timeout: float = None,
    extensions: tuple[str, ...] = MD_EXTENSIONS,
    ) -> list[RawDocument]:
    """Read every Markdown file under root into RawDocuments, in discovery order.

    Reads run concurrently but all of them finish before anything is returned.
    Paths are relative to root (POSIX style). Any read failure, or the timeout
    expiring, aborts the whole ingestion; no partial list is returned. On timeout
    queued reads are cancelled but reads already blocked in the pool are not
    joined; their threads finish in the background and their results are dropped.
    """
    root = Path(root)
    files = discover_files(root, extensions)
    base = root if root.is_dir() else root.parent
    logger.info("Reading %d file(s) from %s", len(files), root)

    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(read_source, p, attempts, backoff) for p in files]
        _, pending = wait(futures, timeout=timeout)
        if pending:
            raise IngestionAborted(
                f"timed out after {timeout}s with {len(pending)} file(s) unread", str(root))
        texts = [f.result() for f in futures]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    return [
        RawDocument(path=p.relative_to(base).as_posix(), raw_text=text)
        for p, text in zip(files, texts)
    ]
