"""Utility functions for text cleanup, batching and file I/O."""

import os
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, TypeVar

import structlog

log = structlog.get_logger()

T = TypeVar("T")

APOSTROPHES = str.maketrans({
    "’": "'",  # right single quotation mark
    "‘": "'",  # left single quotation mark
    "ʼ": "'",  # modifier letter apostrophe
    "`": "'",
    "´": "'",  # acute accent
})


def clean_text(text: str) -> str:
    """Trim whitespace and normalize apostrophe variants to ``'``."""
    return text.strip().translate(APOSTROPHES)


def unique(items: Iterable[T]) -> List[T]:
    """Drop duplicates, keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    for i in range(0, len(items), size):
        yield items[i:i + size]


def read_text(file_path: Path) -> str:
    """Read a UTF-8 text file, ignoring a leading byte order mark."""
    with open(file_path, "r", encoding="utf-8-sig") as f:
        return f.read()


def write_text_atomic(file_path: Path, content: str):
    """Replace ``file_path`` with ``content`` without leaving a partial file behind."""
    fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, file_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    log.info("File written", file=str(file_path), size=len(content))
