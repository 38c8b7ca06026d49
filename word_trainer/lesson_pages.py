"""Extraction of word pairs from saved lesson pages."""

from pathlib import Path
from typing import List, Optional

import structlog
from bs4 import BeautifulSoup, Tag

from .models import RawPair
from .utils import clean_text, read_text

log = structlog.get_logger()


def _field_text(item: Tag, selector: str) -> str:
    node: Optional[Tag] = item.select_one(selector)
    if node is None:
        return ""
    return clean_text(node.get_text())


def parse_lesson_page(markup: str) -> List[RawPair]:
    """Extract (term, translation) pairs from the word sets of a lesson page.

    Items missing either field are dropped rather than reported.
    """
    soup = BeautifulSoup(markup, "html.parser")

    pairs = []
    for word_set in soup.select("div.wordset"):
        for item in word_set.select("li"):
            term = _field_text(item, "div.original > span.text")
            translation = _field_text(item, "div.translation")
            if term and translation:
                pairs.append(RawPair(term, translation))
    return pairs


def parse_lesson_dir(pages_dir: Path) -> List[RawPair]:
    """Parse every page file in ``pages_dir``, skipping pages that fail."""
    pairs = []
    page_files = sorted(p for p in pages_dir.iterdir() if p.is_file())
    for page_file in page_files:
        try:
            page_pairs = parse_lesson_page(read_text(page_file))
        except Exception as e:
            log.warning("Skipping unreadable lesson page", file=str(page_file), error=str(e))
            continue
        log.info("Lesson page parsed", file=page_file.name, count=len(page_pairs))
        pairs.extend(page_pairs)

    log.info("Lesson pages parsed", directory=str(pages_dir), pages=len(page_files), count=len(pairs))
    return pairs
