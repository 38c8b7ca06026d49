"""Collects word pairs from every configured source."""

from typing import List, Optional

import structlog

from .dictionary_file import read_dictionary
from .errors import DictionaryParseError
from .lesson_pages import parse_lesson_dir
from .models import RawPair, SourceSelection
from .vocabulary_api import VocabularyProvider, fetch_vocabulary, fetch_vocabulary_http

log = structlog.get_logger()


async def harvest(sources: SourceSelection,
                  provider: Optional[VocabularyProvider] = None) -> List[RawPair]:
    """Run the adapters for the given sources and collect their pairs.

    Lesson pages come first, then the API, then the dictionary file. Pairs
    keep the (term, translation) order their source gives them and are not
    deduplicated here.
    """
    pairs: List[RawPair] = []

    if sources.pages_dir is not None:
        pairs.extend(parse_lesson_dir(sources.pages_dir))

    if sources.credentials is not None:
        if provider is not None:
            pairs.extend(await fetch_vocabulary(provider, sources.credentials))
        else:
            pairs.extend(await fetch_vocabulary_http(sources.credentials))

    if sources.dictionary_path is not None:
        try:
            pairs.extend(read_dictionary(sources.dictionary_path))
        except DictionaryParseError as e:
            log.error("Dictionary file rejected", file=str(sources.dictionary_path),
                      line=e.line_number, error=str(e))
        except OSError as e:
            log.error("Dictionary file unreadable", file=str(sources.dictionary_path), error=str(e))

    log.info("Harvest completed", count=len(pairs))
    return pairs

