"""JSON-file persistence for the vocabulary and its review history."""

from pathlib import Path
from typing import Iterable, List

import structlog
from pydantic import TypeAdapter, ValidationError

from .config import WORDS_FILE
from .errors import StorePersistenceError
from .models import RawPair, WordEntry
from .utils import read_text, unique, write_text_atomic

log = structlog.get_logger()

_snapshot = TypeAdapter(List[WordEntry])


class WordStore:
    """The full word list, saved as one JSON array and rewritten on every save."""

    def __init__(self, path: Path = WORDS_FILE):
        self.path = Path(path)

    def load(self) -> List[WordEntry]:
        """Load stored words; a missing or unreadable file gives an empty list.

        Entries repeating an identity already loaded are dropped, first one wins.
        """
        if not self.path.exists():
            log.info("Word store not found, starting empty", path=str(self.path))
            return []

        try:
            words = _snapshot.validate_json(read_text(self.path))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            log.warning("Word store unreadable, starting empty", path=str(self.path), error=str(e))
            self._set_aside_corrupt()
            return []

        loaded = unique(words)
        if len(loaded) < len(words):
            log.warning("Duplicate words dropped from store", path=str(self.path),
                        dropped=len(words) - len(loaded))

        log.info("Word store loaded", path=str(self.path), count=len(loaded))
        return loaded

    def _set_aside_corrupt(self):
        backup = self.path.with_name(self.path.name + ".corrupt")
        try:
            self.path.replace(backup)
            log.warning("Corrupt word store moved aside", backup=str(backup))
        except OSError as e:
            log.warning("Could not move corrupt word store aside", path=str(self.path), error=str(e))

    @staticmethod
    def merge(existing: List[WordEntry], fresh_pairs: Iterable[RawPair]) -> List[WordEntry]:
        """Add entries for pairs whose identity is not stored yet.

        Stored entries are kept as they are, review date included.
        """
        merged = list(existing)
        known = {word.identity for word in merged}
        added = 0
        for pair in fresh_pairs:
            identity = (pair.term, pair.translation)
            if identity in known:
                continue
            known.add(identity)
            merged.append(WordEntry(name=pair.term, translation=pair.translation))
            added += 1

        log.info("Words merged", stored=len(existing), added=added, total=len(merged))
        return merged

    def save(self, words: List[WordEntry]):
        """Replace the store file with ``words``."""
        try:
            write_text_atomic(self.path, _snapshot.dump_json(words).decode("utf-8"))
        except OSError as e:
            log.error("Word store could not be saved", path=str(self.path), error=str(e))
            raise StorePersistenceError(f"Could not save words to {self.path}: {e}") from e

        log.info("Word store saved", path=str(self.path), count=len(words))
