"""Exception types raised across the word trainer."""


class WordTrainerError(Exception):
    """Base class for all word trainer errors."""


class SourceUnavailable(WordTrainerError):
    """A vocabulary source could not deliver its payload."""


class DictionaryParseError(WordTrainerError):
    """A dictionary file line has no ``name:translation`` delimiter."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Malformed dictionary line {line_number}: {line!r}")


class LookupFailed(WordTrainerError):
    """Enrichment lookup for a single word failed."""


class EmptyVocabularyError(WordTrainerError):
    """There are no words to train on."""


class StorePersistenceError(WordTrainerError):
    """The word store file could not be written."""
