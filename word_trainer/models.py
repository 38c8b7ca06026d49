"""Data models for the word trainer."""

from datetime import date
from enum import Enum
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple
from pydantic import BaseModel, Field, PositiveInt


class RawPair(NamedTuple):
    """A (term, translation) tuple extracted by a single source adapter."""

    term: str
    translation: str


class Direction(str, Enum):
    """Which side of a stored word is shown and which one is asked for.

    Words are stored as harvested, term first. The direction only decides
    how they are presented, so switching it never changes a word's identity.
    """

    NATIVE_TO_FOREIGN = "native-to-foreign"  # prompt with translation, expect term
    FOREIGN_TO_NATIVE = "foreign-to-native"  # prompt with term, expect translation

    def prompt(self, word: "WordEntry") -> str:
        if self is Direction.FOREIGN_TO_NATIVE:
            return word.name
        return word.translation

    def answer(self, word: "WordEntry") -> str:
        if self is Direction.FOREIGN_TO_NATIVE:
            return word.translation
        return word.name

    def alternate_answers(self, word: "WordEntry") -> List[str]:
        if self is Direction.FOREIGN_TO_NATIVE:
            return [a.translation for a in word.alternates if a.translation]
        return [a.name for a in word.alternates]


class Alternate(BaseModel):
    """An alternate accepted answer with its own translation."""

    name: str
    translation: str = ""


class WordEntry(BaseModel):
    """A vocabulary word with its review history.

    ``name`` is the harvested term and ``translation`` its meaning. Only the
    (name, translation) identity takes part in equality and hashing, so
    enrichment never splits one word into two.
    """

    name: str
    translation: str
    transcription: str = ""
    sentences: List[str] = Field(default_factory=list)
    alternates: List[Alternate] = Field(default_factory=list)
    reviewed: Optional[date] = None

    @property
    def identity(self) -> Tuple[str, str]:
        return (self.name, self.translation)

    def is_reviewed_today(self, today: Optional[date] = None) -> bool:
        """Return True if the word was reviewed on ``today`` (defaults to the current date)."""
        if self.reviewed is None:
            return False
        return self.reviewed == (today or date.today())

    def __eq__(self, other):
        if not isinstance(other, WordEntry):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self):
        return hash(self.identity)


class Credentials(BaseModel):
    """Account credentials for the remote vocabulary API."""

    login: str
    password: str
    student_id: str


class SourceSelection(BaseModel):
    """Which vocabulary sources are available for a harvest run."""

    pages_dir: Optional[Path] = None
    credentials: Optional[Credentials] = None
    dictionary_path: Optional[Path] = None

    @property
    def is_empty(self) -> bool:
        return self.pages_dir is None and self.credentials is None and self.dictionary_path is None


class SessionConfig(BaseModel):
    """Validated configuration for one training session."""

    count: PositiveInt = 20
    offline: bool = False
    use_cache: bool = True
    sources: SourceSelection = Field(default_factory=SourceSelection)
    direction: Direction = Direction.NATIVE_TO_FOREIGN


class PassSummary(BaseModel):
    """Result of a single quiz pass."""

    presented: int
    failures: List[WordEntry] = Field(default_factory=list)

    @property
    def correct(self) -> int:
        return self.presented - len(self.failures)


class OutcomeStatus(str, Enum):
    EMPTY = "empty"
    COMPLETED = "completed"


class SessionOutcome(BaseModel):
    """What a session run reports back to the command line layer."""

    status: OutcomeStatus
    first_pass: Optional[PassSummary] = None
    retry_pass: Optional[PassSummary] = None

    @classmethod
    def empty(cls) -> "SessionOutcome":
        return cls(status=OutcomeStatus.EMPTY)
