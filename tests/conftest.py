"""Pytest configuration and fixtures."""

import os
import pytest
import vcr

from word_trainer.console import Style
from word_trainer.errors import SourceUnavailable
from word_trainer.models import Alternate, WordEntry
from word_trainer.store import WordStore
from word_trainer.vocabulary_api import MemberPage


def cassette(name: str) -> str:
    """Generate cassette filename."""
    return f"{name}.yaml"


@pytest.fixture
def my_vcr():
    """VCR fixture for recording/replaying HTTP interactions."""
    return vcr.VCR(
        cassette_library_dir="tests/fixtures",
        filter_headers=[("authorization", "DUMMY")],
        record_mode="once",
    )


def live_guard():
    """Check if live testing is enabled."""
    if not os.getenv("WORD_TRAINER_LIVE"):
        pytest.skip("Live network disabled (set WORD_TRAINER_LIVE=1)")


class RecordingConsole:
    """Console that replays scripted answers and records everything written."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.lines = []

    def write_line(self, text: str = "", style: Style = Style.DEFAULT):
        self.lines.append((text, style))

    def read_line(self):
        if not self.answers:
            return None
        return self.answers.pop(0)

    @property
    def text(self):
        return [text for text, _ in self.lines]


@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def sample_words():
    """Sample words for testing."""
    return [
        WordEntry(name="apple", translation="яблоко"),
        WordEntry(name="house", translation="дом"),
        WordEntry(name="love", translation="любовь",
                  alternates=[Alternate(name="affection", translation="любовь")]),
        WordEntry(name="think", translation="думать"),
    ]


@pytest.fixture
def store(tmp_path):
    """Word store in a temporary directory."""
    return WordStore(tmp_path / "words.json")


LESSON_PAGE = """
<html><body>
  <div class="wordset">
    <ul>
      <li>
        <div class="original"><span class="text">  don’t worry </span></div>
        <div class="translation"> не волнуйся </div>
      </li>
      <li>
        <div class="original"><span class="text">cat</span></div>
        <div class="translation">кот</div>
      </li>
      <li>
        <div class="original"><span class="text">   </span></div>
        <div class="translation">пусто</div>
      </li>
      <li>
        <div class="original"><span class="text">orphan</span></div>
      </li>
    </ul>
  </div>
  <ul>
    <li>
      <div class="original"><span class="text">outside</span></div>
      <div class="translation">снаружи</div>
    </li>
  </ul>
</body></html>
"""


@pytest.fixture
def lesson_page():
    return LESSON_PAGE


class FakeProvider:
    """In-memory provider recording every call it receives."""

    def __init__(self, sets, members, token="token-1", fail_stage=None):
        self.sets = sets
        self.members = members  # set id -> list of pages of meaning ids
        self.token = token
        self.fail_stage = fail_stage
        self.calls = []

    def _maybe_fail(self, stage):
        if self.fail_stage == stage:
            raise SourceUnavailable(f"{stage} failed")

    async def login(self, login, password):
        self.calls.append(("login", login))
        self._maybe_fail("login")
        return self.token

    async def list_sets(self, token, student_id):
        self.calls.append(("list_sets", token, student_id))
        self._maybe_fail("list_sets")
        return list(self.sets)

    async def list_set_members(self, token, student_id, set_id, page):
        self.calls.append(("list_set_members", set_id, page))
        self._maybe_fail("list_set_members")
        pages = self.members.get(set_id, [[]])
        return MemberPage(pages[page - 1], len(pages))

    async def resolve_meanings(self, token, meaning_ids):
        self.calls.append(("resolve_meanings", list(meaning_ids)))
        self._maybe_fail("resolve_meanings")
        return [{"text": f"word{i}", "translation": {"text": f"слово{i}"}} for i in meaning_ids]

    def resolve_batches(self):
        return [call[1] for call in self.calls if call[0] == "resolve_meanings"]
