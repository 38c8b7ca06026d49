"""Tests for running a whole training session."""

import asyncio
import random
from datetime import date, timedelta

import pytest

from word_trainer.errors import StorePersistenceError
from word_trainer.models import (
    Credentials, Direction, OutcomeStatus, SessionConfig, SourceSelection, WordEntry,
)
from word_trainer.store import WordStore
from word_trainer.trainer import run_session
from tests.conftest import FakeProvider, RecordingConsole


@pytest.fixture
def dictionary(tmp_path):
    path = tmp_path / "dictionary.txt"
    path.write_text("cat:кот\ndog:собака\n", encoding="utf-8")
    return path


def run(config, console, store, **kwargs):
    return asyncio.run(run_session(config, console, store=store, rng=random.Random(0), **kwargs))


def test_empty_word_list(console, store):
    outcome = run(SessionConfig(offline=True), console, store)

    assert outcome.status is OutcomeStatus.EMPTY
    assert not store.path.exists()
    assert console.lines == []


def test_harvests_quizzes_and_saves(console, store, dictionary):
    config = SessionConfig(count=5, offline=True, sources=SourceSelection(dictionary_path=dictionary))
    console.answers.extend(["cat", "dog"])

    outcome = run(config, console, store)

    assert outcome.status is OutcomeStatus.COMPLETED
    assert outcome.first_pass.presented == 2
    saved = store.load()
    assert {w.identity for w in saved} == {("cat", "кот"), ("dog", "собака")}
    assert "Words for training: 2" in console.text
    assert "Imported words: 2" in console.text


def test_retry_pass_saves_again(console, store, dictionary):
    config = SessionConfig(offline=True, sources=SourceSelection(dictionary_path=dictionary))
    console.answers.extend(["wrong", "wrong", "y", "wrong", "wrong"])

    outcome = run(config, console, store)

    assert len(outcome.first_pass.failures) == 2
    assert outcome.retry_pass.presented == 2
    assert len(outcome.retry_pass.failures) == 2
    assert console.text.count("Wrong answers: 2") == 2
    assert all(w.reviewed is None for w in store.load())


def test_retry_pass_saves_words_answered_correctly(console, store, dictionary):
    config = SessionConfig(offline=True, sources=SourceSelection(dictionary_path=dictionary))
    console.answers.extend(["wrong", "wrong", "y", None, "wrong"])

    outcome = run(config, console, store)

    retried, still_wrong = outcome.first_pass.failures
    assert outcome.retry_pass.failures == [still_wrong]
    saved = {w.name: w for w in store.load()}
    assert saved[retried.name].reviewed == date.today()
    assert saved[still_wrong.name].reviewed is None


def test_no_retry_without_confirmation(console, store, dictionary):
    config = SessionConfig(offline=True, sources=SourceSelection(dictionary_path=dictionary))
    console.answers.extend(["wrong", "wrong", "n"])

    outcome = run(config, console, store)

    assert outcome.retry_pass is None
    assert store.path.exists()


def test_cached_words_skip_harvest(console, store):
    store.save([WordEntry(name="apple", translation="яблоко")])
    provider = FakeProvider(sets=[1], members={1: [[1]]})
    credentials = Credentials(login="a", password="b", student_id="c")
    config = SessionConfig(offline=True, sources=SourceSelection(credentials=credentials))

    outcome = run(config, console, store, provider=provider)

    assert provider.calls == []
    assert outcome.first_pass.presented == 1
    assert store.load()[0].reviewed == date.today()


def test_harvest_merges_with_history(console, store, dictionary):
    today = date.today()
    store.save([WordEntry(name="cat", translation="кот", reviewed=today, transcription="kæt")])
    config = SessionConfig(count=1, offline=True, use_cache=False,
                           sources=SourceSelection(dictionary_path=dictionary))
    console.answers.append("dog")

    outcome = run(config, console, store)

    assert outcome.first_pass.presented == 1
    saved = {w.name: w for w in store.load()}
    assert saved["cat"].reviewed == today
    assert saved["cat"].transcription == "kæt"
    assert saved["dog"].reviewed == today
    assert "Previously repeated words: 1" not in console.text


def test_harvest_when_cache_is_empty(console, store):
    provider = FakeProvider(sets=[1], members={1: [[1, 2]]})
    credentials = Credentials(login="a", password="b", student_id="c")
    config = SessionConfig(offline=True, sources=SourceSelection(credentials=credentials))
    console.answers.extend([None, None])

    outcome = run(config, console, store, provider=provider)

    assert outcome.first_pass.correct == 2
    assert {w.name for w in store.load()} == {"word1", "word2"}


def test_save_failure_propagates(console, tmp_path, dictionary):
    store = WordStore(tmp_path / "missing_dir" / "words.json")
    config = SessionConfig(offline=True, sources=SourceSelection(dictionary_path=dictionary))
    console.answers.extend(["cat", "dog"])

    with pytest.raises(StorePersistenceError):
        run(config, console, store)


def test_reviewed_yesterday_counts_as_fresh(console, store):
    store.save([WordEntry(name="apple", translation="яблоко", reviewed=date.today() - timedelta(days=1))])
    config = SessionConfig(offline=True)

    run(config, console, store)

    assert "Previously repeated words: 0" in console.text


@pytest.mark.parametrize("use_cache", [True, False])
def test_switching_direction_keeps_stored_identities(console, store, dictionary, use_cache):
    sources = SourceSelection(dictionary_path=dictionary)
    run(SessionConfig(offline=True, use_cache=False, sources=sources), console, store)

    switched = RecordingConsole()
    config = SessionConfig(offline=True, use_cache=use_cache, sources=sources,
                           direction=Direction.FOREIGN_TO_NATIVE)
    outcome = run(config, switched, store)

    assert outcome.first_pass.presented == 2
    assert {w.identity for w in store.load()} == {("cat", "кот"), ("dog", "собака")}
    assert "cat" in switched.text and "dog" in switched.text
    assert "кот" not in switched.text and "собака" not in switched.text
