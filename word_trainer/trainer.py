"""Runs one training session from harvest to final save."""

import random
from typing import Optional

import structlog

from .console import Console
from .enrichment import SentenceLookupClient, enrich_words
from .errors import EmptyVocabularyError
from .harvester import harvest
from .models import OutcomeStatus, SessionConfig, SessionOutcome
from .quiz import QuizEngine
from .session import build_training_set
from .store import WordStore
from .vocabulary_api import VocabularyProvider

log = structlog.get_logger()


async def run_session(config: SessionConfig, console: Console, store: Optional[WordStore] = None,
                      provider: Optional[VocabularyProvider] = None,
                      lookup_client: Optional[SentenceLookupClient] = None,
                      rng: Optional[random.Random] = None) -> SessionOutcome:
    """Load or harvest words, quiz a subset and save the review dates."""
    store = store or WordStore()
    words = store.load()

    if config.use_cache and words:
        log.info("Training from stored words", count=len(words))
    else:
        pairs = await harvest(config.sources, provider)
        words = store.merge(words, pairs)

    try:
        train_set = build_training_set(words, config.count, rng)
    except EmptyVocabularyError:
        log.warning("No words to train")
        return SessionOutcome.empty()

    console.write_line(f"Words for training: {len(train_set)}")
    console.write_line(f"Imported words: {len(words)}")
    if config.use_cache:
        console.write_line(f"Previously repeated words: {sum(1 for w in words if w.is_reviewed_today())}")
    console.write_line()

    await enrich_words(train_set, console, offline=config.offline, client=lookup_client,
                       direction=config.direction)

    engine = QuizEngine(console, config.direction)
    first_pass = engine.run_pass(train_set)
    engine.report(first_pass)
    store.save(words)

    retry_pass = None
    if first_pass.failures and engine.confirm_retry():
        retry_pass = engine.run_pass(first_pass.failures)
        engine.report(retry_pass)
        store.save(words)

    return SessionOutcome(status=OutcomeStatus.COMPLETED, first_pass=first_pass, retry_pass=retry_pass)
