"""Selection of the words trained in one session."""

import random
from datetime import date
from typing import List, Optional

import structlog

from .errors import EmptyVocabularyError
from .models import WordEntry

log = structlog.get_logger()


def build_training_set(words: List[WordEntry], count: int, rng: Optional[random.Random] = None,
                       today: Optional[date] = None) -> List[WordEntry]:
    """Pick ``count`` distinct words, preferring ones not reviewed today.

    The words are shuffled first; words not reviewed today are taken in
    shuffled order and, if there are too few, the set is topped up from the
    front of the same shuffled order.
    """
    if not words:
        raise EmptyVocabularyError("The list of words is empty.")

    rng = rng or random.Random()
    today = today or date.today()
    count = min(count, len(words))

    shuffled = list(words)
    rng.shuffle(shuffled)

    selected = [word for word in shuffled if not word.is_reviewed_today(today)][:count]
    chosen = {word.identity for word in selected}
    for word in shuffled:
        if len(selected) >= count:
            break
        if word.identity not in chosen:
            chosen.add(word.identity)
            selected.append(word)

    log.info("Training set built", requested=count, total=len(words),
             reviewed_today=sum(1 for w in selected if w.is_reviewed_today(today)))
    return selected
