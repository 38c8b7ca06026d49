"""Interactive quiz over a list of words."""

from datetime import date
from typing import List, Optional

import structlog

from .console import Console, Style
from .models import Direction, PassSummary, WordEntry

log = structlog.get_logger()

RETRY_PROMPT = "Repeat the words in which mistakes were made? (y/n)"
RETRY_CONFIRMATION = "y"


def answer_matches(user_input: Optional[str], word: WordEntry,
                   direction: Direction = Direction.NATIVE_TO_FOREIGN) -> bool:
    """Check an answer against the word and its alternates, ignoring case.

    ``direction`` picks which side of the word is expected. A missing or
    empty answer counts as correct.
    """
    if not user_input:
        return True

    answer = user_input.casefold()
    if answer == direction.answer(word).casefold():
        return True
    return any(answer == alternate.casefold() for alternate in direction.alternate_answers(word))


class QuizEngine:
    """Asks each word once per pass and records the outcome."""

    def __init__(self, console: Console, direction: Direction = Direction.NATIVE_TO_FOREIGN):
        self.console = console
        self.direction = direction

    def run_pass(self, words: List[WordEntry], today: Optional[date] = None) -> PassSummary:
        """Ask every word in order and collect the failures."""
        today = today or date.today()
        failures: List[WordEntry] = []

        for word in words:
            self.console.write_line(self.direction.prompt(word))
            user_input = self.console.read_line()

            if answer_matches(user_input, word, self.direction):
                word.reviewed = today
                self.console.write_line("SUCCESS", Style.SUCCESS)
            else:
                failures.append(word)
                self.console.write_line("FAIL", Style.ERROR)
                self.console.write_line(f"Right answer is: {self.direction.answer(word)}", Style.ERROR)

            self._show_details(word)
            self.console.write_line()

        summary = PassSummary(presented=len(words), failures=failures)
        log.info("Quiz pass completed", presented=summary.presented, failed=len(summary.failures))
        return summary

    def _show_details(self, word: WordEntry):
        if word.alternates:
            self.console.write_line("Synonyms:", Style.INFO)
            self.console.write_line(", ".join(a.name for a in word.alternates), Style.INFO)

        if word.sentences:
            self.console.write_line(f"Example sentences containing {word.name.upper()}:", Style.INFO)
            for sentence in word.sentences:
                self.console.write_line(f'"{sentence}"', Style.INFO)

    def report(self, summary: PassSummary):
        self.console.write_line(f"Correct answers: {summary.correct}")
        self.console.write_line(f"Wrong answers: {len(summary.failures)}")
        self.console.write_line()

    def confirm_retry(self) -> bool:
        """Ask whether to repeat the failed words; only a literal ``y`` confirms."""
        self.console.write_line(RETRY_PROMPT)
        answer = self.console.read_line()
        self.console.write_line()
        return answer == RETRY_CONFIRMATION
