"""
Scheduler for word-driven sentence review.

Each step:
1. Pick the target word: most recently due, else next unseen, else soonest due
2. Pick the drill record containing it that introduces the fewest other words
3. Feed the learner's answers back into the per-word memory model
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from erudify.domain.errors import DictionaryUnavailable, EmptyTargetList
from erudify.domain.memory import ExerciseScore, LearnerState, MemoryRecord
from erudify.domain.models import DictionaryEntry, DrillRecord, WordListStatus
from erudify.domain.ports import Dictionary

logger = logging.getLogger(__name__)

# Word tiers, best first.
_DUE, _UNSEEN, _FUTURE = 0, 1, 2


class Scheduler:
    """
    Owns a learner's state and decides what to present next.

    The state is mutated in place; persisting it is the caller's job.
    """

    def __init__(self, state: LearnerState | None = None, dictionary: Dictionary | None = None):
        """
        Args:
            state: Learner state to schedule against; a fresh one if omitted.
            dictionary: Needed only to build word lists from free text.
        """
        self.state = state if state is not None else LearnerState()
        self._dict = dictionary

    # ---------------------------------------------------------------------
    # Word selection
    # ---------------------------------------------------------------------

    def next_word(self, now: datetime, word_list: Sequence[str]) -> str:
        """
        Return the word from word_list to drill next.

        Raises:
            EmptyTargetList: word_list is empty.
        """
        if not word_list:
            raise EmptyTargetList()

        def rank(item: tuple[int, str]) -> tuple:
            idx, word = item
            memory = self.state.word_memory.get(word)
            if memory is None:
                return (_UNSEEN, idx)
            if memory.is_due(now):
                return (_DUE, now - memory.due_at)
            return (_FUTURE, memory.due_at - now)

        _, word = min(enumerate(word_list), key=rank)
        logger.debug(f"Next word: {word}")
        return word

    # ---------------------------------------------------------------------
    # Record selection
    # ---------------------------------------------------------------------

    def score_record(
        self, now: datetime, record: DrillRecord, word_list: Sequence[str]
    ) -> ExerciseScore:
        words = record.distinct_words()
        targets = set(word_list)
        memory = self.state.word_memory

        future = {w for w in words if w in memory and not memory[w].is_due(now)}
        current = [w for w in words if w not in future]

        return ExerciseScore(
            words_outside_target_list=sum(1 for w in current if w not in targets),
            words_in_target_list=sum(1 for w in current if w in targets),
            # Counted over all words, so a word may also appear in the counts above.
            words_never_seen=sum(1 for w in words if w not in memory),
            last_presented_at=self.state.record_history.get(record),
            future_word_count=len(future),
        )

    def next_record(
        self,
        now: datetime,
        records: Sequence[DrillRecord],
        word_list: Sequence[str],
        target_word: str,
    ) -> DrillRecord | None:
        """
        Return the best-scoring record containing target_word, or None.

        Ties go to the record that comes first in records.
        """
        candidates = [r for r in records if r.contains_word(target_word)]
        if not candidates:
            logger.debug(f"No record contains {target_word}")
            return None
        return min(candidates, key=lambda r: self.score_record(now, r, word_list))

    # ---------------------------------------------------------------------
    # Review outcomes
    # ---------------------------------------------------------------------

    def memory_for(self, word: str, now: datetime) -> MemoryRecord:
        return self.state.memory_for(word, now)

    def record_success(self, word: str, now: datetime) -> MemoryRecord:
        memory = self.state.memory_for(word, now)
        memory.success(now)
        logger.debug(f"{word}: success, next due {memory.due_at.isoformat()}")
        return memory

    def record_failure(self, word: str, now: datetime) -> MemoryRecord:
        memory = self.state.memory_for(word, now)
        memory.fail(now)
        logger.debug(f"{word}: failure, next due {memory.due_at.isoformat()}")
        return memory

    def mark_presented(self, record: DrillRecord, now: datetime) -> None:
        self.state.mark_presented(record, now)

    # ---------------------------------------------------------------------
    # Reporting
    # ---------------------------------------------------------------------

    def status(
        self, records: Sequence[DrillRecord], word_list: Sequence[str], now: datetime
    ) -> WordListStatus:
        targets = set(word_list)
        memory = self.state.word_memory

        known = sum(1 for w in targets if w in memory and not memory[w].is_due(now))
        to_review = sum(1 for w in targets if w in memory and memory[w].is_due(now))

        unlocked: set[DrillRecord] = set()
        seen: set[DrillRecord] = set()
        for record in records:
            words = record.distinct_words()
            if not any(w in targets for w in words):
                continue
            if all(w in memory for w in words):
                unlocked.add(record)
                if record in self.state.record_history:
                    seen.add(record)

        return WordListStatus(
            total_words=len(word_list),
            known_words=known,
            words_to_review=to_review,
            unlocked_records=len(unlocked),
            seen_records=len(seen),
        )

    # ---------------------------------------------------------------------
    # Word lists
    # ---------------------------------------------------------------------

    def build_word_list(self, text: str, frequency_sort: bool = False) -> list[str]:
        """
        Turn free text into a target word list using the dictionary's segmenter.

        Only dictionary words are kept, each once, in order of first appearance.
        With frequency_sort the most frequent words come first; the sort is
        stable.
        """
        if self._dict is None:
            raise DictionaryUnavailable("A dictionary is required to build word lists")

        words = list(
            dict.fromkeys(
                token.canonical_form
                for token in self._dict.segment(text)
                if isinstance(token, DictionaryEntry)
            )
        )
        if frequency_sort:
            words.sort(key=lambda w: -self._dict.frequency(w))
        return words
