"""
Curriculum tiling: choose, word by word, the sentences that introduce it.

A word list is walked in order. For each word the records containing it are
ranked by how many words they would introduce that the course does not cover
yet; a record introducing nothing new is accepted into the course, so later
words can build on it.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from erudify.domain.models import DrillRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class RecordCost:
    """Ordered lexicographically; smaller is cheaper."""

    novel_words: int  # neither in the course's records nor in the word list
    future_words: int  # in the word list but not yet in the course's records
    extraneous_words: int  # in the course's records but not in the word list
    total_chars: int


@dataclass
class WordPlan:
    word: str
    ranked: list[tuple[DrillRecord, RecordCost]]
    accepted: DrillRecord | None = None

    @property
    def is_free(self) -> bool:
        """True when the best record introduces no novel word."""
        return bool(self.ranked) and self.ranked[0][1].novel_words == 0


@dataclass
class Course:
    word_list: list[str]
    records: list[DrillRecord] = field(default_factory=list)

    def push_record(self, record: DrillRecord) -> None:
        self.records.append(record)

    def covered_words(self) -> set[str]:
        return {w for r in self.records for w in r.distinct_words()}

    def record_cost(self, record: DrillRecord) -> RecordCost:
        covered = self.covered_words()
        in_list = set(self.word_list)
        words = record.distinct_words()

        return RecordCost(
            novel_words=sum(1 for w in words if w not in covered and w not in in_list),
            future_words=sum(1 for w in words if w not in covered and w in in_list),
            extraneous_words=sum(1 for w in words if w in covered and w not in in_list),
            total_chars=len(record.full_text()),
        )


def tile(
    words: Sequence[str],
    records: Sequence[DrillRecord],
    assumed: Sequence[str] = (),
) -> Iterator[WordPlan]:
    """
    Yield a plan per word, accepting the cheapest record when it is free.

    Args:
        words: Target words, in teaching order.
        records: Candidate drill records.
        assumed: Words the learner already knows; they never count as novel.
    """
    course = Course(list(words) + list(assumed))

    for word in words:
        ranked = sorted(
            ((r, course.record_cost(r)) for r in records if r.contains_word(word)),
            key=lambda pair: pair[1],
        )
        plan = WordPlan(word, ranked)
        if plan.is_free:
            plan.accepted = ranked[0][0]
            course.push_record(plan.accepted)
        else:
            logger.debug(f"{word}: no free record ({len(ranked)} candidates)")
        yield plan
