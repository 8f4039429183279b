"""
Review session: the bookkeeping half of the training loop.

Rendering and input handling belong to the caller; this module decides which
segment is being asked, checks typed answers and records the outcomes.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from erudify.application.scheduler import Scheduler
from erudify.application.utils.pinyin import apply_tones, compact
from erudify.domain.memory import ExerciseScore
from erudify.domain.models import DrillRecord, Segment
from erudify.domain.ports import LearnerStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ReviewStep:
    """What is currently being drilled."""

    target_word: str
    record: DrillRecord
    score: ExerciseScore
    index: int = 0  # segment being asked
    hint_shown: bool = False

    @property
    def finished(self) -> bool:
        return self.index >= len(self.record.segments)

    @property
    def current(self) -> Segment | None:
        return None if self.finished else self.record.segments[self.index]


@dataclass
class AnswerResult:
    correct: bool
    answer: str  # the answer after tone digits were applied
    step_finished: bool = False
    completed: list[Segment] = field(default_factory=list)


class ReviewSession:
    """
    Drives review steps over a fixed word list and record pool.

    Every recorded success or failure is saved through the store straight
    away, so an interrupted session loses at most the answer in flight.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        word_list: Sequence[str],
        records: Sequence[DrillRecord],
        store: LearnerStore | None = None,
    ):
        self.scheduler = scheduler
        self.word_list = list(word_list)
        self.records = list(records)
        self.store = store
        self.step: ReviewStep | None = None
        self.history: list[DrillRecord] = []

    def advance(self, now: datetime | None = None) -> ReviewStep | None:
        """
        Move on to the next word and record.

        Words without any record are skipped. Returns None when no word in
        the list can be drilled.
        """
        now = now or utcnow()
        candidates = list(self.word_list)

        while candidates:
            word = self.scheduler.next_word(now, candidates)
            record = self.scheduler.next_record(now, self.records, self.word_list, word)
            if record is not None:
                score = self.scheduler.score_record(now, record, self.word_list)
                self.step = ReviewStep(word, record, score)
                self._skip_unaligned()
                logger.debug(f"Drilling {word}: {record.full_text()}")
                return self.step
            logger.debug(f"Skipping {word}: no record")
            candidates.remove(word)

        self.step = None
        return None

    def reveal(self) -> str:
        """Return the expected reading; the segment will count as failed."""
        if self.step is None or self.step.current is None:
            return ""
        self.step.hint_shown = True
        return self.step.current.reading

    def submit(self, answer: str, now: datetime | None = None) -> AnswerResult:
        """
        Check a typed answer against the current segment.

        Tone digits are applied first ("hao3" -> "hǎo"). A correct answer
        updates the word's memory (failure if the hint was shown), saves the
        state and moves past any following unaligned segments. Finishing the
        record marks it presented and advances to the next step.
        """
        now = now or utcnow()
        typed = apply_tones(answer)
        step = self.step
        if step is None or step.current is None:
            return AnswerResult(correct=False, answer=typed)

        segment = step.current
        if compact(typed.strip()) != compact(segment.reading):
            return AnswerResult(correct=False, answer=typed)

        if step.hint_shown:
            self.scheduler.record_failure(segment.text, now)
        else:
            self.scheduler.record_success(segment.text, now)
        self._save()

        completed = [segment]
        step.index += 1
        step.hint_shown = False
        completed.extend(self._skip_unaligned())

        result = AnswerResult(correct=True, answer=typed, completed=completed)
        if step.finished:
            result.step_finished = True
            self.scheduler.mark_presented(step.record, now)
            self._save()
            self.history.append(step.record)
            self.advance(now)
        return result

    def _skip_unaligned(self) -> list[Segment]:
        skipped = []
        step = self.step
        while step is not None and step.current is not None and not step.current.is_aligned:
            skipped.append(step.current)
            step.index += 1
        return skipped

    def _save(self) -> None:
        if self.store is not None:
            self.store.save(self.scheduler.state)
