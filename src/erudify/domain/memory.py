"""
Per-word memory model and learner state.

Pure data structures; the scheduler and the review session are the only
writers, persistence is handled by a LearnerStore.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import total_ordering

from .constants import EARLY_REVIEW_DIVISOR, INITIAL_INTERVAL, SPACED_RECALL_MULTIPLIER
from .models import DrillRecord

_NEVER = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class MemoryRecord:
    """
    Spaced-repetition state for one word.

    Attributes:
        due_at: When the word should next be reviewed.
        interval: Current memory strength; due_at is always last update + interval.
    """

    due_at: datetime
    interval: timedelta = INITIAL_INTERVAL

    def __post_init__(self):
        if self.interval <= timedelta(0):
            raise ValueError(f"interval must be positive, got {self.interval}")

    @classmethod
    def initial(cls, now: datetime) -> "MemoryRecord":
        return cls(due_at=now, interval=INITIAL_INTERVAL)

    def is_due(self, now: datetime) -> bool:
        return self.due_at <= now

    def success(self, now: datetime) -> None:
        if self.due_at > now:
            # Not forgotten yet, only a light reinforcement.
            self.interval += self.interval / EARLY_REVIEW_DIVISOR
        else:
            self.interval += self.interval * SPACED_RECALL_MULTIPLIER
        self.due_at = now + self.interval

    def fail(self, now: datetime) -> None:
        self.interval = INITIAL_INTERVAL
        self.due_at = now + self.interval


@dataclass
class LearnerState:
    """Everything known about one learner: word memory and record history."""

    word_memory: dict[str, MemoryRecord] = field(default_factory=dict)
    record_history: dict[DrillRecord, datetime] = field(default_factory=dict)

    def seen(self, word: str) -> bool:
        return word in self.word_memory

    def memory_for(self, word: str, now: datetime) -> MemoryRecord:
        """Return the word's memory record, creating a fresh one on first encounter."""
        record = self.word_memory.get(word)
        if record is None:
            record = MemoryRecord.initial(now)
            self.word_memory[word] = record
        return record

    def mark_presented(self, record: DrillRecord, now: datetime) -> None:
        self.record_history[record] = now


@total_ordering
@dataclass(frozen=True)
class ExerciseScore:
    """
    How well a drill record fits the learner right now. Smaller is better.

    Ordered lexicographically on the fields in declaration order; a record
    that was never presented sorts before any presentation time.
    """

    words_outside_target_list: int
    words_in_target_list: int
    words_never_seen: int
    last_presented_at: datetime | None
    future_word_count: int

    def sort_key(self) -> tuple:
        presented = self.last_presented_at is not None
        return (
            self.words_outside_target_list,
            self.words_in_target_list,
            self.words_never_seen,
            (presented, self.last_presented_at if presented else _NEVER),
            self.future_word_count,
        )

    def __lt__(self, other: "ExerciseScore") -> bool:
        if not isinstance(other, ExerciseScore):
            return NotImplemented
        return self.sort_key() < other.sort_key()
