"""
Domain models for drill records and dictionary entries.

These are pure data structures with no I/O or external dependencies.
"""

import json
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Segment:
    """
    One aligned unit of a sentence.

    Attributes:
        text: Hanzi (or an unaligned run: punctuation, digits, foreign words).
        reading: Diacritic pinyin, empty iff the segment is an unaligned run.
    """

    text: str
    reading: str = ""

    @property
    def is_aligned(self) -> bool:
        return bool(self.reading)


@dataclass(frozen=True)
class DrillRecord:
    """
    A segmented Chinese sentence paired with its translation.

    Identity is structural: two records with the same segments and translation
    are the same record, which is what the learner history is keyed on.
    """

    segments: tuple[Segment, ...]
    translation: str

    def __post_init__(self):
        # Accept any sequence but store a tuple so the record stays hashable.
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))

    def full_text(self) -> str:
        return "".join(s.text for s in self.segments)

    def full_reading(self) -> str:
        return " ".join(s.reading for s in self.segments if s.reading)

    def distinct_words(self) -> list[str]:
        """Words of the sentence in first-occurrence order, unaligned runs excluded."""
        return list(dict.fromkeys(s.text for s in self.segments if s.is_aligned))

    def contains_word(self, word: str) -> bool:
        return word in self.distinct_words()

    def key(self) -> str:
        """Stable string identity used when the record is a mapping key on disk."""
        payload = [[[s.text, s.reading] for s in self.segments], self.translation]
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_key(cls, key: str) -> "DrillRecord":
        segments, translation = json.loads(key)
        return cls(tuple(Segment(text, reading) for text, reading in segments), translation)


@dataclass(frozen=True)
class DictionaryEntry:
    """
    A dictionary word.

    Attributes:
        canonical_form: Simplified written form, matched against source text.
        reading: Numbered pinyin as stored by the dictionary (e.g. "zhi1 dao4").
        frequency: Relative usage frequency, 0.0 when unknown.
    """

    canonical_form: str
    reading: str
    frequency: float = 0.0
    definitions: tuple[str, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class WordListStatus:
    """Progress summary of a learner against a target word list."""

    total_words: int
    known_words: int  # scheduled in the future
    words_to_review: int  # scheduled in the past
    unlocked_records: int  # records with a target word and no unseen words
    seen_records: int  # unlocked records that have been presented
