"""
Alignment of a Chinese sentence with its pinyin transcription.

Walks both strings left to right, committing one segment at a time:
1. Look up every dictionary word that prefixes the remaining hanzi
2. Try the most specific candidate first against the remaining pinyin
3. Fall back to an unaligned one-character segment when nothing is known

The cursors never backtrack once a segment is committed.
"""

import logging
import unicodedata

from erudify.application.utils.pinyin import compact, prettify, strip_prefix_no_tones
from erudify.domain.constants import LOOSE_TONE_MIN_LENGTH
from erudify.domain.errors import AlignmentFailed, SegmentationAmbiguous
from erudify.domain.models import DictionaryEntry, Segment
from erudify.domain.ports import Dictionary

logger = logging.getLogger(__name__)


class Aligner:
    """
    Splits a sentence and its transcription into matching segments.

    Stateless apart from the injected dictionary, so one instance can align
    any number of sentences.
    """

    def __init__(self, dictionary: Dictionary):
        self._dict = dictionary

    def align(
        self,
        chinese: str,
        romanized: str,
        strict: bool = True,
        loose_tones: bool = False,
    ) -> list[Segment]:
        """
        Align hanzi with pinyin.

        Args:
            chinese: The sentence; interior whitespace is ignored.
            romanized: Its pinyin; case and apostrophes are ignored.
            strict: Fail when a match ends inside a longer pinyin word.
            loose_tones: Ignore tone marks for an unambiguous multi-character match.

        Returns:
            Segments whose texts concatenate back to the whitespace-free sentence.

        Raises:
            SegmentationAmbiguous: strict mode detected a mid-word match.
            AlignmentFailed: no candidate reading matches the remaining pinyin.
        """
        orig_chinese = "".join(chinese.split())
        pinyin = unicodedata.normalize("NFC", romanized.lower().replace("'", ""))
        rest = orig_chinese
        segments: list[Segment] = []

        while rest:
            pinyin = pinyin.lstrip()
            candidates = self._dict.lookup_entries(rest)

            if not candidates:
                char, rest = rest[0], rest[1:]
                if segments and not segments[-1].reading:
                    segments[-1] = Segment(segments[-1].text + char, "")
                else:
                    segments.append(Segment(char, ""))
                # An unknown character eats one character of transcription,
                # usually its punctuation counterpart.
                pinyin = pinyin[1:]
                continue

            entry, reading, pinyin = self._match(
                candidates, pinyin, orig_chinese, romanized, strict, loose_tones
            )
            segments.append(Segment(entry.canonical_form, reading))
            rest = rest[len(entry.canonical_form) :]

        logger.debug(f"Aligned {orig_chinese} into {len(segments)} segments")
        return segments

    def _match(
        self,
        candidates: list[DictionaryEntry],
        pinyin: str,
        chinese: str,
        romanized: str,
        strict: bool,
        loose_tones: bool,
    ) -> tuple[DictionaryEntry, str, str]:
        """
        Pick the first candidate whose reading prefixes the pinyin cursor.

        Returns (entry, rendered reading, remaining pinyin).
        """
        longest = max(len(e.canonical_form) for e in candidates)
        n_longest = len({e.reading for e in candidates if len(e.canonical_form) == longest})
        unambiguous = longest >= LOOSE_TONE_MIN_LENGTH and n_longest == 1

        for nth, entry in enumerate(reversed(candidates)):
            pretty = prettify(entry.reading)
            pretty_compact = compact(pretty)

            if loose_tones and unambiguous and nth == 0:
                remainder = strip_prefix_no_tones(pinyin, pretty_compact)
            elif pinyin.startswith(pretty_compact):
                remainder = pinyin[len(pretty_compact) :]
            else:
                remainder = None

            if remainder is None:
                continue

            if strict and remainder[:1].isalpha():
                raise SegmentationAmbiguous(chinese, romanized, pinyin, pretty_compact)

            logger.debug(f"Matched {entry.canonical_form} as {pretty}")
            return entry, pretty, remainder

        raise AlignmentFailed(chinese, romanized, pinyin)
