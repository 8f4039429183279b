"""
Transcript conversion: "Chinese: / Pinyin: / English:" blocks into drill records.
"""

import logging
from collections.abc import Iterator

from erudify.application.alignment import Aligner
from erudify.domain.constants import TRANSCRIPT_KEYS
from erudify.domain.errors import MalformedRecord
from erudify.domain.models import DrillRecord

logger = logging.getLogger(__name__)


def parse_record(
    text: str,
    aligner: Aligner,
    strict: bool = True,
    loose_tones: bool = False,
) -> tuple[DrillRecord, str]:
    """
    Parse and align the first record of text.

    Returns the record and the unparsed rest of the input.

    Raises:
        MalformedRecord: a line is not "Key: value" or the keys are out of order.
        AlignmentError: the hanzi and pinyin could not be aligned.
    """
    rest = text.strip()
    values: list[str] = []

    for expected in TRANSCRIPT_KEYS:
        line, _, tail = rest.partition("\n")
        key, sep, value = line.partition(":")
        if not sep:
            raise MalformedRecord(f"expected '{expected}:'", rest)
        if key.strip() != expected:
            raise MalformedRecord(f"expected '{expected}:', found '{key.strip()}:'", rest)
        values.append(value.strip())
        rest = tail

    chinese, pinyin, english = values
    segments = aligner.align(chinese, pinyin, strict=strict, loose_tones=loose_tones)
    return DrillRecord(tuple(segments), english), rest


def iter_transcript(
    text: str,
    aligner: Aligner,
    strict: bool = True,
    loose_tones: bool = False,
) -> Iterator[DrillRecord]:
    """
    Yield records until only whitespace is left.

    The first error stops the batch; the offending block needs fixing by hand.
    """
    rest = text
    count = 0
    while rest.strip():
        record, rest = parse_record(rest, aligner, strict=strict, loose_tones=loose_tones)
        count += 1
        yield record
    logger.info(f"Converted {count} records")


def parse_transcript(
    text: str,
    aligner: Aligner,
    strict: bool = True,
    loose_tones: bool = False,
) -> list[DrillRecord]:
    return list(iter_transcript(text, aligner, strict=strict, loose_tones=loose_tones))
