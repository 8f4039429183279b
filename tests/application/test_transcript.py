import pytest

from erudify.application.alignment import Aligner
from erudify.application.transcript import iter_transcript, parse_record, parse_transcript
from erudify.domain.errors import AlignmentFailed, MalformedRecord

TRANSCRIPT = """\
Chinese: 我是学生。
Pinyin: Wǒ shì xuésheng.
English: I am a student.

Chinese: 我喜欢吃饺子。
Pinyin: Wǒ xǐhuan chī jiǎozi.
English: I like to eat dumplings.
"""


@pytest.fixture
def aligner(dictionary):
    return Aligner(dictionary)


def test_parse_transcript(aligner, xuesheng_record, jiaozi_record):
    assert parse_transcript(TRANSCRIPT, aligner) == [xuesheng_record, jiaozi_record]


def test_parse_record_returns_the_rest(aligner, xuesheng_record):
    record, rest = parse_record(TRANSCRIPT, aligner)

    assert record == xuesheng_record
    assert rest.strip().startswith("Chinese: 我喜欢吃饺子。")


def test_whitespace_only_input_has_no_records(aligner):
    assert parse_transcript("\n  \n", aligner) == []


def test_keys_must_come_in_order(aligner):
    text = "Pinyin: Wǒ shì xuésheng.\nChinese: 我是学生。\nEnglish: I am a student.\n"

    with pytest.raises(MalformedRecord) as exc_info:
        parse_transcript(text, aligner)

    assert exc_info.value.reason == "expected 'Chinese:', found 'Pinyin:'"
    assert exc_info.value.remainder.startswith("Pinyin:")


def test_missing_field(aligner):
    text = "Chinese: 我是学生。\nPinyin: Wǒ shì xuésheng.\n"

    with pytest.raises(MalformedRecord, match="expected 'English:'"):
        parse_transcript(text, aligner)


def test_first_error_stops_the_batch(aligner, xuesheng_record):
    text = TRANSCRIPT.replace("jiǎozi", "jiàozi")
    records = iter_transcript(text, aligner)

    assert next(records) == xuesheng_record
    with pytest.raises(AlignmentFailed) as exc_info:
        next(records)
    assert exc_info.value.remainder == "jiàozi."


def test_loose_tones_are_passed_through(aligner):
    text = "Chinese: 你好\nPinyin: nihao\nEnglish: Hello\n"

    [record] = parse_transcript(text, aligner, loose_tones=True)
    assert record.full_reading() == "nǐ hǎo"
