from erudify.domain.models import DictionaryEntry, DrillRecord, Segment


def test_segment_alignment_flag():
    assert Segment("你", "nǐ").is_aligned
    assert not Segment("。").is_aligned


def test_record_text_views(xuesheng_record):
    assert xuesheng_record.full_text() == "我是学生。"
    assert xuesheng_record.full_reading() == "wǒ shì xué sheng"
    assert xuesheng_record.distinct_words() == ["我", "是", "学生"]
    assert xuesheng_record.contains_word("学生")
    assert not xuesheng_record.contains_word("。")


def test_distinct_words_keeps_first_occurrence_order(make_record):
    record = make_record([("谢谢", "xiè xie"), ("你", "nǐ"), ("谢谢", "xiè xie")], "Thanks, thanks.")
    assert record.distinct_words() == ["谢谢", "你"]


def test_record_identity_is_structural(xuesheng_record):
    rebuilt = DrillRecord(
        [Segment(s.text, s.reading) for s in xuesheng_record.segments], "I am a student."
    )
    assert rebuilt == xuesheng_record
    assert hash(rebuilt) == hash(xuesheng_record)
    assert isinstance(rebuilt.segments, tuple)

    other = DrillRecord(xuesheng_record.segments, "I'm a student.")
    assert other != xuesheng_record


def test_record_key_restores_the_record(xuesheng_record):
    key = xuesheng_record.key()
    assert "学生" in key
    assert DrillRecord.from_key(key) == xuesheng_record


def test_dictionary_entry_equality_ignores_definitions():
    assert DictionaryEntry("好", "hao3", definitions=("good",)) == DictionaryEntry("好", "hao3")
