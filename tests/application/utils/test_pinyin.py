import pytest

from erudify.application.utils.pinyin import (
    apply_tones,
    compact,
    has_tone_mark,
    prettify,
    split_words,
    strip_prefix_no_tones,
    strip_tones,
)


@pytest.mark.parametrize(
    "numbered, expected",
    [
        ("zhi1 dao4", "zhī dào"),
        ("xue2 sheng5", "xué sheng"),
        ("Ni3 hao3", "Nǐ hǎo"),
        ("jiao3 zi5", "jiǎo zi"),
        ("wǒ", "wǒ"),  # already marked
        ("，", "，"),
    ],
)
def test_prettify(numbered, expected):
    assert prettify(numbered) == expected


def test_prettify_digit_replaces_existing_mark():
    assert prettify("shēng5") == "sheng"
    assert prettify("shēng4") == "shèng"


def test_tone_helpers():
    assert strip_tones("Nǐ hǎo") == "Ni hao"
    assert has_tone_mark("xué")
    assert not has_tone_mark("xue")
    assert compact("Xué  sheng") == "xuésheng"


class TestStripPrefixNoTones:
    def test_matches_on_base_letters(self):
        assert strip_prefix_no_tones("zhidao dá", "zhīdào") == " dá"
        assert strip_prefix_no_tones("zhīdào", "zhidao") == ""

    def test_requires_the_whole_prefix(self):
        assert strip_prefix_no_tones("zhi", "zhīdào") is None
        assert strip_prefix_no_tones("zhadao", "zhīdào") is None


@pytest.mark.parametrize(
    "pinyin, expected",
    [
        ("xuesheng", ["xue", "sheng"]),
        ("daan", ["daan"]),
        ("da an", ["da", " an"]),
        ("nihao", ["ni", "hao"]),
        ("wo", ["wo"]),
    ],
)
def test_split_words(pinyin, expected):
    assert split_words(pinyin) == expected
    assert "".join(split_words(pinyin)) == pinyin


@pytest.mark.parametrize(
    "typed, expected",
    [
        ("wo3", "wǒ"),
        ("xuesheng2", "xuésheng"),
        ("xuésheng1", "xuéshēng"),
        ("xuéshēng5", "xuésheng"),
        ("xue2sheng", "xuésheng"),
        ("hao", "hao"),
        ("", ""),
    ],
)
def test_apply_tones(typed, expected):
    assert apply_tones(typed) == expected
