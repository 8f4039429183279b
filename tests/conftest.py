from datetime import datetime, timedelta, timezone

import pytest

from erudify.domain.memory import LearnerState, MemoryRecord
from erudify.domain.models import DrillRecord, Segment
from erudify.infrastructure.dictionary.cedict import CedictDictionary

CEDICT_FIXTURE = """\
# CC-CEDICT excerpt used by the tests
他 他 [ta1] /he or him/
也 也 [ye3] /also/
不 不 [bu4] /no; not/
知 知 [zhi1] /to know/
知道 知道 [zhi1 dao4] /to know/
道 道 [dao4] /road/
答 答 [da2] /to answer/
答案 答案 [da2 an4] /answer/
案 案 [an4] /case/
我 我 [wo3] /I; me/
是 是 [shi4] /is; to be/
學生 学生 [xue2 sheng5] /student/
喜歡 喜欢 [xi3 huan5] /to like/
吃 吃 [chi1] /to eat/
餃子 饺子 [jiao3 zi5] /dumpling/
叫 叫 [jiao4] /to be called/
你 你 [ni3] /you/
好 好 [hao3] /good/
你好 你好 [ni3 hao3] /hello/
謝謝 谢谢 [xie4 xie5] /to thank/
西 西 [xi1] /west/
安 安 [an1] /peace/
"""


@pytest.fixture
def cedict_lines():
    return CEDICT_FIXTURE.splitlines()


@pytest.fixture
def dictionary(cedict_lines):
    return CedictDictionary.from_lines(cedict_lines)


@pytest.fixture
def cedict_file(tmp_path):
    path = tmp_path / "cedict_ts.u8"
    path.write_text(CEDICT_FIXTURE, encoding="utf-8")
    return path


@pytest.fixture
def now():
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _make_record(pairs, translation: str) -> DrillRecord:
    return DrillRecord(tuple(Segment(text, reading) for text, reading in pairs), translation)


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def set_due():
    """Give a word a memory record that falls due exactly at due_at."""

    def _set_due(state: LearnerState, word: str, due_at: datetime) -> None:
        state.word_memory[word] = MemoryRecord(due_at=due_at, interval=timedelta(seconds=5))

    return _set_due


@pytest.fixture
def xuesheng_record():
    return _make_record(
        [("我", "wǒ"), ("是", "shì"), ("学生", "xué sheng"), ("。", "")],
        "I am a student.",
    )


@pytest.fixture
def jiaozi_record():
    return _make_record(
        [("我", "wǒ"), ("喜欢", "xǐ huan"), ("吃", "chī"), ("饺子", "jiǎo zi"), ("。", "")],
        "I like to eat dumplings.",
    )


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/state
    monkeypatch.setenv("HOME", str(home))
    for var in ("ERUDIFY_DICTIONARY_PATH", "ERUDIFY_FREQUENCY_PATH", "ERUDIFY_DATA_DIR"):
        monkeypatch.delenv(var, raising=False)
    return home
