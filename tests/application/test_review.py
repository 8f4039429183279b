from datetime import timedelta

import pytest

from erudify.application.review import ReviewSession
from erudify.application.scheduler import Scheduler
from erudify.domain.memory import LearnerState
from erudify.domain.ports import LearnerStore


class RecordingStore(LearnerStore):
    def __init__(self):
        self.saves = 0

    def load(self) -> LearnerState:
        return LearnerState()

    def save(self, state: LearnerState) -> None:
        self.saves += 1


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def session(xuesheng_record, store):
    return ReviewSession(Scheduler(), ["我", "是", "学生"], [xuesheng_record], store)


def test_advance_picks_word_and_record(session, xuesheng_record, now):
    step = session.advance(now)

    assert step.target_word == "我"
    assert step.record == xuesheng_record
    assert step.index == 0
    assert step.score.words_in_target_list == 3
    assert step.current.text == "我"


def test_words_without_records_are_skipped(xuesheng_record, now):
    session = ReviewSession(Scheduler(), ["你好", "我"], [xuesheng_record])
    assert session.advance(now).target_word == "我"


def test_nothing_to_drill(xuesheng_record, now):
    session = ReviewSession(Scheduler(), ["你好"], [xuesheng_record])
    assert session.advance(now) is None
    assert session.step is None


def test_wrong_answer_changes_nothing(session, store, now):
    session.advance(now)
    result = session.submit("wo4", now)

    assert not result.correct
    assert result.answer == "wò"
    assert session.step.index == 0
    assert session.scheduler.state.word_memory == {}
    assert store.saves == 0


def test_correct_answers_walk_the_record(session, store, xuesheng_record, now):
    session.advance(now)

    first = session.submit("wo3", now)
    assert first.correct
    assert first.answer == "wǒ"
    assert not first.step_finished
    assert session.step.index == 1
    assert session.scheduler.state.word_memory["我"].interval == timedelta(seconds=25)

    session.submit("shi4", now)
    last = session.submit("xue2sheng", now)

    assert last.correct
    assert last.step_finished
    assert [s.text for s in last.completed] == ["学生", "。"]
    assert session.history == [xuesheng_record]
    assert session.scheduler.state.record_history[xuesheng_record] == now
    # One save per word, one for the presentation.
    assert store.saves == 4


def test_finishing_advances_to_the_next_step(session, now):
    session.advance(now)
    for answer in ("wo3", "shi4", "xué sheng"):
        session.submit(answer, now)

    # Every word is now scheduled in the future; the soonest comes back.
    assert session.step is not None
    assert session.step.index == 0


def test_revealed_answer_counts_as_failure(session, now):
    session.advance(now)
    assert session.reveal() == "wǒ"

    result = session.submit("wǒ", now)

    assert result.correct
    memory = session.scheduler.state.word_memory["我"]
    assert memory.interval == timedelta(seconds=5)
    assert memory.due_at == now + timedelta(seconds=5)
    assert not session.step.hint_shown


def test_answers_ignore_case_and_spacing(session, now):
    session.advance(now)
    session.submit("WǑ", now)
    session.submit("shì", now)
    assert session.submit("xué  sheng", now).step_finished


def test_submit_without_step(xuesheng_record, now):
    session = ReviewSession(Scheduler(), ["我"], [xuesheng_record])
    assert not session.submit("wo3", now).correct
