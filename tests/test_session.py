# tests/test_session.py
import sqlite3
from datetime import date
from unittest.mock import patch

import pytest

from naplan_tutor.models import Progress
from naplan_tutor.selector import select_mission_ids
from naplan_tutor.session import (
    CONSOLATION_GEMS, CORRECT_GEMS, InvalidTransition, MissionEngine, SessionListener,
    SessionState,
)
from naplan_tutor.storage import StorageError

TODAY = date(2026, 3, 7)


class RecordingListener(SessionListener):
    def __init__(self):
        self.events = []

    def on_question(self, question, index, total):
        self.events.append(("question", question.id, index, total))

    def on_hint(self, question, hint):
        self.events.append(("hint", question.id))

    def on_feedback(self, question, outcome):
        self.events.append(("feedback", outcome.state))

    def on_countdown(self, seconds_left):
        self.events.append(("countdown", seconds_left))

    def on_complete(self, result):
        self.events.append(("complete", result))


def wrong_choice(question):
    return next(c for c in question.choices if c != question.correct_answer)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def engine(storage, bank, scheduler, listener):
    return MissionEngine(storage, bank, scheduler, listener)


def test_start_persists_immediately(engine, storage, bank):
    engine.start("numeracy", 10, today=TODAY)
    session = storage.get_session()
    assert session.module == "numeracy"
    assert session.level == 1
    assert session.q_index == 0
    assert session.question_ids == select_mission_ids(bank, "numeracy", 1, 10, "2026-03-07")
    assert engine.state == SessionState.PRESENTING
    assert engine.total == 10


def test_start_uses_stored_level(engine, storage):
    storage.set_progress(Progress(levels={"numeracy": 1, "reading": 4, "conventions": 1, "writing": 1}))
    engine.start("reading", 10, today=TODAY)
    assert engine.session.level == 4
    assert all(q.difficulty == 4 for q in engine.questions)


def test_start_rejects_unknown_domain(engine):
    with pytest.raises(ValueError):
        engine.start("science", 10)


def test_first_attempt_correct(engine, storage, scheduler):
    engine.start("numeracy", 10, today=TODAY)
    q = engine.current_question
    outcome = engine.submit_answer(q.correct_answer)
    assert outcome.is_correct
    assert outcome.gems_awarded == CORRECT_GEMS
    assert engine.state == SessionState.CORRECT
    assert engine.countdown_active
    session = storage.get_session()
    assert session.correct_count == 1
    assert session.gem_count == 25
    assert session.q_index == 0


def test_countdown_auto_advances_after_five_seconds(engine, storage, scheduler):
    engine.start("numeracy", 10, today=TODAY)
    engine.submit_answer(engine.current_question.correct_answer)
    scheduler.advance(4)
    assert engine.state == SessionState.CORRECT
    assert engine.seconds_left == 1
    scheduler.advance(1)
    assert engine.state == SessionState.PRESENTING
    assert engine.session.q_index == 1
    assert storage.get_session().q_index == 1


def test_manual_advance_cancels_countdown(engine, scheduler):
    engine.start("numeracy", 10, today=TODAY)
    engine.submit_answer(engine.current_question.correct_answer)
    scheduler.advance(2)
    engine.advance()
    assert engine.session.q_index == 1
    assert not engine.countdown_active
    assert scheduler.pending() == []
    scheduler.advance(10)
    assert engine.session.q_index == 1
    assert engine.state == SessionState.PRESENTING


def test_wrong_first_attempt_shows_hint_and_stays(engine, storage, scheduler):
    engine.start("reading", 10, today=TODAY)
    q = engine.current_question
    outcome = engine.submit_answer(wrong_choice(q))
    assert not outcome.is_correct
    assert outcome.hint == q.hint
    assert outcome.gems_awarded == 0
    assert engine.state == SessionState.AWAITING_RETRY
    assert engine.hint_visible
    assert not engine.countdown_active
    session = storage.get_session()
    assert session.q_index == 0
    assert session.correct_count == 0
    assert session.gem_count == 0


def test_retry_correct_gets_full_reward(engine, storage):
    engine.start("reading", 10, today=TODAY)
    q = engine.current_question
    engine.submit_answer(wrong_choice(q))
    outcome = engine.submit_answer(q.correct_answer)
    assert outcome.is_correct
    assert outcome.attempt == 2
    assert engine.state == SessionState.CORRECT
    assert storage.get_session().gem_count == CORRECT_GEMS
    assert storage.get_session().correct_count == 1


def test_second_wrong_reveals_answer_and_waits(engine, storage, scheduler):
    engine.start("writing", 10, today=TODAY)
    q = engine.current_question
    engine.submit_answer(wrong_choice(q))
    outcome = engine.submit_answer(wrong_choice(q))
    assert outcome.revealed_answer == q.correct_answer
    assert outcome.gems_awarded == CONSOLATION_GEMS
    assert engine.state == SessionState.INCORRECT_FINAL
    assert engine.revealed_answer == q.correct_answer
    assert not engine.countdown_active
    assert storage.get_session().gem_count == CONSOLATION_GEMS
    assert storage.get_session().correct_count == 0

    scheduler.advance(30)
    assert engine.session.q_index == 0

    with pytest.raises(InvalidTransition):
        engine.submit_answer(q.correct_answer)

    engine.advance()
    assert engine.session.q_index == 1


def test_cannot_advance_while_question_open(engine):
    engine.start("numeracy", 10, today=TODAY)
    with pytest.raises(InvalidTransition):
        engine.advance()


def test_cannot_answer_twice_after_correct(engine):
    engine.start("numeracy", 10, today=TODAY)
    q = engine.current_question
    engine.submit_answer(q.correct_answer)
    with pytest.raises(InvalidTransition):
        engine.submit_answer(q.correct_answer)


def test_show_hint_does_not_change_counts(engine, storage, listener):
    engine.start("conventions", 10, today=TODAY)
    q = engine.current_question
    assert engine.show_hint() == q.hint
    assert engine.state == SessionState.PRESENTING
    assert storage.get_session().gem_count == 0
    assert ("hint", q.id) in listener.events


def test_quit_and_resume_restores_same_question(storage, bank, scheduler):
    first = MissionEngine(storage, bank, scheduler)
    first.start("numeracy", 10, today=TODAY)
    first.submit_answer(first.current_question.correct_answer)
    first.advance()
    q = first.current_question
    first.submit_answer(wrong_choice(q))
    first.quit()
    assert not first.countdown_active

    second = MissionEngine(storage, bank, scheduler)
    assert second.resume() is True
    assert second.current_question.id == q.id
    assert second.session.q_index == 1
    assert second.session.correct_count == 1
    assert second.session.gem_count == 25
    assert second.session.question_ids == first.session.question_ids
    assert second.state == SessionState.PRESENTING
    assert second.attempt == 0


def test_quit_during_countdown_does_not_advance(engine, storage, scheduler):
    engine.start("numeracy", 10, today=TODAY)
    engine.submit_answer(engine.current_question.correct_answer)
    engine.quit()
    scheduler.advance(10)
    assert storage.get_session().q_index == 0
    assert storage.get_session().correct_count == 1


def test_resume_without_session(engine):
    assert engine.resume() is False
    assert engine.state == SessionState.IDLE


def test_completion_levels_up_and_clears_session(engine, storage, listener):
    engine.start("numeracy", 3, today=TODAY)
    for _ in range(3):
        engine.submit_answer(engine.current_question.correct_answer)
        engine.advance()
    assert engine.state == SessionState.COMPLETED
    result = engine.result
    assert result.correct_count == 3
    assert result.total == 3
    assert result.gem_count == 75
    assert result.level == 1
    assert result.new_level == 2
    assert storage.get_session() is None
    progress = storage.get_progress()
    assert progress.levels["numeracy"] == 2
    assert progress.total_gems == 75
    assert listener.events[-1] == ("complete", result)


def test_completion_levels_down(engine, storage):
    storage.set_progress(Progress(levels={"numeracy": 1, "reading": 3, "conventions": 1, "writing": 1}))
    engine.start("reading", 2, today=TODAY)
    for _ in range(2):
        q = engine.current_question
        engine.submit_answer(wrong_choice(q))
        engine.submit_answer(wrong_choice(q))
        engine.advance()
    assert engine.result.new_level == 2
    assert engine.result.gem_count == 2 * CONSOLATION_GEMS
    assert storage.get_progress().levels["reading"] == 2


def test_each_attempt_updates_mastery_and_log(engine, storage):
    engine.start("numeracy", 10, today=TODAY)
    q = engine.current_question
    engine.submit_answer(wrong_choice(q))
    engine.submit_answer(q.correct_answer)
    record = storage.get_mastery(q.subskill)
    assert record.total_attempts == 2
    assert record.correct_attempts == 1
    assert record.streak_correct == 1
    assert record.scheduled_review_queue == [q.id]
    rows = {r["subskill"]: r for r in storage.subskill_accuracy()}
    assert rows[q.subskill]["total"] == 2


def test_listener_event_order(engine, listener, scheduler):
    engine.start("numeracy", 10, today=TODAY)
    first_id = engine.current_question.id
    engine.submit_answer(engine.current_question.correct_answer)
    scheduler.advance(5)
    kinds = [e[0] for e in listener.events]
    assert listener.events[0] == ("question", first_id, 0, 10)
    assert kinds == ["question", "feedback", "countdown", "countdown", "countdown",
                     "countdown", "countdown", "countdown", "question"]
    assert [e[1] for e in listener.events if e[0] == "countdown"] == [5, 4, 3, 2, 1, 0]


def test_failed_write_leaves_state_untouched(engine, storage):
    engine.start("numeracy", 10, today=TODAY)
    q = engine.current_question
    failing = sqlite3.OperationalError("disk full")
    with patch("naplan_tutor.storage._write_record", side_effect=failing):
        with pytest.raises(StorageError):
            engine.submit_answer(q.correct_answer)
    assert engine.session.correct_count == 0
    assert engine.session.gem_count == 0
    assert engine.state == SessionState.PRESENTING
    assert not engine.countdown_active
    assert storage.get_session().correct_count == 0
    assert storage.get_mastery(q.subskill) is None
    assert storage.subskill_accuracy() == []

    engine.submit_answer(q.correct_answer)
    assert storage.get_mastery(q.subskill).total_attempts == 1
    assert storage.subskill_accuracy()[0]["total"] == 1


def test_same_day_missions_pick_same_questions(storage, bank, scheduler, tmp_path):
    from naplan_tutor.storage import Storage

    a = MissionEngine(storage, bank, scheduler)
    a.start("writing", 10, today=TODAY)
    other = Storage(str(tmp_path / "other.db"))
    b = MissionEngine(other, bank, scheduler)
    b.start("writing", 10, today=TODAY)
    assert a.session.question_ids == b.session.question_ids
