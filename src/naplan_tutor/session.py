"""Mission session engine: question flow, two-attempt answers, rewards, resume.

The engine owns one mission at a time. Every event that changes counters or
the cursor is written to storage before the in-memory state moves on, so a
failed write leaves the engine exactly where the store says it is.
"""
import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional

from naplan_tutor.bank import QuestionBank
from naplan_tutor.leveling import update_level
from naplan_tutor.mastery import init_subskill, update_mastery
from naplan_tutor.models import DOMAINS, MissionResult, MissionSession, Question
from naplan_tutor.scheduler import ScheduledTask, Scheduler
from naplan_tutor.selector import day_stamp, resolve_questions, select_mission_ids
from naplan_tutor.storage import Storage

logger = logging.getLogger(__name__)

CORRECT_GEMS = 25
CONSOLATION_GEMS = 5
AUTO_ADVANCE_SECONDS = 5
MAX_ATTEMPTS = 2
DEFAULT_HINT = "Try thinking it through carefully."


class SessionState(Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    AWAITING_RETRY = "awaiting_retry"
    CORRECT = "correct"
    INCORRECT_FINAL = "incorrect_final"
    COMPLETED = "completed"


ANSWERABLE = (SessionState.PRESENTING, SessionState.AWAITING_RETRY)
ADVANCEABLE = (SessionState.CORRECT, SessionState.INCORRECT_FINAL)


class InvalidTransition(Exception):
    """An event arrived in a state that cannot accept it."""


@dataclass(frozen=True)
class AnswerOutcome:
    is_correct: bool
    attempt: int
    state: SessionState
    gems_awarded: int
    hint: Optional[str] = None
    revealed_answer: Optional[str] = None
    explanation: str = ""


class SessionListener:
    """Presentation hooks. Override what you need."""

    def on_question(self, question: Question, index: int, total: int) -> None:
        pass

    def on_hint(self, question: Question, hint: str) -> None:
        pass

    def on_feedback(self, question: Question, outcome: AnswerOutcome) -> None:
        pass

    def on_countdown(self, seconds_left: int) -> None:
        pass

    def on_complete(self, result: MissionResult) -> None:
        pass


class MissionEngine:
    def __init__(
        self,
        storage: Storage,
        bank: QuestionBank,
        scheduler: Scheduler,
        listener: Optional[SessionListener] = None,
        countdown_seconds: int = AUTO_ADVANCE_SECONDS,
        track_mastery: bool = True,
    ):
        self.storage = storage
        self.bank = bank
        self.scheduler = scheduler
        self.listener = listener or SessionListener()
        self.countdown_seconds = countdown_seconds
        self.track_mastery = track_mastery

        self.session: Optional[MissionSession] = None
        self.questions: list[Question] = []
        self.state = SessionState.IDLE
        self.attempt = 0
        self.hint_visible = False
        self.revealed_answer: Optional[str] = None
        self.seconds_left: Optional[int] = None
        self.result: Optional[MissionResult] = None
        self._countdown: Optional[ScheduledTask] = None

    # Lifecycle

    def start(self, domain: str, mission_size: int, today: Optional[date] = None) -> None:
        """Begin a fresh mission and persist it straight away."""
        if domain not in DOMAINS:
            raise ValueError(f"unknown domain: {domain}")
        if mission_size < 1:
            raise ValueError("mission size must be at least 1")
        level = self.storage.get_progress().level_for(domain)
        ids = select_mission_ids(self.bank, domain, level, mission_size, day_stamp(today))
        session = MissionSession(
            module=domain, mission_size=mission_size, level=level, question_ids=ids
        )
        self.storage.set_session(session)
        logger.info("Started %s mission: level %d, %d questions", domain, level, len(ids))
        self._load(session)

    def resume(self) -> bool:
        """Restore the stored mission. Returns False when there is none."""
        session = self.storage.get_session()
        if session is None:
            return False
        logger.info("Resuming %s mission at question %d", session.module, session.q_index + 1)
        self._load(session)
        return True

    def quit(self) -> None:
        """Save where we are without moving on."""
        self._cancel_countdown()
        if self.session is not None and self.state != SessionState.COMPLETED:
            self.storage.set_session(self.session)
        self.state = SessionState.IDLE

    # Read-only views

    @property
    def current_question(self) -> Optional[Question]:
        if self.session is None or self.session.q_index >= len(self.questions):
            return None
        return self.questions[self.session.q_index]

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def countdown_active(self) -> bool:
        return self._countdown is not None and self._countdown.active

    # Events

    def show_hint(self) -> str:
        question = self._require_question()
        self.hint_visible = True
        hint = question.hint or DEFAULT_HINT
        self.listener.on_hint(question, hint)
        return hint

    def submit_answer(self, choice: str) -> AnswerOutcome:
        if self.state not in ANSWERABLE:
            raise InvalidTransition(f"cannot answer in state {self.state.value}")
        question = self._require_question()
        attempt = self.attempt + 1
        is_correct = choice == question.correct_answer

        mastery = None
        if self.track_mastery:
            record = self.storage.get_mastery(question.subskill) or init_subskill(question.subskill)
            mastery = update_mastery(record, is_correct, question.id)

        if is_correct:
            session = replace(
                self.session,
                correct_count=self.session.correct_count + 1,
                gem_count=self.session.gem_count + CORRECT_GEMS,
            )
        elif attempt < MAX_ATTEMPTS:
            session = None
        else:
            session = replace(self.session, gem_count=self.session.gem_count + CONSOLATION_GEMS)

        self.storage.record_answer(question, attempt, choice, is_correct, mastery, session)
        if session is not None:
            self.session = session
        self.attempt = attempt

        if is_correct:
            self.state = SessionState.CORRECT
            outcome = AnswerOutcome(
                is_correct=True,
                attempt=attempt,
                state=self.state,
                gems_awarded=CORRECT_GEMS,
                explanation=question.explanation,
            )
            self.listener.on_feedback(question, outcome)
            self._start_countdown()
            return outcome

        if attempt < MAX_ATTEMPTS:
            self.state = SessionState.AWAITING_RETRY
            hint = self.show_hint()
            outcome = AnswerOutcome(
                is_correct=False, attempt=attempt, state=self.state, gems_awarded=0, hint=hint
            )
            self.listener.on_feedback(question, outcome)
            return outcome

        self.state = SessionState.INCORRECT_FINAL
        self.revealed_answer = question.correct_answer
        outcome = AnswerOutcome(
            is_correct=False,
            attempt=attempt,
            state=self.state,
            gems_awarded=CONSOLATION_GEMS,
            revealed_answer=question.correct_answer,
            explanation=question.explanation,
        )
        self.listener.on_feedback(question, outcome)
        return outcome

    def advance(self) -> None:
        """Move to the next question, manually or when the countdown runs out."""
        if self.state not in ADVANCEABLE:
            raise InvalidTransition(f"cannot advance in state {self.state.value}")
        self._cancel_countdown()
        self._save(replace(self.session, q_index=self.session.q_index + 1))
        self._present()

    # Internals

    def _load(self, session: MissionSession) -> None:
        self._cancel_countdown()
        self.session = session
        self.questions = resolve_questions(self.bank, session.question_ids)
        self.result = None
        self._present()

    def _present(self) -> None:
        self._cancel_countdown()
        self.attempt = 0
        self.hint_visible = False
        self.revealed_answer = None
        if self.session.q_index >= len(self.questions):
            self._complete()
            return
        self.state = SessionState.PRESENTING
        self.listener.on_question(self.current_question, self.session.q_index, self.total)

    def _complete(self) -> None:
        session = self.session
        progress = self.storage.get_progress()
        new_level = update_level(session.level, session.correct_count, self.total)
        progress.levels[session.module] = new_level
        progress.total_gems += session.gem_count
        self.storage.set_progress(progress)
        self.storage.clear_session()
        self.state = SessionState.COMPLETED
        self.result = MissionResult(
            domain=session.module,
            correct_count=session.correct_count,
            total=self.total,
            gem_count=session.gem_count,
            level=session.level,
            new_level=new_level,
        )
        logger.info(
            "Completed %s mission: %d/%d correct, %d gems, level %d -> %d",
            session.module, session.correct_count, self.total, session.gem_count,
            session.level, new_level,
        )
        self.listener.on_complete(self.result)

    def _save(self, session: MissionSession) -> None:
        self.storage.set_session(session)
        self.session = session

    def _require_question(self) -> Question:
        question = self.current_question
        if question is None:
            raise InvalidTransition("no question is being shown")
        return question

    def _start_countdown(self) -> None:
        self._cancel_countdown()
        self.seconds_left = self.countdown_seconds
        self.listener.on_countdown(self.seconds_left)
        self._countdown = self.scheduler.call_later(1, self._tick)

    def _tick(self) -> None:
        self.seconds_left -= 1
        self.listener.on_countdown(self.seconds_left)
        if self.seconds_left <= 0:
            self._countdown = None
            self.advance()
        else:
            self._countdown = self.scheduler.call_later(1, self._tick)

    def _cancel_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None
        self.seconds_left = None
