"""Persistence of profile, settings, progress, session and mastery records."""
import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

from naplan_tutor.db import DEFAULT_DB_PATH, get_connection, init_db
from naplan_tutor.models import (
    MissionSession, Profile, Progress, Question, Settings, SubskillMastery,
)

logger = logging.getLogger(__name__)

PROFILE_KEY = "profile"
SETTINGS_KEY = "settings"
PROGRESS_KEY = "progress"
SESSION_KEY = "session"

class StorageError(Exception):
    """A read or write against the store failed."""

class Storage:
    """Key-value records plus mastery and answer history, backed by SQLite.

    Missing records come back as defaults rather than errors. Any database
    failure is raised as StorageError so callers never carry on with state
    that was not saved.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        try:
            init_db(db_path)
        except (sqlite3.Error, OSError) as e:
            logger.error("Could not open database %s: %s", db_path, e)
            raise StorageError(f"could not open database {db_path}: {e}") from e

    @contextmanager
    def _connect(self):
        try:
            conn = get_connection(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Storage operation failed: %s", e)
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def _get(self, key: str) -> Optional[dict]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM records WHERE key = ?", (key,)).fetchone()
        return json.loads(row["value"]) if row else None

    def _set(self, key: str, value: dict) -> None:
        with self._connect() as conn:
            _write_record(conn, key, value)

    def _delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM records WHERE key = ?", (key,))

    # Profile / settings

    def get_profile(self) -> Optional[Profile]:
        data = self._get(PROFILE_KEY)
        return Profile.from_dict(data) if data else None

    def set_profile(self, profile: Profile) -> None:
        self._set(PROFILE_KEY, profile.to_dict())

    def get_settings(self) -> Settings:
        data = self._get(SETTINGS_KEY)
        return Settings.from_dict(data) if data else Settings()

    def set_settings(self, settings: Settings) -> None:
        self._set(SETTINGS_KEY, settings.to_dict())

    # Progress / session

    def get_progress(self) -> Progress:
        data = self._get(PROGRESS_KEY)
        return Progress.from_dict(data) if data else Progress()

    def set_progress(self, progress: Progress) -> None:
        self._set(PROGRESS_KEY, progress.to_dict())

    def get_session(self) -> Optional[MissionSession]:
        data = self._get(SESSION_KEY)
        return MissionSession.from_dict(data) if data else None

    def set_session(self, session: MissionSession) -> None:
        self._set(SESSION_KEY, session.to_dict())

    def clear_session(self) -> None:
        """Remove the in-flight session. Clearing twice is fine."""
        self._delete(SESSION_KEY)

    # Mastery

    def get_mastery(self, subskill: str) -> Optional[SubskillMastery]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM subskill_mastery WHERE subskill = ?", (subskill,)
            ).fetchone()
        return _mastery_from_row(row) if row else None

    def set_mastery(self, record: SubskillMastery) -> None:
        with self._connect() as conn:
            _write_mastery(conn, record)

    def all_mastery(self) -> dict:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM subskill_mastery ORDER BY subskill").fetchall()
        return {row["subskill"]: _mastery_from_row(row) for row in rows}

    # Answer history

    def log_answer(
        self,
        question_id: str,
        domain: str,
        subskill: str,
        attempt: int,
        user_answer: str,
        is_correct: bool,
    ) -> None:
        with self._connect() as conn:
            _write_answer(conn, question_id, domain, subskill, attempt, user_answer, is_correct)

    def record_answer(
        self,
        question: Question,
        attempt: int,
        user_answer: str,
        is_correct: bool,
        mastery: Optional[SubskillMastery] = None,
        session: Optional[MissionSession] = None,
    ) -> None:
        """Log one attempt with its mastery and session updates in a single transaction.

        Either every write lands or none does, so a failed save can be
        retried without counting the attempt twice.
        """
        with self._connect() as conn:
            _write_answer(
                conn, question.id, question.domain, question.subskill,
                attempt, user_answer, is_correct,
            )
            if mastery is not None:
                _write_mastery(conn, mastery)
            if session is not None:
                _write_record(conn, SESSION_KEY, session.to_dict())

    def subskill_accuracy(self) -> list[dict]:
        """Attempts and correct answers per subskill from the answer log."""
        with self._connect() as conn:
            rows = conn.execute(
                """SELECT domain, subskill, COUNT(*) as total, SUM(is_correct) as correct
                FROM answer_log
                GROUP BY domain, subskill"""
            ).fetchall()
        return [dict(row) for row in rows]

    def reset_progress(self) -> Progress:
        """Wipe progress, the in-flight session, mastery and answer history."""
        with self._connect() as conn:
            conn.execute("DELETE FROM records WHERE key IN (?, ?)", (PROGRESS_KEY, SESSION_KEY))
            conn.execute("DELETE FROM subskill_mastery")
            conn.execute("DELETE FROM answer_log")
        logger.info("Progress reset")
        return Progress()


def _mastery_from_row(row) -> SubskillMastery:
    return SubskillMastery(
        id=row["subskill"],
        status=row["status"],
        streak_correct=row["streak_correct"],
        total_attempts=row["total_attempts"],
        correct_attempts=row["correct_attempts"],
        difficulty=row["difficulty"],
        last_seen=row["last_seen"],
        scheduled_review_queue=json.loads(row["review_queue"] or "[]"),
    )


def _write_record(conn, key: str, value: dict) -> None:
    payload = json.dumps(value)
    conn.execute(
        "INSERT INTO records (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, payload, payload),
    )


def _write_mastery(conn, record: SubskillMastery) -> None:
    conn.execute(
        """INSERT INTO subskill_mastery
        (subskill, status, streak_correct, total_attempts, correct_attempts,
         difficulty, last_seen, review_queue)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(subskill) DO UPDATE SET
            status=excluded.status,
            streak_correct=excluded.streak_correct,
            total_attempts=excluded.total_attempts,
            correct_attempts=excluded.correct_attempts,
            difficulty=excluded.difficulty,
            last_seen=excluded.last_seen,
            review_queue=excluded.review_queue""",
        (
            record.id, record.status, record.streak_correct, record.total_attempts,
            record.correct_attempts, record.difficulty, record.last_seen,
            json.dumps(record.scheduled_review_queue),
        ),
    )


def _write_answer(conn, question_id, domain, subskill, attempt, user_answer, is_correct) -> None:
    conn.execute(
        """INSERT INTO answer_log
        (question_id, domain, subskill, attempt, user_answer, is_correct, answered_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (question_id, domain, subskill, attempt, user_answer, int(is_correct),
         datetime.now().isoformat()),
    )
