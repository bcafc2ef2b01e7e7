"""Subskill mastery tracking from answer streaks."""
from dataclasses import replace
from datetime import datetime
from typing import Optional

from naplan_tutor.models import MAX_LEVEL, SubskillMastery

MASTERY_STREAK = 3


def init_subskill(subskill_id: str) -> SubskillMastery:
    return SubskillMastery(id=subskill_id)


def update_mastery(
    record: SubskillMastery,
    was_correct: bool,
    question_id: str,
    now: Optional[datetime] = None,
) -> SubskillMastery:
    """Return a new record reflecting one answer.

    Three correct in a row marks the subskill mastered and bumps its
    difficulty once. A wrong answer resets the streak and queues the
    question for review. Only a wrong answer moves an unseen subskill
    to learning; correct answers alone keep it unseen until mastered.
    """
    updated = replace(
        record,
        total_attempts=record.total_attempts + 1,
        scheduled_review_queue=list(record.scheduled_review_queue),
        last_seen=(now or datetime.now()).isoformat(),
    )
    if was_correct:
        updated.correct_attempts += 1
        updated.streak_correct += 1
        if updated.streak_correct >= MASTERY_STREAK and updated.status != "mastered":
            updated.status = "mastered"
            updated.difficulty = min(MAX_LEVEL, updated.difficulty + 1)
    else:
        updated.streak_correct = 0
        if updated.status == "unseen":
            updated.status = "learning"
        if question_id not in updated.scheduled_review_queue:
            updated.scheduled_review_queue.append(question_id)
    return updated
