"""Deterministic selection of mission questions for a given day."""
from datetime import date
from typing import Optional

from naplan_tutor.bank import QuestionBank
from naplan_tutor.models import Question
from naplan_tutor.rng import SeededRandom


def day_stamp(today: Optional[date] = None) -> str:
    """Local calendar day as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def mission_seed(domain: str, difficulty: int, mission_size: int, stamp: str) -> str:
    return f"{domain}|L{difficulty}|N{mission_size}|{stamp}"


def select_mission_ids(
    bank: QuestionBank,
    domain: str,
    difficulty: int,
    mission_size: int,
    stamp: str,
) -> list[str]:
    """Pick the ordered question ids for one mission.

    Uses the questions at exactly ``difficulty`` when there are enough of
    them, otherwise every question in the domain. The same inputs always give
    the same ids in the same order.
    """
    pool = bank.by_domain_and_difficulty(domain, difficulty)
    if len(pool) < mission_size:
        pool = bank.by_domain(domain)
    rng = SeededRandom(mission_seed(domain, difficulty, mission_size, stamp))
    return rng.shuffle([q.id for q in pool])[:mission_size]


def resolve_questions(bank: QuestionBank, question_ids: list[str]) -> list[Question]:
    """Map ids to questions, dropping ids the bank no longer knows."""
    return [q for q in (bank.by_id(qid) for qid in question_ids) if q is not None]
