"""The question bank: every generated question, indexed for lookup."""
import logging
from functools import lru_cache
from typing import Iterable, Optional

from naplan_tutor import conventions, numeracy, reading, writing
from naplan_tutor.models import Question

logger = logging.getLogger(__name__)


class QuestionBank:
    """Read-only collection of questions with lookups by id and domain."""

    def __init__(self, questions: Iterable[Question]):
        self._questions = tuple(questions)
        self._by_id = {}
        for q in self._questions:
            if q.id in self._by_id:
                raise ValueError(f"duplicate question id: {q.id}")
            self._by_id[q.id] = q

    def __len__(self) -> int:
        return len(self._questions)

    def __contains__(self, question_id: str) -> bool:
        return question_id in self._by_id

    def all_questions(self) -> tuple:
        return self._questions

    def by_id(self, question_id: str) -> Optional[Question]:
        return self._by_id.get(question_id)

    def by_domain(self, domain: str) -> list[Question]:
        return [q for q in self._questions if q.domain == domain]

    def by_domain_and_difficulty(self, domain: str, difficulty: int) -> list[Question]:
        return [
            q for q in self._questions
            if q.domain == domain and q.difficulty == difficulty
        ]

    def subskills(self, domain: str) -> list[str]:
        return list(dict.fromkeys(q.subskill for q in self._questions if q.domain == domain))


def build_question_bank() -> QuestionBank:
    questions = []
    for module in (numeracy, reading, conventions, writing):
        questions.extend(module.generate())
    bank = QuestionBank(questions)
    logger.debug("Built question bank with %d questions", len(bank))
    return bank


@lru_cache(maxsize=None)
def get_question_bank() -> QuestionBank:
    """Shared bank, built on first use."""
    return build_question_bank()
