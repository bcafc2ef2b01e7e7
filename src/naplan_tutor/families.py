"""Shared plumbing for the per-domain question families.

A family is a function ``(level, rng, n) -> Question`` that builds the n-th
question of its kind for one difficulty level. Every family gets its own
random stream keyed by domain, family name and level, so adding or changing
one family never shifts the draws of another.
"""
from typing import Callable, Iterable

from naplan_tutor.models import Question
from naplan_tutor.rng import SeededRandom

FAMILY_SIZE = 20
LEVELS = range(1, 6)

Family = Callable[[int, SeededRandom, int], Question]


def make_id(prefix: str, level: int, n: int) -> str:
    return f"{prefix}-L{level}-{n:04d}"


def family_rng(domain: str, family: str, level: int) -> SeededRandom:
    return SeededRandom(f"{domain}|{family}|L{level}")


def generate_domain(
    domain: str,
    families: Iterable[tuple[str, Family]],
    levels: Iterable[int] = LEVELS,
    count: int = FAMILY_SIZE,
) -> list[Question]:
    families = list(families)
    out = []
    for level in levels:
        for name, family in families:
            rng = family_rng(domain, name, level)
            for n in range(1, count + 1):
                out.append(family(level, rng, n))
    return out
