"""Choice-set builder: always four unique options containing the answer."""
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from naplan_tutor.rng import SeededRandom

CHOICE_COUNT = 4
MAX_EXTRA_ATTEMPTS = 50

ExtraCandidateFn = Callable[[set, str], object]


@dataclass(frozen=True)
class ChoiceSet:
    choices: tuple
    correct_answer: str


def _pad(used: list, correct: str) -> None:
    # Last resort when a family cannot supply enough distinct candidates.
    k = 1
    while len(used) < CHOICE_COUNT:
        candidate = f"{correct} ({k})"
        k += 1
        if candidate not in used:
            used.append(candidate)


def _fill_from_extra(used: list, correct: str, extra: Optional[ExtraCandidateFn]) -> None:
    if extra is None:
        return
    attempts = 0
    while len(used) < CHOICE_COUNT and attempts < MAX_EXTRA_ATTEMPTS:
        attempts += 1
        candidate = str(extra(set(used), correct))
        if candidate and candidate != correct and candidate not in used:
            used.append(candidate)


def build_choices(
    rng: SeededRandom,
    correct,
    distractors: Iterable = (),
    extra: Optional[ExtraCandidateFn] = None,
) -> ChoiceSet:
    """Build a shuffled set of four unique choices.

    Distractors are taken in order, skipping duplicates and the correct
    answer. If they run out, ``extra(used, correct)`` is asked for more
    candidates a bounded number of times, and after that the set is padded
    with suffixed copies of the correct answer. This never raises for a
    shortage of candidates.
    """
    correct_str = str(correct)
    used = [correct_str]
    for d in distractors or ():
        if len(used) >= CHOICE_COUNT:
            break
        s = str(d)
        if s != correct_str and s not in used:
            used.append(s)

    _fill_from_extra(used, correct_str, extra)
    _pad(used, correct_str)

    choices = rng.shuffle(used)[:CHOICE_COUNT]

    if correct_str not in choices:
        choices[rng.rand_int(0, CHOICE_COUNT - 1)] = correct_str
        fixed = list(dict.fromkeys(choices))
        if len(fixed) != CHOICE_COUNT:
            _fill_from_extra(fixed, correct_str, extra)
            _pad(fixed, correct_str)
            choices = rng.shuffle(fixed)[:CHOICE_COUNT]

    return ChoiceSet(choices=tuple(choices), correct_answer=correct_str)
