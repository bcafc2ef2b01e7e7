"""Numeracy question families."""
from naplan_tutor.choices import build_choices
from naplan_tutor.families import generate_domain, make_id
from naplan_tutor.models import Question

DOMAIN = "numeracy"

RANGES = {
    1: (0, 20),
    2: (5, 50),
    3: (10, 100),
    4: (20, 200),
    5: (50, 500),
}

PLACE_VALUE_MAX = {1: 99, 2: 199, 3: 999, 4: 1999, 5: 9999}

TIMES = [
    ("3:15", "quarter past three"),
    ("3:30", "half past three"),
    ("3:45", "quarter to four"),
    ("6:15", "quarter past six"),
    ("7:30", "half past seven"),
    ("8:45", "quarter to nine"),
    ("12:00", "twelve o'clock"),
    ("9:30", "half past nine"),
    ("10:15", "quarter past ten"),
    ("1:45", "quarter to two"),
]

# Prices in cents.
PRICES = [50, 80, 120, 150, 200, 240, 310, 350, 420, 480, 560]
NOTES = [5, 10, 20, 50]
NOTES_BY_LEVEL = {1: [5, 10], 2: [5, 10], 3: [10, 20], 4: [10, 20], 5: [20, 50]}

FRACTION_NAMES = {2: "half", 3: "third", 4: "quarter"}


def _money(cents: int) -> str:
    return f"${cents // 100}.{cents % 100:02d}"


def add_sub(level, rng, n):
    low, high = RANGES[level]
    a = rng.rand_int(low, high)
    b = rng.rand_int(low, high)
    op = rng.pick(["+", "−"])
    big, small = max(a, b), min(a, b)
    if op == "+":
        correct = a + b
        prompt = f"What is {a} + {b}?"
    else:
        correct = big - small
        prompt = f"What is {big} − {small}?"

    def extra(used, c):
        cc = int(c)
        delta = rng.pick([3, 4, 5, 6, 7])
        v = cc + rng.pick([1, -1]) * delta
        return cc + delta if v < 0 else v

    result = build_choices(
        rng, correct, [correct + 1, correct - 1, correct + 2, correct - 2], extra
    )
    return Question(
        id=make_id("q-num-addsub", level, n),
        domain=DOMAIN,
        subskill="num-add-sub",
        difficulty=level,
        prompt=prompt,
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Work step by step.",
        explanation="Use number facts and check your answer makes sense.",
    )


def patterns(level, rng, n):
    step = rng.pick([2, 3, 5] if level <= 2 else [2, 3, 4, 5, 10, 20])
    start = rng.rand_int(1, 30 if level <= 2 else 80)
    seq = [start + i * step for i in range(4)]
    correct = start + 4 * step
    prompt = (
        "Here is a number pattern:\n"
        f"{seq[0]}, {seq[1]}, {seq[2]}, {seq[3]}, ?\n"
        "What is the next number?"
    )
    result = build_choices(
        rng,
        correct,
        [correct + step, correct - step, correct + 1, correct - 1],
        lambda used, c: int(c) + rng.pick([step + 2, step + 3, step + 4]),
    )
    return Question(
        id=make_id("q-num-pattern", level, n),
        domain=DOMAIN,
        subskill="num-patterns",
        difficulty=level,
        prompt=prompt,
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Look at what is added each time.",
        explanation=f"This pattern increases by {step}.",
    )


def place_value(level, rng, n):
    high = PLACE_VALUE_MAX[level]
    num = rng.rand_int(high // 4, high)
    ask = rng.pick(["ones", "tens"] if level <= 2 else ["ones", "tens", "hundreds"])
    digits = str(num).zfill(3)
    digit = {"ones": digits[-1], "tens": digits[-2], "hundreds": digits[-3]}[ask]
    others = [d for d in "0123456789" if d != digit]
    result = build_choices(
        rng,
        digit,
        rng.shuffle(others)[:3],
        lambda used, c: str(rng.rand_int(0, 9)),
    )
    return Question(
        id=make_id("q-num-place", level, n),
        domain=DOMAIN,
        subskill="num-place-value",
        difficulty=level,
        prompt=f"In the number {num}, what digit is in the {ask} place?",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Ones is the last digit, tens is the second-last.",
        explanation="Place value tells you what a digit represents.",
    )


def time_language(level, rng, n):
    clock, words = rng.pick(TIMES)
    all_words = [w for _, w in TIMES]
    wrong = rng.shuffle([w for w in all_words if w != words])[:3]
    result = build_choices(rng, words, wrong, lambda used, c: rng.pick(all_words))
    return Question(
        id=make_id("q-num-time", level, n),
        domain=DOMAIN,
        subskill="num-time",
        difficulty=level,
        prompt=f"Which words match the time {clock}?",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Quarter past is :15, half past is :30, quarter to is :45.",
        explanation=f'{clock} is said as "{words}".',
    )


def money(level, rng, n):
    a = rng.pick(PRICES)
    b = rng.pick(PRICES)
    total = a + b
    pay = rng.pick(NOTES_BY_LEVEL[level])
    if pay * 100 < total:
        pay = min(note for note in NOTES if note * 100 >= total)
    change = pay * 100 - total
    prompt = (
        f"A drink costs {_money(a)} and a snack costs {_money(b)}.\n"
        f"A student pays with ${pay}.\n"
        "How much change should they get?"
    )

    def extra(used, c):
        cents = round(float(c.lstrip("$")) * 100)
        return _money(max(0, cents + rng.pick([50, 100, 150, 200, -50, -100])))

    candidates = [change + 100, change - 100, pay * 100 - a, pay * 100 - b]
    result = build_choices(
        rng, _money(change), [_money(v) for v in candidates if v >= 0], extra
    )
    return Question(
        id=make_id("q-num-money", level, n),
        domain=DOMAIN,
        subskill="num-money",
        difficulty=level,
        prompt=prompt,
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Add the prices first, then subtract from the amount paid.",
        explanation="Change = amount paid − total cost.",
    )


def fractions(level, rng, n):
    denom = rng.pick([2, 4] if level <= 2 else [2, 3, 4])
    name = FRACTION_NAMES[denom]
    k = rng.rand_int(2, 12 if level <= 2 else 20 if level <= 4 else 30)
    whole = k * denom
    part = whole // denom

    def extra(used, c):
        cc = int(c)
        candidate = cc + rng.pick([2, 3, 4, 5, 6]) * rng.pick([1, -1])
        return cc + 2 if candidate <= 0 else candidate

    result = build_choices(rng, part, [part + 1, part - 1, whole, part + denom], extra)
    return Question(
        id=make_id("q-num-frac", level, n),
        domain=DOMAIN,
        subskill="num-fractions",
        difficulty=level,
        prompt=f"What is one {name} of {whole}?",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint=f"Divide by {denom}.",
        explanation=f"One {name} means split into {denom} equal parts.",
    )


FAMILIES = [
    ("add-sub", add_sub),
    ("patterns", patterns),
    ("place-value", place_value),
    ("time", time_language),
    ("money", money),
    ("fractions", fractions),
]


def generate() -> list[Question]:
    return generate_domain(DOMAIN, FAMILIES)
