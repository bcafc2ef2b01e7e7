# tests/test_bank.py
import re

import pytest

from naplan_tutor.bank import QuestionBank, build_question_bank
from naplan_tutor.conventions import ANIMALS, NAMES
from naplan_tutor.families import FAMILY_SIZE
from naplan_tutor.models import DOMAINS, Question


def test_every_question_has_four_unique_choices_with_answer(bank):
    for q in bank.all_questions():
        assert len(q.choices) == 4, q.id
        assert len(set(q.choices)) == 4, f"choices not unique for {q.id}"
        assert q.correct_answer in q.choices, f"correct answer missing for {q.id}"


def test_schema_is_valid(bank):
    for q in bank.all_questions():
        assert isinstance(q.id, str) and q.id
        assert q.domain in DOMAINS
        assert q.subskill
        assert 1 <= q.difficulty <= 5
        assert q.type == "mcq"
        assert len(q.prompt) > 5
        assert all(isinstance(c, str) for c in q.choices)


def test_volume_per_domain(bank):
    for domain in DOMAINS:
        assert len(bank.by_domain(domain)) >= 500


def test_volume_per_difficulty(bank):
    for domain in DOMAINS:
        for level in range(1, 6):
            items = bank.by_domain_and_difficulty(domain, level)
            assert len(items) >= 60, f"{domain} level {level} has {len(items)}"
            assert len(items) == 6 * FAMILY_SIZE


def test_subskill_variety(bank):
    for domain in DOMAINS:
        assert len(bank.subskills(domain)) >= 6


def test_prompt_variety(bank):
    for domain in DOMAINS:
        prompts = {q.prompt for q in bank.by_domain(domain)}
        assert len(prompts) >= 200, f"{domain} unique prompts={len(prompts)}"


def test_ids_are_unique(bank):
    ids = [q.id for q in bank.all_questions()]
    assert len(ids) == len(set(ids))


def test_id_format(bank):
    q = bank.by_domain_and_difficulty("numeracy", 3)[0]
    assert re.fullmatch(r"q-num-[a-z]+-L3-\d{4}", q.id)


def test_rebuild_is_identical(bank):
    rebuilt = build_question_bank()
    assert len(rebuilt) == len(bank)
    for a, b in zip(bank.all_questions(), rebuilt.all_questions()):
        assert a == b


def test_by_id(bank):
    q = bank.all_questions()[123]
    assert bank.by_id(q.id) is q
    assert q.id in bank
    assert bank.by_id("no-such-id") is None
    assert "no-such-id" not in bank


def test_duplicate_ids_rejected():
    q = Question(
        id="dup", domain="numeracy", subskill="s", difficulty=1,
        prompt="What is 1 + 1?", choices=("1", "2", "3", "4"), correct_answer="2",
    )
    with pytest.raises(ValueError):
        QuestionBank([q, q])


def test_add_sub_answers_are_computed(bank):
    for q in bank.by_domain("numeracy"):
        if q.subskill != "num-add-sub":
            continue
        a, op, b = re.match(r"What is (\d+) (\+|−) (\d+)\?", q.prompt).groups()
        expected = int(a) + int(b) if op == "+" else int(a) - int(b)
        assert q.correct_answer == str(expected)
        assert int(q.correct_answer) >= 0


def test_fraction_answers_are_computed(bank):
    denominators = {"half": 2, "third": 3, "quarter": 4}
    for q in bank.by_domain("numeracy"):
        if q.subskill != "num-fractions":
            continue
        name, whole = re.match(r"What is one (\w+) of (\d+)\?", q.prompt).groups()
        assert int(q.correct_answer) * denominators[name] == int(whole)


def test_change_is_never_negative(bank):
    for q in bank.by_domain("numeracy"):
        if q.subskill == "num-money":
            assert not q.correct_answer.startswith("$-")


def test_numeric_ranges_widen_with_level(bank):
    def largest_operand(level):
        values = []
        for q in bank.by_domain_and_difficulty("numeracy", level):
            if q.subskill == "num-add-sub":
                values += [int(n) for n in re.findall(r"\d+", q.prompt)]
        return max(values)

    assert largest_operand(1) <= 20
    assert largest_operand(5) > 100


def test_thirds_only_from_level_three(bank):
    for level in (1, 2):
        prompts = [q.prompt for q in bank.by_domain_and_difficulty("numeracy", level)]
        assert not any("third" in p for p in prompts)


def test_noun_questions_have_one_noun_choice(bank):
    nouns = [q for q in bank.by_domain("conventions") if "which word is a noun?" in q.prompt]
    assert nouns
    for q in nouns:
        assert not set(q.choices) & set(NAMES), q.id
        assert [c for c in q.choices if c in ANIMALS] == [q.correct_answer], q.id


def test_grammar_has_one_correct_sentence(bank):
    either = [q for q in bank.by_domain("conventions") if q.prompt.startswith("Which sentence is correct?")]
    assert either
    for q in either:
        assert q.correct_answer.split(" ", 1)[1].startswith("took a hat and a towel to"), q.id
        assert not any(" or " in c for c in q.choices), q.id
        assert sum("took a hat and a towel to" in c for c in q.choices) == 1, q.id


def test_run_on_prompts_use_a_pronoun(bank):
    run_ons = [q for q in bank.by_domain("writing") if q.subskill == "write-sentences"]
    assert run_ons
    for q in run_ons:
        assert "and they picked up" in q.prompt, q.id
