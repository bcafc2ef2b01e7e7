"""Reading comprehension question families."""
from naplan_tutor.choices import build_choices
from naplan_tutor.families import generate_domain, make_id
from naplan_tutor.models import Question

DOMAIN = "reading"

NAMES = ["Alex", "Mina", "Jack", "Sam", "Rani", "Tara", "Lily", "Ethan", "Georgia", "Noah"]
PLACES = ["the park", "the library", "the beach", "the backyard", "school", "the sports oval"]
OBJECTS = [
    "a shiny shell",
    "a new book",
    "a missing lunchbox",
    "a tiny robot",
    "a secret note",
    "a torn map",
]
ANIMALS = ["cat", "dog", "rabbit", "bird", "lizard", "koala"]
TOPICS = [
    "bamboo",
    "seahorses",
    "microbats",
    "rainforests",
    "recycling",
    "volcanoes",
    "gardens",
    "rainbows",
]

# (word, meaning, wrong meanings)
VOCAB = [
    ("swift", "very fast", ["very slow", "very loud", "very small"]),
    ("fragile", "easy to break", ["very strong", "very heavy", "very noisy"]),
    ("ancient", "very old", ["very new", "very shiny", "very wet"]),
    ("curious", "wanting to learn", ["not interested", "very tired", "very hungry"]),
    ("cheerful", "very happy", ["very sad", "very angry", "very scared"]),
    ("determined", "decided and not giving up", ["not sure", "very sleepy", "not careful"]),
]
ADVANCED_VOCAB = [
    ("reluctant", "not wanting to do something", ["very eager", "very proud", "very lucky"]),
    ("enormous", "very big", ["very tiny", "very soft", "very late"]),
    ("cautious", "careful to avoid danger", ["careless", "very bored", "very loud"]),
    ("generous", "happy to share", ["unwilling to share", "very sleepy", "very quick"]),
]


def _vocab_for(level):
    return VOCAB + ADVANCED_VOCAB if level >= 3 else VOCAB


def short_detail(level, rng, n):
    who = rng.pick(NAMES)
    where = rng.pick(PLACES)
    when = rng.pick(["after school", "on Saturday", "early in the morning", "before dinner"])
    found = rng.pick(OBJECTS)
    text = (
        "Read this:\n"
        f"{who} went to {where} {when}. "
        f"{who} found {found} and showed it to a friend."
    )
    distractors = rng.shuffle([o for o in OBJECTS if o != found])[:3]
    result = build_choices(rng, found, distractors, lambda used, c: rng.pick(OBJECTS))
    return Question(
        id=make_id("q-read-detail", level, n),
        domain=DOMAIN,
        subskill="read-detail",
        difficulty=level,
        prompt=f"{text}\n\nWhat did {who} find?",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Look for the exact words in the text.",
        explanation="A detail question is answered directly by the text.",
    )


def inference(level, rng, n):
    who = rng.pick(NAMES)
    pet = rng.pick(ANIMALS)
    spot = rng.pick(["behind the couch", "under the bed", "inside the cupboard", "near the fence"])
    decoy = rng.pick(["excited", "worried", "surprised"])
    text = (
        "Read this:\n"
        f"{who} searched everywhere for their {pet}. "
        f"Then {who} heard a soft sound from {spot}. "
        f"{who} smiled and gently reached out."
    )
    correct = "relieved"
    wrong_pool = ["angry", "bored", "confused", "sleepy", "disappointed", decoy]
    result = build_choices(
        rng,
        correct,
        rng.shuffle(wrong_pool)[:3],
        lambda used, c: rng.pick(wrong_pool),
    )
    return Question(
        id=make_id("q-read-infer", level, n),
        domain=DOMAIN,
        subskill="read-inference",
        difficulty=level,
        prompt=f"{text}\n\nHow is {who} most likely feeling at the end?",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Use clues from what happened.",
        explanation="Inference means using clues to work something out.",
    )


def vocab_context(level, rng, n):
    word, meaning, wrong = rng.pick(_vocab_for(level))
    noun = rng.pick(["runner", "puppy", "robot", "tree", "storm", "bicycle", "magician"])
    prompt = f'Read: "The {word} {noun} kept going."\n\nWhat does "{word}" mean?'
    result = build_choices(
        rng,
        meaning,
        wrong,
        lambda used, c: rng.pick(["very bright", "very old", "very quiet", "very rough"]),
    )
    return Question(
        id=make_id("q-read-vocab", level, n),
        domain=DOMAIN,
        subskill="read-vocab",
        difficulty=level,
        prompt=prompt,
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Use the sentence to help you.",
        explanation=f'"{word}" means {meaning}.',
    )


def main_idea(level, rng, n):
    topic = rng.pick(TOPICS)
    heading = rng.pick(["Did You Know?", "Nature Notes", "Quick Facts", "Amazing Things"])
    s1 = f"{topic.capitalize()} can be surprising."
    s2 = rng.pick([
        f"This text shares facts about {topic}.",
        f"This text explains why {topic} are important.",
        f"This text gives examples and details about {topic}.",
    ])
    s3 = rng.pick([
        "It uses short sentences to help the reader learn.",
        "It includes details to help the reader understand.",
        "It gives examples to explain the topic.",
    ])
    prompt = f"Read this:\n{heading}\n{s1} {s2} {s3}\n\nWhat is the main idea of the text?"
    result = build_choices(
        rng,
        f"Facts about {topic}",
        ["How to cook dinner", "A funny story about a party", "Rules for a sport"],
        lambda used, c: "A list of numbers",
    )
    return Question(
        id=make_id("q-read-main", level, n),
        domain=DOMAIN,
        subskill="read-main-idea",
        difficulty=level,
        prompt=prompt,
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Main idea = what the text is mostly about.",
        explanation="The text keeps talking about the same topic.",
    )


def magazine_detail(level, rng, n):
    heading = rng.pick(["Amazing Animals", "Outdoor Facts", "Science Snapshot", "Nature News"])
    topic = rng.pick(TOPICS)
    fact_a = rng.pick([
        f"Some {topic} live near water.",
        f"Some {topic} can be found in warm places.",
        f"Some {topic} live where they can stay hidden.",
    ])
    fact_b = rng.pick([
        "They have features that help them survive.",
        "They can be useful in different ways.",
        "People can learn from studying them.",
    ])
    fact_c = rng.pick([
        "This helps them stay safe.",
        "This helps them find food.",
        "This helps them move around.",
    ])
    text = f"{heading}\n{fact_a} {fact_b} {fact_c}"
    result = build_choices(
        rng,
        "Their features",
        ["Magic", "Luck", "Their favourite colour"],
        lambda used, c: "Their toys",
    )
    return Question(
        id=make_id("q-read-mini-detail", level, n),
        domain=DOMAIN,
        subskill="read-detail-mini",
        difficulty=level,
        prompt=(
            f"Read this mini-magazine text:\n{text}\n\n"
            f"According to the text, what helps {topic} survive?"
        ),
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Find the sentence that matches the question.",
        explanation="The text explains survival using features.",
    )


def author_purpose(level, rng, n):
    topic = rng.pick(TOPICS)
    detail = rng.pick(["gives examples", "lists facts", "uses diagrams and labels"])
    prompt = (
        "Read this:\n"
        f"This text explains {topic} and {detail}.\n\n"
        "What is the author's purpose?"
    )
    result = build_choices(
        rng,
        "To give information",
        ["To tell a joke", "To persuade the reader", "To describe a game"],
        lambda used, c: "To teach a dance",
    )
    return Question(
        id=make_id("q-read-purpose", level, n),
        domain=DOMAIN,
        subskill="read-author-purpose",
        difficulty=level,
        prompt=prompt,
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Is the text informing, persuading, or entertaining?",
        explanation="It explains and gives examples, so it is informative.",
    )


FAMILIES = [
    ("detail", short_detail),
    ("inference", inference),
    ("vocab", vocab_context),
    ("main-idea", main_idea),
    ("mini-detail", magazine_detail),
    ("purpose", author_purpose),
]


def generate() -> list[Question]:
    return generate_domain(DOMAIN, FAMILIES)
