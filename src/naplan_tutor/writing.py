"""Writing craft question families built around short story contexts."""
from naplan_tutor.choices import build_choices
from naplan_tutor.families import generate_domain, make_id
from naplan_tutor.models import Question

DOMAIN = "writing"

CHARACTERS = [
    "Alex", "Mina", "Jack", "Sam", "Rani", "Tara", "Lily", "Ethan", "Georgia",
    "Noah", "Ava", "Kai", "Zoe", "Mia", "Ben", "Chloe", "Aria", "Leo",
]
SETTINGS = [
    "at the beach", "in the rainforest", "at the zoo", "at the park",
    "in a quiet town", "at a campsite", "near a creek", "at the library",
    "behind the school hall", "on a bushwalk", "at a market", "near an old shed",
    "in a museum", "at a train station", "in the backyard",
]
OBJECTS = [
    "a mysterious box", "a shiny key", "a torn map", "a strange footprint",
    "a tiny robot", "a secret message", "an old compass", "a locked diary",
    "a folded note", "a broken watch", "a silver coin", "a lantern",
    "a pair of goggles", "a small whistle", "a glass marble", "a wooden badge",
    "a painted stone", "a puzzle piece",
]
MOODS = [
    "excited", "nervous", "curious", "proud", "surprised", "brave",
    "worried", "hopeful", "confused", "determined",
]
TIMES = [
    "early in the morning", "after school", "just before dinner",
    "on Saturday", "at sunset", "in the middle of the night",
]
SOUNDS = ["a creak", "a whisper", "a soft thud", "a clang", "a rustle", "a splash", "a tap-tap-tap"]


def story_context(rng):
    who = rng.pick(CHARACTERS)
    where = rng.pick(SETTINGS)
    when = rng.pick(TIMES)
    obj = rng.pick(OBJECTS)
    mood = rng.pick(MOODS)
    sound = rng.pick(SOUNDS)
    return (
        "Story:\n"
        f"{who} was {where} {when}. "
        f"{who} felt {mood} after hearing {sound} and noticing {obj}."
    )


def next_sentence(level, rng, n):
    ctx = story_context(rng)
    correct = rng.pick([
        "I took a slow breath, then moved closer to see what was really happening.",
        "Carefully, I stepped forward to find out where the sound had come from.",
    ])
    result = build_choices(
        rng,
        correct,
        [
            "I ate a sandwich and forgot about it.",
            "My shoes were blue and my hat was red.",
            "Yesterday is a day that happened.",
        ],
        lambda used, c: "I looked around carefully and tried to stay calm.",
    )
    return Question(
        id=make_id("q-write-next", level, n),
        domain=DOMAIN,
        subskill="write-next",
        difficulty=level,
        prompt=f"{ctx}\n\nWhich sentence is the best next sentence?",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="The best next sentence continues the action or mystery.",
        explanation="Good stories connect to what just happened.",
    )


def best_description(level, rng, n):
    ctx = story_context(rng)
    thing = rng.pick(["storm", "treehouse", "bike", "river", "cave", "puppy", "lantern", "path", "ocean", "forest"])
    correct = rng.pick([
        f"The {thing} looked ordinary at first, but tiny details made it seem unusual.",
        f"The {thing} was cold to touch and made my fingers tingle.",
        f"The {thing} stood out like it belonged to a different story.",
    ])
    result = build_choices(
        rng,
        correct,
        [f"The {thing} was nice.", f"The {thing} was good.", f"The {thing} was there."],
        lambda used, c: f"The {thing} was okay.",
    )
    return Question(
        id=make_id("q-write-desc", level, n),
        domain=DOMAIN,
        subskill="write-description",
        difficulty=level,
        prompt=f"{ctx}\n\nWhich sentence describes the {thing} best?",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Good descriptions use specific details.",
        explanation="Specific details help the reader picture the scene.",
    )


def stronger_verb(level, rng, n):
    who = rng.pick(CHARACTERS)
    place = rng.pick(SETTINGS)
    if level >= 4:
        strong, weak = ["creaked", "slammed", "burst", "swung"], ["did", "went", "was"]
    else:
        strong, weak = ["creaked", "opened", "moved", "swung"], ["did", "was", "got"]
    correct = rng.pick(strong)
    result = build_choices(rng, correct, weak, lambda used, c: "made")
    return Question(
        id=make_id("q-write-verb", level, n),
        domain=DOMAIN,
        subskill="write-verbs",
        difficulty=level,
        prompt=(
            f"Story:\n{who} was {place}.\n\n"
            "Choose the strongest verb to complete this sentence:\n"
            '"The door ___ open."'
        ),
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Strong verbs make writing clearer and more vivid.",
        explanation=f'"{correct}" creates a stronger picture in the reader\'s mind.',
    )


def better_opening(level, rng, n):
    who = rng.pick(CHARACTERS)
    where = rng.pick(SETTINGS)
    mood = rng.pick(MOODS)
    correct = rng.pick([
        "I froze when I realised the quiet was not normal.",
        "Something small changed, and suddenly everything felt different.",
        "Just as I turned around, I saw something I could not explain.",
        "I did not know it yet, but this was the moment everything began.",
    ])
    result = build_choices(
        rng,
        correct,
        ["I woke up.", "It was a day.", "I did something."],
        lambda used, c: "I went outside.",
    )
    return Question(
        id=make_id("q-write-open", level, n),
        domain=DOMAIN,
        subskill="write-openings",
        difficulty=level,
        prompt=(
            f"Theme:\nA story about {who} who feels {mood} {where}.\n\n"
            "Which is the best opening sentence for a story?"
        ),
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="A strong opening creates curiosity.",
        explanation="Good openings make the reader want to keep reading.",
    )


def fix_run_on(level, rng, n):
    who = rng.pick(CHARACTERS)
    where = rng.pick(SETTINGS)
    obj = rng.pick(OBJECTS)
    run_on = (
        f"{who} was {where} and they picked up {obj} and "
        "they tried to hide it and they felt nervous."
    )
    correct = f"{who} was {where}, picked up {obj}, and tried to hide it."
    distractors = [
        f"{who} was {where} picked up {obj} and tried to hide it.",
        f"{who} was {where}, picked up {obj} tried to hide it.",
        f"{who} was {where} and, picked up {obj}, and tried to hide it.",
    ]
    result = build_choices(rng, correct, distractors, lambda used, c: f"{who} was {where}.")
    return Question(
        id=make_id("q-write-runon", level, n),
        domain=DOMAIN,
        subskill="write-sentences",
        difficulty=level,
        prompt=f'Read this run-on sentence:\n"{run_on}"\n\nWhich option fixes it best?',
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Split long ideas into clear parts using punctuation and conjunctions.",
        explanation="The best option removes repetition and adds clear punctuation.",
    )


def best_ending(level, rng, n):
    ctx = story_context(rng)
    obj = rng.pick(OBJECTS)
    result = build_choices(
        rng,
        'Inside was a note that said, "Well done. You found me."',
        [
            "Then I went to sleep.",
            "Inside was nothing and that was it.",
            "I ate an apple and forgot about it.",
        ],
        lambda used, c: "I closed it quickly and ran.",
    )
    return Question(
        id=make_id("q-write-end", level, n),
        domain=DOMAIN,
        subskill="write-endings",
        difficulty=level,
        prompt=(
            f"{ctx}\n\n"
            "A story ends like this:\n"
            f'"I took a deep breath and opened {obj}."\n\n'
            "Which ending is best?"
        ),
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="A good ending connects to the story's problem or mystery.",
        explanation="A satisfying ending answers a question or adds a twist.",
    )


FAMILIES = [
    ("next", next_sentence),
    ("description", best_description),
    ("verbs", stronger_verb),
    ("openings", better_opening),
    ("run-on", fix_run_on),
    ("endings", best_ending),
]


def generate() -> list[Question]:
    return generate_domain(DOMAIN, FAMILIES)
