"""Language conventions question families: spelling, grammar, punctuation."""
from naplan_tutor.choices import build_choices
from naplan_tutor.families import generate_domain, make_id
from naplan_tutor.models import Question

DOMAIN = "conventions"

NAMES = ["Georgia", "Alex", "Mina", "Jack", "Sam", "Rani", "Tara", "Lily", "Ethan"]
PLACES = ["the park", "the library", "school", "the beach", "the backyard"]
DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
ANIMALS = ["dog", "cat", "rabbit", "bird", "lizard", "koala"]
OBJECTS = ["backpack", "lunchbox", "helmet", "notebook", "towel", "sandwich", "pencil"]
ADVERBS = ["quickly", "slowly", "quietly", "happily"]

# (correct, misspellings, sentence with {who}, {obj} and {word} slots)
SPELLING = [
    ("because", ["becaus", "becouse", "becuase"], "{who} looked in the {obj} {word} it was missing."),
    ("friend", ["freind", "frend", "friand"], "{who} shared the {obj} with a {word}."),
    ("school", ["skool", "scool", "schol"], "{who} took the {obj} to {word}."),
    ("exactly", ["exatly", "exactley", "exectly"], "{who} knew {word} where the {obj} was."),
    ("probably", ["probly", "proberly", "probabaly"], "{who} will {word} find the {obj} soon."),
    ("beautiful", ["beutiful", "beautifull", "butiful"], "{who} drew a {word} picture of the {obj}."),
    ("minute", ["minit", "minuite", "minut"], "{who} found the {obj} in a {word}."),
    ("basket", ["baskit", "bascket", "baskett"], "{who} put the {obj} in the {word}."),
]
ADVANCED_SPELLING = [
    ("necessary", ["neccessary", "necesary", "nesessary"], "{who} said the {obj} was {word}."),
    ("separate", ["seperate", "separete", "seprate"], "{who} kept the {obj} in a {word} bag."),
    ("definitely", ["definately", "definitly", "defanitely"], "{who} will {word} bring the {obj}."),
    ("surprise", ["suprise", "surprize", "serprise"], "{who} hid the {obj} as a {word}."),
]

PREPOSITIONS = [
    ("{who} put the {obj} ___ {surface}.", "on", ["in", "for", "around"]),
    ("{who} waited ___ the bus to arrive.", "for", ["around", "to", "as"]),
    ("{who} walked ___ school with a friend.", "to", ["of", "as", "since"]),
    ("{who} hid the {obj} ___ {surface}.", "under", ["of", "since", "as"]),
    ("{who} has been practising ___ Monday.", "since", ["for", "at", "of"]),
]


def spelling_in_context(level, rng, n):
    pool = SPELLING + ADVANCED_SPELLING if level >= 3 else SPELLING
    correct, wrong, template = rng.pick(pool)
    who = rng.pick(NAMES)
    obj = rng.pick(OBJECTS)
    sentence = template.format(who=who, obj=obj, word=rng.pick(wrong))
    result = build_choices(rng, correct, wrong, lambda used, c: rng.pick(wrong))
    return Question(
        id=make_id("q-conv-spell", level, n),
        domain=DOMAIN,
        subskill="conv-spelling",
        difficulty=level,
        prompt=f'Read this sentence:\n"{sentence}"\n\nWhich spelling is correct?',
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Look for common spelling patterns.",
        explanation=f'The correct spelling is "{correct}".',
    )


def capitals(level, rng, n):
    who = rng.pick(NAMES)
    day = rng.pick(DAYS)
    place = rng.pick(PLACES)
    base = f"on {day.lower()} {who.lower()} went to {place}."
    correct = f"On {day} {who} went to {place}."
    distractors = [
        f"On {day.lower()} {who} went to {place}.",
        f"on {day} {who} went to {place}.",
        f"ON {day} {who} went to {place}.",
    ]
    result = build_choices(
        rng, correct, distractors, lambda used, c: f"On {day} {who} Went to {place}."
    )
    return Question(
        id=make_id("q-conv-cap", level, n),
        domain=DOMAIN,
        subskill="conv-capitals",
        difficulty=level,
        prompt=f'Which sentence uses capital letters correctly?\n"{base}"',
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Names and days start with a capital letter.",
        explanation="Use capitals for proper nouns and the first word of a sentence.",
    )


def punctuation(level, rng, n):
    who = rng.pick(NAMES)
    if rng.pick(["question", "exclaim"]) == "question":
        raw = f"{who} asked do you want to play"
        correct = f'{who} asked, "Do you want to play?"'
        wrong = [
            f'{who} asked, "Do you want to play."',
            f'{who} asked "Do you want to play"?',
            f"{who} asked, Do you want to play?",
        ]
    else:
        raw = f"what a fantastic day said {who}"
        correct = f'"What a fantastic day!" said {who}.'
        wrong = [
            f'"What a fantastic day" said {who}!',
            f'"What a fantastic day!" said {who}',
            f"What a fantastic day! said {who}.",
        ]
    result = build_choices(
        rng, correct, wrong, lambda used, c: f'{who} asked, "Do you want to play"!'
    )
    return Question(
        id=make_id("q-conv-punct", level, n),
        domain=DOMAIN,
        subskill="conv-punctuation",
        difficulty=level,
        prompt=f"Which sentence is punctuated correctly?\n{raw}",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Questions need a question mark.",
        explanation="Punctuation helps the reader understand meaning.",
    )


def grammar(level, rng, n):
    who = rng.pick(NAMES)
    pet = rng.pick(ANIMALS)
    place = rng.pick(PLACES)
    mode = rng.pick(["agreement", "tense"] if level <= 2 else ["agreement", "tense", "either"])
    if mode == "agreement":
        prompt = "Which is a correct sentence?"
        correct = f"{who}'s {pet} is at {place}."
        distractors = [
            f"{who}'s {pet} are at {place}.",
            f"{who}'s {pet} am at {place}.",
            f"{who}'s {pet} be at {place}.",
        ]
    elif mode == "tense":
        prompt = "Which sentence is written in the past tense?"
        correct = f"{who} walked to {place}."
        distractors = [
            f"{who} walks to {place}.",
            f"{who} will walk to {place}.",
            f"{who} is walking to {place}.",
        ]
    else:
        prompt = "Which sentence is correct?"
        correct = f"{who} took a hat and a towel to {place}."
        distractors = [
            f"{who} taked a hat and a towel to {place}.",
            f"{who} take a hat and a towel to {place}.",
            f"{who} took a hat and towel to to {place}.",
        ]
    result = build_choices(
        rng, correct, distractors, lambda used, c: f"{who} walkeded to {place}."
    )
    return Question(
        id=make_id("q-conv-gram", level, n),
        domain=DOMAIN,
        subskill="conv-grammar",
        difficulty=level,
        prompt=f"{prompt}\n(About {who} and the {pet}.)",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Read each option aloud to see what sounds correct.",
        explanation="Correct sentences use the right verb form and grammar.",
    )


def prepositions(level, rng, n):
    who = rng.pick(NAMES)
    obj = rng.pick(OBJECTS)
    surface = rng.pick(["the table", "the shelf", "the chair", "the bed"])
    template, correct, wrong = rng.pick(PREPOSITIONS)
    sentence = template.format(who=who, obj=obj, surface=surface)
    result = build_choices(rng, correct, wrong, lambda used, c: "beside")
    return Question(
        id=make_id("q-conv-prep", level, n),
        domain=DOMAIN,
        subskill="conv-prepositions",
        difficulty=level,
        prompt=f"Which word completes this sentence correctly?\n{sentence}",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Try each word in the sentence.",
        explanation=f'The correct word is "{correct}".',
    )


def parts_of_speech(level, rng, n):
    who = rng.pick(NAMES)
    pet = rng.pick(ANIMALS)
    action = rng.pick(["ran", "jumped", "laughed", "whispered", "watched", "climbed"])
    place = rng.pick(PLACES)
    adj = rng.pick(["blue", "tiny", "cheerful", "noisy", "sleepy", "brave"])
    adverb = rng.pick(ADVERBS)
    sentence = f"{who} {action} {adverb} with the {adj} {pet} at {place}."
    ask = rng.pick(["noun", "adjective", "verb"])
    if ask == "noun":
        correct, distractors = pet, [adverb, action, adj]
    elif ask == "adjective":
        correct, distractors = adj, [who, action, pet]
    else:
        correct, distractors = action, [who, adj, pet]
    result = build_choices(rng, correct, distractors, lambda used, c: "with")
    return Question(
        id=make_id("q-conv-pos", level, n),
        domain=DOMAIN,
        subskill="conv-parts-of-speech",
        difficulty=level,
        prompt=f"In this sentence, which word is a {ask}?\n{sentence}",
        choices=result.choices,
        correct_answer=result.correct_answer,
        hint="Noun = naming word, verb = doing word, adjective = describing word.",
        explanation=f'The correct answer is "{correct}".',
    )


FAMILIES = [
    ("spelling", spelling_in_context),
    ("capitals", capitals),
    ("punctuation", punctuation),
    ("grammar", grammar),
    ("prepositions", prepositions),
    ("parts-of-speech", parts_of_speech),
]


def generate() -> list[Question]:
    return generate_domain(DOMAIN, FAMILIES)
