"""Data classes for the tutor domain model."""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

DOMAINS = ("numeracy", "reading", "conventions", "writing")
MIN_LEVEL = 1
MAX_LEVEL = 5


@dataclass(frozen=True)
class Question:
    id: str
    domain: str
    subskill: str
    difficulty: int
    prompt: str
    choices: tuple
    correct_answer: str
    hint: str = ""
    explanation: str = ""
    type: str = "mcq"


@dataclass
class MissionSession:
    module: str
    mission_size: int
    level: int
    question_ids: list = field(default_factory=list)
    q_index: int = 0
    correct_count: int = 0
    gem_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "MissionSession":
        data = dict(data)
        data["question_ids"] = list(data.get("question_ids", []))
        return cls(**data)


@dataclass
class Profile:
    nickname: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        return cls(**data)


def _default_colors() -> dict:
    return {"primary": "#6366F1", "secondary": "#EC4899", "accent": "#10B981"}


@dataclass
class Settings:
    theme: str = "space"
    colors: dict = field(default_factory=_default_colors)
    avatar: str = "astronaut-1"
    sound_on: bool = True
    child_name: str = "Student"
    default_mission_size: int = 10
    auto_advance_speed: int = 5

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        return cls(**data)


def _default_levels() -> dict:
    return {domain: MIN_LEVEL for domain in DOMAINS}


@dataclass
class Progress:
    levels: dict = field(default_factory=_default_levels)
    total_gems: int = 0
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def level_for(self, domain: str) -> int:
        return self.levels.get(domain, MIN_LEVEL)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Progress":
        data = dict(data)
        data["levels"] = {**_default_levels(), **data.get("levels", {})}
        return cls(**data)


@dataclass
class SubskillMastery:
    id: str
    status: str = "unseen"  # unseen | learning | mastered
    streak_correct: int = 0
    total_attempts: int = 0
    correct_attempts: int = 0
    difficulty: int = MIN_LEVEL
    last_seen: Optional[str] = None
    scheduled_review_queue: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SubskillMastery":
        data = dict(data)
        data["scheduled_review_queue"] = list(data.get("scheduled_review_queue", []))
        return cls(**data)


@dataclass(frozen=True)
class MissionResult:
    domain: str
    correct_count: int
    total: int
    gem_count: int
    level: int
    new_level: int
