"""Per-domain level adjustment after a completed mission."""
from naplan_tutor.models import MAX_LEVEL, MIN_LEVEL

LEVEL_UP_ACCURACY = 0.8
LEVEL_DOWN_ACCURACY = 0.5


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def update_level(current_level: int, correct_count: int, total_count: int) -> int:
    """>= 80% moves up a level, <= 50% moves down, anything else stays."""
    accuracy = correct_count / max(1, total_count)
    if accuracy >= LEVEL_UP_ACCURACY:
        return clamp_level(current_level + 1)
    if accuracy <= LEVEL_DOWN_ACCURACY:
        return clamp_level(current_level - 1)
    return clamp_level(current_level)
