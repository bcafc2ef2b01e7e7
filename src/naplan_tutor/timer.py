"""Wall-clock budget for a whole mission. Times are in milliseconds."""
import math
from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_SESSION_MINUTES = 20
WARNING_WINDOW_MS = 60 * 1000

RUNNING = "running"
WARNING = "warning"
EXPIRED = "expired"


@dataclass(frozen=True)
class TimerState:
    start_time: float
    max_duration_ms: float
    current_status: str = RUNNING
    warning_shown_at: Optional[float] = None
    elapsed_ms: float = 0


def create_timer_state(duration_minutes: float, now: float) -> TimerState:
    return TimerState(start_time=now, max_duration_ms=duration_minutes * 60 * 1000)


def update_timer_state(state: TimerState, now: float) -> TimerState:
    """Return the timer state as of ``now``. Expired is terminal."""
    if state.current_status == EXPIRED:
        return state
    elapsed = max(0, now - state.start_time)
    if elapsed >= state.max_duration_ms:
        return replace(state, elapsed_ms=elapsed, current_status=EXPIRED)
    if elapsed >= state.max_duration_ms - WARNING_WINDOW_MS:
        return replace(
            state,
            elapsed_ms=elapsed,
            current_status=WARNING,
            warning_shown_at=state.warning_shown_at if state.warning_shown_at is not None else now,
        )
    return replace(state, elapsed_ms=elapsed, current_status=RUNNING)


def format_remaining_time(state: TimerState) -> str:
    """Remaining time as M:SS, rounding partial seconds up."""
    remaining = max(0, state.max_duration_ms - state.elapsed_ms)
    seconds = math.ceil(remaining / 1000)
    return f"{seconds // 60}:{seconds % 60:02d}"


def is_expired(state: TimerState) -> bool:
    return state.current_status == EXPIRED


def should_show_warning(previous: TimerState, current: TimerState) -> bool:
    """True only on the update that first crossed into the warning window."""
    return current.current_status == WARNING and previous.warning_shown_at is None
