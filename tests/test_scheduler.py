# tests/test_scheduler.py
from naplan_tutor.scheduler import ManualClock, Scheduler


def test_task_fires_after_delay(scheduler):
    fired = []
    scheduler.call_later(2, lambda: fired.append("x"))
    scheduler.advance(1)
    assert fired == []
    scheduler.advance(1)
    assert fired == ["x"]


def test_cancelled_task_never_fires(scheduler):
    fired = []
    task = scheduler.call_later(1, lambda: fired.append("x"))
    task.cancel()
    task.cancel()
    scheduler.advance(5)
    assert fired == []
    assert not task.active


def test_tasks_fire_in_deadline_order():
    clock = ManualClock()
    scheduler = Scheduler(clock)
    fired = []
    scheduler.call_later(3, lambda: fired.append("late"))
    scheduler.call_later(1, lambda: fired.append("early"))
    clock.advance(10)
    assert scheduler.run_due() == 2
    assert fired == ["early", "late"]


def test_callback_can_reschedule(scheduler):
    ticks = []

    def tick():
        ticks.append(scheduler.clock())
        if len(ticks) < 3:
            scheduler.call_later(1, tick)

    scheduler.call_later(1, tick)
    scheduler.advance(10)
    assert ticks == [1.0, 2.0, 3.0]
    assert scheduler.pending() == []
