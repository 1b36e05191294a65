"""
Tests for the countdown clock and the delayed-effect scheduler.
"""

from werewolf.core import Clock, Scheduler


def test_clock_counts_down_and_floors_at_zero():
    clock = Clock(3)
    assert not clock.expired
    assert [clock.tick() for _ in range(5)] == [2, 1, 0, 0, 0]
    assert clock.expired


def test_clock_reset():
    clock = Clock(2)
    clock.tick()
    clock.reset(15)
    assert clock.time_remaining == 15


def test_clock_format():
    assert Clock.format(30) == "0:30"
    assert Clock.format(75) == "1:15"
    assert str(Clock(5)) == "0:05"


def test_scheduler_fires_once_after_delay():
    scheduler = Scheduler()
    fired = []
    scheduler.schedule("pairing", 3, lambda: fired.append("x") or ["done"])

    assert scheduler.tick() == []
    assert scheduler.tick() == []
    assert scheduler.tick() == [["done"]]
    assert fired == ["x"]
    assert scheduler.tick() == []
    assert len(scheduler) == 0


def test_scheduler_runs_due_tasks_in_scheduling_order():
    scheduler = Scheduler()
    order = []
    scheduler.schedule("a", 1, lambda: order.append("a"))
    scheduler.schedule("b", 1, lambda: order.append("b"))
    scheduler.tick()
    assert order == ["a", "b"]


def test_cancel_all_discards_pending_effects():
    scheduler = Scheduler()
    fired = []
    scheduler.schedule("pairing", 2, lambda: fired.append(1))
    assert scheduler.pending == ["pairing"]

    scheduler.cancel_all()
    assert scheduler.pending == []
    scheduler.tick()
    scheduler.tick()
    assert fired == []

    # Nothing can be scheduled on a torn-down scheduler
    scheduler.schedule("late", 1, lambda: fired.append(2))
    assert scheduler.tick() == []
    assert fired == []
