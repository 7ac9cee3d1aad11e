import pytest

from rutherford_sim.scheduler import Scheduler


def test_tasks_start_cancelled():
    sched = Scheduler()
    calls = []
    sched.add("a", 0.0, lambda: calls.append("a"))
    assert sched.run_pending(0.0) == 0
    assert sched.time_until_next(0.0) is None
    assert calls == []


def test_interval_and_cancel():
    sched = Scheduler()
    calls = []
    sched.add("fast", 0.0, lambda: calls.append("fast"))
    sched.add("slow", 0.5, lambda: calls.append("slow"))
    sched.start_all(now=0.0)

    sched.run_pending(0.1)
    assert calls == ["fast"]
    assert sched.time_until_next(0.1) == 0.0

    sched.run_pending(0.6)
    assert calls == ["fast", "fast", "slow"]

    sched["fast"].cancel()
    sched.run_pending(2.0)
    assert calls == ["fast", "fast", "slow", "slow"]
    assert sched.time_until_next(2.0) == pytest.approx(0.5)


def test_callback_can_cancel_later_tasks():
    sched = Scheduler()
    calls = []
    sched.add("first", 0.0, lambda: (calls.append("first"), sched.cancel_all()))
    sched.add("second", 0.0, lambda: calls.append("second"))
    sched.start_all(now=0.0)

    sched.run_pending(1.0)
    assert calls == ["first"]
    assert not sched.any_active


def test_duplicate_names_rejected():
    sched = Scheduler()
    sched.add("emit", 1.0, lambda: None)
    with pytest.raises(ValueError):
        sched.add("emit", 2.0, lambda: None)
