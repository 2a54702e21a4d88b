import logging

import pytest

from rendering.scheduler import DrawScheduler


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, *args, **kwargs):
        self.calls.append(args)


def make(timers, interval=0.35):
    fn = Recorder()
    clock = iter(range(1000)).__next__
    return DrawScheduler(fn, interval, clock=clock, timer_factory=timers), fn


def test_first_request_runs_immediately(timers):
    scheduler, fn = make(timers)
    assert scheduler.request("a") is True
    assert fn.calls == [("a",)]
    assert scheduler.active
    assert len(timers.created) == 1
    timer = timers.created[0]
    assert timer.started and timer.daemon
    assert timer.interval == pytest.approx(0.35)


def test_burst_collapses_to_leading_and_trailing_call(timers):
    scheduler, fn = make(timers)
    scheduler.request(1)
    assert scheduler.request(2) is False
    assert scheduler.request(3) is False
    assert fn.calls == [(1,)]
    assert scheduler.suppressed == 2

    timers.created[0].fire()
    assert fn.calls == [(1,), (3,)]
    assert scheduler.runs == 2
    # the trailing run opens a new interval
    assert len(timers.created) == 2 and scheduler.active

    timers.created[1].fire()
    assert fn.calls == [(1,), (3,)]
    assert not scheduler.active


def test_single_request_has_no_trailing_run(timers):
    scheduler, fn = make(timers)
    scheduler.request("only")
    timers.created[0].fire()
    assert fn.calls == [("only",)]
    assert scheduler.pending is None
    assert not scheduler.active


def test_request_after_quiet_period_runs_immediately(timers):
    scheduler, fn = make(timers)
    scheduler.request(1)
    timers.created[0].fire()
    assert scheduler.request(2) is True
    assert fn.calls == [(1,), (2,)]


def test_flush_runs_retained_request_now(timers):
    scheduler, fn = make(timers)
    assert scheduler.flush() is False
    scheduler.request(1)
    scheduler.request(2)
    assert scheduler.flush() is True
    assert fn.calls == [(1,), (2,)]
    assert timers.created[0].cancelled
    # the replaced timer no longer triggers anything
    scheduler.request(3)
    timers.created[0].fire()
    assert fn.calls == [(1,), (2,)]
    timers.created[-1].fire()
    assert fn.calls == [(1,), (2,), (3,)]


def test_cancel_drops_retained_request(timers):
    scheduler, fn = make(timers)
    scheduler.request(1)
    scheduler.request(2)
    scheduler.cancel()
    assert scheduler.pending is None
    assert not scheduler.active
    timers.created[0].fire()
    assert fn.calls == [(1,)]


def test_keyword_arguments_are_retained(timers):
    scheduler, fn = make(timers)
    seen = []
    scheduler.fn = lambda *a, **kw: seen.append(kw)
    scheduler.request(x=1)
    scheduler.request(x=2)
    timers.created[0].fire()
    assert seen == [{"x": 1}, {"x": 2}]


def test_trailing_failure_is_logged(timers, caplog):
    def boom(value):
        if value == "bad":
            raise RuntimeError("render failed")

    scheduler = DrawScheduler(boom, 0.1, timer_factory=timers, name="julia")
    scheduler.request("ok")
    scheduler.request("bad")
    with caplog.at_level(logging.ERROR, logger="rendering.scheduler"):
        timers.created[0].fire()
    assert "trailing run failed" in caplog.text


def test_negative_interval_is_rejected():
    with pytest.raises(ValueError):
        DrawScheduler(lambda: None, -1)


def test_last_run_uses_clock(timers):
    scheduler, _ = make(timers)
    assert scheduler.last_run is None
    scheduler.request()
    assert scheduler.last_run == 0
