"""Tests for frame callback scheduling."""

from endless_runner.loop import FrameScheduler


class TestFrameScheduler:
    def test_dispatch_runs_pending(self, scheduler):
        seen = []
        scheduler.request_frame(seen.append)
        assert scheduler.dispatch(16.0) == 1
        assert seen == [16.0]
        assert scheduler.pending == 0

    def test_callback_runs_once(self, scheduler):
        seen = []
        scheduler.request_frame(seen.append)
        scheduler.dispatch(1)
        scheduler.dispatch(2)
        assert seen == [1]

    def test_handles_are_distinct(self, scheduler):
        a = scheduler.request_frame(lambda t: None)
        b = scheduler.request_frame(lambda t: None)
        assert a != b
        assert scheduler.pending == 2

    def test_cancel(self, scheduler):
        seen = []
        handle = scheduler.request_frame(seen.append)
        scheduler.cancel_frame(handle)
        assert scheduler.dispatch(1) == 0
        assert seen == []

    def test_cancel_unknown_or_none_ignored(self, scheduler):
        scheduler.cancel_frame(None)
        scheduler.cancel_frame(999)
        handle = scheduler.request_frame(lambda t: None)
        scheduler.dispatch(1)
        scheduler.cancel_frame(handle)

    def test_requested_during_dispatch_runs_next_time(self, scheduler):
        seen = []

        def again(t):
            seen.append(t)
            scheduler.request_frame(again)

        scheduler.request_frame(again)
        scheduler.dispatch(1)
        assert seen == [1]
        scheduler.dispatch(2)
        assert seen == [1, 2]

    def test_callback_can_cancel_another(self, scheduler):
        seen = []
        handles = {}

        def first(t):
            seen.append("first")
            scheduler.cancel_frame(handles["second"])

        scheduler.request_frame(first)
        handles["second"] = scheduler.request_frame(lambda t: seen.append("second"))
        assert scheduler.dispatch(1) == 1
        assert seen == ["first"]

    def test_default_timestamp_from_clock(self, clock, scheduler):
        clock.now = 1234.0
        seen = []
        scheduler.request_frame(seen.append)
        scheduler.dispatch()
        assert seen == [1234.0]
        assert scheduler.now() == 1234.0

    def test_default_clock_is_pygame_ticks(self):
        assert isinstance(FrameScheduler().now(), float)
