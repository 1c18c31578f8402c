"""
Tests for the tick sources.
"""

import threading
import unittest
from unittest.mock import Mock

from cotimer import InvalidArgumentError, TickLoopConfig, TimerScheduler
from cotimer.driver import FrameClock, StepDriver, TickLoop
from cotimer.unit import Second


class FakeTime:
    """Time source that advances by a fixed amount on every reading."""

    def __init__(self, step: float = 0.1):
        self.now = 0.0
        self.step = step
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            self.now += self.step
            return self.now


class TestFrameClock(unittest.TestCase):
    """Test FrameClock deltas."""

    def test_first_delta_is_zero(self):
        """Test the first reading only sets the baseline."""
        clock = FrameClock(time_source=iter([10.0, 10.5]).__next__)
        self.assertEqual(clock.next(), 0.0)
        self.assertEqual(clock.next(), 0.5)
        self.assertEqual(clock.elapsed, 0.5)

    def test_delta_is_clamped(self):
        """Test stalls and backwards jumps are bounded."""
        clock = FrameClock(time_source=iter([0.0, 5.0, 4.0]).__next__, max_delta=0.25)
        clock.next()
        self.assertEqual(clock.next(), 0.25)
        self.assertEqual(clock.next(), 0.0)

    def test_reset(self):
        """Test reset discards the previous reading."""
        clock = FrameClock(time_source=iter([0.0, 1.0, 0.1]).__next__, max_delta=10)
        clock.next()
        clock.reset()
        self.assertEqual(clock.next(), 0.0)
        self.assertAlmostEqual(clock.next(), 0.0)


class TestStepDriver(unittest.TestCase):
    """Test the fixed-step driver."""

    def setUp(self):
        self.scheduler = TimerScheduler()

    def test_run_for(self):
        """Test running for a span of simulated time."""
        callback = Mock()
        handle = self.scheduler.start_timer(2.0, callback)
        driver = StepDriver(self.scheduler, step=Second(0.5))
        self.assertEqual(driver.run_for(1.0), 0)
        self.assertAlmostEqual(handle.completed_percentage, 0.5)
        self.assertEqual(driver.run_for(Second(1.0)), 1)
        callback.assert_called_once_with()
        self.assertEqual(float(driver.now), 2.0)
        self.assertEqual(self.scheduler.total_ticks, 4)

    def test_run_until_idle(self):
        """Test ticking until no timers remain."""
        for seconds in [0.1, 0.35, 1.0]:
            self.scheduler.start_timer(seconds, None)
        driver = StepDriver(self.scheduler, step=0.1)
        steps = driver.run_until_idle()
        self.assertEqual(len(self.scheduler), 0)
        self.assertGreaterEqual(steps, 10)
        self.assertLessEqual(steps, 11)

    def test_run_until_idle_is_bounded(self):
        """Test a scheduler that never idles stops at max_steps."""
        self.scheduler.start_timer(1000.0, None)
        driver = StepDriver(self.scheduler, step=1.0)
        self.assertEqual(driver.run_until_idle(max_steps=5), 5)
        self.assertEqual(len(self.scheduler), 1)

    def test_invalid_step(self):
        """Test the step must be positive."""
        with self.assertRaises(InvalidArgumentError):
            StepDriver(self.scheduler, step=0)


class TestTickLoopConfig(unittest.TestCase):
    """Test loop configuration validation."""

    def test_invalid_values(self):
        """Test non-positive settings are rejected."""
        with self.assertRaises(InvalidArgumentError):
            TickLoopConfig(update_interval=0)
        with self.assertRaises(InvalidArgumentError):
            TickLoopConfig(time_scale=-1)
        with self.assertRaises(InvalidArgumentError):
            TickLoopConfig(max_delta=0)


class TestTickLoop(unittest.TestCase):
    """Test the background tick loop."""

    def setUp(self):
        self.scheduler = TimerScheduler()
        self.config = TickLoopConfig(update_interval=0.001, max_delta=1.0)

    def test_timer_fires_from_loop_thread(self):
        """Test a timer completes while the loop is running."""
        done = threading.Event()
        threads = []

        def on_done():
            threads.append(threading.current_thread().name)
            done.set()

        handle = self.scheduler.start_timer(0.5, on_done)
        loop = TickLoop(self.scheduler, self.config, FrameClock(time_source=FakeTime(0.1), max_delta=1.0))
        with loop:
            self.assertTrue(done.wait(timeout=5.0))
        self.assertTrue(handle.is_completed)
        self.assertEqual(threads, [self.config.thread_name])
        self.assertGreater(loop.ticks, 0)

    def test_stop_detaches_scheduler(self):
        """Test stopping the loop cancels timers left in the scheduler."""
        callback = Mock()
        handle = self.scheduler.start_timer(10_000.0, callback)
        loop = TickLoop(self.scheduler, self.config, FrameClock(time_source=FakeTime(0.01)))
        loop.start()
        loop.stop()
        self.assertFalse(loop.running)
        self.assertFalse(handle.is_active)
        self.assertEqual(len(self.scheduler), 0)
        callback.assert_not_called()

    def test_stop_without_detach_keeps_timers(self):
        """Test timers survive a stop when detach is False."""
        handle = self.scheduler.start_timer(10_000.0, None)
        loop = TickLoop(self.scheduler, self.config, FrameClock(time_source=FakeTime(0.01)))
        loop.start()
        loop.stop(detach=False)
        self.assertTrue(handle.is_active)
        self.assertIn(handle, self.scheduler)

    def test_lifecycle_events(self):
        """Test start and stop emit events to registered handlers."""
        events = []
        loop = TickLoop(self.scheduler, self.config, FrameClock(time_source=FakeTime(0.01)))
        loop.register_event_handler("loop_started", lambda name, data: events.append(name))
        loop.register_event_handler("loop_stopped", lambda name, data: events.append(name))
        loop.start()
        loop.start()
        loop.stop()
        loop.stop()
        self.assertEqual(events, ["loop_started", "loop_stopped"])

    def test_tick_error_event(self):
        """Test a failing tick is reported and the loop keeps running."""
        scheduler = Mock(spec=TimerScheduler)
        scheduler.tick.side_effect = RuntimeError("broken")
        errors = []
        seen = threading.Event()

        def on_error(name, data):
            errors.append(data["error"])
            seen.set()

        loop = TickLoop(scheduler, self.config, FrameClock(time_source=FakeTime(0.01)))
        loop.register_event_handler("tick_error", on_error)
        with self.assertLogs("cotimer", level="ERROR"):
            with loop:
                self.assertTrue(seen.wait(timeout=5.0))
        self.assertIsInstance(errors[0], RuntimeError)
        scheduler.stop_all_timers.assert_called_once_with()

    def test_pause_stops_progress(self):
        """Test no time is added while paused."""
        handle = self.scheduler.start_timer(10_000.0, None)
        loop = TickLoop(self.scheduler, self.config, FrameClock(time_source=FakeTime(0.01)))
        loop.start()
        try:
            loop.pause()
            paused_at = handle.elapsed_time
            threading.Event().wait(0.05)
            # at most one tick that was already in flight when pausing
            self.assertLessEqual(handle.elapsed_time - paused_at, 0.01 + 1e-9)
            self.assertTrue(loop.paused)
            loop.resume()
            self.assertFalse(loop.paused)
        finally:
            loop.stop()


if __name__ == "__main__":
    unittest.main()
