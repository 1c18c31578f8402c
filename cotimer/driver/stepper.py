"""Deterministic fixed-step driver.

StepDriver ticks a scheduler with a constant delta, without any real time
passing. It is the driver of choice for tests and offline simulations.
"""

from __future__ import annotations

import math

from cotimer.errors import InvalidArgumentError
from cotimer.timer import TimerScheduler
from cotimer.unit import Second, Seconds, to_seconds


class StepDriver:
    """Ticks a scheduler in fixed steps of simulated time.

    Attributes:
        scheduler (TimerScheduler): Scheduler being driven.
        step_size (float): Seconds passed to every tick.
        now (Second): Simulated time since the driver was created.
    """

    def __init__(self, scheduler: TimerScheduler, step: Seconds = Second(1.0 / 60.0)):
        step = to_seconds(step)
        if step <= 0:
            raise InvalidArgumentError("step must be greater than 0")
        self.scheduler = scheduler
        self.step_size = step
        self.now = Second(0)

    def step(self, n: int = 1) -> int:
        """Run ``n`` ticks.

        Returns:
            int: Number of timers that completed during these ticks.
        """
        completed = 0
        for _ in range(n):
            completed += self.scheduler.tick(self.step_size)
            self.now += self.step_size
        return completed

    def run_for(self, seconds: Seconds) -> int:
        """Run as many ticks as needed to cover ``seconds`` of simulated time.

        Returns:
            int: Number of timers that completed.
        """
        steps = math.ceil(to_seconds(seconds) / self.step_size - 1e-9)
        return self.step(max(steps, 0))

    def run_until_idle(self, max_steps: int = 100_000) -> int:
        """Tick until the scheduler tracks no more timers.

        Args:
            max_steps: Upper bound on ticks, for schedulers that keep
                       starting new timers.

        Returns:
            int: Number of ticks run.
        """
        steps = 0
        while len(self.scheduler) > 0 and steps < max_steps:
            self.step()
            steps += 1
        return steps
