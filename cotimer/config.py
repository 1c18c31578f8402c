"""Configuration dataclasses for the scheduler and its tick loop."""

from dataclasses import dataclass

from cotimer.errors import InvalidArgumentError


@dataclass
class SchedulerConfig:
    """Configuration for a TimerScheduler.

    Attributes:
        seed: Seed for the random generator behind ``start_random_timer``.
              None draws fresh entropy.
        raise_callback_errors: Re-raise the first failing callback as
              CallbackError once the tick has finished. When False the error
              is only logged.
    """

    seed: int | None = None
    raise_callback_errors: bool = False


@dataclass
class TickLoopConfig:
    """Configuration for a background TickLoop."""

    update_interval: float = 1.0 / 60.0  # seconds between ticks
    time_scale: float = 1.0
    max_delta: float = 0.25  # clamp for a single tick after a stall
    thread_name: str = "TimerTickLoop"
    join_timeout: float = 5.0

    def __post_init__(self):
        if self.update_interval <= 0:
            raise InvalidArgumentError("update_interval must be greater than 0")
        if self.time_scale < 0:
            raise InvalidArgumentError("time_scale can't be negative")
        if self.max_delta <= 0:
            raise InvalidArgumentError("max_delta must be greater than 0")
