"""Exceptions raised by the timer scheduler."""


class TimerError(Exception):
    """
    Base exception class for errors raised by cotimer.
    """


class InvalidArgumentError(TimerError, ValueError):
    """
    Raised when an operation receives arguments it cannot work with, such as
    random timer bounds where the minimum is not below the maximum.
    """


class UnsupportedOperationError(TimerError, RuntimeError):
    """
    Raised when a caller tries to bulk-cancel the scheduler's timer coroutines
    through a generic mechanism instead of ``stop_all_timers``.
    """


class CallbackError(TimerError):
    """
    Raised after a tick when a timer callback failed and the scheduler is
    configured to propagate callback errors. The original exception is chained.
    """

    def __init__(self, timer_id: int, name: str | None, error: BaseException) -> None:
        label = f"{name!r} (#{timer_id})" if name else f"#{timer_id}"
        super().__init__(f"Callback of timer {label} raised {type(error).__name__}: {error}")
        self.timer_id = timer_id
        self.name = name
        self.error = error
