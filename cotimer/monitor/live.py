"""Rich terminal view of running timers.

TimerMonitor renders every timer a scheduler is tracking as a row with its
elapsed and remaining time and a progress bar, either as a one-off table or
refreshed continuously inside a ``rich.live.Live`` context.

Example:
    >>> monitor = TimerMonitor(scheduler)
    >>> with monitor.live() as refresh:
    ...     while len(scheduler):
    ...         scheduler.tick(dt)
    ...         refresh()
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from cotimer.log import CONSOLE
from cotimer.timer import TimerScheduler, TimerView
from cotimer.unit import ClockTime


class TimerMonitor:
    """Builds rich renderables describing a scheduler's live timers."""

    def __init__(self, scheduler: TimerScheduler, console: Console | None = None, bar_width: int = 30):
        self.scheduler = scheduler
        self.console = console or CONSOLE
        self.bar_width = bar_width

    def table(self) -> Table:
        """Return a table with one row per active timer."""
        t = Table(expand=False)
        t.add_column("#", justify="right", style="dim")
        t.add_column("Timer")
        t.add_column("Elapsed", justify="right")
        t.add_column("Remaining", justify="right")
        t.add_column("Progress")
        t.add_column("%", justify="right")

        for handle in self.scheduler.active_timers:
            t.add_row(*self._row(handle))
        return t

    def panel(self) -> Panel:
        """Return the timer table wrapped in a panel with scheduler totals."""
        title = (
            f"Timers: {len(self.scheduler)} • Ticks: {self.scheduler.total_ticks} "
            f"• Time: {ClockTime(self.scheduler.elapsed_time)}"
        )
        return Panel(self.table(), title=title, padding=(1, 2))

    def print(self) -> None:
        self.console.print(self.panel())

    @contextmanager
    def live(self, refresh_per_second: float = 10) -> Iterator[Callable[[], None]]:
        """Render the panel live; yields a function that refreshes it."""
        with Live(self.panel(), console=self.console, refresh_per_second=refresh_per_second) as live:

            def refresh() -> None:
                live.update(self.panel())

            yield refresh

    def _row(self, handle: TimerView) -> tuple:
        if handle.elapsed_time > 0:
            remaining = handle.remaining_time
        else:
            remaining = handle.duration
        bar = ProgressBar(total=1.0, completed=handle.completed_percentage, width=self.bar_width)
        return (
            str(handle.id),
            Text(handle.name or "-"),
            str(ClockTime(handle.elapsed_time)),
            str(ClockTime(remaining)),
            bar,
            f"{handle.completed_percentage:.1%}",
        )
