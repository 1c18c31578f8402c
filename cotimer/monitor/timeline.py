"""Timer progress recording and analysis.

TimelineRecorder samples the scheduler after each tick and keeps one row per
timer per sample. The rows can be turned into a pandas DataFrame, summarised
per timer, and plotted as completion curves.

Frame Columns:
    tick, time, timer_id, name, duration, elapsed, remaining, fraction,
    active, completed

Example:
    >>> recorder = TimelineRecorder(scheduler)
    >>> for _ in range(120):
    ...     scheduler.tick(1 / 60)
    ...     recorder.record()
    >>> frame = recorder.to_frame()
    >>> recorder.summary(frame)[["duration", "completed", "overshoot"]]
"""

from __future__ import annotations

import threading

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from cotimer.timer import TimerScheduler, TimerView

COLUMNS = [
    "tick",
    "time",
    "timer_id",
    "name",
    "duration",
    "elapsed",
    "remaining",
    "fraction",
    "active",
    "completed",
]


class TimelineRecorder:
    """Collects per-tick progress samples of a scheduler's timers.

    The recorder listens for new timers on the scheduler, so a timer that
    starts and leaves the scheduler between two samples (completed or
    stopped) still gets one row with its end state. Timers started before
    the recorder was created are picked up by the first sample.
    """

    def __init__(self, scheduler: TimerScheduler):
        self.scheduler = scheduler
        self._rows: list[dict] = []
        self._tracked: dict[int, TimerView] = {}
        self._lock = threading.Lock()
        scheduler.register_start_listener(self._on_start)

    def record(self) -> int:
        """Sample every timer once.

        Returns:
            int: Number of rows added.
        """
        tick = self.scheduler.total_ticks
        now = self.scheduler.elapsed_time
        active = {handle.id: handle for handle in self.scheduler.active_timers}

        added = 0
        with self._lock:
            for timer_id in list(self._tracked):
                if timer_id not in active:
                    self._rows.append(self._row(tick, now, self._tracked.pop(timer_id)))
                    added += 1

            for timer_id, handle in active.items():
                self._tracked[timer_id] = handle
                self._rows.append(self._row(tick, now, handle))
                added += 1
        return added

    def detach(self) -> None:
        """Stop listening for new timers on the scheduler."""
        self.scheduler.unregister_start_listener(self._on_start)

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()
            self._tracked.clear()

    def __len__(self) -> int:
        return len(self._rows)

    def _on_start(self, handle: TimerView) -> None:
        with self._lock:
            self._tracked[handle.id] = handle

    def to_frame(self) -> pd.DataFrame:
        """Return all samples as a DataFrame ordered by tick and timer id."""
        frame = pd.DataFrame(self._rows, columns=COLUMNS)
        if frame.empty:
            return frame
        return frame.sort_values(["tick", "timer_id"], kind="stable").reset_index(drop=True)

    @staticmethod
    def summary(frame: pd.DataFrame) -> pd.DataFrame:
        """Aggregate a timeline frame into one row per timer.

        Columns:
            name, duration, started, last_seen, samples, completed, cancelled,
            elapsed, overshoot (seconds a completed timer ran past its
            duration, at most one tick), final_fraction

        Returns:
            pandas.DataFrame: Indexed by timer_id.
        """
        if frame.empty:
            return pd.DataFrame(
                columns=[
                    "name",
                    "duration",
                    "started",
                    "last_seen",
                    "samples",
                    "completed",
                    "cancelled",
                    "elapsed",
                    "overshoot",
                    "final_fraction",
                ]
            )

        grouped = frame.groupby("timer_id", sort=True)
        stats = grouped.agg(
            name=("name", "first"),
            duration=("duration", "first"),
            started=("time", "min"),
            last_seen=("time", "max"),
            samples=("tick", "count"),
            completed=("completed", "max"),
            elapsed=("elapsed", "max"),
            final_fraction=("fraction", "last"),
        )
        last_active = grouped["active"].last()
        stats["completed"] = stats["completed"].astype(bool)
        stats["cancelled"] = ~stats["completed"] & ~last_active.astype(bool)
        stats["overshoot"] = np.where(
            stats["completed"],
            np.maximum(stats["elapsed"].to_numpy() - stats["duration"].to_numpy(), 0.0),
            np.nan,
        )
        return stats[
            [
                "name",
                "duration",
                "started",
                "last_seen",
                "samples",
                "completed",
                "cancelled",
                "elapsed",
                "overshoot",
                "final_fraction",
            ]
        ]

    @staticmethod
    def _row(tick: int, now: float, handle: TimerView) -> dict:
        return {
            "tick": tick,
            "time": now,
            "timer_id": handle.id,
            "name": handle.name,
            "duration": handle.duration,
            "elapsed": handle.elapsed_time,
            "remaining": handle.remaining_time,
            "fraction": handle.completed_percentage,
            "active": handle.is_active,
            "completed": handle.is_completed,
        }


def plot_progress(frame: pd.DataFrame, path: str | None = None, title: str = "Timer Progress"):
    """Plot the completion fraction of every timer against scheduler time.

    Args:
        frame: Timeline frame from TimelineRecorder.to_frame().
        path: If given, the figure is saved there and closed.
        title: Title for the plot.

    Returns:
        matplotlib.figure.Figure | None: The figure, or None if the frame is
        empty or the figure was saved.
    """
    if frame.empty:
        print("No timeline data to plot.")
        return None

    fig, ax = plt.subplots(figsize=(10, 5))
    for timer_id, group in frame.groupby("timer_id", sort=True):
        name = group["name"].iloc[0]
        label = f"{name} (#{timer_id})" if name else f"#{timer_id}"
        ax.plot(group["time"], group["fraction"], drawstyle="steps-post", label=label)

        done = group[group["completed"]]
        if not done.empty:
            ax.scatter(done["time"].iloc[:1], done["fraction"].iloc[:1], marker="o", s=20)

    ax.set_title(title)
    ax.set_xlabel("Scheduler time (s)")
    ax.set_ylabel("Completed")
    ax.set_ylim(-0.02, 1.05)
    ax.grid(True, alpha=0.3)
    if frame["timer_id"].nunique() <= 12:
        ax.legend(loc="lower right", fontsize="small")
    fig.tight_layout()

    if path is not None:
        fig.savefig(path, dpi=150)
        plt.close(fig)
        return None
    return fig
