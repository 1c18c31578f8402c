"""
Real-time example: a background TickLoop with a live progress table.
"""

import time

from cotimer import TickLoop, TickLoopConfig, TimerScheduler
from cotimer.monitor import TimerMonitor


def main():
    scheduler = TimerScheduler()
    monitor = TimerMonitor(scheduler)

    for i in range(5):
        scheduler.start_random_timer(1.0, 6.0, name=f"worker-{i}")

    config = TickLoopConfig(update_interval=0.05)
    loop = TickLoop(scheduler, config)
    loop.register_event_handler("loop_stopped", lambda name, data: print(f"Stopped after {data['ticks']} ticks"))

    with loop, monitor.live() as refresh:
        while len(scheduler) > 0:
            refresh()
            time.sleep(0.1)
        refresh()


if __name__ == "__main__":
    main()
