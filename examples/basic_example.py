"""
Basic example of driving timers in simulated time.
"""

from cotimer import Minute, Second, StepDriver, TimerScheduler, configure_logging
from cotimer.monitor import TimelineRecorder, TimerMonitor, plot_progress


def main():
    configure_logging("INFO")

    print("=" * 80)
    print("cotimer - Basic Example")
    print("=" * 80)

    scheduler = TimerScheduler()
    driver = StepDriver(scheduler, step=Second(0.5))
    recorder = TimelineRecorder(scheduler)
    monitor = TimerMonitor(scheduler)

    scheduler.start_timer(Second(3), lambda: print("Kettle boiled"), name="kettle")
    scheduler.start_timer(Minute(0.1), lambda: print("Toast ready"), name="toaster")
    scheduler.start_random_timer(1.0, 5.0, lambda: print("Doorbell!"), name="doorbell")
    alarm = scheduler.start_timer(Minute(5), lambda: print("This never rings"), name="alarm")

    for _ in range(4):
        driver.step()
        recorder.record()
    monitor.print()

    print("\nCancelling the alarm...")
    print(f"Stopped: {scheduler.stop_timer(alarm)}")

    steps = driver.run_until_idle()
    recorder.record()
    print(f"\nAll timers finished after {steps} more steps ({driver.now} simulated)")

    frame = recorder.to_frame()
    print(TimelineRecorder.summary(frame))
    plot_progress(frame, path="timer_progress.png")

    print("\n" + "=" * 80)
    print("Example completed!")
    print("=" * 80)


if __name__ == "__main__":
    main()
