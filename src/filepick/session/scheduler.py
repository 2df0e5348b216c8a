"""One-shot callback scheduling behind a cancellable task handle."""

from __future__ import annotations

from typing import Callable, Protocol

from textual.timer import Timer


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, delay_s: float, callback: Callable[[], None]) -> ScheduledTask: ...


class TimerTask:
    def __init__(self, timer: Timer) -> None:
        self._timer = timer
        self.cancelled = False

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._timer.stop()


class TextualScheduler:
    """Schedules on a Textual message pump (an ``App`` or a widget) via ``set_timer``."""

    def __init__(self, pump) -> None:  # noqa: ANN001
        self.pump = pump

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> TimerTask:
        return TimerTask(self.pump.set_timer(delay_s, callback, name="filepick-scan"))
