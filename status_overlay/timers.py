"""Delayed-callback facilities used by the status controller.

A facility exposes ``after(delay, callback) -> TimerHandle`` and ``cancel(handle)``.
Every handle carries its own liveness flag and checks it before running the
callback, so a callback the event loop has already queued is dropped once the
handle is cancelled.
"""
from __future__ import annotations

import heapq
import itertools
import logging
import math
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from PyQt6.QtCore import QObject, QTimer

_LOGGER = logging.getLogger("StatusOverlay.Timers")

# QTimer intervals are signed 32-bit milliseconds.
MAX_TIMER_MS = 2**31 - 1


class TimerHandle:
    """One pending delayed action; fires at most once."""

    __slots__ = ("delay", "_callback", "_active")

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self._callback: Optional[Callable[[], None]] = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False
        self._callback = None

    def fire(self) -> bool:
        """Run the callback if the handle is still live; return whether it ran."""
        if not self._active:
            return False
        callback = self._callback
        self._active = False
        self._callback = None
        if callback is not None:
            callback()
        return True

    def __repr__(self) -> str:
        state = "active" if self._active else "done"
        return f"<TimerHandle delay={self.delay:.3f}s {state}>"


class TimerFacility(Protocol):
    def after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...

    def cancel(self, handle: TimerHandle) -> None:
        ...


def _coerce_delay(delay: float) -> float:
    try:
        value = float(delay)
    except (TypeError, ValueError):
        return 0.0
    if value != value or value < 0.0:
        return 0.0
    return value


def timer_interval_ms(seconds: float) -> Optional[int]:
    """Return the QTimer interval for ``seconds``, or None when it is beyond QTimer's range."""
    if not math.isfinite(seconds):
        return None
    milliseconds = int(round(seconds * 1000))
    if milliseconds > MAX_TIMER_MS:
        return None
    return milliseconds


class ManualTimerFacility:
    """Virtual-clock facility; time only moves when ``advance`` is called."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        seconds = _coerce_delay(delay)
        handle = TimerHandle(seconds, callback)
        heapq.heappush(self._queue, (self._now + seconds, next(self._sequence), handle))
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancel()
        self._queue = [entry for entry in self._queue if entry[2].active]
        heapq.heapify(self._queue)

    def queued_count(self) -> int:
        return len(self._queue)

    def pending_count(self) -> int:
        return sum(1 for _deadline, _seq, handle in self._queue if handle.active)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in deadline order.

        Timers created by callbacks are honoured when they fall due inside the
        window. Returns the number of callbacks that ran.
        """
        target = self._now + _coerce_delay(seconds)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _seq, handle = heapq.heappop(self._queue)
            self._now = max(self._now, deadline)
            if handle.fire():
                fired += 1
        self._now = target
        return fired


class QtTimerFacility:
    """Facility backed by single-shot QTimers on the calling thread's event loop."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        self._timers: Dict[int, Tuple[TimerHandle, Optional[QTimer]]] = {}

    def after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        seconds = _coerce_delay(delay)
        handle = TimerHandle(seconds, callback)
        key = id(handle)
        interval = timer_interval_ms(seconds)
        if interval is None:
            # Too far out for QTimer; stays pending until cancelled.
            _LOGGER.debug("Delay %.1fs exceeds timer range; %r will not fire", seconds, handle)
            self._timers[key] = (handle, None)
            return handle
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._on_timeout(key))
        self._timers[key] = (handle, timer)
        timer.start(interval)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancel()
        entry = self._timers.pop(id(handle), None)
        if entry is None:
            return
        _handle, timer = entry
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def pending_count(self) -> int:
        return sum(1 for handle, _timer in self._timers.values() if handle.active)

    def _on_timeout(self, key: int) -> None:
        entry = self._timers.pop(key, None)
        if entry is None:
            return
        handle, timer = entry
        if timer is not None:
            timer.deleteLater()
        if not handle.fire():
            _LOGGER.debug("Dropped queued timeout for cancelled %r", handle)
