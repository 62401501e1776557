"""
tilt.py: Tilt input plumbing.

A sensor feed pushes samples on its own thread; the frame loop only ever
reads the most recent one.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TiltCallback = Callable[[float], None]


class TiltRegister:
    """Single-slot latest-value register. Last write wins."""

    def __init__(self, value: float = 0.0):
        self._value = float(value)
        self._lock = threading.Lock()

    def write(self, value: float):
        with self._lock:
            self._value = float(value)

    def read(self) -> float:
        with self._lock:
            return self._value


class Subscription:
    """Handle returned by subscribe(); unsubscribe() stops the feed thread."""

    def __init__(self, read: Callable[[], float], callback: TiltCallback, interval_ms: int):
        self._read = read
        self._callback = callback
        self.interval = max(interval_ms, 1) / 1000.0

        self.stopped = threading.Event()
        self.thread = threading.Thread(target=self._sample_loop, name="tilt-feed", daemon=True)

    @property
    def active(self) -> bool:
        return not self.stopped.is_set()

    def start(self):
        self.thread.start()

    def unsubscribe(self):
        if self.stopped.is_set():
            return
        self.stopped.set()
        if self.thread.is_alive() and threading.current_thread() is not self.thread:
            self.thread.join()
        logger.debug("Tilt feed stopped.")

    def _sample_loop(self):
        logger.debug("Tilt feed started, every %.0f ms.", self.interval * 1000)
        while not self.stopped.is_set():
            try:
                self._callback(float(self._read()))
            except Exception:
                logger.exception("Tilt sample failed")
            # returns early once unsubscribed
            self.stopped.wait(self.interval)


class PollingTiltSource:
    """
    Samples a read() callable at a fixed interval and pushes each value to
    the subscriber. Stands in for a device accelerometer.
    """

    def __init__(self, read: Callable[[], float]):
        self._read = read
        self._subscription: Optional[Subscription] = None

    def subscribe(self, interval_ms: int, callback: TiltCallback) -> Subscription:
        if self._subscription is not None and self._subscription.active:
            self._subscription.unsubscribe()
        self._subscription = Subscription(self._read, callback, interval_ms)
        self._subscription.start()
        return self._subscription


class KeyboardTilt:
    """
    Emulates an analog tilt from two digital keys: holding a direction
    leans further toward it, releasing eases back to level.
    """

    def __init__(self, max_tilt: float = 0.6, lean_rate: float = 3.0):
        self.max_tilt = max_tilt
        self.lean_rate = lean_rate
        self._register = TiltRegister()

    def update(self, left: bool, right: bool, dt: float):
        target = (right - left) * self.max_tilt
        current = self._register.read()
        step = self.lean_rate * dt
        if abs(target - current) <= step:
            current = target
        else:
            current += step if target > current else -step
        self._register.write(current)

    def read(self) -> float:
        return self._register.read()
