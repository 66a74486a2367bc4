from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional


TickCallback = Callable[[], None]


class Scheduler(ABC):
    """A single repeating gravity timer.

    ``arm`` and ``rearm`` always tear down the live timer before starting a
    new one, so at most one timer exists at any moment.
    """

    def __init__(self) -> None:
        self.callback: Optional[TickCallback] = None
        self.interval_ms: Optional[int] = None

    @property
    @abstractmethod
    def active(self) -> bool:
        ...

    @abstractmethod
    def _start(self, interval_ms: int) -> None:
        ...

    @abstractmethod
    def _stop(self) -> None:
        ...

    def arm(self, interval_ms: int, callback: TickCallback) -> None:
        self.callback = callback
        self.rearm(interval_ms)

    def rearm(self, interval_ms: int) -> None:
        if self.callback is None:
            raise RuntimeError("scheduler has no callback; call arm() first")
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self.cancel()
        self.interval_ms = int(interval_ms)
        self._start(self.interval_ms)

    def cancel(self) -> None:
        if self.active:
            self._stop()


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler driven by ``advance``.

    Used headless: by the environment and by tests. Re-arming restarts the
    period from the current virtual time.
    """

    def __init__(self) -> None:
        super().__init__()
        self.now_ms = 0
        self._due_ms: Optional[int] = None
        self.arm_count = 0

    @property
    def active(self) -> bool:
        return self._due_ms is not None

    def _start(self, interval_ms: int) -> None:
        self._due_ms = self.now_ms + interval_ms
        self.arm_count += 1

    def _stop(self) -> None:
        self._due_ms = None

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing every tick that falls due. Returns ticks fired."""
        if ms < 0:
            raise ValueError(f"cannot advance by negative time: {ms}")
        target = self.now_ms + ms
        fired = 0
        while self._due_ms is not None and self._due_ms <= target:
            due = self._due_ms
            self.now_ms = due
            self._due_ms = due + int(self.interval_ms)
            fired += 1
            # The callback may cancel or re-arm; both reset _due_ms from now_ms.
            assert self.callback is not None
            self.callback()
        self.now_ms = target
        return fired
