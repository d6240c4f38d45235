"""Clock abstraction used for deadlines and polling."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Elapsed-time source that can also pace polling.

    ``now`` returns integer milliseconds elapsed since the clock was created.
    ``sleep`` returns only after at least ``duration_ms`` has elapsed.
    """

    def now(self) -> int: ...

    def sleep(self, duration_ms: int) -> None: ...


def _check_duration(duration_ms: int) -> int:
    if duration_ms < 0:
        raise ValueError(f"Duration must not be negative: {duration_ms}")
    return duration_ms


class MonotonicClock:
    """Production clock backed by ``time.monotonic_ns`` and a blocking sleep."""

    def __init__(self) -> None:
        self._origin_ns = time.monotonic_ns()

    def now(self) -> int:
        return (time.monotonic_ns() - self._origin_ns) // 1_000_000

    def sleep(self, duration_ms: int) -> None:
        time.sleep(_check_duration(duration_ms) / 1000)


class ManualClock:
    """Deterministic clock whose sleep advances a counter without waiting.

    Not synchronised: share one instance across threads only with external locking.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now_ms = _check_duration(start_ms)
        self.sleeps: list[int] = []

    def now(self) -> int:
        return self._now_ms

    def sleep(self, duration_ms: int) -> None:
        self.sleeps.append(_check_duration(duration_ms))
        self._now_ms += duration_ms

    def advance(self, duration_ms: int) -> None:
        self._now_ms += _check_duration(duration_ms)
