"""Shared timing configuration for one wrapped root."""

from __future__ import annotations

from dataclasses import dataclass

from implicitwait.clock import Clock
from implicitwait.errors import ErrorCode, ImplicitWaitError


@dataclass(frozen=True)
class TimingConfig:
    timeout_ms: int
    poll_interval_ms: int
    clock: Clock

    def __post_init__(self) -> None:
        if self.timeout_ms < 0:
            raise ImplicitWaitError(
                f"Invalid timeout: {self.timeout_ms}",
                code=ErrorCode.INVALID_TIMING,
                hint="Use a timeout of 0 ms or more.",
            )
        if self.poll_interval_ms <= 0:
            raise ImplicitWaitError(
                f"Invalid poll interval: {self.poll_interval_ms}",
                code=ErrorCode.INVALID_TIMING,
                hint="Use a poll interval greater than 0 ms.",
            )

    def deadline(self) -> int:
        return self.clock.now() + self.timeout_ms
