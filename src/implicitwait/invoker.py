"""Retry-until-deadline loop shared by every wrapped handle."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable
from typing import TypeVar

from implicitwait.policy import RetryPolicy, Verdict
from implicitwait.timing import TimingConfig

T = TypeVar("T")

logger = py_logging.getLogger(__name__)


def invoke_with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy,
    timing: TimingConfig,
    *,
    wrap: Callable[[T], object] | None = None,
) -> object:
    """Run ``operation`` until it succeeds or the timing budget is spent.

    A fresh deadline is taken from the shared clock on every call, and the
    first attempt always happens before the deadline is looked at. Transient
    failures are retried every ``poll_interval_ms``; once the clock reaches
    the deadline the latest failure is re-raised as is. Fatal failures are
    never retried. A result the policy wants retried (an empty lookup) is
    returned unchanged once the budget is gone.
    """
    clock = timing.clock
    deadline = timing.deadline()
    attempt = 0

    while True:
        attempt += 1
        try:
            result = operation()
        except Exception as exc:
            if policy.classify(exc) is Verdict.FATAL:
                logger.debug(
                    "Fatal failure policy=%s attempt=%s error=%s",
                    policy.name,
                    attempt,
                    type(exc).__name__,
                )
                raise
            if clock.now() >= deadline:
                logger.debug(
                    "Retry budget exhausted policy=%s attempts=%s error=%s",
                    policy.name,
                    attempt,
                    type(exc).__name__,
                )
                raise
            logger.debug(
                "Transient failure policy=%s attempt=%s remaining_ms=%s error=%s",
                policy.name,
                attempt,
                deadline - clock.now(),
                type(exc).__name__,
            )
        else:
            if not policy.should_retry_result(result) or clock.now() >= deadline:
                if attempt > 1:
                    logger.debug("Operation settled policy=%s attempts=%s", policy.name, attempt)
                return wrap(result) if wrap is not None else result
            logger.debug(
                "Retryable result policy=%s attempt=%s remaining_ms=%s",
                policy.name,
                attempt,
                deadline - clock.now(),
            )
        clock.sleep(timing.poll_interval_ms)
