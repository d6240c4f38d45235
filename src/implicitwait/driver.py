"""Entry points that wrap a live Selenium session."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Mapping
from typing import Any, TextIO

from implicitwait.clock import Clock, MonotonicClock
from implicitwait.config import WaitSettings
from implicitwait.logging import configure_from_settings
from implicitwait.policy import CapabilitySurface, RetryPolicy, resolve_policies
from implicitwait.timing import TimingConfig
from implicitwait.wrappers import WaitingDriver

logger = py_logging.getLogger(__name__)


def wait_implicitly(
    driver: Any,
    *,
    timeout_ms: int,
    poll_interval_ms: int,
    clock: Clock | None = None,
    policies: Mapping[CapabilitySurface | str, RetryPolicy] | None = None,
) -> WaitingDriver:
    """Return ``driver`` decorated so lookups and interactions wait implicitly.

    Every handle obtained through the returned object shares one
    ``TimingConfig``; ``policies`` replaces the default retry policy of the
    given capability surfaces.
    """
    timing = TimingConfig(
        timeout_ms=timeout_ms,
        poll_interval_ms=poll_interval_ms,
        clock=clock or MonotonicClock(),
    )
    resolved = resolve_policies(policies)
    logger.debug(
        "Wrapping driver timeout_ms=%s poll_interval_ms=%s overrides=%s",
        timeout_ms,
        poll_interval_ms,
        sorted(str(key) for key in (policies or {})),
    )
    return WaitingDriver(driver, timing, resolved)


def from_settings(
    driver: Any,
    settings: WaitSettings,
    *,
    clock: Clock | None = None,
    policies: Mapping[CapabilitySurface | str, RetryPolicy] | None = None,
    log_stream: TextIO | None = None,
) -> WaitingDriver:
    """Wrap ``driver`` with the timing of ``settings`` and route logs at its log level."""
    configure_from_settings(settings, log_stream)
    return wait_implicitly(
        driver,
        timeout_ms=settings.timeout_ms,
        poll_interval_ms=settings.poll_interval_ms,
        clock=clock,
        policies=policies,
    )
