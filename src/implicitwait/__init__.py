"""Implicit waits for Selenium sessions and every handle reachable from them."""

from .clock import Clock, ManualClock, MonotonicClock
from .config import WaitSettings, load_settings, save_settings
from .driver import from_settings, wait_implicitly
from .errors import ErrorCode, ImplicitWaitError
from .invoker import invoke_with_retry
from .logging import configure_from_settings, configure_logging
from .policy import CapabilitySurface, PolicySet, RetryPolicy, Verdict, default_policies, resolve_policies
from .timing import TimingConfig
from .wrappers import (
    WaitingAlert,
    WaitingDriver,
    WaitingElement,
    WaitingShadowRoot,
    WaitingSwitchTo,
    unwrap,
    unwrap_arguments,
    wrap_result,
)

__all__ = [
    "CapabilitySurface",
    "Clock",
    "configure_from_settings",
    "configure_logging",
    "default_policies",
    "ErrorCode",
    "from_settings",
    "ImplicitWaitError",
    "invoke_with_retry",
    "load_settings",
    "ManualClock",
    "MonotonicClock",
    "PolicySet",
    "resolve_policies",
    "RetryPolicy",
    "save_settings",
    "TimingConfig",
    "unwrap",
    "unwrap_arguments",
    "Verdict",
    "wait_implicitly",
    "WaitingAlert",
    "WaitingDriver",
    "WaitingElement",
    "WaitingShadowRoot",
    "WaitingSwitchTo",
    "WaitSettings",
    "wrap_result",
]
