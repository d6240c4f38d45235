"""Transient/fatal classification per capability surface."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from selenium.common.exceptions import (
    ElementNotInteractableException,
    ElementNotVisibleException,
    NoAlertPresentException,
    NoSuchElementException,
    NoSuchFrameException,
    NoSuchShadowRootException,
    NoSuchWindowException,
)

from implicitwait.errors import ErrorCode, ImplicitWaitError


class Verdict(str, Enum):
    TRANSIENT = "transient"
    FATAL = "fatal"


class CapabilitySurface(str, Enum):
    LOOKUP = "lookup"
    COLLECTION_LOOKUP = "collection-lookup"
    INTERACTION = "interaction"
    SHADOW_ROOT = "shadow-root"
    ALERT = "alert"
    FRAME = "frame"
    WINDOW = "window"


@dataclass(frozen=True)
class RetryPolicy:
    """Decides which failures of one capability surface are worth retrying.

    ``transient_errors`` lists the exception types that are expected to clear
    up given more time; anything else is fatal. ``retry_on_result`` marks a
    successful result as "not there yet" (an empty lookup, for instance).
    """

    name: str
    transient_errors: tuple[type[BaseException], ...] = ()
    retry_on_result: Callable[[object], bool] | None = None

    def classify(self, exc: BaseException) -> Verdict:
        if self.transient_errors and isinstance(exc, self.transient_errors):
            return Verdict.TRANSIENT
        return Verdict.FATAL

    def should_retry_result(self, result: object) -> bool:
        if self.retry_on_result is None:
            return False
        return self.retry_on_result(result)


PolicySet = Mapping[CapabilitySurface, RetryPolicy]


def _is_empty(result: object) -> bool:
    return isinstance(result, (list, tuple)) and not result


LOOKUP_POLICY = RetryPolicy("lookup", (NoSuchElementException,))
COLLECTION_LOOKUP_POLICY = RetryPolicy("collection-lookup", retry_on_result=_is_empty)
INTERACTION_POLICY = RetryPolicy(
    "interaction",
    (ElementNotVisibleException, ElementNotInteractableException),
)
SHADOW_ROOT_POLICY = RetryPolicy("shadow-root", (NoSuchShadowRootException,))
ALERT_POLICY = RetryPolicy("alert", (NoAlertPresentException,))
FRAME_POLICY = RetryPolicy("frame", (NoSuchFrameException,))
WINDOW_POLICY = RetryPolicy("window", (NoSuchWindowException,))

_DEFAULTS: dict[CapabilitySurface, RetryPolicy] = {
    CapabilitySurface.LOOKUP: LOOKUP_POLICY,
    CapabilitySurface.COLLECTION_LOOKUP: COLLECTION_LOOKUP_POLICY,
    CapabilitySurface.INTERACTION: INTERACTION_POLICY,
    CapabilitySurface.SHADOW_ROOT: SHADOW_ROOT_POLICY,
    CapabilitySurface.ALERT: ALERT_POLICY,
    CapabilitySurface.FRAME: FRAME_POLICY,
    CapabilitySurface.WINDOW: WINDOW_POLICY,
}


def default_policies() -> PolicySet:
    return MappingProxyType(dict(_DEFAULTS))


def resolve_policies(overrides: Mapping[CapabilitySurface | str, RetryPolicy] | None = None) -> PolicySet:
    resolved = dict(_DEFAULTS)
    for key, policy in (overrides or {}).items():
        try:
            surface = CapabilitySurface(key)
        except ValueError as exc:
            accepted = ", ".join(item.value for item in CapabilitySurface)
            raise ImplicitWaitError(
                f"Unknown capability surface: {key}",
                code=ErrorCode.POLICY_ERROR,
                hint=f"Use one of: {accepted}.",
            ) from exc
        if not isinstance(policy, RetryPolicy):
            raise ImplicitWaitError(
                f"Invalid retry policy for surface '{surface.value}'",
                code=ErrorCode.POLICY_ERROR,
                hint="Pass a RetryPolicy instance.",
            )
        resolved[surface] = policy
    return MappingProxyType(resolved)
