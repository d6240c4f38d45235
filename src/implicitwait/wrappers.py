"""Retrying decorators, one per capability surface of a Selenium session."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from selenium.webdriver.common.by import By

from implicitwait.invoker import invoke_with_retry
from implicitwait.policy import CapabilitySurface, PolicySet
from implicitwait.timing import TimingConfig


class _Waiting:
    """Holds the real handle plus the timing and policies shared from the root.

    Members that are not intercepted are read straight from the real handle,
    so a wrapper exposes the same surface as the object it decorates.
    """

    def __init__(self, wrapped: Any, timing: TimingConfig, policies: PolicySet) -> None:
        self._wrapped = wrapped
        self._timing = timing
        self._policies = policies

    @property
    def wrapped(self) -> Any:
        return self._wrapped

    @property
    def timing(self) -> TimingConfig:
        return self._timing

    def _retry(self, surface: CapabilitySurface, operation: Callable[[], Any]) -> Any:
        return invoke_with_retry(
            operation,
            self._policies[surface],
            self._timing,
            wrap=self._wrap,
        )

    def _wrap(self, value: Any) -> Any:
        return wrap_result(value, self._timing, self._policies)

    def __getattr__(self, name: str) -> Any:
        if name in {"_wrapped", "_timing", "_policies"}:
            raise AttributeError(name)
        member = getattr(self._wrapped, name)
        if not callable(member):
            return self._wrap(member)

        def delegate(*args: Any, **kwargs: Any) -> Any:
            return self._wrap(member(*unwrap_arguments(args), **unwrap_arguments(kwargs)))

        delegate.__name__ = name
        delegate.__doc__ = getattr(member, "__doc__", None)
        return delegate

    def __eq__(self, other: object) -> bool:
        return bool(self._wrapped == unwrap(other))

    def __hash__(self) -> int:
        return hash(self._wrapped)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._wrapped!r})"


class _WaitingSearchContext(_Waiting):
    def find_element(self, by: str = By.ID, value: str | None = None) -> Any:
        return self._retry(
            CapabilitySurface.LOOKUP,
            lambda: self._wrapped.find_element(by, value),
        )

    def find_elements(self, by: str = By.ID, value: str | None = None) -> Any:
        return self._retry(
            CapabilitySurface.COLLECTION_LOOKUP,
            lambda: self._wrapped.find_elements(by, value),
        )


class WaitingDriver(_WaitingSearchContext):
    @property
    def switch_to(self) -> WaitingSwitchTo:
        return WaitingSwitchTo(self._wrapped.switch_to, self._timing, self._policies)


class WaitingElement(_WaitingSearchContext):
    def click(self) -> Any:
        return self._retry(CapabilitySurface.INTERACTION, self._wrapped.click)

    def submit(self) -> Any:
        return self._retry(CapabilitySurface.INTERACTION, self._wrapped.submit)

    def clear(self) -> Any:
        return self._retry(CapabilitySurface.INTERACTION, self._wrapped.clear)

    def send_keys(self, *value: Any) -> Any:
        return self._retry(CapabilitySurface.INTERACTION, lambda: self._wrapped.send_keys(*value))

    def is_selected(self) -> Any:
        return self._retry(CapabilitySurface.INTERACTION, self._wrapped.is_selected)

    def is_enabled(self) -> Any:
        return self._retry(CapabilitySurface.INTERACTION, self._wrapped.is_enabled)

    @property
    def shadow_root(self) -> Any:
        return self._retry(CapabilitySurface.SHADOW_ROOT, lambda: self._wrapped.shadow_root)


class WaitingShadowRoot(_WaitingSearchContext):
    pass


class WaitingSwitchTo(_Waiting):
    @property
    def alert(self) -> Any:
        return self._retry(CapabilitySurface.ALERT, lambda: self._wrapped.alert)

    @property
    def active_element(self) -> Any:
        return self._retry(CapabilitySurface.LOOKUP, lambda: self._wrapped.active_element)

    def frame(self, frame_reference: Any) -> Any:
        reference = unwrap_arguments(frame_reference)
        return self._retry(CapabilitySurface.FRAME, lambda: self._wrapped.frame(reference))

    def window(self, window_name: str) -> Any:
        return self._retry(CapabilitySurface.WINDOW, lambda: self._wrapped.window(window_name))


class WaitingAlert(_Waiting):
    @property
    def text(self) -> Any:
        return self._retry(CapabilitySurface.ALERT, lambda: self._wrapped.text)

    def accept(self) -> Any:
        return self._retry(CapabilitySurface.ALERT, self._wrapped.accept)

    def dismiss(self) -> Any:
        return self._retry(CapabilitySurface.ALERT, self._wrapped.dismiss)

    def send_keys(self, keys_to_send: str) -> Any:
        return self._retry(CapabilitySurface.ALERT, lambda: self._wrapped.send_keys(keys_to_send))


def _has(value: object, *names: str) -> bool:
    return all(hasattr(value, name) for name in names)


def _decorator_for(value: object) -> type[_Waiting] | None:
    if isinstance(value, (str, bytes, bool, int, float, dict)):
        return None
    if _has(value, "find_element", "find_elements", "get"):
        return WaitingDriver
    if _has(value, "find_element", "find_elements", "click"):
        return WaitingElement
    if _has(value, "find_element", "find_elements"):
        return WaitingShadowRoot
    if _has(value, "accept", "dismiss"):
        return WaitingAlert
    return None


def wrap_result(value: Any, timing: TimingConfig, policies: PolicySet) -> Any:
    """Wrap ``value`` so later calls on it keep retrying with the same timing."""
    if value is None or isinstance(value, _Waiting):
        return value
    if type(value) in (list, tuple):
        if not value:
            return value
        items = [wrap_result(item, timing, policies) for item in value]
        return items if isinstance(value, list) else tuple(items)
    decorator = _decorator_for(value)
    if decorator is None:
        return value
    return decorator(value, timing, policies)


def unwrap(value: Any) -> Any:
    if isinstance(value, _Waiting):
        return value.wrapped
    return value


def unwrap_arguments(value: Any) -> Any:
    """Replace wrappers, also inside lists, tuples and dicts, by the real handles."""
    if isinstance(value, _Waiting):
        return value.wrapped
    if isinstance(value, list):
        return [unwrap_arguments(item) for item in value]
    if type(value) is tuple:
        return tuple(unwrap_arguments(item) for item in value)
    if isinstance(value, dict):
        return {key: unwrap_arguments(item) for key, item in value.items()}
    return value
