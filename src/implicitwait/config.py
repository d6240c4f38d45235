"""XDG settings loading/saving for implicit waits."""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import TypedDict

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from implicitwait.clock import Clock
from implicitwait.errors import ErrorCode, ImplicitWaitError
from implicitwait.timing import TimingConfig

DEFAULT_CONFIG_PATH = Path("~/.config/implicitwait/config.toml").expanduser()
DEFAULT_TIMEOUT_MS = 1000
DEFAULT_POLL_INTERVAL_MS = 100
DEFAULT_LOG_LEVEL = "INFO"
TIMEOUT_ENV = "IMPLICITWAIT_TIMEOUT_MS"
POLL_INTERVAL_ENV = "IMPLICITWAIT_POLL_INTERVAL_MS"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARN", "WARNING", "ERROR"}


class SettingsPayload(TypedDict):
    timeout_ms: int
    poll_interval_ms: int
    log_level: str
    log_file: str


class WaitSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0)
    poll_interval_ms: int = Field(default=DEFAULT_POLL_INTERVAL_MS, gt=0)
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str = ""

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return normalized

    def to_timing(self, clock: Clock) -> TimingConfig:
        return TimingConfig(
            timeout_ms=self.timeout_ms,
            poll_interval_ms=self.poll_interval_ms,
            clock=clock,
        )

    def to_dict(self) -> SettingsPayload:
        return SettingsPayload(
            timeout_ms=self.timeout_ms,
            poll_interval_ms=self.poll_interval_ms,
            log_level=self.log_level,
            log_file=self.log_file,
        )


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _env_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _sanitize(raw: dict[str, object]) -> WaitSettings:
    settings = WaitSettings()

    timeout_ms = raw.get("timeout_ms", settings.timeout_ms)
    if _is_int(timeout_ms) and timeout_ms >= 0:
        settings.timeout_ms = timeout_ms

    poll_interval_ms = raw.get("poll_interval_ms", settings.poll_interval_ms)
    if _is_int(poll_interval_ms) and poll_interval_ms > 0:
        settings.poll_interval_ms = poll_interval_ms

    log_level = raw.get("log_level", settings.log_level)
    if isinstance(log_level, str) and log_level.strip().upper() in _VALID_LOG_LEVELS:
        settings.log_level = log_level

    log_file = raw.get("log_file", settings.log_file)
    if isinstance(log_file, str):
        settings.log_file = log_file.strip()

    env_timeout = _env_int(TIMEOUT_ENV)
    if env_timeout is not None and env_timeout >= 0:
        settings.timeout_ms = env_timeout
    env_interval = _env_int(POLL_INTERVAL_ENV)
    if env_interval is not None and env_interval > 0:
        settings.poll_interval_ms = env_interval

    return settings


def load_settings(path: str | Path | None = None) -> WaitSettings:
    resolved = get_config_path(path)
    raw: object = {}
    if resolved.exists():
        try:
            with resolved.open("rb") as handle:
                raw = tomllib.load(handle)
        except (tomllib.TOMLDecodeError, OSError):
            raw = {}
    if not isinstance(raw, dict):
        raw = {}
    return _sanitize(raw)


def save_settings(settings: WaitSettings, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    try:
        resolved.parent.mkdir(parents=True, exist_ok=True)
        payload = settings.to_dict()
        lines = [
            f"timeout_ms = {payload['timeout_ms']}",
            f"poll_interval_ms = {payload['poll_interval_ms']}",
            f'log_level = "{payload["log_level"]}"',
            f'log_file = "{_escape(payload["log_file"])}"',
        ]
        resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ImplicitWaitError(
            f"Could not write settings to {resolved}",
            code=ErrorCode.CONFIG_ERROR,
            hint="Check that the config directory is writable.",
        ) from exc
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
