"""Deterministic error model for package-owned failures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    INVALID_TIMING = "invalid-timing"
    CONFIG_ERROR = "config-error"
    POLICY_ERROR = "policy-error"


@dataclass
class ImplicitWaitError(Exception):
    message: str
    code: ErrorCode = ErrorCode.CONFIG_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message
