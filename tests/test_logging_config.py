from __future__ import annotations

import io
import logging as py_logging
from pathlib import Path

import pytest
from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By

import implicitwait.logging as iw_logging
from implicitwait import ManualClock, WaitSettings, from_settings, load_settings


class _FlakyDriver:
    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.get = lambda url: None
        self.find_elements = lambda by, value: []

    def find_element(self, by: str, value: str) -> str:
        if self.failures:
            self.failures -= 1
            raise NoSuchElementException("not yet")
        return "found"


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        ("debug", py_logging.DEBUG),
        (" WARN ", py_logging.WARNING),
        ("warning", py_logging.WARNING),
        ("chatty", py_logging.INFO),
    ],
)
def test_resolve_level(level: str, expected: int) -> None:
    assert iw_logging.resolve_level(level) == expected


def test_reconfiguring_replaces_and_closes_handlers() -> None:
    first = iw_logging.configure_logging("INFO", io.StringIO())
    old_handler = first.handlers[0]

    logger = iw_logging.configure_logging("ERROR", io.StringIO())

    assert logger is first
    assert len(logger.handlers) == 1
    assert logger.handlers[0] is not old_handler
    assert logger.level == py_logging.ERROR
    assert logger.propagate is False


def test_unusable_log_file_is_reported_on_stream(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def raise_os_error(*args: object, **kwargs: object) -> py_logging.Handler:
        raise OSError("disk full")

    monkeypatch.setattr(iw_logging.py_logging, "FileHandler", raise_os_error)
    stream = io.StringIO()

    logger = iw_logging.configure_logging("INFO", stream, log_file=tmp_path / "nope" / "wait.log")

    assert len(logger.handlers) == 1
    assert "Log file unavailable" in stream.getvalue()


def test_debug_settings_surface_retry_attempts(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('timeout_ms = 500\npoll_interval_ms = 100\nlog_level = "DEBUG"\n', encoding="utf-8")
    stream = io.StringIO()

    driver = from_settings(_FlakyDriver(failures=2), load_settings(path), clock=ManualClock(), log_stream=stream)
    driver.find_element(By.ID, "x")

    output = stream.getvalue()
    assert "Transient failure policy=lookup attempt=1 remaining_ms=500" in output
    assert "Transient failure policy=lookup attempt=2" in output
    assert "Operation settled policy=lookup attempts=3" in output


def test_info_settings_keep_retry_attempts_quiet() -> None:
    stream = io.StringIO()

    driver = from_settings(_FlakyDriver(failures=2), WaitSettings(), clock=ManualClock(), log_stream=stream)
    driver.find_element(By.ID, "x")

    assert "Transient failure" not in stream.getvalue()


def test_settings_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "wait.log"
    settings = WaitSettings(log_level="DEBUG", log_file=str(log_file))

    logger = iw_logging.configure_from_settings(settings, io.StringIO())
    driver = from_settings(_FlakyDriver(failures=1), settings, clock=ManualClock(), log_stream=io.StringIO())
    driver.find_element(By.ID, "x")
    for handler in py_logging.getLogger(iw_logging.LOGGER_NAME).handlers:
        handler.flush()

    assert any(isinstance(handler, py_logging.FileHandler) for handler in logger.handlers)
    assert "Transient failure policy=lookup attempt=1" in log_file.read_text(encoding="utf-8")
