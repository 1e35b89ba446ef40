from __future__ import annotations

import threading
from datetime import datetime, timezone
from io import StringIO
from typing import Any, Callable

import pytest
from rich.console import Console

from lib_log_console.adapters.template_formatter import compile_template
from lib_log_console.domain.events import LogEvent
from lib_log_console.domain.levels import LogLevel


class CollectingWriter:
    """Line writer recording every write in order."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._lock = threading.Lock()

    def write_line(self, text: str) -> None:
        with self._lock:
            self.lines.append(text)


class CountingCompiler:
    """Template compiler wrapper counting compilations per template."""

    def __init__(self, delegate: Callable[..., Any]) -> None:
        self.delegate = delegate
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, template: str, format_provider: Any = None) -> Any:
        with self._lock:
            self.calls.append(template)
        return self.delegate(template, format_provider)


FIXED_TIMESTAMP = datetime(2025, 9, 23, 12, 34, 56, 789000, tzinfo=timezone.utc)


@pytest.fixture
def collector() -> CollectingWriter:
    return CollectingWriter()


@pytest.fixture
def counting_compiler() -> CountingCompiler:
    return CountingCompiler(compile_template)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=120, color_system=None)


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    def _make(
        message: str = "hello",
        *,
        level: LogLevel = LogLevel.INFORMATION,
        properties: dict[str, Any] | None = None,
        exception: BaseException | str | None = None,
        timestamp: datetime = FIXED_TIMESTAMP,
    ) -> LogEvent:
        return LogEvent(
            timestamp=timestamp,
            level=level,
            message_template=message,
            properties=properties or {},
            exception=exception,
        )

    return _make


@pytest.fixture(autouse=True)
def _isolate_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_CONSOLE_TEMPLATE", "LOG_FORCE_COLOR", "LOG_NO_COLOR", "LIB_LOG_CONSOLE_USE_DOTENV"):
        monkeypatch.delenv(name, raising=False)
