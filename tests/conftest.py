from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO

import pytest
from rich.console import Console

from lib_log_fanout.adapters.error_channel import RecordingErrorChannel


class FixedClock:
    def __init__(self, moment: datetime) -> None:
        self.moment = moment
        self.calls = 0

    def now(self) -> datetime:
        self.calls += 1
        return self.moment


@pytest.fixture
def fixed_timestamp() -> datetime:
    return datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(fixed_timestamp: datetime) -> FixedClock:
    return FixedClock(fixed_timestamp)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200, color_system=None)


@pytest.fixture
def record_error_console() -> Console:
    return Console(file=StringIO(), record=True, width=200, color_system=None)


@pytest.fixture
def error_channel() -> RecordingErrorChannel:
    return RecordingErrorChannel()


_LOG_ENV_VARS = (
    "LOG_USE_DOTENV",
    "LOG_MINIMUM_SEVERITY",
    "LOG_SEVERITIES",
    "LOG_FILE_PATH",
    "LOG_FILE_FORMAT",
    "LOG_NO_COLOR",
)


@pytest.fixture(autouse=True)
def _isolate_log_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without LOG_* variables and restore them afterwards."""

    for name in _LOG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
