from __future__ import annotations

from datetime import datetime
from io import StringIO

import pytest
from rich.console import Console

from lib_log_fanout.adapters.error_channel import RecordingErrorChannel
from lib_log_fanout.adapters.console import ConsoleTransport, ConsoleTransportOptions
from lib_log_fanout.domain import Severity


def _transport(out: Console, err: Console, **overrides) -> ConsoleTransport:
    return ConsoleTransport(console=out, error_console=err, **overrides)


def test_info_line_goes_to_stdout_only(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    transport = _transport(record_console, record_error_console)

    transport.log(Severity.INFO, "default", ["hello", 1], fixed_timestamp)

    assert record_console.export_text() == "2025-09-23T12:00:00.000Z INFO  default: hello 1\n"
    assert record_error_console.export_text() == ""


def test_error_line_goes_to_stderr(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    transport = _transport(record_console, record_error_console)

    transport.log(Severity.ERROR, "db", ["connection lost", {"retry": True}], fixed_timestamp)

    assert record_console.export_text() == ""
    assert record_error_console.export_text() == "2025-09-23T12:00:00.000Z ERROR db: connection lost Map:{ retry => true }\n"


@pytest.mark.parametrize("severity", [Severity.LOG, Severity.WARN])
def test_non_error_severities_use_stdout(record_console, record_error_console, fixed_timestamp: datetime, severity: Severity) -> None:
    transport = _transport(record_console, record_error_console)

    transport.log(severity, "default", ["x"], fixed_timestamp)

    assert severity.value in record_console.export_text()
    assert record_error_console.export_text() == ""


def test_debug_is_dropped_by_default(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    transport = _transport(record_console, record_error_console)

    transport.log(Severity.DEBUG, "default", ["hidden"], fixed_timestamp)

    assert record_console.export_text() == ""


def test_minimum_severity_override(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    transport = _transport(record_console, record_error_console, minimum_severity=Severity.WARN)

    for severity in Severity:
        transport.log(severity, "default", [severity.value.lower()], fixed_timestamp)

    stdout_lines = record_console.export_text().splitlines()
    stderr_lines = record_error_console.export_text().splitlines()
    assert len(stdout_lines) == 1 and "WARN" in stdout_lines[0]
    assert len(stderr_lines) == 1 and "ERROR" in stderr_lines[0]


def test_explicit_severity_set_accepts_debug(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    transport = _transport(record_console, record_error_console, minimum_severity="error", severities=["debug"])

    transport.log(Severity.DEBUG, "default", ["visible"], fixed_timestamp)
    transport.log(Severity.ERROR, "default", ["hidden"], fixed_timestamp)

    assert "DEBUG default: visible" in record_console.export_text()
    assert record_error_console.export_text() == ""


def test_keyword_overrides_win_over_options(record_console, record_error_console) -> None:
    base = ConsoleTransportOptions(minimum_severity=Severity.ERROR, no_color=True)
    transport = ConsoleTransport(base, console=record_console, error_console=record_error_console, minimum_severity=Severity.DEBUG)

    assert transport.options.minimum_severity is Severity.DEBUG
    assert transport.options.no_color is True
    assert transport.filter.should_log(Severity.DEBUG) is True


def test_unknown_option_is_rejected(record_console) -> None:
    with pytest.raises(TypeError, match="colour"):
        ConsoleTransport(console=record_console, colour=True)


def test_repeated_calls_print_repeated_lines(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    transport = _transport(record_console, record_error_console)

    transport.log(Severity.INFO, "default", ["same"], fixed_timestamp)
    transport.log(Severity.INFO, "default", ["same"], fixed_timestamp)

    lines = record_console.export_text().splitlines()
    assert len(lines) == 2
    assert lines[0] == lines[1]


def test_coloured_output_contains_ansi_sequences(fixed_timestamp: datetime) -> None:
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, color_system="standard", width=200)
    transport = ConsoleTransport(console=console, error_console=Console(file=StringIO()))

    transport.log(Severity.WARN, "default", ["careful"], fixed_timestamp)

    assert "\x1b[" in buffer.getvalue()


def test_no_color_suppresses_styles(fixed_timestamp: datetime) -> None:
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, color_system="standard", width=200)
    transport = ConsoleTransport(console=console, error_console=Console(file=StringIO()), no_color=True)

    transport.log(Severity.WARN, "default", ["careful"], fixed_timestamp)

    assert "\x1b[" not in buffer.getvalue()
    assert "WARN  default: careful" in buffer.getvalue()


def test_render_pads_level_column(record_console, fixed_timestamp: datetime) -> None:
    transport = ConsoleTransport(console=record_console, error_console=record_console)

    rendered = transport.render(Severity.LOG, "jobs", ["done"], fixed_timestamp)

    assert rendered.plain == "2025-09-23T12:00:00.000Z LOG   jobs: done"


def test_values_json_cannot_key_are_still_printed(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    errors = RecordingErrorChannel()
    transport = ConsoleTransport(console=record_console, error_console=record_error_console, errors=errors)

    transport.log(Severity.INFO, "default", ["payload", [{(1, 2): "x"}]], fixed_timestamp)

    assert record_console.export_text().endswith('default: payload [{"[1,2]":"x"}]\n')
    assert errors.reports == []


def test_rendering_failure_is_reported_not_raised(record_console, record_error_console, fixed_timestamp: datetime) -> None:
    class Unprintable:
        def __str__(self) -> str:
            raise RuntimeError("no text form")

    errors = RecordingErrorChannel()
    transport = ConsoleTransport(console=record_console, error_console=record_error_console, errors=errors)

    transport.log(Severity.WARN, "default", [Unprintable()], fixed_timestamp)

    assert record_console.export_text() == ""
    assert errors.messages == ["error writing to console: no text form"]
