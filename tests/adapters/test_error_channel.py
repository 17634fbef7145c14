from __future__ import annotations

from lib_log_fanout.adapters.error_channel import RecordingErrorChannel, RichErrorChannel, format_report


def test_rich_error_channel_prints_message_and_cause(record_error_console) -> None:
    channel = RichErrorChannel(console=record_error_console)

    channel.report("error writing to log file", PermissionError("denied"))

    assert record_error_console.export_text() == "error writing to log file: denied\n"


def test_rich_error_channel_without_cause(record_error_console) -> None:
    RichErrorChannel(console=record_error_console).report("plain failure")

    assert record_error_console.export_text() == "plain failure\n"


def test_format_report_uses_type_name_for_blank_causes() -> None:
    assert format_report("failed", TimeoutError()) == "failed: TimeoutError"


def test_recording_channel_keeps_order() -> None:
    channel = RecordingErrorChannel()
    channel.report("first")
    channel.report("second", ValueError("x"))

    assert channel.messages == ["first", "second: x"]
    assert [message for message, _ in channel.reports] == ["first", "second"]
