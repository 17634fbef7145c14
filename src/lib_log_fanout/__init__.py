"""Public package surface of lib_log_fanout.

``Log`` dispatches severity-tagged values to a list of transports; each
transport filters and persists independently::

    from lib_log_fanout import ConsoleTransport, FileTransport, Log, Severity

    log = Log([ConsoleTransport(), FileTransport(file_format="json", minimum_severity=Severity.WARN)])
    log.info("service started", {"port": 8080})
"""

from __future__ import annotations

from .adapters import (
    BackgroundWorker,
    ConsoleTransport,
    ConsoleTransportOptions,
    FileFormat,
    FileTransport,
    FileTransportOptions,
    NewRelicOptions,
    NewRelicTransport,
    RecordingErrorChannel,
    RichErrorChannel,
    SplunkHecOptions,
    SplunkHecTransport,
    TransportOptions,
)
from .application.ports import ClockPort, ErrorChannelPort, TransportPort
from .domain import UNDEFINED, LogEvent, Severity, SeverityFilter, serialize_value, serialize_values
from .errors import LogFanoutError, TransportConfigurationError, TransportDeliveryError
from .log import Log

__all__ = [
    "BackgroundWorker",
    "ClockPort",
    "ConsoleTransport",
    "ConsoleTransportOptions",
    "ErrorChannelPort",
    "FileFormat",
    "FileTransport",
    "FileTransportOptions",
    "Log",
    "LogEvent",
    "LogFanoutError",
    "NewRelicOptions",
    "NewRelicTransport",
    "RecordingErrorChannel",
    "RichErrorChannel",
    "Severity",
    "SeverityFilter",
    "SplunkHecOptions",
    "SplunkHecTransport",
    "TransportConfigurationError",
    "TransportDeliveryError",
    "TransportOptions",
    "TransportPort",
    "UNDEFINED",
    "serialize_value",
    "serialize_values",
]
