"""Concrete transports and their infrastructure helpers."""

from __future__ import annotations

from ._options import TransportOptions
from .console import ConsoleTransport, ConsoleTransportOptions
from .error_channel import RecordingErrorChannel, RichErrorChannel
from .file import FileFormat, FileTransport, FileTransportOptions
from .remote import NewRelicOptions, NewRelicTransport, SplunkHecOptions, SplunkHecTransport
from .worker import BackgroundWorker

__all__ = [
    "BackgroundWorker",
    "ConsoleTransport",
    "ConsoleTransportOptions",
    "FileFormat",
    "FileTransport",
    "FileTransportOptions",
    "NewRelicOptions",
    "NewRelicTransport",
    "RecordingErrorChannel",
    "RichErrorChannel",
    "SplunkHecOptions",
    "SplunkHecTransport",
    "TransportOptions",
]
