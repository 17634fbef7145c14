"""Append-only file transport.

Purpose
-------
Persist each accepted call as one line, either plain text or a JSON object,
without blocking the caller on disk I/O.

Contents
--------
* :class:`FileFormat` - accepted line formats.
* :class:`FileTransportOptions` - path, format, and filter options.
* :class:`FileTransport` - the :class:`TransportPort` implementation.

System Role
-----------
Formatting happens on the caller's thread; the append itself runs on the
transport's :class:`~lib_log_fanout.adapters.worker.BackgroundWorker`, so
appends from one transport land in call order. Failures are reported as
``error writing to log file: <cause>`` and never reach the dispatcher.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Any

from lib_log_fanout.adapters._options import TransportOptions, resolve_options
from lib_log_fanout.adapters.error_channel import RichErrorChannel
from lib_log_fanout.adapters.worker import BackgroundWorker
from lib_log_fanout.application.ports.error_channel import ErrorChannelPort
from lib_log_fanout.application.ports.transport import TransportPort
from lib_log_fanout.domain import Severity, SeverityFilter, format_timestamp, join_values

logger = logging.getLogger(__name__)

DEFAULT_FILE_PATH = "./app.log"


class FileFormat(str, Enum):
    """Line formats written by :class:`FileTransport`."""

    TXT = "txt"
    JSON = "json"

    @classmethod
    def from_name(cls, name: "FileFormat | str") -> "FileFormat":
        if isinstance(name, FileFormat):
            return name
        normalized = name.strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown file format: {name!r} (expected 'txt' or 'json')") from exc


@dataclass(slots=True, frozen=True)
class FileTransportOptions(TransportOptions):
    """File options on top of the shared filter settings.

    Attributes
    ----------
    file_path:
        Target file; created on first append when absent.
    file_format:
        ``"txt"`` (default) or ``"json"``.
    background:
        When ``True`` appends run on a worker thread; ``False`` appends inline.
    """

    file_path: str | Path = DEFAULT_FILE_PATH
    file_format: FileFormat | str = FileFormat.TXT
    background: bool = True


def format_line(file_format: FileFormat, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> str:
    """Render one newline-terminated line.

    Examples
    --------
    >>> from datetime import timezone
    >>> ts = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)
    >>> format_line(FileFormat.TXT, Severity.WARN, 'db', ['slow', 12], ts)
    '[2025-09-23T12:00:00.000Z] [WARN] db: slow 12\\n'
    >>> format_line(FileFormat.JSON, Severity.ERROR, 'default', ['boom'], ts)
    '{"timestamp":"2025-09-23T12:00:00.000Z","level":"ERROR","message":"default: boom"}\\n'
    """

    timestamp_text = format_timestamp(timestamp)
    joined = join_values(values)
    message = f"{scope}: {joined}" if scope else joined
    if file_format is FileFormat.JSON:
        payload = {"timestamp": timestamp_text, "level": severity.value, "message": message}
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False) + "\n"
    return f"[{timestamp_text}] [{severity.value}] {message}\n"


class FileTransport(TransportPort):
    """Append accepted calls to a file."""

    def __init__(
        self,
        options: FileTransportOptions | None = None,
        *,
        errors: ErrorChannelPort | None = None,
        worker: BackgroundWorker | None = None,
        **overrides: Any,
    ) -> None:
        self._options = resolve_options(options, FileTransportOptions, overrides)
        self._filter = self._options.build_filter()
        self._format = FileFormat.from_name(self._options.file_format)
        self._path = Path(self._options.file_path)
        self._errors: ErrorChannelPort = errors if errors is not None else RichErrorChannel()
        self._worker = worker if worker is not None else BackgroundWorker(name="file", errors=self._errors)

    @property
    def options(self) -> FileTransportOptions:
        return self._options

    @property
    def filter(self) -> SeverityFilter:
        return self._filter

    @property
    def path(self) -> Path:
        return self._path

    @property
    def file_format(self) -> FileFormat:
        return self._format

    def log(self, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> None:
        if not self._filter.should_log(severity):
            return
        try:
            line = format_line(self._format, severity, scope, values, timestamp)
        except Exception as exc:  # noqa: BLE001
            self._errors.report("error formatting log line", exc)
            return
        if self._options.background:
            self._worker.submit(partial(self._append, line))
        else:
            self._append(line)

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until pending appends finished; ``False`` on timeout."""

        return self._worker.wait_until_idle(timeout)

    def close(self, timeout: float | None = 5.0) -> bool:
        """Drain pending appends and stop the worker thread."""

        return self._worker.stop(drain=True, timeout=timeout)

    def _append(self, line: str) -> None:
        try:
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        except OSError as exc:
            logger.debug("append to %s failed", self._path, exc_info=exc)
            self._errors.report("error writing to log file", exc)


__all__ = ["DEFAULT_FILE_PATH", "FileFormat", "FileTransport", "FileTransportOptions", "format_line"]
