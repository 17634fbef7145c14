"""Rich-backed error channel receiving transport failures.

Purpose
-------
Give transports somewhere to put sink failures (file append errors, network
errors, non-2xx responses) without raising into the dispatcher.

Contents
--------
* :class:`RichErrorChannel` - prints to a Rich stderr console.
* :class:`RecordingErrorChannel` - keeps reports in memory.

System Role
-----------
Default :class:`~lib_log_fanout.application.ports.ErrorChannelPort` wired into
every transport that performs I/O.
"""

from __future__ import annotations

import logging
import threading

from rich.console import Console
from rich.text import Text

from lib_log_fanout.application.ports.error_channel import ErrorChannelPort

logger = logging.getLogger(__name__)


def format_report(message: str, error: BaseException | None) -> str:
    """Return ``message`` with the cause appended, if any.

    Examples
    --------
    >>> format_report("error writing to log file", OSError("disk full"))
    'error writing to log file: disk full'
    >>> format_report("plain", None)
    'plain'
    """

    if error is None:
        return message
    cause = str(error) or type(error).__name__
    return f"{message}: {cause}"


class RichErrorChannel(ErrorChannelPort):
    """Print failure reports to standard error using Rich."""

    def __init__(self, *, console: Console | None = None, style: str = "bold red") -> None:
        self._console = console if console is not None else Console(stderr=True)
        self._style = style
        self._lock = threading.Lock()

    def report(self, message: str, error: BaseException | None = None) -> None:
        text = format_report(message, error)
        logger.debug("transport failure reported: %s", text, exc_info=error)
        with self._lock:
            self._console.print(Text(text, style=self._style), highlight=False, soft_wrap=True)


class RecordingErrorChannel(ErrorChannelPort):
    """Collect reports in memory; handy for tests and embedding hosts.

    Examples
    --------
    >>> channel = RecordingErrorChannel()
    >>> channel.report("boom", ValueError("bad"))
    >>> channel.messages
    ['boom: bad']
    """

    def __init__(self) -> None:
        self.reports: list[tuple[str, BaseException | None]] = []
        self._lock = threading.Lock()

    def report(self, message: str, error: BaseException | None = None) -> None:
        with self._lock:
            self.reports.append((message, error))

    @property
    def messages(self) -> list[str]:
        with self._lock:
            return [format_report(message, error) for message, error in self.reports]


__all__ = ["RecordingErrorChannel", "RichErrorChannel", "format_report"]
