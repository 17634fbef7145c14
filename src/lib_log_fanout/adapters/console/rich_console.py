"""Rich-powered console transport.

Purpose
-------
Render dispatched log calls as single styled terminal lines, routing
``ERROR`` to standard error and everything else to standard output.

Contents
--------
* :data:`_LEVEL_STYLE_MAP` / :data:`_MESSAGE_STYLE_MAP` - default styles.
* :class:`ConsoleTransportOptions` - filter and colour options.
* :class:`ConsoleTransport` - the :class:`TransportPort` implementation.

System Role
-----------
Default transport of :class:`lib_log_fanout.log.Log`. Synchronous; Rich
handles terminals that cannot render colour.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.text import Text

from lib_log_fanout.adapters._options import TransportOptions, resolve_options
from lib_log_fanout.adapters.error_channel import RichErrorChannel
from lib_log_fanout.application.ports.error_channel import ErrorChannelPort
from lib_log_fanout.application.ports.transport import TransportPort
from lib_log_fanout.domain import Severity, SeverityFilter, format_timestamp, join_values

_LEVEL_STYLE_MAP: Mapping[Severity, str] = {
    Severity.DEBUG: "dim",
    Severity.INFO: "blue",
    Severity.LOG: "",
    Severity.WARN: "yellow",
    Severity.ERROR: "red",
}

#: Styles applied to the whole message, not only the level column.
_MESSAGE_STYLE_MAP: Mapping[Severity, str] = {
    Severity.DEBUG: "dim",
    Severity.ERROR: "red",
}

_TIMESTAMP_STYLE = "dim"


@dataclass(slots=True, frozen=True)
class ConsoleTransportOptions(TransportOptions):
    """Console options on top of the shared filter settings."""

    force_color: bool = False
    no_color: bool = False


class ConsoleTransport(TransportPort):
    """Print events to the terminal through Rich."""

    def __init__(
        self,
        options: ConsoleTransportOptions | None = None,
        *,
        console: Console | None = None,
        error_console: Console | None = None,
        errors: ErrorChannelPort | None = None,
        **overrides: Any,
    ) -> None:
        """Configure the transport.

        Parameters
        ----------
        options:
            Base options; keyword ``overrides`` are applied on top.
        console / error_console:
            Injected Rich consoles for standard output and standard error.
        errors:
            Receives rendering and write failures; defaults to
            :class:`RichErrorChannel`.
        """
        self._options = resolve_options(options, ConsoleTransportOptions, overrides)
        self._filter = self._options.build_filter()
        force_terminal = True if self._options.force_color else None
        self._console = console if console is not None else Console(force_terminal=force_terminal, no_color=self._options.no_color)
        self._error_console = (
            error_console
            if error_console is not None
            else Console(stderr=True, force_terminal=force_terminal, no_color=self._options.no_color)
        )
        self._errors: ErrorChannelPort = errors if errors is not None else RichErrorChannel()

    @property
    def options(self) -> ConsoleTransportOptions:
        return self._options

    @property
    def filter(self) -> SeverityFilter:
        return self._filter

    def log(self, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> None:
        """Print the call when it passes the filter.

        Examples
        --------
        >>> from datetime import timezone
        >>> from io import StringIO
        >>> out = Console(file=StringIO(), record=True)
        >>> transport = ConsoleTransport(console=out, error_console=Console(file=StringIO()))
        >>> transport.log(Severity.INFO, 'default', ['hello', 1], datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))
        >>> out.export_text()
        '2025-09-30T12:00:00.000Z INFO  default: hello 1\\n'
        """
        if not self._filter.should_log(severity):
            return
        target = self._error_console if severity is Severity.ERROR else self._console
        try:
            line = self.render(severity, scope, values, timestamp)
            target.print(line, highlight=False, soft_wrap=True, markup=False, emoji=False)
        except Exception as exc:  # noqa: BLE001
            self._errors.report("error writing to console", exc)

    def render(self, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> Text:
        """Return the styled line for one call."""

        styled = not self._options.no_color
        level_style = _LEVEL_STYLE_MAP.get(severity, "") if styled else ""
        message_style = _MESSAGE_STYLE_MAP.get(severity, "") if styled else ""
        return Text.assemble(
            (format_timestamp(timestamp), _TIMESTAMP_STYLE if styled else ""),
            " ",
            (severity.value.ljust(5), level_style),
            " ",
            (f"{scope}: {join_values(values)}", message_style),
        )


__all__ = ["ConsoleTransport", "ConsoleTransportOptions"]
