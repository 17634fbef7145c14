"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

name = "lib_log_fanout"
title = "Severity-filtered logging facade with console, file and HTTP collector transports"
version = "0.1.0"
shell_command = "lib_log_fanout"

_FIELDS = (
    ("name", name),
    ("title", title),
    ("version", version),
    ("shell_command", shell_command),
)


def summary_info() -> str:
    """Return the metadata banner, newline-terminated.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_log_fanout:'
    """

    pad = max(len(label) for label, _ in _FIELDS)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in _FIELDS)
    return "\n".join(lines) + "\n"


__all__ = ["name", "shell_command", "summary_info", "title", "version"]
