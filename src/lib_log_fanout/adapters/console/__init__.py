"""Console transports."""

from __future__ import annotations

from .rich_console import ConsoleTransport, ConsoleTransportOptions

__all__ = ["ConsoleTransport", "ConsoleTransportOptions"]
