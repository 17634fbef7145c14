"""Protocols the application layer depends on."""

from __future__ import annotations

from .error_channel import ErrorChannelPort
from .time import ClockPort
from .transport import TransportPort

__all__ = ["ClockPort", "ErrorChannelPort", "TransportPort"]
