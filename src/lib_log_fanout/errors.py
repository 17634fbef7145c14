"""Exception hierarchy raised inside transports.

None of these escape a transport's ``log``: they are raised by the send path,
caught at the transport boundary, and handed to the error channel.
"""

from __future__ import annotations


class LogFanoutError(Exception):
    """Base class for errors raised by lib_log_fanout."""


class TransportConfigurationError(LogFanoutError):
    """Raised at send time when a transport lacks usable configuration.

    Examples are an unknown region code or a missing credential. Configuration
    may be supplied in stages, so construction never raises this.
    """


class TransportDeliveryError(LogFanoutError):
    """Raised when a remote collector answers with a non-2xx status."""

    def __init__(self, provider: str, *, status_code: int, reason: str = "") -> None:
        super().__init__(provider, status_code, reason)
        self.provider = provider
        self.status_code = status_code
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


__all__ = ["LogFanoutError", "TransportConfigurationError", "TransportDeliveryError"]
