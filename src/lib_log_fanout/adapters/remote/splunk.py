"""Splunk HTTP Event Collector transport.

Purpose
-------
Forward accepted calls to a Splunk HEC endpoint, one JSON event per POST.

Contents
--------
* :class:`SplunkHecOptions` - endpoint, token, and metadata options.
* :class:`SplunkHecTransport` - the :class:`TransportPort` implementation.

System Role
-----------
Remote sink. Endpoint and token are checked when a send runs; a missing value
is reported as a configuration error for that send only.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx

from lib_log_fanout.adapters._options import TransportOptions, resolve_options
from lib_log_fanout.adapters.error_channel import RichErrorChannel
from lib_log_fanout.adapters.remote._http import DEFAULT_TIMEOUT_SECONDS, HttpSender, RemoteDelivery
from lib_log_fanout.application.ports.error_channel import ErrorChannelPort
from lib_log_fanout.application.ports.transport import TransportPort
from lib_log_fanout.domain import Severity, SeverityFilter, join_values
from lib_log_fanout.errors import TransportConfigurationError

PROVIDER = "Splunk"


@dataclass(slots=True, frozen=True)
class SplunkHecOptions(TransportOptions):
    """Splunk HEC options on top of the shared filter settings.

    Attributes
    ----------
    hec_endpoint:
        Full collector URL, e.g. ``https://splunk:8088/services/collector/event``.
    hec_token:
        HEC token sent as ``Authorization: Splunk <token>``.
    source_type / host / index:
        Fixed metadata attached to every event; left out of the envelope
        when ``None``.
    """

    hec_endpoint: str | None = None
    hec_token: str | None = None
    source_type: str | None = None
    host: str | None = None
    index: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    background: bool = True


def build_envelope(options: SplunkHecOptions, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> dict[str, Any]:
    """Return the HEC event body for one call.

    Examples
    --------
    >>> from datetime import timezone
    >>> ts = datetime(2025, 9, 23, 12, 0, 0, 500000, tzinfo=timezone.utc)
    >>> envelope = build_envelope(SplunkHecOptions(source_type='app'), Severity.WARN, 'db', ['slow'], ts)
    >>> envelope['time'], envelope['source'], envelope['sourcetype'], envelope['event']
    (1758628800.5, 'db', 'app', {'level': 'WARN', 'message': 'slow'})
    """

    envelope: dict[str, Any] = {
        "time": timestamp.timestamp(),
        "source": scope,
        "event": {"level": severity.value, "message": join_values(values)},
    }
    optional = {"sourcetype": options.source_type, "host": options.host, "index": options.index}
    envelope.update((key, value) for key, value in optional.items() if value is not None)
    return envelope


class SplunkHecTransport(TransportPort):
    """Send accepted calls to Splunk's HTTP Event Collector."""

    def __init__(
        self,
        options: SplunkHecOptions | None = None,
        *,
        errors: ErrorChannelPort | None = None,
        http_transport: httpx.BaseTransport | None = None,
        **overrides: Any,
    ) -> None:
        self._options = resolve_options(options, SplunkHecOptions, overrides)
        self._filter = self._options.build_filter()
        self._errors: ErrorChannelPort = errors if errors is not None else RichErrorChannel()
        sender = HttpSender(provider=PROVIDER, timeout=self._options.timeout, transport=http_transport)
        self._delivery = RemoteDelivery(sender=sender, errors=self._errors, background=self._options.background)

    @property
    def options(self) -> SplunkHecOptions:
        return self._options

    @property
    def filter(self) -> SeverityFilter:
        return self._filter

    def log(self, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> None:
        if not self._filter.should_log(severity):
            return
        try:
            envelope = build_envelope(self._options, severity, scope, values, timestamp)
        except Exception as exc:  # noqa: BLE001
            self._errors.report(f"error formatting {PROVIDER} event", exc)
            return
        self._delivery.dispatch(envelope, endpoint=self.endpoint, headers=self.headers)

    def endpoint(self) -> str:
        """Return the configured collector URL or raise a configuration error."""

        if not self._options.hec_endpoint:
            raise TransportConfigurationError("Splunk HEC endpoint is not configured")
        return self._options.hec_endpoint

    def headers(self) -> Mapping[str, str]:
        """Return the auth header or raise when the token is missing."""

        if not self._options.hec_token:
            raise TransportConfigurationError("Splunk HEC token is not configured")
        return {"Authorization": f"Splunk {self._options.hec_token}"}

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        return self._delivery.wait_until_idle(timeout)

    def close(self, timeout: float | None = 5.0) -> bool:
        return self._delivery.close(timeout)


__all__ = ["SplunkHecOptions", "SplunkHecTransport", "build_envelope"]
