"""New Relic Log API transport.

Purpose
-------
Forward accepted calls to New Relic's Log API, picking the ingest URL from a
closed region table.

Contents
--------
* :data:`REGION_ENDPOINTS` - region code to base URL mapping.
* :class:`NewRelicOptions` - API key, region, and fixed attributes.
* :class:`NewRelicTransport` - the :class:`TransportPort` implementation.

System Role
-----------
Remote sink. An unknown region or a missing API key raises
:class:`~lib_log_fanout.errors.TransportConfigurationError` inside the send,
which is reported and affects that send only.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any

import httpx

from lib_log_fanout.adapters._options import TransportOptions, resolve_options
from lib_log_fanout.adapters.error_channel import RichErrorChannel
from lib_log_fanout.adapters.remote._http import DEFAULT_TIMEOUT_SECONDS, HttpSender, RemoteDelivery
from lib_log_fanout.application.ports.error_channel import ErrorChannelPort
from lib_log_fanout.application.ports.transport import TransportPort
from lib_log_fanout.domain import Severity, SeverityFilter, join_values
from lib_log_fanout.errors import TransportConfigurationError

PROVIDER = "New Relic"

REGION_ENDPOINTS: Mapping[str, str] = MappingProxyType(
    {
        "US": "https://log-api.newrelic.com/log/v1",
        "EU": "https://log-api.eu.newrelic.com/log/v1",
        "FedRamp": "https://gov-log-api.newrelic.com/log/v1",
    }
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(slots=True, frozen=True)
class NewRelicOptions(TransportOptions):
    """New Relic options on top of the shared filter settings."""

    api_key: str | None = None
    region: str = "US"
    service_attribute: str | None = None
    logtype_attribute: str | None = None
    hostname_attribute: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    background: bool = True


def resolve_endpoint(region: str) -> str:
    """Return the ingest URL for ``region``.

    Examples
    --------
    >>> resolve_endpoint("EU")
    'https://log-api.eu.newrelic.com/log/v1'
    >>> resolve_endpoint("APAC")
    Traceback (most recent call last):
    ...
    lib_log_fanout.errors.TransportConfigurationError: Unknown New Relic region 'APAC'. Please check your configuration.
    """

    try:
        return REGION_ENDPOINTS[region]
    except KeyError as exc:
        raise TransportConfigurationError(f"Unknown New Relic region {region!r}. Please check your configuration.") from exc


def epoch_millis(timestamp: datetime) -> int:
    """Return whole milliseconds since the Unix epoch."""

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return (timestamp - _EPOCH) // timedelta(milliseconds=1)


def build_event(options: NewRelicOptions, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> dict[str, Any]:
    """Return the Log API body for one call; unset attributes are omitted.

    Examples
    --------
    >>> ts = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)
    >>> build_event(NewRelicOptions(api_key="k"), Severity.INFO, "default", ["up"], ts)
    {'timestamp': 1758628800000, 'message': 'up', 'severity': 'INFO', 'scope': 'default'}
    """

    attributes = {
        "logtype": options.logtype_attribute,
        "service": options.service_attribute,
        "hostname": options.hostname_attribute,
    }
    event: dict[str, Any] = {key: value for key, value in attributes.items() if value is not None}
    event.update(
        timestamp=epoch_millis(timestamp),
        message=join_values(values),
        severity=severity.value,
        scope=scope,
    )
    return event


class NewRelicTransport(TransportPort):
    """Send accepted calls to New Relic."""

    def __init__(
        self,
        options: NewRelicOptions | None = None,
        *,
        errors: ErrorChannelPort | None = None,
        http_transport: httpx.BaseTransport | None = None,
        **overrides: Any,
    ) -> None:
        self._options = resolve_options(options, NewRelicOptions, overrides)
        self._filter = self._options.build_filter()
        self._errors: ErrorChannelPort = errors if errors is not None else RichErrorChannel()
        sender = HttpSender(provider=PROVIDER, timeout=self._options.timeout, transport=http_transport)
        self._delivery = RemoteDelivery(sender=sender, errors=self._errors, background=self._options.background)

    @property
    def options(self) -> NewRelicOptions:
        return self._options

    @property
    def filter(self) -> SeverityFilter:
        return self._filter

    def log(self, severity: Severity, scope: str, values: Sequence[Any], timestamp: datetime) -> None:
        if not self._filter.should_log(severity):
            return
        try:
            event = build_event(self._options, severity, scope, values, timestamp)
        except Exception as exc:  # noqa: BLE001
            self._errors.report(f"error formatting {PROVIDER} event", exc)
            return
        self._delivery.dispatch(event, endpoint=self.endpoint, headers=self.headers)

    def endpoint(self) -> str:
        return resolve_endpoint(self._options.region)

    def headers(self) -> Mapping[str, str]:
        if not self._options.api_key:
            raise TransportConfigurationError("New Relic API key is not configured")
        return {"Api-Key": self._options.api_key}

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        return self._delivery.wait_until_idle(timeout)

    def close(self, timeout: float | None = 5.0) -> bool:
        return self._delivery.close(timeout)


__all__ = ["NewRelicOptions", "NewRelicTransport", "REGION_ENDPOINTS", "build_event", "epoch_millis", "resolve_endpoint"]
