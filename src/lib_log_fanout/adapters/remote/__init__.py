"""Remote HTTP collector transports."""

from __future__ import annotations

from ._http import HttpSender, RemoteDelivery
from .newrelic import REGION_ENDPOINTS, NewRelicOptions, NewRelicTransport
from .splunk import SplunkHecOptions, SplunkHecTransport

__all__ = [
    "HttpSender",
    "NewRelicOptions",
    "NewRelicTransport",
    "REGION_ENDPOINTS",
    "RemoteDelivery",
    "SplunkHecOptions",
    "SplunkHecTransport",
]
