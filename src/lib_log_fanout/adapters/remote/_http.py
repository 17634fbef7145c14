"""Shared HTTP delivery for remote log collectors.

Purpose
-------
Both collector transports send one JSON document per event with an auth
header and treat every failure the same way. This module holds that logic so
the transports only describe their envelope, endpoint, and headers.

Contents
--------
* :class:`HttpSender` - thin wrapper over :class:`httpx.Client`.
* :class:`RemoteDelivery` - resolves endpoint/headers at send time, hands the
  POST to a background worker, and reports failures.

System Role
-----------
Composition helper for :mod:`lib_log_fanout.adapters.remote.splunk` and
:mod:`lib_log_fanout.adapters.remote.newrelic`. Delivery is best effort:
no retries, no batching.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from lib_log_fanout.adapters.worker import BackgroundWorker
from lib_log_fanout.application.ports.error_channel import ErrorChannelPort
from lib_log_fanout.errors import TransportConfigurationError, TransportDeliveryError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpSender:
    """POST JSON payloads and raise on non-2xx answers.

    Examples
    --------
    >>> transport = httpx.MockTransport(lambda request: httpx.Response(204))
    >>> sender = HttpSender(provider="Demo", transport=transport)
    >>> sender.post_json("https://collector.test/ingest", {"a": 1}, {"Api-Key": "k"}).status_code
    204
    >>> sender.close()
    """

    def __init__(
        self,
        *,
        provider: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._provider = provider
        self._client = client if client is not None else httpx.Client(timeout=timeout, transport=transport)

    @property
    def provider(self) -> str:
        return self._provider

    def post_json(self, url: str, payload: Any, headers: Mapping[str, str]) -> httpx.Response:
        """Send ``payload`` as the JSON body of a single POST."""

        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        merged = {"Content-Type": "application/json", **headers}
        response = self._client.post(url, content=body, headers=merged)
        if not response.is_success:
            raise TransportDeliveryError(
                self._provider,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
        return response

    def close(self) -> None:
        self._client.close()


class RemoteDelivery:
    """Run sends on a worker and route every failure to the error channel."""

    def __init__(
        self,
        *,
        sender: HttpSender,
        errors: ErrorChannelPort,
        worker: BackgroundWorker | None = None,
        background: bool = True,
    ) -> None:
        self._sender = sender
        self._errors = errors
        self._worker = worker if worker is not None else BackgroundWorker(name=sender.provider.lower().replace(" ", "_"), errors=errors)
        self._background = background

    def dispatch(
        self,
        payload: Any,
        *,
        endpoint: Callable[[], str],
        headers: Callable[[], Mapping[str, str]],
    ) -> None:
        """Initiate delivery of ``payload`` and return immediately.

        ``endpoint`` and ``headers`` are resolved when the send runs, so a
        configuration problem surfaces per send and never at construction.
        """

        def job() -> None:
            self._deliver(payload, endpoint, headers)

        if self._background:
            self._worker.submit(job)
        else:
            job()

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        return self._worker.wait_until_idle(timeout)

    def close(self, timeout: float | None = 5.0) -> bool:
        stopped = self._worker.stop(drain=True, timeout=timeout)
        self._sender.close()
        return stopped

    def _deliver(
        self,
        payload: Any,
        endpoint: Callable[[], str],
        headers: Callable[[], Mapping[str, str]],
    ) -> None:
        provider = self._sender.provider
        try:
            self._sender.post_json(endpoint(), payload, headers())
        except TransportConfigurationError as exc:
            self._report(f"{provider} transport is misconfigured", exc)
        except TransportDeliveryError as exc:
            self._report(f"Error sending log event to {provider}", exc)
        except httpx.HTTPError as exc:
            self._report(f"Network error sending log event to {provider}", exc)

    def _report(self, message: str, exc: BaseException) -> None:
        logger.debug("%s", message, exc_info=exc)
        self._errors.report(message, exc)


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "HttpSender", "RemoteDelivery"]
