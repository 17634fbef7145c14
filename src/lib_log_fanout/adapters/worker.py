"""Background worker running a transport's I/O off the caller's thread.

Purpose
-------
Let ``log`` return as soon as a file append or HTTP POST has been handed off,
while keeping per-transport FIFO ordering of those effects.

Contents
--------
* :class:`BackgroundWorker` - daemon thread draining a queue of jobs.

System Role
-----------
Owned by each I/O transport. Jobs are fire-and-forget: their failures go to
the transport's error channel and the thread keeps running. The thread is a
daemon and nothing is flushed at interpreter exit; hosts that need delivery
call :meth:`BackgroundWorker.wait_until_idle` or :meth:`BackgroundWorker.stop`.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable

from lib_log_fanout.application.ports.error_channel import ErrorChannelPort

Job = Callable[[], None]

LOGGER = logging.getLogger(__name__)


class BackgroundWorker:
    """Execute submitted jobs sequentially on a lazily started thread.

    Examples
    --------
    >>> done = []
    >>> worker = BackgroundWorker(name="doc")
    >>> worker.submit(lambda: done.append(1))
    >>> worker.wait_until_idle(timeout=5)
    True
    >>> done
    [1]
    >>> worker.stop()
    True
    """

    def __init__(self, *, name: str = "transport", errors: ErrorChannelPort | None = None) -> None:
        self._name = name
        self._errors = errors
        self._queue: queue.Queue[Job | None] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._start_lock = threading.Lock()
        self._discard_pending = False

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Start the worker thread if it is not already running."""
        with self._start_lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._discard_pending = False
            self._thread = threading.Thread(target=self._run, name=f"lib_log_fanout-{self._name}", daemon=True)
            self._thread.start()

    def submit(self, job: Job) -> None:
        """Queue ``job`` and return immediately."""
        self.start()
        self._queue.put(job)

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until every submitted job has finished.

        Returns ``True`` when the queue drained, ``False`` when ``timeout``
        elapsed first.
        """

        deadline = None if timeout is None else time.monotonic() + timeout
        with self._queue.all_tasks_done:
            while self._queue.unfinished_tasks:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._queue.all_tasks_done.wait(remaining)
        return True

    def stop(self, *, drain: bool = True, timeout: float | None = 5.0) -> bool:
        """Stop the worker thread.

        Parameters
        ----------
        drain:
            When ``True`` queued jobs run before the thread exits; otherwise
            pending jobs are discarded.
        timeout:
            Seconds to wait for the thread to finish; ``None`` waits forever.

        Returns
        -------
        bool
            ``True`` when the thread has exited.
        """

        thread = self._thread
        if thread is None:
            return True
        if not drain:
            self._discard_pending = True
        self._queue.put(None)
        thread.join(timeout)
        if thread.is_alive():
            LOGGER.warning("worker %s did not stop within %s seconds", self._name, timeout)
            return False
        with self._start_lock:
            if self._thread is thread:
                self._thread = None
        return True

    def _run(self) -> None:
        """Internal loop draining the queue until the stop sentinel arrives."""
        while True:
            job = self._queue.get()
            try:
                if job is None:
                    break
                if self._discard_pending:
                    continue
                self._execute(job)
            finally:
                self._queue.task_done()

    def _execute(self, job: Job) -> None:
        try:
            job()
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Worker %s job raised an exception; continuing", self._name, exc_info=exc)
            if self._errors is not None:
                try:
                    self._errors.report(f"{self._name} transport job failed", exc)
                except Exception as report_exc:  # noqa: BLE001
                    LOGGER.error("Error channel raised while reporting a %s failure", self._name, exc_info=report_exc)


__all__ = ["BackgroundWorker", "Job"]
