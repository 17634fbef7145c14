from __future__ import annotations

import threading

from lib_log_fanout.adapters.error_channel import RecordingErrorChannel
from lib_log_fanout.adapters.worker import BackgroundWorker


def test_jobs_run_in_submission_order() -> None:
    processed: list[int] = []
    worker = BackgroundWorker(name="order")

    for index in range(25):
        worker.submit(lambda index=index: processed.append(index))

    assert worker.wait_until_idle(timeout=5)
    assert worker.stop()
    assert processed == list(range(25))


def test_thread_starts_lazily() -> None:
    worker = BackgroundWorker(name="lazy")
    assert worker.running is False

    worker.submit(lambda: None)

    assert worker.running is True
    assert worker.stop()
    assert worker.running is False


def test_failing_job_is_reported_and_worker_continues() -> None:
    errors = RecordingErrorChannel()
    processed: list[str] = []
    worker = BackgroundWorker(name="flaky", errors=errors)

    def explode() -> None:
        raise RuntimeError("kaboom")

    worker.submit(explode)
    worker.submit(lambda: processed.append("after"))

    assert worker.wait_until_idle(timeout=5)
    worker.stop()
    assert processed == ["after"]
    assert errors.messages == ["flaky transport job failed: kaboom"]


def test_wait_until_idle_times_out_while_a_job_blocks() -> None:
    gate = threading.Event()
    worker = BackgroundWorker(name="blocked")
    worker.submit(gate.wait)

    assert worker.wait_until_idle(timeout=0.05) is False

    gate.set()
    assert worker.wait_until_idle(timeout=5) is True
    worker.stop()


def test_stop_drains_pending_jobs() -> None:
    gate = threading.Event()
    processed: list[int] = []
    worker = BackgroundWorker(name="drain")
    worker.submit(gate.wait)
    for index in range(3):
        worker.submit(lambda index=index: processed.append(index))

    gate.set()
    assert worker.stop(drain=True, timeout=5)
    assert processed == [0, 1, 2]


def test_stop_without_drain_discards_pending_jobs() -> None:
    gate = threading.Event()
    processed: list[int] = []
    worker = BackgroundWorker(name="discard")
    worker.submit(gate.wait)
    worker.submit(lambda: processed.append(1))

    release = threading.Timer(0.1, gate.set)
    release.start()
    assert worker.stop(drain=False, timeout=5)
    release.join()

    assert processed == []
    assert worker.running is False


def test_stop_before_start_is_a_noop() -> None:
    assert BackgroundWorker(name="idle").stop() is True


def test_worker_restarts_after_stop() -> None:
    processed: list[str] = []
    worker = BackgroundWorker(name="restart")
    worker.submit(lambda: processed.append("first"))
    worker.stop()

    worker.submit(lambda: processed.append("second"))
    assert worker.wait_until_idle(timeout=5)
    worker.stop()

    assert processed == ["first", "second"]
