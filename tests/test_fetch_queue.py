import logging
import threading

import pytest

from bracket_harvester.errors import QueueClosedError
from bracket_harvester.fetch_queue import FetchQueue, QueueState


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _queue(handler, clock: FakeClock, interval: float = 1.0) -> FetchQueue:
    return FetchQueue(
        handler,
        logger=logging.getLogger("test"),
        interval=interval,
        sleep_fn=clock.sleep,
    )


def test_tasks_run_in_fifo_order_spaced_by_interval() -> None:
    clock = FakeClock()
    started: list[tuple[str, float]] = []
    queue = _queue(lambda url: started.append((url, clock.now)), clock)

    queue.enqueue_many(["a", "b"])
    queue.enqueue("c")
    queue.close()

    assert queue.run_to_completion(timeout=5) is True
    assert [url for url, _ in started] == ["a", "b", "c"]
    starts = [at for _, at in started]
    assert all(later - earlier >= 1.0 for earlier, later in zip(starts, starts[1:]))
    assert clock.sleeps == [1.0, 1.0, 1.0]
    assert queue.completed == 3
    assert queue.state is QueueState.DRAINED


def test_interval_is_added_after_slow_and_failing_tasks() -> None:
    clock = FakeClock()
    started: list[float] = []

    def handler(url: str) -> None:
        started.append(clock.now)
        if url == "slow":
            clock.sleep(60.0)
        if url == "boom":
            raise RuntimeError("unexpected")

    queue = _queue(handler, clock)
    queue.enqueue_many(["slow", "boom", "next"])
    queue.close()

    assert queue.run_to_completion(timeout=5) is True
    assert started == [0.0, 61.0, 62.0]


def test_queue_waits_for_input_until_closed() -> None:
    clock = FakeClock()
    handled = threading.Event()
    seen: list[str] = []

    def handler(url: str) -> None:
        seen.append(url)
        handled.set()

    queue = _queue(handler, clock)
    queue.start()
    queue.enqueue("first")
    assert handled.wait(timeout=5)
    assert queue.run_to_completion(timeout=0.05) is False
    assert queue.state is not QueueState.DRAINED

    queue.enqueue("second")
    queue.close()
    assert queue.run_to_completion(timeout=5) is True
    assert seen == ["first", "second"]


def test_closed_empty_queue_drains_immediately() -> None:
    clock = FakeClock()
    queue = _queue(lambda url: None, clock)
    queue.close()
    assert queue.run_to_completion(timeout=5) is True
    assert clock.sleeps == []


def test_enqueue_after_close_raises() -> None:
    queue = _queue(lambda url: None, FakeClock())
    queue.close()
    with pytest.raises(QueueClosedError):
        queue.enqueue("late")


def test_enqueue_never_runs_the_handler() -> None:
    calls: list[str] = []
    queue = _queue(calls.append, FakeClock())
    queue.enqueue_many(["a", "b"])
    assert calls == []
    assert len(queue) == 2
    assert queue.state is QueueState.IDLE


def test_enqueue_while_task_in_flight_keeps_fifo_order() -> None:
    clock = FakeClock()
    in_flight = threading.Event()
    release = threading.Event()
    seen: list[str] = []

    def handler(url: str) -> None:
        seen.append(url)
        if url == "a":
            in_flight.set()
            assert release.wait(timeout=5)

    queue = _queue(handler, clock)
    queue.enqueue("a")
    queue.start()
    assert in_flight.wait(timeout=5)
    assert queue.state is QueueState.DRAINING

    queue.enqueue_many(["b", "c"])
    queue.close()
    release.set()

    assert queue.run_to_completion(timeout=5) is True
    assert seen == ["a", "b", "c"]
    assert clock.sleeps == [1.0, 1.0, 1.0]


def test_start_is_idempotent() -> None:
    queue = _queue(lambda url: None, FakeClock())
    worker = queue.start()
    assert queue.start() is worker
    queue.close()
    assert queue.run_to_completion(timeout=5) is True
    assert not worker.is_alive()
