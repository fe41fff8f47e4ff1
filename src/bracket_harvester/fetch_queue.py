"""Single-worker, rate-limited FIFO of fetch tasks."""

from __future__ import annotations

import enum
import logging
import time
from collections import deque
from collections.abc import Callable, Iterable
from threading import Condition, Thread

from tqdm import tqdm

from .config import DEFAULT_REQUEST_INTERVAL
from .errors import QueueClosedError
from .models import FetchTask

TaskHandler = Callable[[str], object]
SleepFn = Callable[[float], None]


class QueueState(enum.Enum):
    IDLE = "idle"
    DRAINING = "draining"
    DRAINED = "drained"


class FetchQueue:
    """Serialize all network work behind one worker thread.

    After every task, whatever its outcome, the worker sleeps ``interval``
    seconds before taking the next one, so two fetch cycles never start closer
    than that. Producers call ``enqueue`` from any thread without blocking.
    The queue is drained once ``close`` was called, the FIFO is empty and no
    task is in flight.
    """

    def __init__(
        self,
        handler: TaskHandler,
        *,
        logger: logging.Logger,
        interval: float = DEFAULT_REQUEST_INTERVAL,
        sleep_fn: SleepFn = time.sleep,
        show_progress: bool = False,
    ) -> None:
        self._handler = handler
        self._logger = logger
        self._interval = interval
        self._sleep = sleep_fn
        self._show_progress = show_progress
        self._tasks: deque[FetchTask] = deque()
        self._cond = Condition()
        self._closed = False
        self._state = QueueState.IDLE
        self._completed = 0
        self._thread: Thread | None = None

    @property
    def state(self) -> QueueState:
        with self._cond:
            return self._state

    @property
    def completed(self) -> int:
        with self._cond:
            return self._completed

    def __len__(self) -> int:
        with self._cond:
            return len(self._tasks)

    def enqueue(self, url: str) -> None:
        self.enqueue_many([url])

    def enqueue_many(self, urls: Iterable[str]) -> None:
        """Append urls in order under one lock so they are queued together."""
        tasks = [FetchTask(url=url) for url in urls]
        if not tasks:
            return
        with self._cond:
            if self._closed:
                raise QueueClosedError("Cannot enqueue after the input source was closed.")
            self._tasks.extend(tasks)
            self._cond.notify()

    def close(self) -> None:
        """Signal that no more input will arrive; queued work still runs."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def start(self) -> Thread:
        """Launch the worker thread once and return it."""
        with self._cond:
            if self._thread is None:
                self._thread = Thread(target=self._run, name="fetch-queue", daemon=True)
                self._thread.start()
            return self._thread

    def run_to_completion(self, timeout: float | None = None) -> bool:
        """Start the worker if needed and wait for it; True once drained."""
        self.start().join(timeout)
        return self.state is QueueState.DRAINED

    def _next_task(self) -> FetchTask | None:
        with self._cond:
            self._state = QueueState.IDLE
            while not self._tasks and not self._closed:
                self._cond.wait()
            if not self._tasks:
                self._state = QueueState.DRAINED
                self._cond.notify_all()
                return None
            self._state = QueueState.DRAINING
            return self._tasks.popleft()

    def _run(self) -> None:
        with tqdm(
            total=0, desc="fetching", unit="url", disable=not self._show_progress
        ) as progress:
            while True:
                task = self._next_task()
                if task is None:
                    return
                progress.total = self.completed + len(self) + 1
                progress.refresh()
                try:
                    self._handler(task.url)
                except Exception:
                    self._logger.exception("Unexpected error while processing %s", task.url)
                with self._cond:
                    self._completed += 1
                progress.update(1)
                self._sleep(self._interval)
