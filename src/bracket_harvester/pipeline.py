"""Core orchestration pipeline."""

from __future__ import annotations

import codecs
import io
import logging
import time
from collections.abc import Callable, Iterable

from .config import ScanConfig
from .dedupe import SeenUrls
from .errors import InputError
from .fetch_queue import FetchQueue
from .fetchers import RequestsFetcher, make_session
from .io_jsonl import open_output
from .models import HttpFetcher, RecordSink
from .processor import PageProcessor
from .scanner import BracketScanner, parse_urls
from .validation import read_input_file

SleepFn = Callable[[float], None]


def schedule_urls(urls: Iterable[str], *, seen: SeenUrls, queue: FetchQueue) -> list[str]:
    """Admit first-seen URLs and enqueue them together, in emission order."""
    admitted = [url for url in urls if seen.admit(url)]
    queue.enqueue_many(admitted)
    return admitted


def consume_stream(
    stream: io.BufferedIOBase,
    *,
    scanner: BracketScanner,
    seen: SeenUrls,
    queue: FetchQueue,
    chunk_size: int,
    logger: logging.Logger,
) -> int:
    """Feed a byte stream to the scanner chunk by chunk until end of input.

    Returns the number of URLs scheduled. Invalid UTF-8 is replaced rather than
    rejected; read errors raise InputError.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    scheduled = 0
    while True:
        try:
            raw = stream.read1(chunk_size)
        except OSError as exc:
            raise InputError(f"Failed to read input stream ({exc})") from exc
        final = not raw
        text = decoder.decode(raw, final=final)
        if text:
            admitted = schedule_urls(scanner.feed(text), seen=seen, queue=queue)
            for url in admitted:
                logger.debug("Queued %s", url)
            scheduled += len(admitted)
        if final:
            return scheduled


def _build_queue(
    config: ScanConfig,
    *,
    fetcher: HttpFetcher,
    sink: RecordSink,
    sleep_fn: SleepFn,
    logger: logging.Logger,
) -> FetchQueue:
    processor = PageProcessor(
        fetcher=fetcher,
        sink=sink,
        logger=logger,
        secret=config.secret,
        retry_delay=config.retry_delay,
        sleep_fn=sleep_fn,
    )
    return FetchQueue(
        processor.process,
        logger=logger,
        interval=config.request_interval,
        sleep_fn=sleep_fn,
        show_progress=config.show_progress,
    )


def harvest_text(
    text: str,
    config: ScanConfig,
    *,
    fetcher: HttpFetcher,
    sink: RecordSink,
    logger: logging.Logger,
    sleep_fn: SleepFn = time.sleep,
) -> FetchQueue:
    """File mode: scan the whole text, then drain the queue."""
    queue = _build_queue(config, fetcher=fetcher, sink=sink, sleep_fn=sleep_fn, logger=logger)
    admitted = schedule_urls(parse_urls(text), seen=SeenUrls(), queue=queue)
    logger.info("Total URLs to fetch: %d", len(admitted))
    queue.close()
    queue.run_to_completion()
    return queue


def harvest_stream(
    stream: io.BufferedIOBase,
    config: ScanConfig,
    *,
    fetcher: HttpFetcher,
    sink: RecordSink,
    logger: logging.Logger,
    sleep_fn: SleepFn = time.sleep,
) -> FetchQueue:
    """Stream mode: fetch while input is still arriving, drain after it ends."""
    queue = _build_queue(config, fetcher=fetcher, sink=sink, sleep_fn=sleep_fn, logger=logger)
    queue.start()
    try:
        scheduled = consume_stream(
            stream,
            scanner=BracketScanner(),
            seen=SeenUrls(),
            queue=queue,
            chunk_size=config.chunk_size,
            logger=logger,
        )
    finally:
        queue.close()
    logger.info("Input ended after %d URLs; draining queue.", scheduled)
    queue.run_to_completion()
    return queue


def run_pipeline(
    config: ScanConfig,
    *,
    source: str | None,
    stdin: io.BufferedIOBase,
    logger: logging.Logger,
) -> None:
    """Build concrete dependencies and run file or stream mode."""
    text = read_input_file(source) if source is not None else None
    session = make_session(config.user_agent)
    fetcher = RequestsFetcher(session=session, timeout=config.request_timeout, logger=logger)
    try:
        with open_output(config.output) as sink:
            if text is not None:
                harvest_text(text, config, fetcher=fetcher, sink=sink, logger=logger)
            else:
                harvest_stream(stdin, config, fetcher=fetcher, sink=sink, logger=logger)
    finally:
        session.close()
