"""Fetch one URL, extract its title and email, and report the result."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .config import DEFAULT_RETRY_DELAY
from .errors import FetchError
from .extraction import extract_first_email, extract_title, fingerprint_email
from .models import HttpFetcher, PageResponse, RecordSink, ResultRecord
from .validation import add_protocol

SleepFn = Callable[[float], None]


class PageProcessor:
    """Fetch-and-report step run by the fetch queue for each URL.

    A failed GET (transport error or non-2xx status) is retried once after
    ``retry_delay`` seconds. A second failure is logged and the URL skipped;
    nothing here raises for fetch problems.
    """

    def __init__(
        self,
        *,
        fetcher: HttpFetcher,
        sink: RecordSink,
        logger: logging.Logger,
        secret: str | None = None,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep_fn: SleepFn = time.sleep,
    ) -> None:
        self._fetcher = fetcher
        self._sink = sink
        self._logger = logger
        self._secret = secret
        self._retry_delay = retry_delay
        self._sleep = sleep_fn

    def _attempt(self, target: str) -> PageResponse:
        response = self._fetcher.get(target)
        if not response.ok:
            raise FetchError(f"Status {response.status_code}")
        return response

    def fetch_with_retry(self, url: str) -> PageResponse | None:
        """Return a successful response, or None after two failed attempts."""
        target = add_protocol(url)
        try:
            return self._attempt(target)
        except FetchError as exc:
            self._logger.debug(
                "Fetch failed for %s (%s); retrying in %.0fs", url, exc, self._retry_delay
            )

        self._sleep(self._retry_delay)
        try:
            return self._attempt(target)
        except FetchError as exc:
            self._logger.error("Failed to fetch %s: %s", url, exc)
            return None

    def build_record(self, url: str, html: str) -> ResultRecord:
        title = extract_title(html)
        email = extract_first_email(html)
        fingerprint = None
        if email and self._secret:
            fingerprint = fingerprint_email(email, self._secret)
        return ResultRecord(url=url, title=title, email=fingerprint)

    def process(self, url: str) -> ResultRecord | None:
        response = self.fetch_with_retry(url)
        if response is None:
            return None
        record = self.build_record(url, response.text)
        self._sink.write(record)
        return record
