"""HTTP fetchers."""

from __future__ import annotations

import logging

from requests import Session
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from .errors import FetchError
from .models import PageResponse

MAX_REDIRECTS = 10


def make_session(user_agent: str) -> Session:
    """Create a requests session that follows up to MAX_REDIRECTS redirects but never retries.

    Retrying is owned by the page processor, which waits between attempts.
    """
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    session.max_redirects = MAX_REDIRECTS
    retry = Retry(connect=0, read=0, status=0, other=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class RequestsFetcher:
    """Requests-based GET collaborator."""

    def __init__(self, *, session: Session, timeout: float, logger: logging.Logger) -> None:
        self._session = session
        self._timeout = timeout
        self._logger = logger

    def get(self, url: str) -> PageResponse:
        try:
            response = self._session.get(url, timeout=self._timeout)
        except RequestException as exc:
            self._logger.debug("Request failed for %s: %s", url, exc)
            raise FetchError(str(exc)) from exc
        self._logger.debug("GET %s -> %d", url, response.status_code)
        return PageResponse(status_code=response.status_code, text=str(response.text))
