"""Protocols and lightweight model types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class PageResponse:
    """Status and body of one completed GET."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class FetchTask:
    """One deduplicated URL waiting in the fetch queue."""

    url: str


@dataclass(frozen=True)
class ResultRecord:
    """Output for one successfully fetched URL."""

    url: str
    title: str | None = None
    email: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return the record with absent fields left out."""
        output = {"url": self.url}
        if self.title:
            output["title"] = self.title
        if self.email:
            output["email"] = self.email
        return output


class HttpFetcher(Protocol):
    """Contract for HTTP GET collaborators."""

    def get(self, url: str) -> PageResponse:
        """Return the response for a URL or raise FetchError on transport failure."""


class RecordSink(Protocol):
    """Contract for result outputs."""

    def write(self, record: ResultRecord) -> None:
        """Emit one result record."""
