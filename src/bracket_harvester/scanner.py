"""Bracket-aware URL discovery.

Only text inside outermost ``[...]`` groups is considered. Nested groups are
flattened into their outermost group, a backslash makes the following bracket
literal, and each closed group yields at most one URL: the last URL-like token
inside it.
"""

from __future__ import annotations

import re

URL_TOKEN_REGEX = re.compile(r"(?:https?://|www\.)[^\s\[\]]+", re.IGNORECASE)

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
ESCAPE = "\\"


def last_url_token(text: str) -> str | None:
    """Return the last URL-like token in text, if any."""
    matches = URL_TOKEN_REGEX.findall(text)
    return matches[-1] if matches else None


class BracketScanner:
    """Incremental scanner fed by successive text chunks.

    State survives between ``feed`` calls, so a group opened in one chunk can
    close in a later one. Closed groups are never scanned twice.
    """

    def __init__(self) -> None:
        self._depth = 0
        self._buffer: list[str] = []
        self._escaped = False

    @property
    def depth(self) -> int:
        return self._depth

    def reset(self) -> None:
        self._depth = 0
        self._buffer = []
        self._escaped = False

    def feed(self, chunk: str) -> list[str]:
        """Consume a chunk and return URLs of the groups it closed, in order."""
        found: list[str] = []
        for char in chunk:
            escaped = self._escaped
            self._escaped = char == ESCAPE and not escaped

            if char == OPEN_BRACKET and not escaped:
                self._depth += 1
                if self._depth == 1:
                    self._buffer = []
            elif char == CLOSE_BRACKET and not escaped:
                if self._depth == 0:
                    continue
                self._depth -= 1
                if self._depth == 0:
                    url = last_url_token("".join(self._buffer))
                    self._buffer = []
                    if url:
                        found.append(url)
            elif self._depth >= 1:
                self._buffer.append(char)
        return found


def parse_urls(text: str) -> list[str]:
    """Scan a complete text and return one URL per qualifying group."""
    return BracketScanner().feed(text)
