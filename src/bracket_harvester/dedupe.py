"""Run-scoped URL de-duplication."""

from __future__ import annotations

from threading import Lock


class SeenUrls:
    """Set of URLs already admitted during this run."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._lock = Lock()

    def admit(self, url: str) -> bool:
        """Record url and return True on first sight, False afterwards."""
        with self._lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
