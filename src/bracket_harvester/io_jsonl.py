"""JSON lines serialization helpers."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from .models import ResultRecord

STDOUT_PATH = "-"


class JsonLinesWriter:
    """Write one JSON object per line and flush after each record."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, record: ResultRecord) -> None:
        self._stream.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
        self._stream.flush()


@contextmanager
def open_output(path: str) -> Iterator[JsonLinesWriter]:
    """Yield a writer for path; ``-`` writes to stdout."""
    if path == STDOUT_PATH:
        yield JsonLinesWriter(sys.stdout)
        return
    with Path(path).open("w", encoding="utf-8") as file_obj:
        yield JsonLinesWriter(file_obj)
