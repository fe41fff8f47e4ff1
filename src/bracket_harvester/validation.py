"""Validation and runtime guardrails."""

from __future__ import annotations

import re
from pathlib import Path

from .errors import ConfigError, InputError

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def add_protocol(url: str) -> str:
    """Prefix https:// when the URL carries no http(s) scheme."""
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def read_input_file(path: str) -> str:
    """Read a whole UTF-8 text file or raise InputError."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Failed to read input file: {path} ({exc})") from exc


def validate_runtime_constraints(
    *,
    request_interval: float,
    retry_delay: float,
    request_timeout: float,
    chunk_size: int,
) -> None:
    """Validate CLI/runtime configuration and raise ConfigError on invalid values."""
    if request_interval < 0:
        raise ConfigError("--interval must be >= 0.")
    if retry_delay < 0:
        raise ConfigError("--retry-delay must be >= 0.")
    if request_timeout <= 0:
        raise ConfigError("--timeout must be > 0.")
    if chunk_size < 1:
        raise ConfigError("--chunk-size must be >= 1.")
