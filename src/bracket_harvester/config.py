"""Runtime configuration model."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .validation import validate_runtime_constraints

SECRET_ENV_VAR = "IM_SECRET"
DEFAULT_USER_AGENT = "BracketHarvester/1.0"
DEFAULT_REQUEST_INTERVAL = 1.0
DEFAULT_RETRY_DELAY = 60.0
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_CHUNK_SIZE = 4096


def load_secret(env_file: str | None = None) -> str | None:
    """Return the fingerprinting secret from the environment or a .env file.

    Variables already set in the environment win over the .env file. An empty
    value counts as unset.
    """
    load_dotenv(env_file, override=False)
    return os.getenv(SECRET_ENV_VAR) or None


@dataclass(frozen=True)
class ScanConfig:
    """Validated configuration used by the harvesting pipeline."""

    secret: str | None = field(default=None, repr=False)
    output: str = "-"
    request_interval: float = DEFAULT_REQUEST_INTERVAL
    retry_delay: float = DEFAULT_RETRY_DELAY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    user_agent: str = DEFAULT_USER_AGENT
    show_progress: bool = False

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            request_interval=self.request_interval,
            retry_delay=self.retry_delay,
            request_timeout=self.request_timeout,
            chunk_size=self.chunk_size,
        )
