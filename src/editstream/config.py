"""Configuration constants and runtime settings.

Centralizes magic numbers and configuration values for the reconciler.
Values that need to change without code edits (endpoint, stall timeout)
are read from the environment by load_config().
"""

import os

from pydantic import BaseModel, ConfigDict, Field


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Endpoint configuration
DEFAULT_ENDPOINT = "http://localhost:3001/api/improve"
DEFAULT_REQUEST_TIMEOUT_S = 30.0  # Connect/read timeout for the HTTP transport

# Liveness
DEFAULT_STALL_TIMEOUT_MS = 2000  # No frame for this long raises a stall advisory

# Payloads containing this marker are fixture placeholders and never update state
TRUNCATION_MARKER = "(truncated for brevity)"

# Assistant brief
BRIEF_MAX_LENGTH = 120  # Characters before truncating the brief
BRIEF_ELLIPSIS = "…"

# Replay transport
REPLAY_CHUNK_SIZE = 64  # Bytes per simulated network read

# Advisory messages surfaced to the caller
STALL_ADVISORY = "Connection is slow. If nothing appears, check the server."
FAILURE_ADVISORY = "Request failed. Make sure the server is running and reachable."

# Environment variable names
ENV_URL = "EDITSTREAM_URL"
ENV_STALL_TIMEOUT_MS = "EDITSTREAM_STALL_TIMEOUT_MS"
ENV_REQUEST_TIMEOUT = "EDITSTREAM_REQUEST_TIMEOUT"


class ReconcilerConfig(BaseModel):
    """Runtime settings for a reconciliation session."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(default=DEFAULT_ENDPOINT, description="Event stream endpoint")
    stall_timeout_ms: int = Field(
        default=DEFAULT_STALL_TIMEOUT_MS,
        gt=0,
        description="Milliseconds without a frame before the stall advisory fires"
    )
    request_timeout_s: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_S,
        gt=0,
        description="HTTP timeout in seconds"
    )
    brief_max_length: int = Field(default=BRIEF_MAX_LENGTH, ge=1)

    @property
    def stall_timeout_s(self) -> float:
        """Stall timeout in seconds, as asyncio timers expect."""
        return self.stall_timeout_ms / 1000


def load_config(**overrides) -> ReconcilerConfig:
    """Build a ReconcilerConfig from environment variables.

    Args:
        **overrides: Explicit values that win over the environment
            (None values are ignored)

    Returns:
        ReconcilerConfig instance

    Environment variables:
        EDITSTREAM_URL: Event stream endpoint (default: DEFAULT_ENDPOINT)
        EDITSTREAM_STALL_TIMEOUT_MS: Stall timeout in ms (default: 2000)
        EDITSTREAM_REQUEST_TIMEOUT: HTTP timeout in seconds (default: 30)
    """
    values = {
        "url": os.getenv(ENV_URL, DEFAULT_ENDPOINT),
        "stall_timeout_ms": int(os.getenv(ENV_STALL_TIMEOUT_MS, str(DEFAULT_STALL_TIMEOUT_MS))),
        "request_timeout_s": float(os.getenv(ENV_REQUEST_TIMEOUT, str(DEFAULT_REQUEST_TIMEOUT_S))),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ReconcilerConfig(**values)
