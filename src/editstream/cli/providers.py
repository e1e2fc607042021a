"""Provider factory functions for CLI.

Centralizes creation of configuration, transports and log sinks from
environment variables and command options. Hides configuration details from
command implementations.
"""

from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..config import LogLevel, ReconcilerConfig, load_config
from ..transport import StreamTransport, create_transport

# Default console for output
_console = Console()

_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}


def get_config(
    url: str | None = None,
    stall_ms: int | None = None
) -> ReconcilerConfig:
    """Create runtime configuration from environment variables.

    Args:
        url: Endpoint override (wins over EDITSTREAM_URL)
        stall_ms: Stall timeout override (wins over EDITSTREAM_STALL_TIMEOUT_MS)

    Returns:
        ReconcilerConfig instance

    Environment variables:
        EDITSTREAM_URL: Event stream endpoint (default: http://localhost:3001/api/improve)
        EDITSTREAM_STALL_TIMEOUT_MS: Stall timeout in milliseconds (default: 2000)
        EDITSTREAM_REQUEST_TIMEOUT: HTTP timeout in seconds (default: 30)
    """
    return load_config(url=url, stall_timeout_ms=stall_ms)


def get_http_transport(config: ReconcilerConfig) -> StreamTransport:
    """Create the HTTP transport for a configured endpoint."""
    return create_transport("http", url=config.url, timeout=config.request_timeout_s)


def get_replay_transport(
    path: Path,
    chunk_size: int,
    delay: float
) -> StreamTransport:
    """Create a replay transport for a recorded stream file."""
    return create_transport("replay", path=path, chunk_size=chunk_size, delay=delay)


def get_log_callback(
    level: str = "info",
    console: Console | None = None
) -> Callable[[str, str, str], None]:
    """Create a debug callback that prints to a Rich console.

    Args:
        level: Minimum level to show ('debug', 'info', 'warning', 'error')
        console: Optional Rich console for output

    Returns:
        Callable(level: str, component: str, message: str)
    """
    con = console or _console
    threshold = LogLevel.from_string(level)

    def _log(msg_level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(msg_level)
        if numeric < threshold:
            return
        style = _LEVEL_STYLES.get(numeric, "dim")
        con.print(f"[{style}]{LogLevel.name(numeric):<7}[/{style}] [bold]{component}[/bold]: {escape(message)}", highlight=False)

    return _log
