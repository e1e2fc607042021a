"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import REPLAY_CHUNK_SIZE, ReconcilerConfig
from ..session import Advisory, ChatClient, ReconciliationSession
from ..transport import StreamTransport, TransportError
from .providers import get_config, get_http_transport, get_log_callback, get_replay_transport

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="editstream",
    help="Stream assistant replies and reconcile their edit proposals",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _print_advisory(advisory: Advisory) -> None:
    console.print(f"[yellow]{escape(advisory.message)}[/yellow]")


def _print_session(session: ReconciliationSession, show_text: bool = False) -> None:
    """Render the brief, optional full text and the proposals table."""
    if session.brief:
        console.print(f"[bold green]Assistant:[/bold green] {escape(session.brief)}\n")

    if show_text and session.assistant_text:
        console.print(Panel(escape(session.assistant_text), title="Assistant text"))

    if not len(session.proposals):
        console.print("[dim]No edit proposals[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="cyan")
    table.add_column("Original")
    table.add_column("Suggested", style="green")
    table.add_column("Accepted", width=8)

    for proposal in session.proposals:
        table.add_row(
            escape(proposal.id),
            escape(proposal.original_text),
            escape(proposal.suggested_text),
            "yes" if proposal.accepted else "no",
        )

    console.print(table)


async def _run_prompt(
    transport: StreamTransport,
    prompt: str,
    config: ReconcilerConfig,
    log_level: str,
    show_text: bool
) -> ReconciliationSession:
    client = ChatClient(transport, config=config, on_advisory=_print_advisory)
    client.set_debug_callback(get_log_callback(log_level, console))
    try:
        session = await client.ask(prompt)
        _print_session(session, show_text=show_text)
        return session
    finally:
        await client.close()


@app.command()
def stream(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Event stream endpoint (default: $EDITSTREAM_URL)"
    ),
    stall_ms: int | None = typer.Option(
        None,
        "--stall-ms",
        help="Stall advisory timeout in milliseconds"
    ),
    show_text: bool = typer.Option(
        False,
        "--text",
        "-t",
        help="Show the full assistant text"
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Minimum log level: debug, info, warning, error"
    )
):
    """Send a prompt to the server and reconcile the streamed edit proposals."""
    config = get_config(url=url, stall_ms=stall_ms)

    async def _stream():
        transport = get_http_transport(config)
        console.print(f"[dim]Streaming from {config.url}[/dim]")
        try:
            await _run_prompt(transport, prompt, config, log_level, show_text)
        except TransportError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)

    asyncio.run(_stream())


@app.command()
def replay(
    file: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Recorded event stream to replay"
    ),
    prompt: str = typer.Option(
        "replay",
        "--prompt",
        "-p",
        help="Prompt recorded in the transcript"
    ),
    chunk_size: int = typer.Option(
        REPLAY_CHUNK_SIZE,
        "--chunk-size",
        "-c",
        min=1,
        help="Bytes per simulated network read"
    ),
    delay: float = typer.Option(
        0.0,
        "--delay",
        "-d",
        min=0.0,
        help="Seconds between simulated reads"
    ),
    stall_ms: int | None = typer.Option(
        None,
        "--stall-ms",
        help="Stall advisory timeout in milliseconds"
    ),
    show_text: bool = typer.Option(
        False,
        "--text",
        "-t",
        help="Show the full assistant text"
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Minimum log level: debug, info, warning, error"
    )
):
    """Replay a recorded event stream offline."""
    config = get_config(stall_ms=stall_ms)

    async def _replay():
        transport = get_replay_transport(file, chunk_size, delay)
        try:
            await _run_prompt(transport, prompt, config, log_level, show_text)
        except TransportError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)

    asyncio.run(_replay())


@app.command()
def chat(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Event stream endpoint (default: $EDITSTREAM_URL)"
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Minimum log level: debug, info, warning, error"
    )
):
    """Interactive chat; review proposals with /accept ID and /reject ID."""
    config = get_config(url=url)

    async def _chat():
        client = ChatClient(get_http_transport(config), config=config, on_advisory=_print_advisory)
        client.set_debug_callback(get_log_callback(log_level, console))

        console.print("[bold cyan]Editstream Interactive Chat[/bold cyan]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ").strip()

                    if not user_input:
                        continue

                    if user_input.lower() in ('exit', 'quit', 'q'):
                        console.print("[dim]Goodbye![/dim]")
                        break

                    command, _, argument = user_input.partition(" ")
                    if command in ("/accept", "/reject"):
                        if client.session is None:
                            console.print("[yellow]No proposals yet[/yellow]")
                            continue
                        if command == "/accept":
                            client.accept(argument.strip())
                        else:
                            client.reject(argument.strip())
                        _print_session(client.session)
                        continue

                    try:
                        await client.ask(user_input)
                    except TransportError as e:
                        console.print(f"[red]Error: {escape(str(e))}[/red]")
                        continue
                    _print_session(client.session)

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
        finally:
            await client.close()

    asyncio.run(_chat())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
