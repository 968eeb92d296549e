"""CLI interface for Mastermind."""

import json
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt

from ....composition import container
from ....config import settings
from ....config.logging import setup_logging
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="mastermind",
    help="Mastermind - ask questions about your notes vault",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

GREETING = "Greetings. I am Mastermind. How can I assist you with your knowledge vault today?"


def handle_cli_error(exc: Exception) -> None:
    """Display an error in the CLI.

    In debug mode, shows full JSON error details. Otherwise shows a short
    message with the error code.
    """
    error_data = format_exception_json(exc, include_trace=settings.debug)

    if settings.debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error_msg = error_data["error"]["message"]
    error_code = error_data["error"].get("code", "UNKNOWN")
    console.print(f"[red]Error [{error_code}]:[/] {error_msg}")
    console.print("[dim]Set DEBUG=true for full details[/]")


@app.callback()
def main(
    vault: Path | None = typer.Option(None, "--vault", help="Vault directory (overrides VAULT_DIR)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging and the vault location."""
    if vault is not None:
        settings.vault_dir = vault
        container.reset_container()
    setup_logging(
        "DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )


def _print_answer(response) -> None:
    console.print(Panel(Markdown(response.text), title="[bold magenta]Mastermind[/]", border_style="magenta"))
    if response.sources:
        console.print("[dim]Context notes:[/]")
        for source in response.sources:
            console.print(f"  [dim]{source}[/]")
    for call in response.tool_calls:
        marker = "[red]x[/]" if call.failed else "[green]>[/]"
        console.print(f"  {marker} [dim]{call.name}({', '.join(f'{k}={v!r}' for k, v in call.arguments.items())})[/]")


def _ask_cancellable(service, query: str, active: str | None):
    """Run a question on a worker thread so Ctrl+C can cancel it.

    On interrupt the cancel event is set, which stops context assembly, and
    the interrupt is re-raised.
    """
    cancel_event = threading.Event()
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mastermind-ask")
    try:
        future = pool.submit(service.ask, query, active_path=active, cancel_event=cancel_event)
        while not future.done():
            wait([future], timeout=0.1)
        return future.result()
    except KeyboardInterrupt:
        cancel_event.set()
        raise
    finally:
        pool.shutdown(wait=False)


@app.command()
def chat(
    active: str | None = typer.Option(None, "--active", "-a", help="Vault path of the note you have open"),
) -> None:
    """Start an interactive chat session."""
    console.print(
        Panel.fit(
            f"[bold magenta]Mastermind[/]\n{GREETING}\n\n"
            "[dim]Ctrl+C cancels a running question. Type 'quit' or 'exit' to leave[/]",
            border_style="magenta",
        )
    )

    try:
        service = container.get_chat_service()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    while True:
        try:
            query = Prompt.ask("\n[bold cyan]You[/]")
        except (KeyboardInterrupt, EOFError):
            console.print("\n[dim]Goodbye.[/]")
            break

        if query.lower() in ("quit", "exit", "q"):
            console.print("[dim]Goodbye.[/]")
            break
        if not query.strip():
            continue

        try:
            with console.status("[bold green]Thinking...[/]"):
                response = _ask_cancellable(service, query, active)
        except KeyboardInterrupt:
            console.print("[yellow]Cancelled.[/]")
            continue
        except Exception as exc:
            handle_cli_error(exc)
            continue

        console.print()
        _print_answer(response)


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about your notes"),
    active: str | None = typer.Option(None, "--active", "-a", help="Vault path of the note you have open"),
) -> None:
    """Ask a single question and get an answer."""
    try:
        service = container.get_chat_service()
        with console.status("[bold green]Thinking...[/]"):
            response = _ask_cancellable(service, question, active)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    _print_answer(response)


@app.command()
def context(
    query: str = typer.Argument("", help="Query to rank notes against"),
    active: str | None = typer.Option(None, "--active", "-a", help="Vault path of the note you have open"),
) -> None:
    """Print the context that would be sent with a question."""
    try:
        service = container.get_chat_service()
        text, _ = service.build_context(query, active_path=active)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    typer.echo(text.rstrip("\n"))


@app.command("list")
def list_notes() -> None:
    """List every note in the vault."""
    try:
        paths = container.get_retrieval_service().list_documents()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    for path in paths:
        typer.echo(path)


@app.command()
def search(query: str = typer.Argument(..., help="Text to search for")) -> None:
    """Search note paths and content (max 20 results)."""
    try:
        results = container.get_retrieval_service().search_documents(query)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not results:
        console.print("[yellow]No matching notes.[/]")
        return
    for path in results:
        typer.echo(path)


@app.command()
def read(path: str = typer.Argument(..., help="Vault path of the note")) -> None:
    """Print a note's content."""
    try:
        content = container.get_retrieval_service().get_document_content(path)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    typer.echo(content)


@app.command()
def create(
    path: str = typer.Argument(..., help="Vault path; '.md' is appended when missing"),
    content: str = typer.Option("", "--content", "-c", help="Note content ('-' reads stdin)"),
) -> None:
    """Create a new note. Never overwrites an existing one."""
    if content == "-":
        content = typer.get_text_stream("stdin").read()
    try:
        created = container.get_retrieval_service().create_document(path, content)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(f"[green]Created[/] {created}")


@app.command()
def status() -> None:
    """Show configuration and vault status."""
    console.print("[bold]Mastermind Status[/]\n")

    if settings.google_api_key:
        console.print(f"[green]ok[/]  Google API key configured (model: {settings.llm_model})")
    else:
        console.print("[red]--[/]  Google API key not set (set GOOGLE_API_KEY in .env)")

    console.print(f"[dim]Vault:[/] {settings.vault_dir}")
    if settings.active_note:
        console.print(f"[dim]Active note:[/] {settings.active_note}")

    try:
        count = len(container.get_retrieval_service().list_documents())
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if count == 0:
        console.print("\n[yellow]Vault is empty or missing.[/]")
    else:
        console.print(f"\n[green]{count} notes[/]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("mastermind.adapters.inbound.api.main:app", host=host, port=port, log_level="info")


if __name__ == "__main__":
    app()
