"""
CLI interface for Movie Budget AI.

Provides a terminal chat with the budgeting assistant plus template and
endpoint helpers.
"""

import logging
import sys
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from movie_budget.config.loader import AppConfig, default_app_config, load_app_config
from movie_budget.core.analysis import format_signed, render_report
from movie_budget.core.dispatcher import BudgetSession, ChatDispatcher
from movie_budget.core.templates import TEMPLATE_CATALOG, format_amount, generate_template
from movie_budget.sdk.ollama_client import OllamaClient

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

EXIT_WORDS = {"exit", "quit"}
REPORT_COMMAND = "/report"
MODEL_COMMAND = "/model"


def _build_client(config: AppConfig) -> OllamaClient:
    return OllamaClient(
        base_url=config.generation.base_url,
        model=config.generation.model,
        timeout=config.generation.timeout,
    )


def _get_config(ctx: typer.Context) -> AppConfig:
    return ctx.obj["config"]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML configuration file"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging"
    )
):
    """Movie Budget AI CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_app_config(config_path) if config_path else default_app_config()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading configuration:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    ctx.obj = {"config": config}
    if ctx.invoked_subcommand is None:
        console.print("Movie Budget AI - Use --help to see available commands")


@app.command()
def chat(ctx: typer.Context):
    """Start an interactive chat with the budgeting assistant."""
    config = _get_config(ctx)
    session = BudgetSession.start()
    client = _build_client(config)
    dispatcher = ChatDispatcher(session, client)

    console.print(f"[bold]{config.project.name}[/bold] ({config.project.currency})")
    console.print(Markdown(session.messages[0].content))
    console.print(f"[dim]Type 'exit' to quit, '{REPORT_COMMAND}' for a budget report, '{MODEL_COMMAND} NAME' to switch models.[/]")

    while True:
        try:
            text = console.input("\n[bold cyan]You:[/] ")
        except (EOFError, KeyboardInterrupt):
            break
        if text.strip().lower() in EXIT_WORDS:
            break
        if _run_chat_command(text, session, client):
            continue

        with console.status("AI is thinking..."):
            reply = dispatcher.send(text)
        if reply is not None:
            console.print(Markdown(reply.content))
            _print_totals(session)

    sys.exit(EXIT_CODE_PASS)


@app.command()
def ask(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Message for the budgeting assistant")
):
    """Send a single message to a fresh session and print the reply."""
    config = _get_config(ctx)
    dispatcher = ChatDispatcher(BudgetSession.start(), _build_client(config))

    reply = dispatcher.send(message)
    if reply is None:
        console.print("[red]Error:[/] message cannot be empty")
        sys.exit(EXIT_CODE_FAIL)

    console.print(Markdown(reply.content))
    sys.exit(EXIT_CODE_PASS)


@app.command()
def template(
    project_type: str = typer.Argument(
        "feature-film",
        help=f"One of: {', '.join(TEMPLATE_CATALOG)}"
    )
):
    """Preview a budget template from the catalog."""
    selected = generate_template(project_type)

    table = Table(title=selected.name)
    table.add_column("Category")
    table.add_column("Subcategory")
    table.add_column("Description")
    table.add_column("Amount", justify="right")
    for item in selected.items:
        table.add_row(item.category, item.subcategory, item.description, f"${format_amount(item.amount)}")
    table.add_section()
    table.add_row("[bold]Total[/bold]", "", "", f"[bold]${format_amount(selected.total)}[/bold]")

    console.print(selected.description)
    console.print(table)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def models(ctx: typer.Context):
    """List models available on the generation endpoint."""
    client = _build_client(_get_config(ctx))
    names = client.list_models()
    if not names:
        console.print(f"[yellow]No models found at {client.base_url}[/]")
        sys.exit(EXIT_CODE_PASS)

    for name in names:
        marker = "[green]*[/] " if name == client.model else "  "
        console.print(f"{marker}{name}")
    sys.exit(EXIT_CODE_PASS)


@app.command()
def status(ctx: typer.Context):
    """Check whether the generation endpoint is reachable."""
    client = _build_client(_get_config(ctx))
    if client.is_available():
        console.print(f"[green]✓[/] Generation endpoint available at {client.base_url}")
        sys.exit(EXIT_CODE_PASS)

    console.print(f"[red]✗[/] Generation endpoint not reachable at {client.base_url}")
    console.print("[dim]Chat will use offline replies.[/]")
    sys.exit(EXIT_CODE_FAIL)


def _run_chat_command(text: str, session: BudgetSession, client: OllamaClient) -> bool:
    """Handle a slash command typed in the chat loop.

    Returns:
        True if the line was a command and must not reach the assistant
    """
    command, _, argument = text.strip().partition(" ")
    command = command.lower()

    if command == REPORT_COMMAND:
        console.print(Markdown(render_report(session.ledger.state)))
        return True

    if command == MODEL_COMMAND:
        try:
            client.set_model(argument.strip())
        except ValueError as e:
            console.print(f"[red]Error:[/] {str(e)}")
        else:
            console.print(f"[green]✓[/] Using model {client.model}")
        return True

    return False


def _print_totals(session: BudgetSession) -> None:
    """Show running ledger totals once items exist."""
    state = session.ledger.state
    if not state.items:
        return
    console.print(
        f"[dim]Budget ${format_amount(state.total_budget)} | "
        f"Spent ${format_amount(state.total_actual)} | "
        f"Variance {format_signed(state.total_variance)}[/]"
    )


if __name__ == "__main__":
    app()
