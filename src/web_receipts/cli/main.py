"""CLI application for web-receipts."""

import json
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from web_receipts import __version__
from web_receipts.core.config import Config
from web_receipts.protocols.registry import ProtocolRegistry
from web_receipts.workflows import ExportWorkflow

app = typer.Typer(
    name="web-receipts",
    help="web-receipts - Save browser tabs as PDF receipts",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
err_console = Console(stderr=True)


def get_config() -> Config:
    """Load and validate configuration from the environment."""
    try:
        config = Config.from_env()
        config.validate()
        return config
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    if value:
        console.print(f"web-receipts {__version__}", highlight=False)
        raise typer.Exit()


def print_protocols(registry: ProtocolRegistry) -> None:
    """Print the registered export protocols."""
    table = Table(title="Export Protocols")
    table.add_column("Protocol", style="cyan")
    table.add_column("Browser", style="white")
    table.add_column("macOS", style="green")
    table.add_column("Steps", justify="right")
    table.add_column("Names file", justify="center")

    for protocol in registry:
        table.add_row(
            protocol.name,
            protocol.browser.label,
            protocol.os_range,
            str(len(protocol.steps)),
            "yes" if protocol.names_file else "no",
        )

    console.print(table)


@app.command()
def save(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version number",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log each automation step"),
    list_protocols: bool = typer.Option(
        False, "--list-protocols", help="Show export protocols and exit"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output the result as JSON"),
) -> None:
    """Save the current tab of the frontmost browser (Safari or Chrome) as a
    PDF in ~/Documents/Web Receipts/.

    The filename is derived from the tab title. Duplicate filenames are
    handled by appending .2, .3, etc.

    Safari requires a "Save to Web Receipts" PDF workflow in the system.
    The workflow chooses its own folder, so if WEB_RECEIPTS_DESTINATION is
    changed the workflow must save there too.
    Bind to a hotkey using Automator, Shortcuts, Alfred, or similar.
    """
    config = get_config()
    configure_logging("DEBUG" if verbose else config.log_level)

    if list_protocols:
        print_protocols(ProtocolRegistry.default())
        return

    workflow = ExportWorkflow(config)
    outcome = workflow.run()

    if json_output:
        console.print(
            json.dumps(outcome.to_dict(), indent=2, default=str),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    elif outcome.is_success:
        console.print(outcome.summary, markup=False, highlight=False, soft_wrap=True)

    if not outcome.is_success:
        err_console.print(f"[red]Error:[/red] {escape(outcome.message)}", soft_wrap=True)
        raise typer.Exit(1)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
