"""workspace-vault CLI - Inspect workspace encryption bootstrap."""

import asyncio
import json
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="workspace-vault",
    help="Check whether workspace encryption can be activated.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (default: LOG_LEVEL env or WARNING)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file",
    ),
):
    """Configure logging before running a command."""
    from ..utils.logging import setup_logging

    setup_logging(
        level=log_level or os.getenv("LOG_LEVEL", "WARNING"),
        log_file=log_file,
    )


@app.command()
def status(
    workspace_dir: Path = typer.Argument(..., help="Workspace root directory"),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the bootstrap result as JSON",
    ),
):
    """
    Run the encryption bootstrap for a workspace and report the outcome.

    Keys are cleared again before exit.
    """
    from ..encryption import EncryptionBootstrapper, EncryptionError

    bootstrapper = EncryptionBootstrapper()
    try:
        result = asyncio.run(bootstrapper.bootstrap(workspace_dir))
    except EncryptionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        bootstrapper.shutdown()

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    table = Table(title=f"Encryption: {workspace_dir}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("State", result.state.value)
    table.add_row("Enabled", "yes" if result.enabled else "no")
    table.add_row("Keys loaded", "yes" if result.keys_loaded else "no")
    console.print(table)

    if result.error:
        console.print(f"[yellow]{result.error}[/yellow]", soft_wrap=True)


@app.command()
def version():
    """Show version information."""
    from .. import __version__

    console.print(f"workspace-vault v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
