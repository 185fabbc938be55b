"""
CLI entry point for honoka.
"""

# Standard library imports
import logging
from pathlib import Path
from typing import Optional

# Third-party imports
import click
import typer
from rich.console import Console
from rich.markup import escape

# Local application imports
from honoka.cli._review_logic import review_next
from honoka.config import get_settings
from honoka.db.database import CardStore
from honoka.exceptions import DuplicateKeyError, StoreError
from honoka.listing import list_due


console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="honoka",
    help="honoka: a minimal spaced repetition flashcard tool. "
    "Run without a command to review the next due card.",
    add_completion=False,
    rich_markup_mode="markdown",
)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


_db_option = typer.Option(  # noqa: B008
    None,
    "--db",
    help="Path to the DuckDB database file. "
    "Falls back to HONOKA_DB_PATH, then ~/.local/share/honoka/data.db.",
    envvar="HONOKA_DB_PATH",
)


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.CRITICAL)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _fail(message: str, e: Exception) -> None:
    """Print one error line on stderr and exit with status 1."""
    err_console.print(f"[bold red]{message}[/bold red] {escape(str(e))}")
    raise typer.Exit(code=1) from e


def _run_review(db_path: Path) -> None:
    try:
        review_next(db_path=db_path)
    except StoreError as e:
        _fail("A database error occurred:", e)


# ---------------------------------------------------------------------------
# Root callback: global options and the default review
# ---------------------------------------------------------------------------


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    db: Optional[Path] = _db_option,
):
    """
    Resolve the database path and, when no command is given, review the next due card.
    """
    settings = get_settings()
    _configure_logging(settings.log_level)
    ctx.obj = db if db is not None else settings.db_path
    if ctx.invoked_subcommand is None:
        _run_review(ctx.obj)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def review(ctx: typer.Context):
    """Review the next due card (same as running without a command)."""
    _run_review(ctx.obj)


@app.command()
def add(
    ctx: typer.Context,
    front: str = typer.Argument(..., help="Prompt text; must be unique."),  # noqa: B008
    back: str = typer.Argument(..., help="Answer text."),  # noqa: B008
):
    """Add a new card. It is due for review immediately."""
    try:
        with CardStore(db_path=ctx.obj) as store:
            store.insert(front, back)
    except DuplicateKeyError as e:
        _fail("Error:", e)
    except StoreError as e:
        _fail("A database error occurred:", e)
    console.print(f"[green]Added[/green] {escape(front)}")


@app.command("list")
def list_cards(ctx: typer.Context):
    """Print the front of every card that is due, one per line."""
    try:
        with CardStore(db_path=ctx.obj) as store:
            fronts = list_due(store)
    except StoreError as e:
        _fail("A database error occurred:", e)
    for front in fronts:
        console.print(front, markup=False, highlight=False, soft_wrap=True)


@app.command()
def remove(
    ctx: typer.Context,
    front: str = typer.Argument(..., help="Front of the card to remove."),  # noqa: B008
):
    """Remove a card. Removing a card that does not exist is not an error."""
    try:
        with CardStore(db_path=ctx.obj) as store:
            existed = store.select_one(front) is not None
            store.delete(front)
    except StoreError as e:
        _fail("A database error occurred:", e)
    if existed:
        console.print(f"[green]Removed[/green] {escape(front)}")
    else:
        console.print(f"[yellow]No card with front[/yellow] {escape(front)}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application.

    Malformed invocations (missing or extra arguments, unknown commands) and
    any unexpected exception exit with status 1.
    """
    try:
        result = app(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        raise SystemExit(1)
    except click.exceptions.Abort:
        err_console.print("[bold red]Aborted.[/bold red]")
        raise SystemExit(1)
    except Exception as e:
        err_console.print(f"[bold red]UNEXPECTED ERROR: {escape(str(e))}[/bold red]")
        raise SystemExit(1)
    raise SystemExit(result if isinstance(result, int) else 0)


if __name__ == "__main__":
    main()
