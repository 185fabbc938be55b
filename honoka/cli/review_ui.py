"""
Command-line interface for reviewing a flashcard.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from honoka.review_session import ReviewSession
from honoka.scheduler import SchedulerOutput, interval_for

logger = logging.getLogger(__name__)
console = Console()


def _read_line(prompt: str) -> str:
    """
    Read one line from the user. End of input reads as an empty line.
    """
    try:
        return console.input(prompt)
    except EOFError:
        logger.debug("End of input reached; treating it as an empty reply.")
        return ""


def start_review_flow(session: ReviewSession) -> Optional[SchedulerOutput]:
    """
    Runs one review: show the front, wait, show the back, ask for the outcome.

    Prints nothing when no card is due.

    Args:
        session: A fresh ReviewSession.

    Returns:
        The committed scheduler output, or None when no card was due.
    """
    card = session.start()
    if card is None:
        return None

    console.print(Panel(Text(session.present()), title="Front", border_style="green"))
    _read_line("[italic]Press Enter to see the back...[/italic]")

    console.print(Panel(Text(session.acknowledge()), title="Back", border_style="blue"))
    reply = _read_line("Ok? (Y/n) ")

    output = session.submit(reply)
    days = interval_for(output.interval_index).days
    unit = "day" if days == 1 else "days"
    due_date_str = output.next_due.strftime("%Y-%m-%d")
    console.print(
        f"[green]Reviewed.[/green] Next due in [bold]{days} {unit}[/bold] on {due_date_str}."
    )
    return output
