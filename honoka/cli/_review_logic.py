from pathlib import Path
from typing import Optional

from honoka.cli.review_ui import start_review_flow
from honoka.db.database import CardStore
from honoka.review_session import ReviewSession
from honoka.scheduler import IntervalScheduler, SchedulerOutput


def review_next(db_path: Path) -> Optional[SchedulerOutput]:
    """
    Review the first due card in the store, if any.

    Opens the card store (creating the schema when needed), builds a
    review session with the interval scheduler, and runs the interactive
    flow. The store is closed on every exit path.

    Parameters:
        db_path (Path): Path to the card database file.

    Returns:
        The committed scheduler output, or None when nothing was due.
    """
    with CardStore(db_path=db_path) as store:
        session = ReviewSession(store=store, scheduler=IntervalScheduler())
        return start_review_flow(session)
