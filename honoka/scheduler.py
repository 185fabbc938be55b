# honoka/scheduler.py

"""
Fixed-interval scheduling for honoka.

A card's interval_index selects an entry of the interval table; the card is
due once that much time has passed since its last update. A successful recall
moves one step up the table, a lapse drops back to the one-day step.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from .constants import INTERVALS, LAPSE_INTERVAL_INDEX, MAX_INTERVAL_INDEX
from .models import Card, Outcome, utc_now

logger = logging.getLogger(__name__)


def _check_index(interval_index: int) -> int:
    if isinstance(interval_index, bool) or not isinstance(interval_index, int):
        raise ValueError(f"Invalid interval index: {interval_index!r}.")
    if not (0 <= interval_index <= MAX_INTERVAL_INDEX):
        raise ValueError(
            f"Invalid interval index: {interval_index}. Must be 0-{MAX_INTERVAL_INDEX}."
        )
    return interval_index


def interval_for(interval_index: int) -> datetime.timedelta:
    """Return the duration a card at `interval_index` waits before it is due."""
    return INTERVALS[_check_index(interval_index)]


def due_at(
    interval_index: int, updated_at: datetime.datetime
) -> datetime.datetime:
    """Return the instant a card last updated at `updated_at` becomes due."""
    return updated_at + interval_for(interval_index)


def is_due(
    interval_index: int,
    updated_at: datetime.datetime,
    now: datetime.datetime,
) -> bool:
    """
    Decide whether a card is due for review.

    The boundary is inclusive: a card becomes due at the exact instant its
    interval elapses.
    """
    return now >= due_at(interval_index, updated_at)


def next_interval_on_success(interval_index: int) -> int:
    """Escalate by one step, saturating at the longest interval."""
    return min(_check_index(interval_index) + 1, MAX_INTERVAL_INDEX)


def next_interval_on_failure(interval_index: int) -> int:
    """A lapse always re-enters at the one-day step, whatever the current index."""
    _check_index(interval_index)
    return LAPSE_INTERVAL_INDEX


def next_interval(interval_index: int, outcome: Outcome) -> int:
    if outcome is Outcome.Pass:
        return next_interval_on_success(interval_index)
    return next_interval_on_failure(interval_index)


@dataclass
class SchedulerOutput:
    interval_index: int
    next_due: datetime.datetime


class IntervalScheduler:
    """
    Scheduler over the fixed interval table.

    Stateless; kept as a class so the review session receives its scheduling
    policy as a collaborator.
    """

    def is_due(self, card: Card, now: Optional[datetime.datetime] = None) -> bool:
        return is_due(card.interval_index, card.updated_at, now or utc_now())

    def compute_next_state(
        self,
        card: Card,
        outcome: Outcome,
        review_ts: Optional[datetime.datetime] = None,
    ) -> SchedulerOutput:
        """
        Computes the interval a card moves to after a review.

        Args:
            card: The card being reviewed.
            outcome: Whether the user recalled the card.
            review_ts: The UTC timestamp of the review; defaults to now.

        Returns:
            A SchedulerOutput with the new interval index and the instant the
            card will next be due if it is committed at `review_ts`.
        """
        ts = review_ts or utc_now()
        new_index = next_interval(card.interval_index, outcome)
        logger.debug(
            f"Card '{card.front}': {outcome.name} moves interval {card.interval_index} -> {new_index}"
        )
        return SchedulerOutput(
            interval_index=new_index,
            next_due=due_at(new_index, ts),
        )
