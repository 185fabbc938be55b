"""
This module defines the ReviewSession class, which drives a single review:
it picks the first due card from the store, walks it through the two user
prompts, and writes the scheduler's verdict back to the store.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from .db.database import CardStore
from .exceptions import ReviewSessionError
from .models import Card, Outcome, utc_now
from .scheduler import IntervalScheduler, SchedulerOutput

# Initialize logger
logger = logging.getLogger(__name__)

PASS_REPLIES = frozenset({"", "Y", "y"})


class ReviewState(Enum):
    Idle = "idle"
    Selecting = "selecting"
    Presenting = "presenting"
    AwaitingAnswerAck = "awaiting_answer_ack"
    AwaitingOutcome = "awaiting_outcome"
    Committing = "committing"
    Done = "done"


def interpret_reply(reply: str) -> Outcome:
    """An empty reply, "Y" or "y" counts as recalled; anything else is a lapse."""
    return Outcome.Pass if reply in PASS_REPLIES else Outcome.Fail


class ReviewSession:
    """
    Linear state machine for reviewing at most one card.

    Idle -> Selecting -> Presenting -> AwaitingAnswerAck -> AwaitingOutcome
    -> Committing -> Done, or Selecting -> Done when nothing is due.

    The session keeps a transient copy of the selected card only; the store
    remains the owner of all card state.
    """

    def __init__(self, store: CardStore, scheduler: IntervalScheduler):
        self.store = store
        self.scheduler = scheduler
        self.state = ReviewState.Idle
        self.card: Optional[Card] = None
        self.result: Optional[SchedulerOutput] = None

    @property
    def is_done(self) -> bool:
        return self.state is ReviewState.Done

    def _require(self, expected: ReviewState) -> None:
        if self.state is not expected:
            raise ReviewSessionError(
                f"Review session is {self.state.value}, expected {expected.value}"
            )

    def _transition(self, new_state: ReviewState) -> None:
        logger.debug(f"Review session {self.state.value} -> {new_state.value}")
        self.state = new_state

    def start(self, now: Optional[datetime] = None) -> Optional[Card]:
        """
        Scan the store and keep the first card that is due at `now`.

        Returns:
            The selected card, or None if nothing is due (the session is then Done).
        """
        self._require(ReviewState.Idle)
        self._transition(ReviewState.Selecting)
        self.card = self._select_first_due(now or utc_now())
        if self.card is None:
            logger.info("No cards are due for review.")
            self._transition(ReviewState.Done)
        else:
            logger.info(f"Selected card '{self.card.front}' for review.")
            self._transition(ReviewState.Presenting)
        return self.card

    def _select_first_due(self, now: datetime) -> Optional[Card]:
        # The scan is always run to completion; only the first hit is kept.
        first_due: Optional[Card] = None
        for card in self.store.select_all():
            if first_due is None and self.scheduler.is_due(card, now):
                first_due = card
        return first_due

    def present(self) -> str:
        """Return the front to show; the caller then waits for one line of input."""
        self._require(ReviewState.Presenting)
        self._transition(ReviewState.AwaitingAnswerAck)
        return self.card.front

    def acknowledge(self) -> str:
        """Called once the user has paced the reveal. Returns the back to show."""
        self._require(ReviewState.AwaitingAnswerAck)
        self._transition(ReviewState.AwaitingOutcome)
        return self.card.back

    def submit(
        self, reply: str, now: Optional[datetime] = None
    ) -> SchedulerOutput:
        """
        Interpret the user's pass/fail reply and commit the new interval.

        Args:
            reply: The raw line the user typed after seeing the back.
            now: Review timestamp, defaults to the current UTC time.

        Returns:
            The scheduler's output for the committed interval.

        Raises:
            StoreError: If the update cannot be written. The session then
            stays in Committing.
        """
        self._require(ReviewState.AwaitingOutcome)
        outcome = interpret_reply(reply)
        self._transition(ReviewState.Committing)

        ts = now or utc_now()
        # The store never moves updated_at backwards; due dates follow the stored value.
        committed_ts = max(ts, self.card.updated_at)
        output = self.scheduler.compute_next_state(self.card, outcome, committed_ts)
        self.store.update_interval(self.card.front, output.interval_index, now=ts)

        self.result = output
        self._transition(ReviewState.Done)
        return output
