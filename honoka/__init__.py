"""honoka - A minimal spaced repetition flashcard tool."""

from .models import Card, Outcome
from .constants import INTERVALS, MAX_INTERVAL_INDEX
from .db import CardStore
from .listing import list_due
from .review_session import ReviewSession, ReviewState
from .scheduler import IntervalScheduler

__all__ = [
    "Card",
    "Outcome",
    "INTERVALS",
    "MAX_INTERVAL_INDEX",
    "CardStore",
    "list_due",
    "ReviewSession",
    "ReviewState",
    "IntervalScheduler",
]
