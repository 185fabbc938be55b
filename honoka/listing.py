"""Read-only report of the cards that are currently due."""

from datetime import datetime
from typing import Iterator, List, Optional

from .db.database import CardStore
from .models import utc_now
from .scheduler import is_due


def iter_due(store: CardStore, now: Optional[datetime] = None) -> Iterator[str]:
    """Yield the front of each due card in store enumeration order."""
    now = now or utc_now()
    for card in store.select_all():
        if is_due(card.interval_index, card.updated_at, now):
            yield card.front


def list_due(store: CardStore, now: Optional[datetime] = None) -> List[str]:
    return list(iter_due(store, now))
