"""
Scheduling constants.

This module contains the static interval table used to decide when a card is
due again. No runtime configuration or path defaults - pure constants only.
"""
from datetime import timedelta
from typing import Tuple

PROGRAM: str = "honoka"

DAY: timedelta = timedelta(days=1)

# Days that must elapse since a card's last update before it is due again,
# indexed by the card's interval_index. Ascending, T[0] == 0.
INTERVAL_DAYS: Tuple[int, ...] = (0, 1, 2, 4, 8, 16, 32, 64)

INTERVALS: Tuple[timedelta, ...] = tuple(days * DAY for days in INTERVAL_DAYS)

MAX_INTERVAL_INDEX: int = len(INTERVALS) - 1

# A lapse re-enters at the shortest non-zero interval, never at 0.
LAPSE_INTERVAL_INDEX: int = 1
