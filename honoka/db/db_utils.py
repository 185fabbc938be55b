"""
Utility functions for data marshalling between Card models and database formats.
This module helps decouple the core database logic from the specifics of data conversion.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from pydantic import ValidationError

from ..constants import MAX_INTERVAL_INDEX
from ..exceptions import ConversionError
from ..models import Card

# DuckDB INTEGER is a signed 32-bit value; text sizes are held to the same
# bound so they fit the engine's length fields.
INT32_MAX = 2**31 - 1
INT32_MIN = -(2**31)


def int_to_db(value: int, field: str) -> int:
    """
    Check that an integer fits a DuckDB INTEGER column.

    Raises:
        ConversionError: If `value` is not an int or is outside the signed 32-bit range.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConversionError(f"{field} must be an integer, got {value!r}")
    if not (INT32_MIN <= value <= INT32_MAX):
        raise ConversionError(f"{field} value {value} too big for INTEGER")
    return value


def interval_index_to_db(value: int) -> int:
    """Marshal an interval index, rejecting anything outside the interval table."""
    value = int_to_db(value, "interval_index")
    if not (0 <= value <= MAX_INTERVAL_INDEX):
        raise ConversionError(
            f"interval_index {value} is outside 0-{MAX_INTERVAL_INDEX}"
        )
    return value


def text_to_db(value: str, field: str) -> str:
    """
    Check that a text value can be bound as a VARCHAR parameter.

    Raises:
        ConversionError: If `value` is not a str or its UTF-8 size exceeds the signed 32-bit range.
    """
    if not isinstance(value, str):
        raise ConversionError(f"{field} must be a string, got {type(value).__name__}")
    if len(value) > INT32_MAX or len(value.encode("utf-8")) > INT32_MAX:
        raise ConversionError(f"{field} size too big for INTEGER")
    return value


def datetime_to_db(value: datetime) -> datetime:
    """Convert an aware timestamp to the naive UTC form stored in TIMESTAMP columns."""
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(microsecond=0)
    return value.astimezone(timezone.utc).replace(tzinfo=None, microsecond=0)


def datetime_from_db(value: datetime) -> datetime:
    """Attach UTC to a naive TIMESTAMP value read from the database."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def card_to_db_params_tuple(card: Card) -> Tuple:
    """
    Convert a Card model into a tuple suitable for database insertion.

    Returns:
        tuple: (front, back, interval_index, created_at, updated_at)
    """
    return (
        text_to_db(card.front, "front"),
        text_to_db(card.back, "back"),
        interval_index_to_db(card.interval_index),
        datetime_to_db(card.created_at),
        datetime_to_db(card.updated_at),
    )


def db_row_to_card(row_dict: Dict[str, Any]) -> Card:
    """
    Create a Card model from a database row dictionary.

    Raises:
        ConversionError: If the row cannot be validated into a Card (wraps the original ValidationError).
    """
    data = row_dict.copy()
    for key in ("created_at", "updated_at"):
        if isinstance(data.get(key), datetime):
            data[key] = datetime_from_db(data[key])

    try:
        return Card(**data)
    except ValidationError as e:
        raise ConversionError(
            f"Failed to parse card from DB row: {row_dict}. Error: {e}",
            original_exception=e,
        ) from e
