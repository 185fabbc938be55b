"""
DuckDB database interactions for honoka.
Implements the CardStore class, the only owner of persisted card rows.
"""

import duckdb
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import ValidationError

from ..exceptions import (
    CardOperationError,
    DuplicateKeyError,
    StoreError,
)
from ..models import Card, utc_now
from . import db_utils
from .connection import ConnectionHandler
from .schema_manager import SchemaManager

# --- Logging Setup ---
logger = logging.getLogger(__name__)

# --- Helper Functions ---


def _row_to_dict(columns: List[str], row: tuple) -> Dict[str, Any]:
    return dict(zip(columns, row, strict=True))


def _is_duplicate_key_error(e: duckdb.Error) -> bool:
    if not isinstance(e, duckdb.ConstraintException):
        return False
    message = str(e).lower()
    return "duplicate key" in message or "primary key" in message


class CardStore:
    """
    Acts as a Facade for the database subsystem, providing the create,
    select, update and delete operations over cards.

    It coordinates the ConnectionHandler, SchemaManager, and data marshalling
    utilities. Intended for use as a context manager: entering opens the
    connection and ensures the schema, exiting always releases the connection.
    """

    FETCH_BATCH_SIZE = 256

    _INSERT_CARD_SQL = """
        INSERT INTO cards (front, back, interval_index, created_at, updated_at)
        VALUES ($1, $2, $3, $4, $5);
        """

    _SELECT_ALL_SQL = """
        SELECT front, back, interval_index, created_at, updated_at FROM cards;
        """

    _SELECT_ONE_SQL = """
        SELECT front, back, interval_index, created_at, updated_at
        FROM cards WHERE front = $1;
        """

    # updated_at never moves backwards, even if the caller's clock does.
    _UPDATE_INTERVAL_SQL = """
        UPDATE cards
        SET interval_index = $1,
            updated_at = greatest(updated_at, CAST($2 AS TIMESTAMP))
        WHERE front = $3;
        """

    _DELETE_CARD_SQL = "DELETE FROM cards WHERE front = $1;"

    def __init__(self, db_path: Union[str, Path]):
        """
        Create a CardStore backed by the given DuckDB path.

        Args:
            db_path (str | Path): Path to the database file. Use ':memory:' for an in-memory database.
                Missing parent directories are created when the connection is opened.
        """
        self._handler = ConnectionHandler(db_path=db_path)
        self._schema_manager = SchemaManager(self._handler)
        logger.info(
            f"CardStore initialized for DB at: {self._handler.db_path_resolved}"
        )

    @property
    def db_path_resolved(self) -> Path:
        return self._handler.db_path_resolved

    def get_connection(self) -> duckdb.DuckDBPyConnection:
        return self._handler.get_connection()

    def close(self) -> None:
        """
        Close the underlying database connection managed by the ConnectionHandler.
        """
        self._handler.close_connection()

    def __enter__(self) -> "CardStore":
        """
        Open the database connection and make sure the schema exists.

        If schema creation fails the connection is released before the error
        propagates.
        """
        self.get_connection()
        try:
            self.initialize()
        except StoreError:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Ensures the connection is closed on exiting the context."""
        self.close()

    def initialize(self) -> None:
        """
        Ensure the cards table exists. Idempotent.

        Raises:
            StoreConnectionError: If the database cannot be opened.
            SchemaInitializationError: If the table cannot be created.
        """
        self._schema_manager.initialize_schema()

    # --- Write Operations ---

    def _execute_write(self, sql: str, params: tuple, action: str) -> None:
        """
        Run one mutating statement in its own transaction, rolling back on failure.

        duckdb.Error is re-raised untouched so callers can classify it.
        """
        conn = self.get_connection()
        with conn.cursor() as cursor:
            cursor.begin()
            try:
                cursor.execute(sql, params)
                cursor.commit()
            except duckdb.Error:
                try:
                    cursor.rollback()
                    logger.info(f"Transaction rolled back due to error in {action}.")
                except duckdb.Error as rb_err:
                    logger.error(
                        f"Failed to rollback transaction during {action}: {rb_err}"
                    )
                raise

    def insert(
        self, front: str, back: str, now: Optional[datetime] = None
    ) -> Card:
        """
        Add a new card at interval index 0 with both timestamps set to `now`.

        Parameters:
            front (str): Prompt text; must not already exist.
            back (str): Answer text; must not be empty.
            now (Optional[datetime]): Insertion time; defaults to the current UTC time.

        Returns:
            Card: The card as stored.

        Raises:
            DuplicateKeyError: If a card with the same front exists.
            ConversionError: If a value cannot be represented in the database.
            CardOperationError: If the card is invalid or the insert fails.
        """
        ts = now or utc_now()
        try:
            card = Card(front=front, back=back, created_at=ts, updated_at=ts)
        except ValidationError as e:
            raise CardOperationError(
                f"Invalid card '{front}': {e}", original_exception=e
            ) from e

        params = db_utils.card_to_db_params_tuple(card)
        try:
            self._execute_write(self._INSERT_CARD_SQL, params, "card insert")
        except duckdb.Error as e:
            if _is_duplicate_key_error(e):
                logger.error(f"Card '{front}' already exists.")
                raise DuplicateKeyError(
                    f"Card '{front}' already exists", original_exception=e
                ) from e
            logger.error(f"Error inserting card '{front}': {e}")
            raise CardOperationError(
                f"Can't insert into table: {e}", original_exception=e
            ) from e

        logger.info(f"Inserted card '{front}'.")
        return card

    def update_interval(
        self,
        front: str,
        new_interval_index: int,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Set a card's interval index and refresh its updated_at.

        The statement is issued unconditionally; a front that matches no row
        is not an error. Callers verify existence beforehand.

        Raises:
            ConversionError: If `new_interval_index` is outside the interval table.
            CardOperationError: If the update statement fails.
        """
        params = (
            db_utils.interval_index_to_db(new_interval_index),
            db_utils.datetime_to_db(now or utc_now()),
            db_utils.text_to_db(front, "front"),
        )
        try:
            self._execute_write(
                self._UPDATE_INTERVAL_SQL, params, "interval update"
            )
        except duckdb.Error as e:
            logger.error(f"Error updating interval of card '{front}': {e}")
            raise CardOperationError(
                f"Can't update table: {e}", original_exception=e
            ) from e
        logger.info(f"Card '{front}' set to interval index {new_interval_index}.")

    def delete(self, front: str) -> None:
        """
        Remove the card with the given front if present.

        Raises:
            CardOperationError: If the delete statement fails.
        """
        params = (db_utils.text_to_db(front, "front"),)
        try:
            self._execute_write(self._DELETE_CARD_SQL, params, "card delete")
        except duckdb.Error as e:
            logger.error(f"Error deleting card '{front}': {e}")
            raise CardOperationError(
                f"Can't delete from table: {e}", original_exception=e
            ) from e
        logger.info(f"Delete issued for card '{front}'.")

    # --- Read Operations ---

    def select_all(self) -> Iterator[Card]:
        """
        Lazily yield every card. Order is whatever the engine returns and must
        not be relied upon.

        Rows are fetched in batches of FETCH_BATCH_SIZE. A failure aborts the
        scan; start a new one with another call.

        Raises:
            CardOperationError: If the query fails.
            ConversionError: If a stored row cannot be parsed into a Card.
        """
        conn = self.get_connection()
        try:
            with conn.cursor() as cursor:
                cursor.execute(self._SELECT_ALL_SQL)
                columns = [desc[0] for desc in cursor.description]
                while True:
                    rows = cursor.fetchmany(self.FETCH_BATCH_SIZE)
                    if not rows:
                        break
                    for row in rows:
                        yield db_utils.db_row_to_card(_row_to_dict(columns, row))
        except duckdb.Error as e:
            logger.error(f"Error scanning cards: {e}")
            raise CardOperationError(
                f"Can't select from table: {e}", original_exception=e
            ) from e

    def select_one(self, front: str) -> Optional[Card]:
        """
        Fetch a card by its front.

        Returns:
            Card | None: The card, or `None` if no card has that front.

        Raises:
            CardOperationError: If the query fails.
            ConversionError: If the stored row cannot be parsed into a Card.
        """
        conn = self.get_connection()
        params = (db_utils.text_to_db(front, "front"),)
        try:
            cursor = conn.execute(self._SELECT_ONE_SQL, params)
            row = cursor.fetchone()
            if row is None:
                return None
            columns = [desc[0] for desc in cursor.description]
        except duckdb.Error as e:
            logger.error(f"Error fetching card '{front}': {e}")
            raise CardOperationError(
                f"Can't select from table: {e}", original_exception=e
            ) from e
        logger.debug(f"Fetched card '{front}'")
        return db_utils.db_row_to_card(_row_to_dict(columns, row))
