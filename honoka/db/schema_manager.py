import duckdb
import logging

from .connection import ConnectionHandler
from . import schema
from ..exceptions import SchemaInitializationError

logger = logging.getLogger(__name__)


class SchemaManager:
    """Manages the database schema initialization."""

    def __init__(self, handler: ConnectionHandler):
        """
        Initializes the SchemaManager with a connection handler.

        Args:
            handler: The ConnectionHandler instance for the database.
        """
        self._handler = handler

    def initialize_schema(self) -> None:
        """
        Creates the cards table if it does not exist yet, inside a
        transaction. Safe to call any number of times.
        """
        conn = self._handler.get_connection()
        try:
            with conn.cursor() as cursor:
                cursor.begin()
                try:
                    cursor.execute(schema.DB_SCHEMA_SQL)
                    cursor.commit()
                except duckdb.Error:
                    self._rollback(cursor)
                    raise
            logger.info(
                f"Database schema at {self._handler.db_path_resolved} initialized successfully (or already exists)."
            )
        except duckdb.Error as e:
            logger.error(
                f"Error initializing database schema at {self._handler.db_path_resolved}: {e}"
            )
            raise SchemaInitializationError(
                f"Can't create table: {e}", original_exception=e
            ) from e

    def _rollback(self, cursor: duckdb.DuckDBPyConnection) -> None:
        try:
            cursor.rollback()
            logger.info(
                "Transaction rolled back due to schema initialization error."
            )
        except duckdb.Error as rb_err:
            logger.error(f"Failed to rollback transaction: {rb_err}")
