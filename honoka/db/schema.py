"""
Defines the database schema for honoka using a SQL string constant.
This keeps the schema definition separate from the database connection and
operation logic.
"""

from ..constants import INTERVALS

# Timestamps are naive TIMESTAMPs holding UTC; db_utils attaches the zone.
DB_SCHEMA_SQL = f"""
    CREATE TABLE IF NOT EXISTS cards (
        front VARCHAR PRIMARY KEY,
        back VARCHAR NOT NULL,
        interval_index INTEGER NOT NULL DEFAULT 0
            CHECK (interval_index >= 0 AND interval_index < {len(INTERVALS)}),
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP NOT NULL
    );
"""
