"""
Idempotent column additions for databases created before alert settings existed.
create_all() only creates missing tables, so older tables get their new columns here.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

# table -> [(column, DDL type and default)]
ADDED_COLUMNS = {
    "washrooms": [
        ("alert_email", "VARCHAR(255)"),
        ("alert_enabled", "BOOLEAN DEFAULT FALSE"),
        ("alert_threshold_hours", "INTEGER DEFAULT 8"),
        ("business_hours_start", "VARCHAR(5) DEFAULT '08:00'"),
        ("business_hours_end", "VARCHAR(5) DEFAULT '17:00'"),
        ("alert_days", "JSON"),
        ("timezone", "VARCHAR(64) DEFAULT 'America/Moncton'"),
        ("last_alert_sent_at", "TIMESTAMP"),
    ],
    "businesses": [
        ("global_alert_emails", "JSON"),
        ("use_global_alerts", "BOOLEAN DEFAULT FALSE"),
    ],
    "cleaning_logs": [
        ("resolved", "BOOLEAN DEFAULT FALSE"),
        ("resolved_at", "TIMESTAMP"),
    ],
}


def upgrade(engine: Engine) -> list[str]:
    """
    Add any missing columns.

    Returns:
        "table.column" for every column added
    """
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    added: list[str] = []

    with engine.begin() as conn:
        for table, columns in ADDED_COLUMNS.items():
            if table not in existing_tables:
                continue
            existing_columns = {col["name"] for col in inspector.get_columns(table)}
            for column, ddl in columns:
                if column in existing_columns:
                    continue
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}"))
                added.append(f"{table}.{column}")
                logger.info(f"✅ Added {table}.{column} column")

    return added
