from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
import logging


def _ensure_index(engine: Engine, table: str, idx_name: str, column: str) -> None:
    insp = inspect(engine)
    existing_indexes = {idx.get("name") for idx in insp.get_indexes(table)}
    if idx_name in existing_indexes:
        return
    try:
        with engine.begin() as conn:
            conn.execute(text(f"CREATE INDEX {idx_name} ON {table} ({column})"))
        logging.info(f"Created missing index {idx_name} on {table}({column})")
    except Exception:
        logging.exception(f"Failed to create index {idx_name} on {table}({column}). Continuing.")


def ensure_medications_schema(engine: Engine) -> None:
    """Bring a medications table written by an older version up to date.

    - Adds status and start_date columns if missing (left NULL; the loader
      reads NULL as 'paused' and today's date)
    - Adds position if missing
    - Ensures the index on status

    Idempotent and safe to run on startup.
    """
    try:
        insp = inspect(engine)
        tables = set(insp.get_table_names())
        if "medications" not in tables:
            return

        columns = {col["name"] for col in insp.get_columns("medications")}
        alters = []
        if "status" not in columns:
            alters.append("ADD COLUMN status VARCHAR(16) NULL")
        if "start_date" not in columns:
            alters.append("ADD COLUMN start_date DATE NULL")
        if "position" not in columns:
            alters.append("ADD COLUMN position INTEGER NOT NULL DEFAULT 0")

        # one column per statement, SQLite cannot batch ADD COLUMN
        for alter in alters:
            stmt = f"ALTER TABLE medications {alter}"
            logging.info(f"Applying schema patch: {stmt}")
            with engine.begin() as conn:
                conn.execute(text(stmt))

        _ensure_index(engine, "medications", "ix_medications_status", "status")
    except Exception:
        logging.exception("Error ensuring medications schema; continuing without blocking startup.")


def ensure_dose_logs_schema(engine: Engine) -> None:
    """Ensure the medication_id index on dose_logs; the table itself comes from create_all."""
    try:
        insp = inspect(engine)
        tables = set(insp.get_table_names())
        if "dose_logs" not in tables:
            return
        columns = {col["name"] for col in insp.get_columns("dose_logs")}
        if "position" not in columns:
            stmt = "ALTER TABLE dose_logs ADD COLUMN position INTEGER NOT NULL DEFAULT 0"
            logging.info(f"Applying schema patch: {stmt}")
            with engine.begin() as conn:
                conn.execute(text(stmt))
        _ensure_index(engine, "dose_logs", "ix_dose_logs_medication_id", "medication_id")
    except Exception:
        logging.exception("Error ensuring dose_logs schema; continuing.")
