import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from core.database import Base
from core.exceptions import SchemaError, engine_message
from models.patient import Patient

logger = logging.getLogger(__name__)

# Columns added after the first release, in the order they shipped.
# Each one is nullable with no default, so existing rows read NULL.
PATIENT_MIGRATIONS = [
    ("height_cm", "REAL"),
    ("weight_kg", "REAL"),
    ("allergies", "TEXT"),
    ("medical_notes", "TEXT"),
]


def column_exists(conn, table, column):
    cols = [col["name"] for col in inspect(conn).get_columns(table)]
    return column in cols


def missing_columns(engine):
    """Return the migration columns not yet present on ``patients``."""
    with engine.connect() as conn:
        return [col for col, _ in PATIENT_MIGRATIONS if not column_exists(conn, Patient.__tablename__, col)]


def _add_column(engine, column, sql_type):
    with engine.begin() as conn:
        if column_exists(conn, Patient.__tablename__, column):
            return False
        logger.info("Adding column: %s", column)
        conn.exec_driver_sql(f"ALTER TABLE {Patient.__tablename__} ADD COLUMN {column} {sql_type}")
        return True


def ensure_schema(engine):
    """Create the patients table and bring it up to the current column set.

    Safe to call on every start: existing tables, columns and indexes are
    left alone. Each column is checked and added in its own transaction so
    one failure does not stop the rest; failures are reported together as a
    SchemaError once every column has been tried.
    """
    try:
        Base.metadata.create_all(bind=engine, tables=[Patient.__table__])
    except SQLAlchemyError as exc:
        raise SchemaError(f"Could not create patients table: {engine_message(exc)}") from exc

    failures = []
    for column, sql_type in PATIENT_MIGRATIONS:
        try:
            _add_column(engine, column, sql_type)
        except SQLAlchemyError as exc:
            logger.error("Failed to add column %s: %s", column, engine_message(exc))
            failures.append(f"{column}: {engine_message(exc)}")

    # A table created by an older release may predate the index.
    try:
        with engine.begin() as conn:
            for index in Patient.__table__.indexes:
                index.create(conn, checkfirst=True)
    except SQLAlchemyError as exc:
        failures.append(f"indexes: {engine_message(exc)}")

    if failures:
        raise SchemaError("Schema migration incomplete - " + "; ".join(failures))

    logger.info("Database schema initialized and migrated if necessary")
