import logging
import os
import threading
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from core.config import config
from core.exceptions import DatabaseConnectionError, engine_message

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


class Database:
    """Lazily created, process-wide handle to one SQLite database file.

    The engine is built on first use, probed, and migrated with
    ``ensure_schema`` exactly once. Streamlit runs every browser session in
    its own thread, so construction is guarded by a lock: early callers wait
    for the single in-flight initialization instead of racing a second one.
    A failed construction is not cached; the next call tries again.
    """

    def __init__(self, path: str, echo: bool = False):
        self.path = path
        self.echo = echo
        # (engine, sessionmaker), published together so readers never see half
        self._state = None
        self._lock = threading.Lock()

    @property
    def url(self) -> str:
        return f"sqlite:///{self.path}"

    def _ready(self):
        state = self._state
        if state is not None:
            return state

        with self._lock:
            if self._state is None:
                engine = self._connect()
                self._state = (engine, sessionmaker(autocommit=False, autoflush=False, bind=engine))
            return self._state

    def get_engine(self):
        return self._ready()[0]

    def _connect(self):
        from core.schema import ensure_schema

        folder = os.path.dirname(self.path)
        if folder:
            try:
                os.makedirs(folder, exist_ok=True)
            except OSError as exc:
                raise DatabaseConnectionError(f"Cannot create database folder {folder}: {exc}") from exc

        engine = create_engine(
            self.url,
            echo=self.echo,
            connect_args={"check_same_thread": False},
        )

        try:
            with engine.connect() as conn:
                conn.exec_driver_sql("SELECT 1")
        except DBAPIError as exc:
            engine.dispose()
            logger.error("Failed to open database at %s: %s", self.path, engine_message(exc))
            raise DatabaseConnectionError(engine_message(exc)) from exc

        try:
            ensure_schema(engine)
        except Exception:
            engine.dispose()
            logger.exception("Failed to initialize database schema")
            raise

        logger.info("Database ready at %s", self.path)
        return engine

    def session(self) -> Session:
        _, make_session = self._ready()
        return make_session()

    def dispose(self):
        """Drop the cached engine; the next call reconnects."""
        with self._lock:
            if self._state is not None:
                self._state[0].dispose()
            self._state = None


database = Database(config.DB_PATH, echo=config.SQL_ECHO)


def get_engine():
    return database.get_engine()


@contextmanager
def get_db_context():
    """
    Context manager for database sessions.
    Automatically closes session when done.

    Usage:
        with get_db_context() as db:
            result = db.query(Model).all()
    """
    db = database.session()
    try:
        yield db
    finally:
        db.close()
