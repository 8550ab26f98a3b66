"""HealthHub exceptions.

Engine failures are re-raised as one of these with the engine's own message
text, so a page can show exactly what SQLite said.
"""


class HealthHubError(Exception):
    """Base application exception."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class SchemaError(HealthHubError):
    """Creating or migrating the patients schema failed."""


class DatabaseConnectionError(HealthHubError):
    """The database file could not be opened."""


class PersistenceError(HealthHubError):
    """An insert or select was rejected by the engine."""


class QueryExecutionError(HealthHubError):
    """A console statement failed. Never escapes execute_query."""


def engine_message(exc: Exception) -> str:
    """Return the DBAPI error text behind a SQLAlchemy exception, if any."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc)
