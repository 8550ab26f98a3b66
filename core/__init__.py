from .config import config, configure_logging
from .database import Base, Database, get_db_context, get_engine
from .exceptions import (
    DatabaseConnectionError,
    HealthHubError,
    PersistenceError,
    QueryExecutionError,
    SchemaError,
)
from .form_state import FormState

__all__ = [
    "config",
    "configure_logging",
    "Base",
    "Database",
    "get_db_context",
    "get_engine",
    "HealthHubError",
    "SchemaError",
    "DatabaseConnectionError",
    "PersistenceError",
    "QueryExecutionError",
    "FormState",
]
