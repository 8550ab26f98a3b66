import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, TypedDict

from sqlalchemy.exc import SQLAlchemyError

from core.database import get_engine
from core.exceptions import HealthHubError, QueryExecutionError, engine_message

logger = logging.getLogger(__name__)


class QueryResult(TypedDict):
    success: bool
    data: List[Dict[str, Any]]
    error: Optional[str]


QUERY_EXAMPLES = [
    {
        "id": "basic-patients",
        "label": "All Patients (Limit 10)",
        "query": "SELECT id, first_name, last_name, gender, date_of_birth FROM patients LIMIT 10;",
        "description": "Get basic details for the first 10 patients.",
    },
    {
        "id": "allergies",
        "label": "Patients with Allergies",
        "query": "SELECT first_name, last_name, allergies FROM patients "
                 "WHERE allergies IS NOT NULL AND allergies != '' ORDER BY last_name;",
        "description": "Find patients who have recorded allergies.",
    },
    {
        "id": "gender-count",
        "label": "Gender Distribution",
        "query": "SELECT gender, COUNT(*) AS patient_count FROM patients GROUP BY gender ORDER BY gender;",
        "description": "Count patients by gender to see the distribution.",
    },
    {
        "id": "adult-females",
        "label": "Adult Females (Age > 18)",
        "query": "SELECT first_name, last_name, date_of_birth, gender FROM patients "
                 "WHERE gender = 'female' "
                 "AND (CAST(strftime('%Y', 'now') - strftime('%Y', date_of_birth) AS INTEGER)) > 18 LIMIT 20;",
        "description": "Find adult female patients by birth year.",
    },
    {
        "id": "bmi-over-30",
        "label": "Patients with BMI > 30",
        "query": "SELECT id, first_name, last_name, height_cm, weight_kg, "
                 "(weight_kg / ((height_cm / 100.0) * (height_cm / 100.0))) AS bmi FROM patients "
                 "WHERE weight_kg IS NOT NULL AND height_cm IS NOT NULL "
                 "AND (weight_kg / ((height_cm / 100.0) * (height_cm / 100.0))) > 30 LIMIT 10;",
        "description": "Calculate BMI and find patients over 30 (needs height and weight).",
    },
]

DEFAULT_QUERY = QUERY_EXAMPLES[0]["query"]


def _bind_params(params):
    # sqlite3 takes a sequence for "?" placeholders or a mapping for ":name"
    if params is None:
        return ()
    if isinstance(params, Mapping):
        return dict(params)
    return tuple(params)


def run_statement(sql_text: str, params=None) -> List[Dict[str, Any]]:
    """Execute one statement in its own transaction and return its rows.

    Raises QueryExecutionError with the engine's message on failure.
    """
    engine = get_engine()
    try:
        with engine.begin() as conn:
            result = conn.exec_driver_sql(sql_text, _bind_params(params))
            if not result.returns_rows:
                return []
            return [dict(row._mapping) for row in result]
    except SQLAlchemyError as exc:
        raise QueryExecutionError(engine_message(exc)) from exc


def execute_query(sql_text: str, params=None) -> QueryResult:
    """Run a free-form console statement; failures come back in ``error``.

    The statement text is taken as-is. Only ``params`` are bound, never
    spliced into the text.
    """
    try:
        rows = run_statement(sql_text, params)
    except HealthHubError as exc:
        logger.warning("Query execution error: %s", exc.message)
        return {"success": False, "data": [], "error": exc.message}
    except Exception as exc:
        logger.exception("Unexpected query execution error")
        return {
            "success": False,
            "data": [],
            "error": str(exc) or "An error occurred while executing the query",
        }

    return {"success": True, "data": rows, "error": None}
