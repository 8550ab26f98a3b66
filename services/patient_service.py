import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.database import get_db_context
from core.exceptions import PersistenceError, engine_message
from models.patient import Patient

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "date_of_birth", "gender")
OPTIONAL_TEXT_FIELDS = ("email", "phone", "address", "allergies", "medical_notes")
NUMERIC_FIELDS = ("height_cm", "weight_kg")

LIKE_ESCAPE = "\\"


def _empty(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _patient_fields(data):
    """Map form data onto Patient columns; blank optionals become NULL."""
    fields = {}
    for name in REQUIRED_FIELDS:
        value = data.get(name)
        # st.date_input hands back a date
        if hasattr(value, "isoformat"):
            value = value.isoformat()
        fields[name] = value

    for name in OPTIONAL_TEXT_FIELDS:
        value = data.get(name)
        fields[name] = None if _empty(value) else value

    for name in NUMERIC_FIELDS:
        value = data.get(name)
        if _empty(value):
            fields[name] = None
            continue
        try:
            fields[name] = float(value)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"{name} must be numeric, got {value!r}") from exc

    return fields


# ------------------------------------------
# Register a new patient
# ------------------------------------------
def register_patient(data, db: Session | None = None) -> int:
    """Insert one patient row and return its new id.

    No business validation happens here; see core.validations.
    """
    if db is None:
        with get_db_context() as _db:
            return register_patient(data, db=_db)

    patient = Patient(**_patient_fields(data))
    try:
        db.add(patient)
        db.commit()
        db.refresh(patient)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to register patient: %s", engine_message(exc))
        raise PersistenceError(engine_message(exc)) from exc

    logger.info("Registered patient %s", patient.id)
    return patient.id


# ------------------------------------------
# Fetch ALL patients, by name
# ------------------------------------------
def get_all_patients(db: Session | None = None):
    if db is None:
        with get_db_context() as _db:
            return get_all_patients(db=_db)

    try:
        return (
            db.query(Patient)
            .order_by(Patient.last_name, Patient.first_name)
            .all()
        )
    except (SQLAlchemyError, ValueError) as exc:
        # ValueError: a stored value the column type cannot load, e.g. a bad created_at
        logger.error("Error executing get_all_patients query: %s", engine_message(exc))
        raise PersistenceError(engine_message(exc)) from exc


# ------------------------------------------
# Search by first or last name fragment
# ------------------------------------------
def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def search_patients_by_name(term: str, db: Session | None = None):
    """Patients whose first or last name contains ``term``, ignoring case.

    A blank term matches every row (``%%``).
    """
    if db is None:
        with get_db_context() as _db:
            return search_patients_by_name(term, db=_db)

    pattern = _like_pattern(term or "")
    try:
        return (
            db.query(Patient)
            .filter(
                or_(
                    Patient.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                    Patient.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(Patient.last_name, Patient.first_name)
            .all()
        )
    except (SQLAlchemyError, ValueError) as exc:
        logger.error("Error executing search_patients_by_name query: %s", engine_message(exc))
        raise PersistenceError(engine_message(exc)) from exc


def count_patients(db: Session | None = None) -> int:
    if db is None:
        with get_db_context() as _db:
            return count_patients(db=_db)

    try:
        return db.query(func.count(Patient.id)).scalar() or 0
    except SQLAlchemyError as exc:
        raise PersistenceError(engine_message(exc)) from exc


# -----------------------------
# Directory table sorting
# -----------------------------
SORTABLE_FIELDS = ("last_name", "date_of_birth", "gender", "phone", "created_at")


def _sort_value(value):
    if isinstance(value, str):
        return value.casefold()
    return value


def sort_patients(patients, field: str = "last_name", direction: str = "asc"):
    """Sort rows for display; missing values go last ascending, first descending."""
    descending = direction == "desc"

    def get(p):
        return p.get(field) if isinstance(p, dict) else getattr(p, field, None)

    present = [p for p in patients if get(p) is not None]
    missing = [p for p in patients if get(p) is None]
    present.sort(key=lambda p: _sort_value(get(p)), reverse=descending)
    return missing + present if descending else present + missing


def toggle_sort(current_field: str, current_direction: str, clicked_field: str):
    if clicked_field == current_field:
        return current_field, "desc" if current_direction == "asc" else "asc"
    return clicked_field, "asc"
