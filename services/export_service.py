import json
from datetime import date, datetime
from decimal import Decimal

PATIENT_EXPORT_PREFIX = "healthhub_patients"
QUERY_EXPORT_PREFIX = "healthhub_query_results"

# Locale date + time, like the directory's "Registered On" column
CREATED_AT_FORMAT = "%x %X"


def _as_dict(patient):
    return patient if isinstance(patient, dict) else patient.to_dict()


def _format_created_at(value):
    if isinstance(value, datetime):
        return value.strftime(CREATED_AT_FORMAT)
    return value


def patients_to_export_records(patients):
    """Export shape: no ``id``; ``created_at`` as a locale date string."""
    records = []
    for patient in patients:
        record = dict(_as_dict(patient))
        record.pop("id", None)
        record["created_at"] = _format_created_at(record.get("created_at"))
        records.append(record)
    return records


def export_patients_json(patients) -> str:
    return json.dumps(patients_to_export_records(patients), indent=2, default=str)


def load_patient_export(text: str):
    """Parse an export back into dicts ready for register_patient."""
    records = json.loads(text)
    if not isinstance(records, list):
        raise ValueError("Patient export must be a JSON list")
    loaded = []
    for record in records:
        record = dict(record)
        record.pop("id", None)
        record.pop("created_at", None)
        loaded.append(record)
    return loaded


def _json_safe(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def export_query_results_json(rows) -> str:
    safe_rows = [{key: _json_safe(value) for key, value in row.items()} for row in rows]
    return json.dumps(safe_rows, indent=2, default=str)


def _filename(prefix: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.json"


def patient_export_filename(today: date | None = None) -> str:
    return _filename(PATIENT_EXPORT_PREFIX, today)


def query_export_filename(today: date | None = None) -> str:
    return _filename(QUERY_EXPORT_PREFIX, today)
