import re
from datetime import date

from models.patient import GENDERS

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Earliest birth date the registration form offers
DATE_OF_BIRTH_MIN = date(1900, 1, 1)


def date_of_birth_range(today: date | None = None):
    """(earliest, latest) selectable birth date; nobody is born in the future."""
    return DATE_OF_BIRTH_MIN, today or date.today()


def _as_date(value):
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def _positive_number(value) -> bool:
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def validate_patient_form(data, today: date | None = None):
    """Check a candidate patient record; returns {field: message} for each problem."""
    errors = {}

    if _blank(data.get("first_name")):
        errors["first_name"] = "First name is required."

    if _blank(data.get("last_name")):
        errors["last_name"] = "Last name is required."

    date_of_birth = data.get("date_of_birth")
    if _blank(date_of_birth):
        errors["date_of_birth"] = "Date of birth is required."
    else:
        born = _as_date(date_of_birth)
        earliest, latest = date_of_birth_range(today)
        if born is None:
            errors["date_of_birth"] = "Date of birth must be a date (YYYY-MM-DD)."
        elif not earliest <= born <= latest:
            errors["date_of_birth"] = f"Date of birth must be between {earliest.isoformat()} and {latest.isoformat()}."

    gender = data.get("gender")
    if _blank(gender):
        errors["gender"] = "Gender is required."
    elif gender not in GENDERS:
        errors["gender"] = "Gender must be one of: " + ", ".join(GENDERS) + "."

    email = data.get("email")
    if not _blank(email) and not EMAIL_RE.match(str(email)):
        errors["email"] = "Invalid email format."

    for field, label in (("height_cm", "Height"), ("weight_kg", "Weight")):
        value = data.get(field)
        if not _blank(value) and not _positive_number(value):
            errors[field] = f"{label} must be a positive number."

    return errors
