from datetime import date

from core.validations import date_of_birth_range, validate_patient_form
from tests.conftest import make_patient


def test_valid_record_has_no_errors():
    assert validate_patient_form(make_patient(email="john@example.com", height_cm="180", weight_kg=75)) == {}


def test_required_fields():
    errors = validate_patient_form(make_patient(first_name="  ", last_name="", date_of_birth=None, gender=""))

    assert errors == {
        "first_name": "First name is required.",
        "last_name": "Last name is required.",
        "date_of_birth": "Date of birth is required.",
        "gender": "Gender is required.",
    }


def test_gender_must_be_known():
    errors = validate_patient_form(make_patient(gender="unknown"))

    assert list(errors) == ["gender"]


def test_email_format():
    assert "email" in validate_patient_form(make_patient(email="john@example"))
    assert "email" in validate_patient_form(make_patient(email="john doe@example.com"))
    assert "email" not in validate_patient_form(make_patient(email=""))


def test_measurements_must_be_positive_numbers():
    errors = validate_patient_form(make_patient(height_cm="tall", weight_kg=-4))

    assert errors == {
        "height_cm": "Height must be a positive number.",
        "weight_kg": "Weight must be a positive number.",
    }


class TestDateOfBirth:
    TODAY = date(2026, 10, 16)

    def test_range_reaches_back_to_adults_and_stops_today(self):
        earliest, latest = date_of_birth_range(self.TODAY)

        assert earliest <= date(1930, 1, 1)
        assert latest == self.TODAY

    def test_range_defaults_to_today(self):
        assert date_of_birth_range()[1] == date.today()

    def test_accepts_adult_birth_dates(self):
        assert validate_patient_form(make_patient(date_of_birth=date(1950, 3, 1)), today=self.TODAY) == {}
        assert validate_patient_form(make_patient(date_of_birth="1980-05-17"), today=self.TODAY) == {}

    def test_rejects_future_birth_date(self):
        errors = validate_patient_form(make_patient(date_of_birth="2027-01-01"), today=self.TODAY)

        assert list(errors) == ["date_of_birth"]

    def test_rejects_birth_date_before_range(self):
        errors = validate_patient_form(make_patient(date_of_birth=date(1899, 12, 31)), today=self.TODAY)

        assert list(errors) == ["date_of_birth"]

    def test_rejects_text_that_is_not_a_date(self):
        errors = validate_patient_form(make_patient(date_of_birth="last spring"), today=self.TODAY)

        assert errors == {"date_of_birth": "Date of birth must be a date (YYYY-MM-DD)."}
