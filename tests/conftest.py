import pytest

import core.database as database_module
from core.database import Database
from services.patient_service import register_patient


@pytest.fixture(scope="function")
def test_database(tmp_path, monkeypatch):
    """A fresh SQLite file installed as the process-wide database."""
    db = Database(str(tmp_path / "healthhub_test.db"))
    monkeypatch.setattr(database_module, "database", db)
    yield db
    db.dispose()


def make_patient(**overrides):
    data = {
        "first_name": "John",
        "last_name": "Doe",
        "date_of_birth": "1980-05-17",
        "gender": "male",
        "email": "",
        "phone": "",
        "address": "",
        "height_cm": "",
        "weight_kg": "",
        "allergies": "",
        "medical_notes": "",
    }
    data.update(overrides)
    return data


@pytest.fixture
def sample_patients(test_database):
    """John Doe, Jane Smith and Robert Doel, inserted out of name order."""
    ids = [
        register_patient(make_patient(first_name="Robert", last_name="Doel", gender="male")),
        register_patient(make_patient(first_name="Jane", last_name="Smith", gender="female",
                                      email="jane@example.com", height_cm="165", weight_kg="60")),
        register_patient(make_patient(first_name="John", last_name="Doe", gender="male",
                                      allergies="Penicillin")),
    ]
    return ids
