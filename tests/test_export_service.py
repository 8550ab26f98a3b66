import json
from datetime import date, datetime
from decimal import Decimal

from services.export_service import (
    CREATED_AT_FORMAT,
    export_patients_json,
    export_query_results_json,
    load_patient_export,
    patient_export_filename,
    patients_to_export_records,
    query_export_filename,
)
from services.patient_service import get_all_patients, register_patient
from tests.conftest import make_patient


def test_export_drops_id_and_formats_created_at(sample_patients):
    patients = get_all_patients()

    records = patients_to_export_records(patients)

    assert len(records) == 3
    for patient, record in zip(patients, records):
        assert "id" not in record
        assert record["created_at"] == patient.created_at.strftime(CREATED_AT_FORMAT)
        assert record["last_name"] == patient.last_name


def test_exported_record_reimports_with_same_fields(test_database):
    register_patient(make_patient(
        first_name="Jane", last_name="Smith", gender="female", email="jane@example.com",
        phone="555-0100", address="1 Main St", height_cm="165", weight_kg="60.5",
        allergies="Latex", medical_notes="Asthma",
    ))
    original = get_all_patients()[0].to_dict()

    reloaded = load_patient_export(export_patients_json(get_all_patients()))

    assert len(reloaded) == 1
    expected = {k: v for k, v in original.items() if k not in ("id", "created_at")}
    assert reloaded[0] == expected


def test_query_results_are_json_safe():
    rows = [{"total": Decimal("1.50"), "blob": b"\x01\x02", "seen": datetime(2024, 1, 2, 3, 4, 5), "n": 3}]

    assert json.loads(export_query_results_json(rows)) == [
        {"total": "1.50", "blob": "0102", "seen": "2024-01-02T03:04:05", "n": 3}
    ]


def test_filenames_embed_the_date():
    day = date(2024, 3, 9)

    assert patient_export_filename(day) == "healthhub_patients_2024-03-09.json"
    assert query_export_filename(day) == "healthhub_query_results_2024-03-09.json"
