from .patient_service import (
    count_patients,
    get_all_patients,
    register_patient,
    search_patients_by_name,
)
from .query_service import execute_query

__all__ = [
    "register_patient",
    "get_all_patients",
    "search_patients_by_name",
    "count_patients",
    "execute_query",
]
