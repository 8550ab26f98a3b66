import streamlit as st

from core.exceptions import HealthHubError
from core.helpers import render_sidebar
from core.session_manager import require_database
from services.export_service import export_patients_json, patient_export_filename
from services.patient_service import (
    SORTABLE_FIELDS,
    get_all_patients,
    search_patients_by_name,
    sort_patients,
    toggle_sort,
)

# Page config is set globally in app.py

SORT_LABELS = {
    "last_name": "Patient Name",
    "date_of_birth": "Date of Birth",
    "gender": "Gender",
    "phone": "Contact",
    "created_at": "Registered On",
}

render_sidebar()
require_database()

st.title("Patient Directory")
st.write("Manage and explore details of all registered patients.")

st.session_state.setdefault("sort_field", "last_name")
st.session_state.setdefault("sort_direction", "asc")


def clear_search():
    st.session_state.directory_search = ""


# Search bar
c1, c2 = st.columns([4, 1])
with c1:
    search_term = st.text_input("Search patients by name", placeholder="e.g., Doe", key="directory_search")
with c2:
    st.write("")
    st.button("Clear", use_container_width=True, on_click=clear_search)

# Blank input lists everyone
try:
    if search_term.strip():
        patients = search_patients_by_name(search_term.strip())
    else:
        patients = get_all_patients()
except HealthHubError as e:
    st.error(f"Failed to load patient data: {e.message}")
    st.stop()

if not patients:
    if search_term.strip():
        st.info("Your search returned no results. Try a different name.")
    else:
        st.info("No patients are currently registered.")
        if st.button("Register a patient"):
            st.switch_page("pages/1_Register_Patient.py")
    st.stop()

# Sort controls
sort_cols = st.columns(len(SORTABLE_FIELDS))
for col, name in zip(sort_cols, SORTABLE_FIELDS):
    label = SORT_LABELS[name]
    if name == st.session_state.sort_field:
        label += " ▲" if st.session_state.sort_direction == "asc" else " ▼"
    with col:
        if st.button(label, key=f"sort_{name}", use_container_width=True):
            field, direction = toggle_sort(
                st.session_state.sort_field, st.session_state.sort_direction, name
            )
            st.session_state.sort_field = field
            st.session_state.sort_direction = direction
            st.rerun()

rows = sort_patients(
    [p.to_dict() for p in patients],
    st.session_state.sort_field,
    st.session_state.sort_direction,
)

table = [
    {
        "Patient Name": f"{r['last_name']}, {r['first_name']}",
        "Date of Birth": r["date_of_birth"],
        "Gender": r["gender"],
        "Height (cm)": r["height_cm"],
        "Weight (kg)": r["weight_kg"],
        "Allergies": r["allergies"] or "—",
        "Contact": r["email"] or r["phone"] or "—",
        "Registered On": r["created_at"].strftime("%x") if r["created_at"] else "—",
    }
    for r in rows
]
st.dataframe(table, use_container_width=True, hide_index=True)
st.caption(f"{len(rows)} patient(s)")

st.download_button(
    "Download JSON",
    data=export_patients_json(patients),
    file_name=patient_export_filename(),
    mime="application/json",
)
