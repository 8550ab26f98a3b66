import streamlit as st

from core.config import configure_logging
from core.exceptions import HealthHubError
from core.helpers import render_sidebar
from core.session_manager import require_database
from services.patient_service import count_patients


def go_to(page_path: str):
    st.switch_page(page_path)


def main():
    st.set_page_config(
        page_title="HealthHub",
        page_icon="🩺",
        layout="wide",
    )
    configure_logging()

    render_sidebar()
    st.title("HealthHub Dashboard")
    st.caption("Your centralized hub for patient management and data insights.")
    st.write("---")

    require_database()

    try:
        total = count_patients()
    except HealthHubError as e:
        st.error(f"Could not count patients: {e.message}")
        total = None

    c1, c2, c3 = st.columns(3)

    with c1:
        st.markdown("### Total Patients")
        st.metric("Registered", total if total is not None else "-")
        if st.button("View all patients"):
            go_to("pages/2_Patient_Directory.py")

    with c2:
        st.markdown("### New Patient")
        st.write("Register a new patient record.")
        if st.button("Register patient"):
            go_to("pages/1_Register_Patient.py")

    with c3:
        st.markdown("### Query Console")
        st.write("Run SQL directly against the patient database.")
        if st.button("Open console"):
            go_to("pages/3_Query_Console.py")


if __name__ == "__main__":
    main()
