import streamlit as st

from core.helpers import render_field_error, render_sidebar
from core.session_manager import advance_widget_generation, require_database, session_form
from core.validations import date_of_birth_range, validate_patient_form
from models.patient import GENDERS
from services.patient_service import register_patient

# Page config is set globally in app.py

INITIAL_VALUES = {
    "first_name": "",
    "last_name": "",
    "date_of_birth": None,
    "gender": "",
    "email": "",
    "phone": "",
    "address": "",
    "height_cm": None,
    "weight_kg": None,
    "allergies": "",
    "medical_notes": "",
}

GENDER_LABELS = {"": "Select gender"}
GENDER_LABELS.update({g: g.replace("_", " ").capitalize() for g in GENDERS})

render_sidebar()
require_database()

st.title("Register New Patient")

form = session_form("patient_form", INITIAL_VALUES, validate_patient_form, register_patient)
values = form.values

WIDGET_PREFIX = "patient_field_"

# Widgets are keyed by the form's reset count so a successful submit or a
# reset clears them along with the FormState values.
generation = st.session_state.setdefault("patient_form_generation", 0)


def field(name):
    return f"{WIDGET_PREFIX}{name}_{generation}"


with st.form("patient_form_widgets"):
    c1, c2 = st.columns(2)
    with c1:
        first_name = st.text_input("First Name *", value=values["first_name"], key=field("first_name"))
        render_field_error(form.errors, "first_name")
        dob_min, dob_max = date_of_birth_range()
        date_of_birth = st.date_input(
            "Date of Birth *",
            value=values["date_of_birth"],
            min_value=dob_min,
            max_value=dob_max,
            key=field("date_of_birth"),
        )
        render_field_error(form.errors, "date_of_birth")
        email = st.text_input("Email", value=values["email"], key=field("email"))
        render_field_error(form.errors, "email")
        height_cm = st.number_input("Height (cm)", min_value=0.0, value=values["height_cm"], key=field("height_cm"))
        render_field_error(form.errors, "height_cm")
    with c2:
        last_name = st.text_input("Last Name *", value=values["last_name"], key=field("last_name"))
        render_field_error(form.errors, "last_name")
        gender = st.selectbox(
            "Gender *",
            list(GENDER_LABELS),
            index=list(GENDER_LABELS).index(values["gender"] or ""),
            format_func=GENDER_LABELS.get,
            key=field("gender"),
        )
        render_field_error(form.errors, "gender")
        phone = st.text_input("Phone", value=values["phone"], key=field("phone"))
        weight_kg = st.number_input("Weight (kg)", min_value=0.0, value=values["weight_kg"], key=field("weight_kg"))
        render_field_error(form.errors, "weight_kg")

    address = st.text_area("Address", value=values["address"], key=field("address"))
    allergies = st.text_area("Allergies", value=values["allergies"], key=field("allergies"))
    medical_notes = st.text_area("Medical Notes", value=values["medical_notes"], key=field("medical_notes"))

    c_submit, c_reset = st.columns([1, 1])
    with c_submit:
        submitted = st.form_submit_button("Register Patient", disabled=form.submitting)
    with c_reset:
        reset = st.form_submit_button("Reset")

if reset:
    form.reset()
    advance_widget_generation("patient_form_generation", WIDGET_PREFIX)
    st.rerun()

if submitted:
    entered = {
        "first_name": first_name,
        "last_name": last_name,
        "date_of_birth": date_of_birth,
        "gender": gender,
        "email": email,
        "phone": phone,
        "address": address,
        "height_cm": height_cm,
        "weight_kg": weight_kg,
        "allergies": allergies,
        "medical_notes": medical_notes,
    }
    for name, value in entered.items():
        if form.values.get(name) != value:
            form.set_field(name, value)

    with st.spinner("Registering..."):
        ok = form.submit()
    if ok:
        advance_widget_generation("patient_form_generation", WIDGET_PREFIX)
    st.rerun()

if form.success:
    st.success("Patient registered successfully!")
if form.submit_error:
    st.error(f"Could not register patient: {form.submit_error}")
if form.errors:
    st.warning("Please fix the highlighted fields.")

st.caption("Fields marked * are required.")
