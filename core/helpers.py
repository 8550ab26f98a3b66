import streamlit as st


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        /* Hide the auto-generated Pages section */
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar():
    """Render the HealthHub menu.

    Items:
    - Dashboard
    - Register Patient
    - Patient Directory
    - Query Console
    """
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### HealthHub")
        if st.button("Dashboard", use_container_width=True):
            st.switch_page("app.py")
        if st.button("Register Patient", use_container_width=True):
            st.switch_page("pages/1_Register_Patient.py")
        if st.button("Patient Directory", use_container_width=True):
            st.switch_page("pages/2_Patient_Directory.py")
        if st.button("Query Console", use_container_width=True):
            st.switch_page("pages/3_Query_Console.py")


def render_field_error(errors, field):
    if errors.get(field):
        st.caption(f":red[{errors[field]}]")
