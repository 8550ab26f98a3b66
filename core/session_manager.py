import streamlit as st

from core.database import get_engine
from core.exceptions import HealthHubError
from core.form_state import FormState


def init_session_state():
    """Open the database once per session and remember whether it worked."""
    if st.session_state.get("db_ready"):
        return
    try:
        get_engine()
    except HealthHubError as e:
        st.session_state.db_ready = False
        st.session_state.db_error = e.message
    else:
        st.session_state.db_ready = True
        st.session_state.db_error = None


def require_database():
    """Stop the page with an error banner if the database is unavailable."""
    init_session_state()
    if not st.session_state.db_ready:
        st.error(f"Database unavailable: {st.session_state.db_error}")
        if st.button("Retry"):
            st.rerun()
        st.stop()


def session_form(key: str, initial_values, validator, on_submit) -> FormState:
    """Return this session's FormState for ``key``, creating it on first use."""
    if key not in st.session_state:
        st.session_state[key] = FormState(initial_values, validator, on_submit)
    return st.session_state[key]


def advance_widget_generation(counter_key: str, key_prefix: str, state=None) -> int:
    """Retire the current set of form widgets so the next run starts blank.

    Widgets keyed ``<key_prefix>..._<generation>`` are dropped from session
    state before the counter moves on, so old keys do not pile up.
    """
    state = st.session_state if state is None else state
    for key in [k for k in state.keys() if str(k).startswith(key_prefix)]:
        del state[key]
    state[counter_key] = state.get(counter_key, 0) + 1
    return state[counter_key]
