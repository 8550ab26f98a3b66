import streamlit as st

from core.helpers import render_sidebar
from core.session_manager import require_database
from services.export_service import export_query_results_json, query_export_filename
from services.query_service import DEFAULT_QUERY, QUERY_EXAMPLES, execute_query

# Page config is set globally in app.py

render_sidebar()
require_database()

st.title("Advanced Query Console")
st.write("Directly interact with the patient database using custom SQL commands.")

if "sql_query" not in st.session_state:
    st.session_state.sql_query = DEFAULT_QUERY
    st.session_state.query_result = execute_query(DEFAULT_QUERY)


def run(query: str):
    if not query.strip():
        st.session_state.query_result = None
        return
    st.session_state.query_result = execute_query(query)


def clear_editor():
    # Runs before the editor widget is rebuilt
    st.session_state.sql_query = ""
    st.session_state.query_result = None


with st.expander("Examples"):
    for example in QUERY_EXAMPLES:
        st.markdown(f"**{example['label']}** - {example['description']}")
        st.code(example["query"], language="sql")
        if st.button("Load", key=f"example_{example['id']}"):
            st.session_state.sql_query = example["query"]
            run(example["query"])
            st.rerun()

st.text_area("SQL Editor", key="sql_query", height=160)

c1, c2 = st.columns([1, 5])
with c1:
    if st.button("Execute", type="primary", use_container_width=True):
        with st.spinner("Executing..."):
            run(st.session_state.sql_query)
with c2:
    st.button("Clear", on_click=clear_editor)

result = st.session_state.get("query_result")
if result is None:
    st.stop()

if not result["success"]:
    st.error(result["error"])
    st.stop()

rows = result["data"]
st.success(f"Query executed successfully. {len(rows)} row(s) returned.")
if rows:
    st.dataframe(rows, use_container_width=True, hide_index=True)
    results_json = export_query_results_json(rows)
    with st.expander("Results as JSON"):
        # st.code renders a copy button
        st.code(results_json, language="json")
    st.download_button(
        "Download results",
        data=results_json,
        file_name=query_export_filename(),
        mime="application/json",
    )
