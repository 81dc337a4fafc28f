# probe_app.py
import streamlit as st

import settings
from identifiers import check_table_exists, existence_report, resolve_table, sample_table, Resolved
from queries import SESSION_CONTEXT_SQL, SHOW_DATABASES_SQL, show_schemas_sql, show_tables_sql
from query_runner import Error, execute
from snowflake_db import ConnectionMethod, open_session
from utils.formatting import connection_status_text, options_label
from utils.render import show_connection_failure, show_result
from utils.sidebar import render_connection_options

st.set_page_config(page_title="Snowflake Connection Diagnostic", page_icon="🧪", layout="wide")
st.title("🧪 Snowflake Connection Diagnostic")

options = render_connection_options()
if options is None:
    st.stop()

# Basic connections have no database/schema of their own; fall back to the demo location
database = options.database or settings.DEFAULT_DATABASE
schema = options.schema or settings.DEFAULT_SCHEMA

with st.expander("Connection parameters", expanded=False):
    st.json(options_label(options))

# -----------------------------------
# Controls
# -----------------------------------
c1, c2, c3 = st.columns(3)
with c1:
    st.subheader("Connection Test")
    test_conn = st.button("Test Connection", type="primary")
with c2:
    st.subheader("Table Discovery")
    list_databases = st.button("List Databases")
    list_schemas = st.button("List Schemas")
    list_tables = st.button("List Tables")
with c3:
    st.subheader(f"{settings.DEFAULT_PROBE_TABLE.upper()} Tests")
    table = st.text_input("Table", value=settings.DEFAULT_PROBE_TABLE, key="probe_table").strip()
    check_exists = st.button("Check Table Exists")
    count_rows = st.button("Count Table Rows")
    simple_query = st.button("Simple Table Query")

# Each click owns its session; nothing is kept between reruns except rendered output.
if test_conn:
    with open_session(options) as conn:
        context = execute(conn.session, SESSION_CONTEXT_SQL) if conn.ok else None
        st.session_state["conn_status"] = connection_status_text(conn, context)

canned = None
if list_databases:
    canned = SHOW_DATABASES_SQL
elif list_schemas:
    canned = show_schemas_sql(database)
elif list_tables:
    canned = show_tables_sql(database, schema)

if canned:
    with open_session(options) as conn:
        if not show_connection_failure(conn):
            st.session_state["results"] = (canned, execute(conn.session, canned))

if check_exists and table:
    with open_session(options) as conn:
        if conn.ok:
            st.session_state["debug"] = existence_report(check_table_exists(conn.session, database, table))
        else:
            st.session_state["debug"] = f"Error: {conn.message}"

if count_rows and table:
    with open_session(options) as conn:
        if conn.ok:
            outcome = resolve_table(conn.session, database, schema, table)
            if isinstance(outcome, Resolved):
                lines = [a.describe() for a in outcome.attempts]
                lines.append(f"Resolved as {outcome.candidate}")
                st.session_state["debug"] = "\n".join(lines)
            else:
                st.session_state["debug"] = outcome.message
        else:
            st.session_state["debug"] = f"Connection error: {conn.message}"

if simple_query and table:
    with open_session(options) as conn:
        if conn.ok:
            result = sample_table(conn.session, database, schema, table)
            if isinstance(result, Error):
                result = Error(result.kind, f"Query failed: {result.message}")
            st.session_state["results"] = (f"Sample of {table}", result)
        else:
            show_connection_failure(conn)

# -----------------------------------
# Output
# -----------------------------------
st.divider()
if "conn_status" in st.session_state:
    st.code(st.session_state["conn_status"], language=None)

st.subheader("Results")
if "results" in st.session_state:
    label, result = st.session_state["results"]
    st.caption(label)
    show_result(result)
else:
    st.info("Run a discovery or table query to see results here.")

if "debug" in st.session_state:
    st.code(st.session_state["debug"], language=None)

if options.method is ConnectionMethod.BASIC:
    st.caption(f"Basic connections probe {database}.{schema} explicitly; session defaults come from the user.")
