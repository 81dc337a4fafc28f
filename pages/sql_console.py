import streamlit as st

from query_runner import execute
from snowflake_db import open_session
from utils.render import show_connection_failure, show_result
from utils.sidebar import render_connection_options

st.set_page_config(page_title="SQL Console", page_icon="⌨️", layout="wide")
st.title("⌨️ SQL Console")

options = render_connection_options()

sql = st.text_area("SQL", height=180, value="SELECT CURRENT_TIMESTAMP() AS NOW", key="console_sql")
if st.button("▶️ Run", type="primary", disabled=options is None):
    if not sql.strip():
        # Rejected before any connection is opened
        show_result(execute(None, sql))
    else:
        # Sent as typed; no rewriting or LIMIT injection
        with st.spinner("Running..."):
            with open_session(options) as conn:
                if not show_connection_failure(conn):
                    show_result(execute(conn.session, sql))
