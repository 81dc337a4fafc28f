# utils/render.py
import streamlit as st

from query_runner import Empty, Error, QueryResult, Rows, to_dataframe
from snowflake_db import ConnectionResult, Failure
from utils.formatting import result_summary, truncate


def show_connection_failure(conn: ConnectionResult) -> bool:
    """Render a failed acquisition. Returns True when there was one."""
    if isinstance(conn, Failure):
        st.error(truncate(f"Connection failed: {conn.message}"))
        return True
    return False


def show_result(result: QueryResult) -> None:
    if isinstance(result, Rows):
        st.caption(result_summary(result))
        st.dataframe(to_dataframe(result), use_container_width=True)
    elif isinstance(result, Empty):
        st.info(result.notice)
    elif isinstance(result, Error):
        st.error(truncate(result.message))
        st.dataframe(to_dataframe(result), use_container_width=True)
