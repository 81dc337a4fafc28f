# utils/sidebar.py
from typing import Optional

import streamlit as st

import settings
from snowflake_db import ConnectionMethod, ConnectionOptions, options_from_env

_METHOD_HELP = {
    ConnectionMethod.FULLY_QUALIFIED: "Explicit database + schema (+ warehouse).",
    ConnectionMethod.BASIC: "Credentials only; the user's default database/schema apply.",
    ConnectionMethod.NAMED_SOURCE: "A named connection from connections.toml.",
}


def render_connection_options() -> Optional[ConnectionOptions]:
    """Sidebar form for the connection parameters. Returns None when the combination is invalid."""
    with st.sidebar:
        st.header("Connection")
        method = st.radio(
            "Method",
            list(ConnectionMethod),
            format_func=lambda m: m.value,
            key="conn_method",
        )
        st.caption(_METHOD_HELP[method])
        defaults = options_from_env(method)

        source_name = None
        if method is ConnectionMethod.NAMED_SOURCE:
            source_name = st.text_input("Connection name", value=defaults.source_name or "", key="conn_source")

        database = schema = None
        if method is not ConnectionMethod.BASIC:
            database = st.text_input(
                "Database", value=defaults.database or settings.DEFAULT_DATABASE, key=f"conn_db_{method.name}"
            ).strip() or None
            schema = st.text_input(
                "Schema", value=defaults.schema or settings.DEFAULT_SCHEMA, key=f"conn_schema_{method.name}"
            ).strip() or None

        warehouse = st.text_input("Warehouse", value=defaults.warehouse or "", key="conn_wh").strip() or None

        timeout = None
        if st.checkbox("Set timeout", key="conn_timeout_on"):
            timeout = int(st.number_input("Timeout (seconds)", min_value=1, value=30, step=5, key="conn_timeout"))

        autocommit = None
        if st.checkbox("Set autocommit", key="conn_autocommit_on"):
            autocommit = st.toggle("Autocommit", value=True, key="conn_autocommit")

    try:
        if method is ConnectionMethod.FULLY_QUALIFIED:
            return ConnectionOptions.fully_qualified(database, schema, warehouse, timeout, autocommit)
        if method is ConnectionMethod.NAMED_SOURCE:
            return ConnectionOptions.named_source(source_name, database, schema, warehouse, timeout, autocommit)
        return ConnectionOptions.basic(warehouse, timeout, autocommit)
    except ValueError as e:
        st.sidebar.error(str(e))
        return None
