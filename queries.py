# queries.py
"""Canned SQL used by the probe buttons."""
from __future__ import annotations

import settings

SESSION_CONTEXT_SQL = (
    "SELECT CURRENT_USER() AS USER, CURRENT_DATABASE() AS DB, CURRENT_SCHEMA() AS SCHEMA"
)
SHOW_DATABASES_SQL = "SHOW DATABASES"


def quote_ident(name: str) -> str:
    """Double-quote an identifier, escaping embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def show_schemas_sql(database: str) -> str:
    return f"SHOW SCHEMAS IN {database}"


def show_tables_sql(database: str, schema: str) -> str:
    return f"SHOW TABLES IN {database}.{schema}"


def sample_rows_sql(database: str, schema: str, table: str,
                    limit: int = settings.SAMPLE_ROW_LIMIT) -> str:
    # Table name comes from SHOW TABLES, so it is quoted exactly as stored
    return f"SELECT * FROM {database}.{schema}.{quote_ident(table)} LIMIT {int(limit)}"
