from __future__ import annotations
from typing import Any, Dict, Optional

import settings
from query_runner import Empty, Error, QueryResult, Rows
from snowflake_db import ConnectionOptions, ConnectionResult, Failure

# Pure helpers: text in, text out. Rendering lives in utils/render.py.

def truncate(text: str, limit: int = settings.DISPLAY_MAX_CHARS) -> str:
    if text is None:
        return ""
    if limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + f"… [{len(text) - limit} more chars]"

def mask_secret(value: Optional[str]) -> str:
    return "*" * 10 if value else "<missing>"

def connection_status_text(conn: ConnectionResult, context: Optional[QueryResult] = None) -> str:
    """Status block for the connection test: failure reason, or user/db/schema."""
    if isinstance(conn, Failure):
        return truncate(f"❌ Connection failed: {conn.message}")
    if isinstance(context, Error):
        return truncate(f"❌ Connection failed: {context.message}")
    if not isinstance(context, Rows):
        return "✅ Connection successful!"
    row = dict(zip([c.upper() for c in context.columns], context.rows[0]))
    return (
        "✅ Connection successful!"
        f"\nUser: {row.get('USER')}"
        f"\nDatabase: {row.get('DB')}"
        f"\nSchema: {row.get('SCHEMA')}"
    )

def result_summary(result: QueryResult) -> str:
    if isinstance(result, Rows):
        return f"{len(result.rows)} rows × {len(result.columns)} columns"
    if isinstance(result, Empty):
        return result.notice
    return truncate(result.message)

def options_label(options: ConnectionOptions) -> Dict[str, Any]:
    """Flat description of the options, for tables and captions."""
    return {
        "method": options.method.value,
        "database": options.database or "(user default)",
        "schema": options.schema or "(user default)",
        "warehouse": options.warehouse or "(user default)",
        "timeout": options.timeout_seconds if options.timeout_seconds is not None else "(driver default)",
        "autocommit": options.autocommit if options.autocommit is not None else "(driver default)",
    }
