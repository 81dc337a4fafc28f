# query_runner.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Union

import pandas as pd

from logger import LOGGER
from snowflake_db import ErrorKind

NO_ROWS_NOTICE = "Query ran successfully but returned no rows."
NO_RESULT_SET_NOTICE = "Statement executed; it does not produce a result set."


@dataclass(frozen=True)
class Rows:
    columns: List[str]
    rows: List[List[Any]] = field(default_factory=list)

    ok = True


@dataclass(frozen=True)
class Error:
    kind: ErrorKind
    message: str

    ok = False


@dataclass(frozen=True)
class Empty:
    notice: str = NO_ROWS_NOTICE

    ok = True


QueryResult = Union[Rows, Error, Empty]


def execute(session: Any, sql: str) -> QueryResult:
    """
    Run `sql` verbatim on an open session and materialize the whole result.

    The string is never parsed or rewritten. Backend errors keep their
    original text so the person debugging sees exactly what the warehouse said.
    """
    if sql is None or not sql.strip():
        return Error(ErrorKind.EMPTY_QUERY, f"{ErrorKind.EMPTY_QUERY.value}: no SQL to run")

    LOGGER.debug("Executing: %s", sql)
    try:
        with session.cursor() as cur:
            cur.execute(sql)
            if cur.description is None:
                return Empty(NO_RESULT_SET_NOTICE)
            columns = [c[0] for c in cur.description]
            rows = [list(r) for r in cur.fetchall()]
    except Exception as e:
        LOGGER.warning("Query failed: %s", e)
        return Error(ErrorKind.QUERY_FAILURE, str(e))

    if not rows:
        return Empty()
    return Rows(columns, rows)


def to_dataframe(result: QueryResult) -> pd.DataFrame:
    """Shape any QueryResult for a table widget."""
    if isinstance(result, Rows):
        return pd.DataFrame(result.rows, columns=result.columns)
    if isinstance(result, Error):
        return pd.DataFrame({"Error": [result.message]})
    return pd.DataFrame({"Notice": [result.notice]})
