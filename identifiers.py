# identifiers.py
"""
Finding a table whose name may or may not have been created case-sensitively.

Snowflake folds unquoted identifiers to upper case, so a table created as
"mtcars" (quoted) is invisible as mtcars or MTCARS. These helpers try the
plausible spellings in a fixed order and show the operator every outcome.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

import settings
from logger import LOGGER
from queries import quote_ident, quote_literal, sample_rows_sql, show_tables_sql
from query_runner import Empty, Error, QueryResult, Rows, execute
from snowflake_db import ErrorKind

Runner = Callable[[Any, str], QueryResult]


# =========================================================
# Candidates + probe
# =========================================================

def identifier_candidates(database: str, schema: str, table: str) -> List[str]:
    """
    Renderings of database.schema.table, in the order they are tried:
    unquoted upper-case, unquoted lower-case, quoted lower-case table,
    then every segment quoted.
    """
    lower = table.lower()
    candidates = [
        f"{database}.{schema}.{table.upper()}",
        f"{database}.{schema}.{lower}",
        f"{database}.{schema}.{quote_ident(lower)}",
        ".".join(quote_ident(part) for part in (database, schema, lower)),
    ]
    seen = set()
    ordered = []
    for c in candidates:
        if c not in seen:
            seen.add(c)
            ordered.append(c)
    return ordered


def probe_sql(candidate: str) -> str:
    return f"SELECT COUNT(*) AS ROW_COUNT FROM {candidate}"


@dataclass(frozen=True)
class Attempt:
    candidate: str
    result: QueryResult

    def describe(self) -> str:
        if isinstance(self.result, Rows):
            count = self.result.rows[0][0] if self.result.rows else "?"
            return f"{self.candidate} : {count} rows"
        if isinstance(self.result, Error):
            return f"{self.candidate} : ERROR - {self.result.message}"
        return f"{self.candidate} : {self.result.notice}"


@dataclass(frozen=True)
class Resolved:
    candidate: str
    rows: Rows
    attempts: List[Attempt] = field(default_factory=list)

    ok = True


def no_match_message(attempts: List[Attempt]) -> str:
    lines = [
        f"{ErrorKind.NO_MATCHING_IDENTIFIER.value}: none of {len(attempts)} "
        "candidate identifiers resolved"
    ]
    lines += [f"{i}. {a.describe()}" for i, a in enumerate(attempts, start=1)]
    return "\n".join(lines)


def resolve_candidates(session: Any, candidates: List[str],
                       runner: Runner = execute) -> Union[Resolved, Error]:
    """Probe candidates in order; stop at the first one that returns rows."""
    attempts: List[Attempt] = []
    for candidate in candidates:
        result = runner(session, probe_sql(candidate))
        attempts.append(Attempt(candidate, result))
        if isinstance(result, Rows):
            LOGGER.info("Resolved table as %s after %d attempt(s)", candidate, len(attempts))
            return Resolved(candidate, result, attempts)
    LOGGER.info("No candidate resolved (%d tried)", len(attempts))
    return Error(ErrorKind.NO_MATCHING_IDENTIFIER, no_match_message(attempts))


def resolve_table(session: Any, database: str, schema: str, table: str,
                  runner: Runner = execute) -> Union[Resolved, Error]:
    """Returns Resolved, or Error(NO_MATCHING_IDENTIFIER) listing every attempt."""
    return resolve_candidates(session, identifier_candidates(database, schema, table), runner)


# =========================================================
# INFORMATION_SCHEMA existence checks
# =========================================================

@dataclass(frozen=True)
class Lookup:
    label: str
    sql: str
    result: QueryResult

    @property
    def row_count(self) -> Optional[int]:
        if isinstance(self.result, Rows):
            return len(self.result.rows)
        if isinstance(self.result, Empty):
            return 0
        return None


def existence_queries(database: str, table: str) -> List[tuple]:
    lower, upper = table.lower(), table.upper()
    info = f"{database}.INFORMATION_SCHEMA"
    return [
        ("Lowercase search",
         f"SELECT table_name FROM {info}.TABLES WHERE table_name LIKE {quote_literal('%' + lower + '%')}"),
        ("Uppercase search",
         f"SELECT table_name FROM {info}.TABLES WHERE UPPER(table_name) LIKE {quote_literal('%' + upper + '%')}"),
        (f"Columns ({lower})",
         f"SELECT column_name, data_type FROM {info}.COLUMNS WHERE table_name = {quote_literal(lower)}"),
        (f"Columns ({upper})",
         f"SELECT column_name, data_type FROM {info}.COLUMNS WHERE table_name = {quote_literal(upper)}"),
    ]


def check_table_exists(session: Any, database: str, table: str,
                       runner: Runner = execute) -> List[Lookup]:
    """Run every lookup; one failing does not stop the others."""
    return [Lookup(label, sql, runner(session, sql)) for label, sql in existence_queries(database, table)]


def existence_report(lookups: List[Lookup]) -> str:
    lines = ["Table search results:"]
    for i, lookup in enumerate(lookups, start=1):
        if lookup.row_count is None:
            lines.append(f"{i}. {lookup.label}: ERROR - {lookup.result.message}")
        else:
            lines.append(f"{i}. {lookup.label}: {lookup.row_count} rows")
    return "\n".join(lines)


# =========================================================
# Discovered sample
# =========================================================

def find_table_name(listing: Rows, table: str) -> Optional[str]:
    """First name in a SHOW TABLES listing containing `table`, ignoring case."""
    names = [c.lower() for c in listing.columns]
    if "name" not in names:
        return None
    idx = names.index("name")
    needle = table.lower()
    for row in listing.rows:
        name = row[idx]
        if name is not None and needle in str(name).lower():
            return str(name)
    return None


def sample_table(session: Any, database: str, schema: str,
                 table: str = settings.DEFAULT_PROBE_TABLE,
                 runner: Runner = execute) -> QueryResult:
    """Look the table up with SHOW TABLES, then select a few rows using its stored name."""
    listing = runner(session, show_tables_sql(database, schema))
    if isinstance(listing, Error):
        return listing
    actual = find_table_name(listing, table) if isinstance(listing, Rows) else None
    if actual is None:
        return Error(ErrorKind.NO_MATCHING_IDENTIFIER, f"No {table} table found")
    return runner(session, sample_rows_sql(database, schema, actual))
