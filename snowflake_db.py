# snowflake_db.py
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

import snowflake.connector

import settings
from logger import LOGGER


class ErrorKind(str, Enum):
    """Every failure the probe can report. None of them escape as exceptions."""

    MISSING_CREDENTIALS = "MissingCredentials"
    CONNECTION_FAILURE = "ConnectionFailure"
    EMPTY_QUERY = "EmptyQuery"
    QUERY_FAILURE = "QueryFailure"
    NO_MATCHING_IDENTIFIER = "NoMatchingIdentifier"


class ConnectionMethod(str, Enum):
    FULLY_QUALIFIED = "FullyQualified"
    BASIC = "Basic"
    NAMED_SOURCE = "NamedSource"


# =========================================================
# Config / credentials
# =========================================================

@dataclass(frozen=True)
class Credentials:
    user: str
    password: str
    host: str

    @property
    def missing(self) -> List[str]:
        """Names of the environment variables that are empty."""
        fields = (
            (settings.ENV_USER, self.user),
            (settings.ENV_PASSWORD, self.password),
            (settings.ENV_SERVER, self.host),
        )
        return [name for name, value in fields if not (value or "").strip()]

    @property
    def account(self) -> str:
        """Account identifier derived from the server host name."""
        host = (self.host or "").strip()
        suffix = ".snowflakecomputing.com"
        if host.lower().endswith(suffix):
            return host[: -len(suffix)]
        return host


def read_credentials(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Read user, secret and host from the environment at call time."""
    env = os.environ if environ is None else environ
    return Credentials(
        user=env.get(settings.ENV_USER, ""),
        password=env.get(settings.ENV_PASSWORD, ""),
        host=env.get(settings.ENV_SERVER, ""),
    )


@dataclass(frozen=True)
class ConnectionOptions:
    """
    One set of connection parameters. Build it through the per-method
    constructors; __post_init__ rejects combinations no method allows.
    """

    method: ConnectionMethod
    database: Optional[str] = None
    schema: Optional[str] = None
    warehouse: Optional[str] = None
    timeout_seconds: Optional[int] = None
    autocommit: Optional[bool] = None
    source_name: Optional[str] = None

    def __post_init__(self) -> None:
        if bool(self.database) != bool(self.schema):
            raise ValueError("database and schema must be given together")
        if self.method is ConnectionMethod.FULLY_QUALIFIED and not self.database:
            raise ValueError("FullyQualified connections need a database and schema")
        if self.method is ConnectionMethod.BASIC and self.database:
            raise ValueError("Basic connections use the user's default database and schema")
        if self.method is ConnectionMethod.NAMED_SOURCE and not self.source_name:
            raise ValueError("NamedSource connections need a source name")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be a positive number of seconds")

    @classmethod
    def fully_qualified(cls, database: str, schema: str, warehouse: Optional[str] = None,
                        timeout_seconds: Optional[int] = None,
                        autocommit: Optional[bool] = None) -> "ConnectionOptions":
        return cls(ConnectionMethod.FULLY_QUALIFIED, database=database, schema=schema,
                   warehouse=warehouse, timeout_seconds=timeout_seconds, autocommit=autocommit)

    @classmethod
    def basic(cls, warehouse: Optional[str] = None,
              timeout_seconds: Optional[int] = None,
              autocommit: Optional[bool] = None) -> "ConnectionOptions":
        return cls(ConnectionMethod.BASIC, warehouse=warehouse,
                   timeout_seconds=timeout_seconds, autocommit=autocommit)

    @classmethod
    def named_source(cls, source_name: str, database: Optional[str] = None,
                     schema: Optional[str] = None, warehouse: Optional[str] = None,
                     timeout_seconds: Optional[int] = None,
                     autocommit: Optional[bool] = None) -> "ConnectionOptions":
        """A connection defined in the connector's connections.toml, by name."""
        return cls(ConnectionMethod.NAMED_SOURCE, database=database, schema=schema,
                   warehouse=warehouse, timeout_seconds=timeout_seconds,
                   autocommit=autocommit, source_name=source_name)


def options_from_env(method: ConnectionMethod,
                     environ: Optional[Mapping[str, str]] = None) -> ConnectionOptions:
    """Default options for a method, taken from SNOWFLAKE_* variables."""
    env = os.environ if environ is None else environ
    warehouse = env.get(settings.ENV_WAREHOUSE) or None
    if method is ConnectionMethod.FULLY_QUALIFIED:
        return ConnectionOptions.fully_qualified(
            database=env.get(settings.ENV_DATABASE) or settings.DEFAULT_DATABASE,
            schema=env.get(settings.ENV_SCHEMA) or settings.DEFAULT_SCHEMA,
            warehouse=warehouse,
        )
    if method is ConnectionMethod.NAMED_SOURCE:
        return ConnectionOptions.named_source(
            source_name=env.get(settings.ENV_CONNECTION_NAME) or settings.DEFAULT_CONNECTION_NAME,
            warehouse=warehouse,
        )
    return ConnectionOptions.basic(warehouse=warehouse)


def connect_params(options: ConnectionOptions, credentials: Credentials) -> Dict[str, Any]:
    """Keyword arguments for snowflake.connector.connect()."""
    params: Dict[str, Any] = {
        "user": credentials.user,
        "password": credentials.password,
        "account": credentials.account,
        "host": credentials.host,
    }
    if options.method is ConnectionMethod.NAMED_SOURCE:
        params["connection_name"] = options.source_name
    if options.database:
        params["database"] = options.database
        params["schema"] = options.schema
    if options.warehouse:
        params["warehouse"] = options.warehouse
    if options.timeout_seconds is not None:
        # Passed through only; the driver decides what to do with it
        params["login_timeout"] = options.timeout_seconds
        params["network_timeout"] = options.timeout_seconds
    if options.autocommit is not None:
        params["autocommit"] = options.autocommit
    return params


# =========================================================
# Acquire / release
# =========================================================

@dataclass(frozen=True)
class Success:
    session: Any

    ok = True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    ok = False
    session = None


ConnectionResult = Union[Success, Failure]
Connect = Callable[..., Any]


def acquire(options: ConnectionOptions,
            credentials: Optional[Credentials] = None,
            connect: Optional[Connect] = None) -> ConnectionResult:
    """Open one session. A single attempt; failures come back as Failure, never raised."""
    creds = credentials if credentials is not None else read_credentials()
    missing = creds.missing
    if missing:
        LOGGER.warning("Not connecting, missing environment variables: %s", ", ".join(missing))
        return Failure(
            ErrorKind.MISSING_CREDENTIALS,
            f"{ErrorKind.MISSING_CREDENTIALS.value}: missing environment variables "
            + ", ".join(missing),
        )

    connect = connect or snowflake.connector.connect
    LOGGER.info("Connecting to %s as %s (%s)", creds.host, creds.user, options.method.value)
    try:
        session = connect(**connect_params(options, creds))
    except Exception as e:
        LOGGER.error("Connection failed: %s", e)
        return Failure(ErrorKind.CONNECTION_FAILURE, str(e))
    return Success(session)


def release(session: Any) -> None:
    """Close a session. Safe with None, twice, or when the remote side is already gone."""
    if session is None:
        return
    try:
        session.close()
    except Exception as e:
        LOGGER.warning("Ignoring error while closing session: %s", e)


@contextmanager
def open_session(options: ConnectionOptions,
                 credentials: Optional[Credentials] = None,
                 connect: Optional[Connect] = None) -> Iterator[ConnectionResult]:
    """Acquire for the duration of a with-block; the session is released on every exit path."""
    result = acquire(options, credentials, connect)
    try:
        yield result
    finally:
        release(result.session)
