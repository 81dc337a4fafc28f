import pytest

import snowflake_db as mod
from snowflake_db import (
    ConnectionMethod,
    ConnectionOptions,
    Credentials,
    ErrorKind,
    Failure,
    Success,
    acquire,
    connect_params,
    open_session,
    options_from_env,
    read_credentials,
    release,
)
from fakes import FakeConnection, FakeDriver

# ---------- options ----------


def test_fully_qualified_requires_database_and_schema():
    with pytest.raises(ValueError):
        ConnectionOptions.fully_qualified(database="DEMO_DATA", schema=None)
    with pytest.raises(ValueError):
        ConnectionOptions.fully_qualified(database=None, schema=None)


def test_basic_rejects_database():
    with pytest.raises(ValueError):
        ConnectionOptions(ConnectionMethod.BASIC, database="DEMO_DATA", schema="PUBLIC")


def test_named_source_rejects_mixed_database_schema():
    with pytest.raises(ValueError):
        ConnectionOptions.named_source("dev", database="DEMO_DATA")


def test_named_source_requires_name():
    with pytest.raises(ValueError):
        ConnectionOptions.named_source("")


def test_timeout_must_be_positive():
    with pytest.raises(ValueError):
        ConnectionOptions.basic(timeout_seconds=0)


def test_variant_constructors_set_method():
    assert ConnectionOptions.basic().method is ConnectionMethod.BASIC
    assert ConnectionOptions.fully_qualified("D", "S").method is ConnectionMethod.FULLY_QUALIFIED
    assert ConnectionOptions.named_source("dev").method is ConnectionMethod.NAMED_SOURCE


def test_connect_params_fully_qualified(credentials):
    options = ConnectionOptions.fully_qualified(
        "DEMO_DATA", "PUBLIC", warehouse="COMPUTE_WH", timeout_seconds=15, autocommit=False
    )
    params = connect_params(options, credentials)

    assert params == {
        "user": "probe_user",
        "password": "s3cret",
        "account": "xy12345",
        "host": "xy12345.snowflakecomputing.com",
        "database": "DEMO_DATA",
        "schema": "PUBLIC",
        "warehouse": "COMPUTE_WH",
        "login_timeout": 15,
        "network_timeout": 15,
        "autocommit": False,
    }


def test_connect_params_basic_omits_unset_options(credentials):
    params = connect_params(ConnectionOptions.basic(), credentials)

    assert set(params) == {"user", "password", "account", "host"}


def test_connect_params_named_source(credentials):
    params = connect_params(ConnectionOptions.named_source("dev"), credentials)

    assert params["connection_name"] == "dev"
    assert "database" not in params


def test_account_without_known_suffix_is_host():
    assert Credentials("u", "p", "myorg-myacct").account == "myorg-myacct"


def test_options_from_env_defaults(clean_env):
    options = options_from_env(ConnectionMethod.FULLY_QUALIFIED)

    assert (options.database, options.schema, options.warehouse) == ("DEMO_DATA", "PUBLIC", None)


def test_options_from_env_reads_variables(clean_env):
    clean_env.setenv("SNOWFLAKE_DATABASE", "ANALYTICS")
    clean_env.setenv("SNOWFLAKE_SCHEMA", "RAW")
    clean_env.setenv("SNOWFLAKE_WAREHOUSE", "WH")
    clean_env.setenv("SNOWFLAKE_CONNECTION_NAME", "probe")

    fq = options_from_env(ConnectionMethod.FULLY_QUALIFIED)
    named = options_from_env(ConnectionMethod.NAMED_SOURCE)
    basic = options_from_env(ConnectionMethod.BASIC)

    assert (fq.database, fq.schema, fq.warehouse) == ("ANALYTICS", "RAW", "WH")
    assert named.source_name == "probe"
    assert basic.database is None and basic.warehouse == "WH"


# ---------- credentials ----------


def test_read_credentials_at_call_time(clean_env):
    clean_env.setenv("SNOWFLAKE_USER", "first")
    assert read_credentials().user == "first"

    clean_env.setenv("SNOWFLAKE_USER", "second")
    assert read_credentials().user == "second"


def test_read_credentials_missing_lists_variables(clean_env):
    clean_env.setenv("SNOWFLAKE_USER", "someone")

    assert read_credentials().missing == ["SNOWFLAKE_PASSWORD", "SNOWFLAKE_SERVER"]


# ---------- acquire ----------


@pytest.mark.parametrize(
    "user, password, host",
    [
        ("", "pw", "host"),
        ("u", "", "host"),
        ("u", "pw", ""),
        ("", "", ""),
        ("   ", "pw", "host"),
    ],
)
def test_missing_credentials_never_call_driver(user, password, host):
    driver = FakeDriver()

    result = acquire(ConnectionOptions.basic(), Credentials(user, password, host), connect=driver)

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.MISSING_CREDENTIALS
    assert "MissingCredentials" in result.message
    assert driver.calls == []


def test_missing_credentials_from_unset_environment(clean_env):
    driver = FakeDriver()

    result = acquire(ConnectionOptions.basic(), connect=driver)

    assert result.kind is ErrorKind.MISSING_CREDENTIALS
    assert len(driver.calls) == 0


def test_acquire_success_makes_one_call(credentials, fake_driver, fake_connection):
    result = acquire(ConnectionOptions.basic(), credentials, connect=fake_driver)

    assert isinstance(result, Success)
    assert result.ok
    assert result.session is fake_connection
    assert len(fake_driver.calls) == 1


def test_acquire_converts_driver_error(credentials):
    driver = FakeDriver(error=RuntimeError("250001: Incorrect username or password was specified."))

    result = acquire(ConnectionOptions.basic(), credentials, connect=driver)

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.CONNECTION_FAILURE
    assert result.message == "250001: Incorrect username or password was specified."
    assert len(driver.calls) == 1  # no retry


def test_acquire_defaults_to_snowflake_connector(monkeypatch, credentials):
    driver = FakeDriver()
    monkeypatch.setattr(mod.snowflake.connector, "connect", driver)

    result = acquire(ConnectionOptions.basic(), credentials)

    assert result.ok
    assert driver.calls[0]["user"] == "probe_user"


# ---------- release ----------


def test_release_none_is_noop():
    release(None)


def test_release_after_failed_acquire_is_noop(credentials):
    result = acquire(ConnectionOptions.basic(), credentials, connect=FakeDriver(error=OSError("unreachable")))

    release(result.session)


def test_release_twice_is_safe():
    conn = FakeConnection()

    release(conn)
    release(conn)

    assert conn.close_calls == 2


def test_release_swallows_close_errors():
    conn = FakeConnection(close_error=RuntimeError("session already gone"))

    release(conn)

    assert conn.close_calls == 1


# ---------- open_session ----------


def test_open_session_releases_on_exit(credentials, fake_driver, fake_connection):
    with open_session(ConnectionOptions.basic(), credentials, connect=fake_driver) as result:
        assert result.ok

    assert fake_connection.close_calls == 1


def test_open_session_releases_on_error(credentials, fake_driver, fake_connection):
    with pytest.raises(KeyError):
        with open_session(ConnectionOptions.basic(), credentials, connect=fake_driver):
            raise KeyError("boom")

    assert fake_connection.close_calls == 1


def test_open_session_yields_failure_without_raising():
    with open_session(ConnectionOptions.basic(), Credentials("", "", ""), connect=FakeDriver()) as result:
        assert result.kind is ErrorKind.MISSING_CREDENTIALS
