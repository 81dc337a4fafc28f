import pytest

from fakes import FakeConnection, FakeDriver
from snowflake_db import Credentials


@pytest.fixture
def credentials():
    return Credentials(user="probe_user", password="s3cret", host="xy12345.snowflakecomputing.com")


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def fake_driver(fake_connection):
    return FakeDriver(fake_connection)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every SNOWFLAKE_* variable so tests see a known environment."""
    import os

    for key in list(os.environ):
        if key.startswith("SNOWFLAKE_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
