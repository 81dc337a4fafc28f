from query_runner import Empty, Error, Rows
from snowflake_db import ConnectionOptions, ErrorKind, Failure, Success
from utils.formatting import connection_status_text, mask_secret, options_label, result_summary, truncate


def test_truncate_leaves_short_text_alone():
    assert truncate("short", limit=10) == "short"


def test_truncate_marks_cut_text():
    text = truncate("x" * 25, limit=10)

    assert text.startswith("x" * 10)
    assert text.endswith("[15 more chars]")


def test_mask_secret():
    assert mask_secret("hunter2") == "*" * 10
    assert mask_secret("") == "<missing>"


def test_status_for_failed_connection():
    text = connection_status_text(Failure(ErrorKind.CONNECTION_FAILURE, "Incorrect username or password"))

    assert text == "❌ Connection failed: Incorrect username or password"


def test_status_for_successful_connection():
    context = Rows(["USER", "DB", "SCHEMA"], [["PROBE_USER", "DEMO_DATA", "PUBLIC"]])

    text = connection_status_text(Success(object()), context)

    assert text.splitlines() == [
        "✅ Connection successful!",
        "User: PROBE_USER",
        "Database: DEMO_DATA",
        "Schema: PUBLIC",
    ]


def test_status_when_context_query_fails():
    text = connection_status_text(Success(object()), Error(ErrorKind.QUERY_FAILURE, "warehouse suspended"))

    assert "warehouse suspended" in text


def test_result_summary():
    assert result_summary(Rows(["A"], [[1], [2]])) == "2 rows × 1 columns"
    assert result_summary(Empty("none")) == "none"
    assert result_summary(Error(ErrorKind.QUERY_FAILURE, "bad")) == "bad"


def test_options_label_defaults():
    label = options_label(ConnectionOptions.basic())

    assert label["method"] == "Basic"
    assert label["database"] == "(user default)"
    assert label["timeout"] == "(driver default)"
