"""Configuration values sourced from environment variables."""

import os
from typing import Final

# Credential variables, read at connection time (never cached here)
ENV_USER: Final[str] = "SNOWFLAKE_USER"
ENV_PASSWORD: Final[str] = "SNOWFLAKE_PASSWORD"
ENV_SERVER: Final[str] = "SNOWFLAKE_SERVER"

# Option variables used to prefill the sidebar
ENV_DATABASE: Final[str] = "SNOWFLAKE_DATABASE"
ENV_SCHEMA: Final[str] = "SNOWFLAKE_SCHEMA"
ENV_WAREHOUSE: Final[str] = "SNOWFLAKE_WAREHOUSE"
ENV_CONNECTION_NAME: Final[str] = "SNOWFLAKE_CONNECTION_NAME"

DEFAULT_DATABASE: Final[str] = "DEMO_DATA"
DEFAULT_SCHEMA: Final[str] = "PUBLIC"
DEFAULT_CONNECTION_NAME: Final[str] = "default"
DEFAULT_PROBE_TABLE: Final[str] = "mtcars"
SAMPLE_ROW_LIMIT: Final[int] = 5

DISPLAY_MAX_CHARS: Final[int] = int(os.getenv(key="DISPLAY_MAX_CHARS", default="1000"))
LOG_LEVEL: Final[str] = os.getenv(key="LOG_LEVEL", default="INFO")
LOGGER_NAME: Final[str] = os.getenv(key="LOGGER_NAME", default="warehouse-probe")
