"""
Runtime configuration for HTTP Workbench.

Values are read once from environment variables at import time.
"""

import os

# SQLite database URL - file-based storage
DATABASE_URL = os.getenv("HTTP_WORKBENCH_DATABASE_URL", "sqlite:///./http_workbench.db")

# Transport timeout in seconds
DEFAULT_TIMEOUT = float(os.getenv("HTTP_WORKBENCH_TIMEOUT", "30.0"))

LOG_LEVEL = os.getenv("HTTP_WORKBENCH_LOG_LEVEL", "INFO").upper()
