"""
Application constants for Graph Canvas.

This module contains default values and limits used throughout the
application.
"""

from __future__ import annotations

# Storage configuration
DEFAULT_DB_PATH = "data/graph.duckdb"
MEMORY_DB_PATH = ":memory:"
DB_CONNECT_MAX_RETRIES = 5
DB_CONNECT_RETRY_DELAY = 1.0  # seconds

# Node defaults
DEFAULT_NODE_TYPE = "default"
DEFAULT_COORDINATE = 0.0

# Edge defaults
DEFAULT_EDGE_LABEL = ""
DEFAULT_EDGE_DIRECTED = True

# Search configuration
SEARCH_RESULT_LIMIT = 20

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"
REQUEST_ID_HEADER = "X-Request-ID"
