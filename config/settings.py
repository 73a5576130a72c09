"""
Global settings configurable via environment variables.
"""

import os

ACCOUNT_SERVER_HOST = os.getenv("ACCOUNT_SERVER_HOST", "http://127.0.0.1:8080")
ACCOUNT_SERVICE_NAME = os.getenv("ACCOUNT_SERVICE_NAME", "account")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))
RPC_MAX_RETRIES = int(os.getenv("RPC_MAX_RETRIES", "3"))
RPC_BACKOFF_FACTOR = float(os.getenv("RPC_BACKOFF_FACTOR", "0.5"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "")
