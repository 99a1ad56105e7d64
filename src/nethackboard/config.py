# src/nethackboard/config.py

"""Runtime configuration read from the environment."""

import os

# Base URL of the remote leaderboard API (no trailing slash)
API_BASE_URL = os.getenv(
    "NETHACKBOARD_API_BASE",
    "https://bnvjt64eva.execute-api.us-east-1.amazonaws.com/prod",
).rstrip("/")

SITE_TITLE = os.getenv("NETHACKBOARD_SITE_TITLE", "Nethack Challenges")

LOG_LEVEL = os.getenv("NETHACKBOARD_LOG_LEVEL", "INFO").upper()

# Address the bundled server listens on
HOST = os.getenv("NETHACKBOARD_HOST", "127.0.0.1")
PORT = int(os.getenv("NETHACKBOARD_PORT", "8000"))
