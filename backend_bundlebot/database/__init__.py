"""
Persistence layer — JSON documents for bundles, sessions and history.

Each table is a JsonStore backed by one file in the data directory.
"""

from backend_bundlebot.database.json_store import JsonStore

BUNDLES_FILE = "bundles.json"
SESSIONS_FILE = "sessions.json"
HISTORY_FILE = "history.json"

__all__ = [
    "BUNDLES_FILE",
    "HISTORY_FILE",
    "JsonStore",
    "SESSIONS_FILE",
]
