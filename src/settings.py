"""Static configuration for schemadeck.

All user-editable settings (cluster, test config, notifications, logging) live
in a single JSON file for quick edits without touching Python.
"""

import json
import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# config.json sits next to the project by default; SCHEMADECK_CONFIG points
# elsewhere when several clusters are managed from one checkout.
CONFIG_PATH = os.getenv("SCHEMADECK_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


def _load_test_config(section: dict) -> "str | None":
    """Read the predefined test config document, if one is configured."""

    if not section.get("enabled", True):
        return None
    path = section.get("path")
    if not path:
        return None
    path = _resolve_path(path)
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


_CONFIG = _load_json_config()

# Target cluster. CLUSTER_ENDPOINT / CLUSTER_ALIAS in .env take precedence.
_cluster = _CONFIG.get("cluster", {})
CLUSTER_ALIAS = _cluster.get("alias", "")
CLUSTER_ENDPOINT = _cluster.get("endpoint", "http://localhost:8081")
REQUEST_TIMEOUT_SECONDS = float(_cluster.get("timeout_seconds", 10))

# Predefined test config offered behind a confirmation prompt.
_test_config = _CONFIG.get("test_config", {})
TEST_CONFIG = _load_test_config(_test_config)

# How many delivered notifications the sink keeps around.
_notifications = _CONFIG.get("notifications", {})
NOTIFICATION_HISTORY_SIZE = int(_notifications.get("history_size", 50))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
