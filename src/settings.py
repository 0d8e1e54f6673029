"""Static configuration for tabsweep.

All user-editable settings (rules, internal prefixes, DevTools endpoint,
logging) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

from core.classifier import INTERNAL_URL_PREFIXES

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Where to store the SQLite database (closed batch + target registry).
DB_PATH = os.getenv("TABSWEEP_DB", os.path.join(os.path.dirname(__file__), "tabsweep.db"))

# TABSWEEP_CONFIG can point at a config.json outside the checkout.
CONFIG_PATH = os.getenv("TABSWEEP_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Custom rules: [{"name": ..., "pattern": ...}]. The JSON rule store writes
# back to the same section.
RULES_CONFIG = _CONFIG.get("rules", [])

# URL prefixes of pages that are never grouped or closed.
INTERNAL_PREFIXES = tuple(_CONFIG.get("internal_prefixes") or INTERNAL_URL_PREFIXES)

# Only the current window is supported as a query scope.
WINDOW_SCOPE = _CONFIG.get("window_scope", "current_window")

# DevTools endpoint of a browser started with --remote-debugging-port.
# CDP_HOST / CDP_PORT in the environment (or .env) win over config.json.
_cdp = _CONFIG.get("cdp", {})
CDP_HOST = os.getenv("CDP_HOST") or _cdp.get("host", "127.0.0.1")
CDP_PORT = int(os.getenv("CDP_PORT") or _cdp.get("port", 9222))
CDP_TIMEOUT = float(_cdp.get("timeout", 5.0))
# Registry rows for targets not seen in this many days are dropped at startup.
TARGET_TTL_DAYS = int(_cdp.get("target_ttl_days", 30))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
