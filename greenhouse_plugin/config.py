"""
Configuration module for the Greenhouse plugin.
Centralizes environment variables, logging setup, and constants.
"""
import os
import logging
from typing import Mapping, Optional
from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()

# ============================================================================
# Storage Configuration
# ============================================================================

# Host document store connection (optional, falls back to in-process storage)
DATABASE_URL = os.environ.get("DATABASE_URL")

# Store backend: "postgres", "memory" or "none" (settings from env only, nothing cached)
GREENHOUSE_STORE = os.environ.get("GREENHOUSE_STORE") or ("postgres" if DATABASE_URL else "memory")

# Collection names in the host document store
JOBS_COLLECTION = "greenhouse-jobs"
SETTINGS_COLLECTION = "greenhouse-settings"

# ============================================================================
# Greenhouse API Configuration
# ============================================================================

GREENHOUSE_BOARDS_API_URL = os.environ.get("GREENHOUSE_BOARDS_API_URL", "https://boards-api.greenhouse.io")
GREENHOUSE_HARVEST_API_URL = os.environ.get("GREENHOUSE_HARVEST_API_URL", "https://harvest.greenhouse.io")

# Upper bound for a single upstream request (seconds)
GREENHOUSE_REQUEST_TIMEOUT = float(os.environ.get("GREENHOUSE_REQUEST_TIMEOUT", "30"))

# Max job detail fetches in flight during one sync
GREENHOUSE_DETAIL_CONCURRENCY = int(os.environ.get("GREENHOUSE_DETAIL_CONCURRENCY", "10"))

# ============================================================================
# Dashboard Configuration
# ============================================================================

GREENHOUSE_DASHBOARD_ROWS = int(os.environ.get("GREENHOUSE_DASHBOARD_ROWS", "10"))

# ============================================================================
# Logging Configuration
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ============================================================================
# Settings sourced from the environment
# ============================================================================

# Settings field (camelCase) -> environment variable
SETTINGS_ENV_VARS = {
    "urlToken": "GREENHOUSE_URL_TOKEN",
    "apiKey": "GREENHOUSE_API_KEY",
    "cacheExpiryTime": "GREENHOUSE_CACHE_EXPIRY_TIME",
    "boardType": "GREENHOUSE_BOARD_TYPE",
    "formType": "GREENHOUSE_FORM_TYPE",
    "cycleFx": "GREENHOUSE_CYCLE_FX",
    "debug": "GREENHOUSE_DEBUG",
    "customCSS": "GREENHOUSE_CUSTOM_CSS",
}

# Label field -> environment variable
LABEL_ENV_VARS = {
    "applyNow": "GREENHOUSE_LABEL_APPLY_NOW",
    "applyNowCancel": "GREENHOUSE_LABEL_APPLY_NOW_CANCEL",
    "back": "GREENHOUSE_LABEL_BACK",
    "department": "GREENHOUSE_LABEL_DEPARTMENT",
    "description": "GREENHOUSE_LABEL_DESCRIPTION",
    "hideFullDesc": "GREENHOUSE_LABEL_HIDE_FULL_DESC",
    "location": "GREENHOUSE_LABEL_LOCATION",
    "office": "GREENHOUSE_LABEL_OFFICE",
    "readFullDesc": "GREENHOUSE_LABEL_READ_FULL_DESC",
}


def load_environment_settings(environ: Optional[Mapping[str, str]] = None) -> dict:
    """
    Snapshot the settings-type environment variables.

    Returns a dict keyed by settings field name (camelCase) holding the raw
    string values; unset and empty variables are left out. Labels are nested
    under "labels". Values are validated later by the settings model.
    """
    if environ is None:
        environ = os.environ

    settings = {
        field: environ[var]
        for field, var in SETTINGS_ENV_VARS.items()
        if environ.get(var)
    }
    labels = {
        field: environ[var]
        for field, var in LABEL_ENV_VARS.items()
        if environ.get(var)
    }
    if labels:
        settings["labels"] = labels
    return settings


# ============================================================================
# Runtime flags (used by the app entry point to build PluginOptions)
# ============================================================================

def _flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes", "on")


GREENHOUSE_DISABLED = _flag("GREENHOUSE_DISABLED")
GREENHOUSE_DISABLE_DASHBOARD = _flag("GREENHOUSE_DISABLE_DASHBOARD")
GREENHOUSE_STRICT_SYNC = _flag("GREENHOUSE_STRICT_SYNC")
GREENHOUSE_SYNC_ON_INIT = not os.environ.get("GREENHOUSE_SYNC_ON_INIT") or _flag("GREENHOUSE_SYNC_ON_INIT")
