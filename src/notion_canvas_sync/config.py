"""Configuration constants for Notion Canvas Sync.

This module contains ONLY constants - no file or network access.
Secrets are read and written by api/auth.py.
"""

import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "notion-canvas-sync"

# Per-user config directory holding the cached secrets
DEFAULT_CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))

# Secret file name -> (environment override, prompt message)
SECRETS = {
    "notion.key": ("NOTION_API_KEY", "What is your Notion API key?"),
    "canvas.key": ("CANVAS_API_KEY", "What is your Canvas API key?"),
    "canvas.url": ("CANVAS_URL", "What is your Canvas URL?"),
}

# Placeholder assignment emitted by Canvas that is never synced
SENTINEL_ASSIGNMENT_NAME = "SYS_EXCEPTION_GRADE"

# Notion property names the sync relies on
PROP_NAME = "Name"
PROP_DUE_DATE = "Due Date"
PROP_ASSIGNMENT_ID = "Assignment Id"
PROP_SUBJECT_ID = "Subject Id"
PROP_URL = "Assignment URL"

DATABASE_SCHEMA = {
    PROP_NAME: {"title": {}},
    PROP_DUE_DATE: {"date": {}},
    PROP_ASSIGNMENT_ID: {"number": {}},
    PROP_SUBJECT_ID: {"rich_text": {}},
    PROP_URL: {"url": {}},
}

DEFAULT_TITLE = "Untitled"

# Log level for the final summary line, between INFO and WARNING
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")
