#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the hos backend.

The project structure:
    ROOT/
    ├── hos/             # Package code
    │   └── database/
    │       └── migrations/  # Alembic environment and revisions
    ├── data/            # SQLite database
    └── logs/            # Application logs

``HOS_DB_PATH`` in the environment points the database somewhere else
(a test database, a shared volume). Everything else is derived from the
project root.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/hos/core/paths.py.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> hos/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "hos"
DATA_DIR = ROOT / "data"

# --- Database ---
ALEMBIC_DIR = PACKAGE_DIR / "database" / "migrations"
DB_PATH = Path(os.environ.get("HOS_DB_PATH", DATA_DIR / "hos.db"))

# ---- Logs ----
LOG_DIR = ROOT / "logs"
