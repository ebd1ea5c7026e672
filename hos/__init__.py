"""
hos Backend Package
===================

Model layer for a campus-radio show and playlist application.

Members (DJs and admins) own shows, build dated playlists for those shows,
add songs to playlists, and favorite shows. This package keeps the
referential bookkeeping between those entities consistent: existence and
duplicate checks before every write, partial updates, and the per-playlist
song ordering.

Main Components:
    - core: Exceptions, logging, validation, credentials and paths
    - database: SQLAlchemy ORM with entity managers, Alembic migrations,
      and the ``hosdb`` CLI

Primary Interfaces:
    - hos.database.manager.HosDB: Main database interface
    - hos.database.cli: Database management CLI

Example Usage:
    >>> from hos import HosDB, DB_PATH, ALEMBIC_DIR, LOG_DIR
    >>> db = HosDB(db_path=DB_PATH, alembic_dir=ALEMBIC_DIR, log_dir=LOG_DIR)
    >>> with db.session_scope():
    ...     show = db.shows.create({"show_name": "Night Owls", "day_of_week": 5,
    ...                             "show_time": "23:00"})

Version: 1.0.0
"""

__version__ = "1.0.0"

from hos.database.manager import HosDB
from hos.core.paths import ALEMBIC_DIR, DATA_DIR, DB_PATH, LOG_DIR

__all__ = [
    "HosDB",
    "ALEMBIC_DIR",
    "DATA_DIR",
    "DB_PATH",
    "LOG_DIR",
]
