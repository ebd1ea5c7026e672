#!/usr/bin/env python3
"""
manager.py
--------------------
HosDB: the single entry point to the station database.

One HosDB owns the SQLite engine, the session factory and the Alembic
configuration. Entity work happens inside ``session_scope``, which binds
the five entity managers to a shared session for the length of the
``with`` block:

    Members:    db.members.register / authenticate / get / update / remove
    Shows:      db.shows.create / get_all / get / update / remove
    Playlists:  db.playlists.create / get_all / get / update / remove
    Songs:      db.songs.create / get / update / remove
    Favorites:  db.favorites.create / get / remove

Schema upkeep lives here too: a brand new file is built from the models
and stamped at the newest revision, an existing file is migrated forward.

Every connection runs with foreign keys on, so deleting a member, show,
playlist or song drops the join rows that point at it. SQLite savepoints
are enabled so managers can undo a multi-row write without abandoning the
surrounding scope.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

# --- Local imports ---
from hos.core.exceptions import DatabaseError
from hos.core.logging_manager import HosLogger, safe_logger
from .decorators import handle_db_errors, log_database_operation
from .models import Base
from .managers import (
    FavoriteManager,
    MemberManager,
    PlaylistManager,
    ShowManager,
    SongManager,
)

# Attribute name on HosDB -> manager class bound in each session scope
SCOPED_MANAGERS = {
    "members": MemberManager,
    "shows": ShowManager,
    "playlists": PlaylistManager,
    "songs": SongManager,
    "favorites": FavoriteManager,
}


def _enable_sqlite_savepoints(engine: Engine) -> None:
    """
    Turn on foreign keys and let SQLAlchemy own transaction boundaries.

    pysqlite's own transaction handling defers BEGIN and breaks
    SAVEPOINT; with it disabled, BEGIN is emitted explicitly instead.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class HosDB:
    """
    Station database: engine, sessions, entity managers and migrations.

    Attributes:
        db_path: Resolved path of the SQLite file
        alembic_dir: Resolved path of the migration scripts
        engine: SQLAlchemy engine bound to db_path
        SessionLocal: Session factory used by session_scope

    Usage:
        db = HosDB("data/hos.db", ALEMBIC_DIR)
        with db.session_scope():
            show = db.shows.get(3)
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        alembic_dir: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Args:
            db_path: SQLite file; created along with its parent folders
                when missing
            alembic_dir: Folder holding env.py and versions/
            log_dir: Where to write database.log and errors.log; no file
                logging when omitted
        """
        self.db_path = Path(db_path).expanduser().resolve()
        self.alembic_dir = Path(alembic_dir).expanduser().resolve()

        self.logger: Optional[HosLogger] = None
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve()
            self.logger = HosLogger(self.log_dir, component_name="database")

        # Filled by session_scope, empty otherwise
        self._scoped: Dict[str, Any] = {}

        self._connect()

    def _connect(self) -> None:
        log = safe_logger(self.logger)
        log.log_operation(
            "database_open",
            {"db_path": str(self.db_path), "alembic_dir": str(self.alembic_dir)},
        )
        creating = not self.db_path.exists()

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.engine: Engine = create_engine(f"sqlite:///{self.db_path}")
            _enable_sqlite_savepoints(self.engine)
            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine, expire_on_commit=False
            )
            self.alembic_cfg: Config = self._alembic_config()
            if creating:
                self.initialize_schema()
        except Exception as e:
            log.log_error(e, {"operation": "database_open", "creating": creating})
            raise DatabaseError(f"Database initialization failed: {e}") from e

        log.log_operation("database_ready", {"created": creating})

    def _alembic_config(self) -> Config:
        """Build the Alembic config in code; the package ships no alembic.ini."""
        cfg = Config()
        cfg.set_main_option("script_location", str(self.alembic_dir))
        cfg.set_main_option("sqlalchemy.url", f"sqlite:///{self.db_path}")
        cfg.set_main_option(
            "file_template",
            "%%(year)d%%(month).2d%%(day).2d_%%(hour).2d%%(minute).2d_%%(slug)s",
        )
        return cfg

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Run a block of work as one transaction.

        While the block runs, db.members, db.shows, db.playlists, db.songs
        and db.favorites all share the yielded session. Leaving the block
        normally commits; an exception rolls back every write made in it
        and propagates.

        Usage:
            with db.session_scope():
                member = db.members.register({"username": "aliya", "password": "pw"})
                db.favorites.create(member["id"], 3)
        """
        log = safe_logger(self.logger)
        session = self.SessionLocal()
        scope_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self._scoped = {
            name: manager_cls(session, self.logger)
            for name, manager_cls in SCOPED_MANAGERS.items()
        }
        log.log_debug("scope_open", {"scope_id": scope_id})

        try:
            yield session
            session.commit()
            log.log_debug("scope_commit", {"scope_id": scope_id})
        except Exception as e:
            session.rollback()
            log.log_error(e, {"operation": "scope_rollback", "scope_id": scope_id})
            raise
        finally:
            self._scoped = {}
            session.close()

    def get_session(self) -> Session:
        """Return a bare session; the caller commits and closes it."""
        return self.SessionLocal()

    def _manager(self, name: str):
        try:
            return self._scoped[name]
        except KeyError:
            raise DatabaseError(
                f"db.{name} requires active session; "
                f"call it inside 'with db.session_scope():'"
            ) from None

    @property
    def members(self) -> MemberManager:
        return self._manager("members")

    @property
    def shows(self) -> ShowManager:
        return self._manager("shows")

    @property
    def playlists(self) -> PlaylistManager:
        return self._manager("playlists")

    @property
    def songs(self) -> SongManager:
        return self._manager("songs")

    @property
    def favorites(self) -> FavoriteManager:
        return self._manager("favorites")

    # -------------------------------------------------------------------------
    # Schema & Migrations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Bring the file to the newest schema.

        An empty file gets every table from the models and is stamped at
        head, so no migration replays. A file that already has tables is
        upgraded instead.
        """
        with self.engine.connect() as conn:
            existing = self.engine.dialect.get_table_names(conn)

        if existing:
            self.upgrade_database()
            safe_logger(self.logger).log_operation(
                "schema_migrated", {"table_count": len(existing)}
            )
            return

        Base.metadata.create_all(bind=self.engine)
        try:
            command.stamp(self.alembic_cfg, "head")
        except Exception as e:
            raise DatabaseError(f"Could not stamp new database: {e}") from e
        safe_logger(self.logger).log_operation(
            "schema_created", {"tables_created": len(Base.metadata.tables)}
        )

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """Migrate forward to ``revision`` (the newest by default)."""
        try:
            command.upgrade(self.alembic_cfg, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}") from e

    @handle_db_errors
    @log_database_operation("downgrade_database")
    def downgrade_database(self, revision: str) -> None:
        """Migrate back to ``revision``; ``"base"`` drops every table."""
        try:
            command.downgrade(self.alembic_cfg, revision)
        except Exception as e:
            raise DatabaseError(f"Database downgrade to {revision} failed: {e}") from e

    def get_migration_history(self) -> Dict[str, Any]:
        """
        Compare the file's revision with the newest migration script.

        Returns:
            {
                "current_revision": str | None,
                "head_revision": str | None,
                "status": "up_to_date" | "needs_migration",
                "revisions": [{"revision", "down_revision", "doc"}, ...],
            }
            or {"error": message} when either side cannot be read.
        """
        try:
            scripts = ScriptDirectory.from_config(self.alembic_cfg)
            with self.engine.connect() as conn:
                current = MigrationContext.configure(conn).get_current_revision()
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "get_migration_history"})
            return {"error": str(e)}

        head = scripts.get_current_head()
        revisions: List[Dict[str, Optional[str]]] = [
            {
                "revision": script.revision,
                "down_revision": script.down_revision,
                "doc": script.doc,
            }
            for script in scripts.walk_revisions()
        ]
        return {
            "current_revision": current,
            "head_revision": head,
            "status": "up_to_date" if current and current == head else "needs_migration",
            "revisions": revisions,
        }

    def __enter__(self) -> "HosDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.engine.dispose()
