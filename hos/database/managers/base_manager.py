#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common query and write helpers.
All entity managers inherit from this class.

Key Features:
    - Existence checks used as referential integrity pre-conditions
    - Row fetch helpers returning plain dictionaries
    - Partial UPDATE built from sql_for_partial_update
    - Single round-trip DELETE ... RETURNING
    - Inserts inside a savepoint, with constraint conflicts reported as
      BadRequestError

Usage:
    Subclass BaseManager for each entity type and implement the entity's
    operations (create, get, get_all, update, remove) on top of these
    helpers:

    class ShowManager(BaseManager):
        def remove(self, show_id: int) -> Dict[str, Any]:
            deleted = self._delete_returning(Show, Show.id == show_id)
            if deleted is None:
                raise NotFoundError(f"No show w/ ID: {show_id}")
            return deleted
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Dict, List, Optional, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import ColumnElement, delete, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

# --- Local imports ---
from hos.core.exceptions import BadRequestError
from hos.core.logging_manager import HosLogger, safe_logger
from hos.database.models import Base
from hos.database.sql import PartialUpdate

T = TypeVar("T", bound=Base)


class BaseManager(ABC):
    """
    Abstract base manager providing common helpers.

    Checks and writes issued through one manager share the caller's
    session, so a check and the write it guards run in the same
    transaction.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[HosLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Read Helpers
    # -------------------------------------------------------------------------

    def _exists(self, model_class: Type[T], *criteria: ColumnElement[bool]) -> bool:
        """
        Check whether any row of ``model_class`` matches all criteria.

        Example:
            self._exists(Show, Show.show_name == "Night Owls")
        """
        query = select(model_class.id).where(*criteria).limit(1)
        return self.session.execute(query).first() is not None

    def _fetch_one(self, query) -> Optional[Dict[str, Any]]:
        """Execute a select and return its first row as a dict, or None."""
        row = self.session.execute(query).mappings().first()
        return dict(row) if row is not None else None

    def _fetch_all(self, query) -> List[Dict[str, Any]]:
        """Execute a select and return every row as a dict."""
        return [dict(row) for row in self.session.execute(query).mappings().all()]

    # -------------------------------------------------------------------------
    # Write Helpers
    # -------------------------------------------------------------------------

    def _insert(self, entity: T, conflict_message: str) -> T:
        """
        Add and flush a new row inside a savepoint.

        The referential checks run before this; a unique constraint firing
        here means a concurrent writer won the race, which the caller sees
        as the same BadRequestError the check would have raised.

        Args:
            entity: New ORM instance
            conflict_message: Message for the BadRequestError on conflict

        Returns:
            The flushed entity (its id populated)

        Raises:
            BadRequestError: If a constraint rejects the row
        """
        try:
            with self.session.begin_nested():
                self.session.add(entity)
                self.session.flush()
        except IntegrityError as e:
            safe_logger(self.logger).log_warning(
                "Insert rejected by constraint",
                {"table": entity.__tablename__, "error": str(e.orig)},
            )
            raise BadRequestError(conflict_message) from e
        return entity

    def _apply_patch(
        self,
        table_name: str,
        patch: PartialUpdate,
        key_column: str,
        key_value: Any,
        conflict_message: str = "Update conflicts with an existing record",
    ) -> bool:
        """
        Apply a partial update to the row identified by ``key_column``.

        Args:
            table_name: Table to update
            patch: SET clause and values from sql_for_partial_update
            key_column: Column identifying the row
            key_value: Value of ``key_column`` for the target row
            conflict_message: Message for the BadRequestError on conflict

        Returns:
            True if a row was updated, False if none matched

        Raises:
            BadRequestError: If the new values violate a unique constraint
        """
        statement = text(
            f"UPDATE {table_name} SET {patch.set_clause} "
            f"WHERE {key_column} = :key RETURNING {key_column}"
        )

        try:
            with self.session.begin_nested():
                updated = self.session.execute(
                    statement, {**patch.params, "key": key_value}
                ).first()
        except IntegrityError as e:
            raise BadRequestError(conflict_message) from e

        safe_logger(self.logger).log_debug(
            f"Partial update on {table_name}",
            {"key": key_value, "columns": patch.columns, "matched": updated is not None},
        )
        return updated is not None

    def _delete_returning(
        self, model_class: Type[T], *criteria: ColumnElement[bool], returning=None
    ) -> Optional[Dict[str, Any]]:
        """
        Delete matching rows in one round trip.

        Args:
            model_class: Model whose table is targeted
            *criteria: WHERE conditions
            returning: Columns to return (default: the primary key ``id``)

        Returns:
            The first deleted row as a dict, or None if nothing matched
        """
        columns = returning if returning is not None else [model_class.id]
        statement = delete(model_class).where(*criteria).returning(*columns)
        row = self.session.execute(statement).mappings().first()
        return dict(row) if row is not None else None
