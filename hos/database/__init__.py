#!/usr/bin/env python3
"""
hos Database Package
--------------------
Model layer of the hos backend.

- manager: HosDB facade (engine, sessions, migrations)
- managers: one manager per entity (members, shows, playlists, songs,
  favorites)
- sql: partial-update builder shared by every manager's ``update``
- decorators: logging and error translation for manager methods
- cli: ``hosdb`` command line
"""

from .manager import HosDB
from hos.core.exceptions import (
    BadRequestError,
    DatabaseError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .sql import PartialUpdate, sql_for_partial_update
from .decorators import (
    log_database_operation,
    handle_db_errors,
    validate_metadata,
)

__all__ = [
    # Main manager
    "HosDB",
    # Exceptions
    "BadRequestError",
    "DatabaseError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    # Partial updates
    "PartialUpdate",
    "sql_for_partial_update",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
    "validate_metadata",
]
