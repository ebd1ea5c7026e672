#!/usr/bin/env python3
"""
decorators.py
--------------------
Cross-cutting wrappers for manager methods.

A typical manager method stacks all three decorators:

    @handle_db_errors
    @log_database_operation("create_show")
    @validate_metadata(["show_name", "day_of_week", "show_time"])
    def create(self, metadata): ...

Domain errors (BadRequestError, NotFoundError, ...) pass through
untouched; only raw SQLAlchemy failures are rewrapped as DatabaseError.
"""
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hos.core.exceptions import DatabaseError
from hos.core.logging_manager import HosLogger, safe_logger
from hos.core.validators import DataValidator


def _as_database_error(error: SQLAlchemyError) -> DatabaseError:
    if isinstance(error, IntegrityError):
        return DatabaseError(f"Data integrity violation: {error.orig}")
    return DatabaseError(f"Database operation failed: {error}")


class DatabaseOperation:
    """
    Time a block of database work and log how it ended.

    SQLAlchemy errors leaving the block are re-raised as DatabaseError;
    anything else is logged and propagates as is.

    Usage:
        with DatabaseOperation(self.logger, "link_playlist", {"show_id": 4}):
            ...
    """

    def __init__(
        self,
        logger: Optional[HosLogger],
        operation_name: str,
        details: Optional[Dict[str, Any]] = None,
        log_start: bool = False,
    ):
        self.logger = safe_logger(logger)
        self.operation_name = operation_name
        self.details = details or {}
        self.log_start = log_start
        self.start_time: Optional[datetime] = None

    def _elapsed(self) -> float:
        return (datetime.now() - self.start_time).total_seconds()

    def __enter__(self) -> "DatabaseOperation":
        self.start_time = datetime.now()
        if self.log_start:
            self.logger.log_debug(f"Starting {self.operation_name}", self.details)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None:
            self.logger.log_operation(
                f"{self.operation_name}_completed",
                {**self.details, "duration_seconds": self._elapsed(), "success": True},
            )
            return False

        self.logger.log_error(
            exc_val,
            {
                **self.details,
                "operation": self.operation_name,
                "duration_seconds": self._elapsed(),
            },
        )
        if isinstance(exc_val, SQLAlchemyError):
            raise _as_database_error(exc_val) from exc_val
        return False


def log_database_operation(operation_name: str):
    """
    Wrap a manager method in a DatabaseOperation named ``operation_name``.

    The start is logged at debug level with the shape of the call; the
    method's ``self.logger`` may be None.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            call_shape = {"args_count": len(args), "kwargs_keys": list(kwargs)}
            with DatabaseOperation(
                getattr(self, "logger", None), operation_name, call_shape, log_start=True
            ):
                return function(self, *args, **kwargs)

        return wrapper

    return decorator


def validate_metadata(required_fields: List[str]):
    """
    Reject a metadata dict missing any of ``required_fields``.

    The dict is the method's last positional argument, or its
    ``metadata`` keyword.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            metadata = args[-1] if args else kwargs.get("metadata", {})
            DataValidator.validate_required_fields(metadata, required_fields)
            return function(self, *args, **kwargs)

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """Re-raise SQLAlchemy errors from ``function`` as DatabaseError."""

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except SQLAlchemyError as e:
            raise _as_database_error(e) from e

    return wrapper
