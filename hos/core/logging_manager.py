#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Centralized logging for hos database operations and CLI commands.

Each component writes two rotating files under the log directory:
``<component>.log`` with every record and ``errors.log`` with failures
only. Structured details are appended as JSON so the files stay greppable.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class HosLogger:
    """
    Structured logger with rotating files for one component.

    Attributes:
        log_dir: Directory for log files
        component_name: Name of the component using this logger
        main_logger: Logger receiving every record
        error_logger: Logger receiving errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "hos",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        """
        Initialize the logging system.

        Args:
            log_dir: Directory for log files
            component_name: Name for the component logger (e.g. 'database', 'cli')
            max_bytes: Maximum log file size before rotation (default: 5MB)
            backup_count: Number of rotated files to keep (default: 3)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._setup_loggers()

    def _setup_loggers(self) -> None:
        """Attach file and console handlers to the component loggers."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = logging.getLogger(f"hos.{self.component_name}")
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        self.main_logger.handlers = []

        self.error_logger = logging.getLogger(f"hos.{self.component_name}.errors")
        self.error_logger.setLevel(logging.ERROR)
        self.error_logger.propagate = False
        self.error_logger.handlers = []

        self._add_file_handler(
            self.main_logger, self.log_dir / f"{self.component_name}.log", logging.DEBUG
        )
        self._add_file_handler(
            self.error_logger, self.log_dir / "errors.log", logging.ERROR
        )

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
        )
        self.main_logger.addHandler(console_handler)

    def _add_file_handler(
        self, logger: logging.Logger, file_path: Path, level: int
    ) -> None:
        handler = RotatingFileHandler(
            file_path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    def _emit(
        self, level: int, tag: str, message: str, details: Optional[Dict[str, Any]]
    ) -> None:
        # Details ride along as JSON so one record stays on one line
        text = f"{tag} - {message}"
        if details:
            text = f"{text}: {json.dumps(details, default=str)}"
        self.main_logger.log(level, text)

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a finished operation (``create_show_completed`` and the like)."""
        self._emit(logging.INFO, "OPERATION", operation, details)

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an exception, its context and the active traceback to errors.log.

        Args:
            error: The exception being reported
            context: Where it happened, as key=value pairs
        """
        lines = [f"ERROR - {type(error).__name__}: {error}"]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        lines.append(f"Traceback:\n{traceback.format_exc()}")
        for line in lines:
            self.error_logger.error(line)

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.DEBUG, "DEBUG", message, details)

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.INFO, "INFO", message, details)

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.WARNING, "WARNING", message, details)

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log full error details and return a short message for the terminal.

        Args:
            error: Exception to log
            context: Optional context about where the error occurred
            show_traceback: Include the traceback in the returned message

        Returns:
            Formatted error message suitable for CLI display

        Examples:
            >>> logger.log_cli_error(NotFoundError("No user: ghost"))
            '❌ NotFoundError: No user: ghost'
        """
        self.log_error(error, context or {"source": "cli"})

        message = f"❌ {type(error).__name__}: {error}"
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed CLI command and exit.

    Args:
        ctx: Click context whose ``obj`` may hold ``logger`` and ``verbose``
        error: Exception that occurred
        operation: Name of the command that failed (e.g. 'init', 'member_add')
        additional_context: Optional extra context (username, show id, ...)
        exit_code: Exit code for sys.exit() (default: 1)

    Note:
        This function never returns.
    """
    obj = ctx.obj or {}
    logger: Optional[HosLogger] = obj.get("logger")

    context = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    error_msg = safe_logger(logger).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(error_msg, err=True)
    sys.exit(exit_code)


class NullLogger(HosLogger):
    """HosLogger that writes nowhere; stands in when no log_dir is configured."""

    def __init__(self) -> None:
        pass

    def _emit(self, level, tag, message, details) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[HosLogger]) -> HosLogger:
    """
    Return the provided logger or a shared NullLogger if None.

    Usage:
        safe_logger(self.logger).log_debug("Created show", {"show_id": 3})
    """
    return logger if logger is not None else _null_logger
