"""
Tests for logging_manager module.

Covers HosLogger's files, the NullLogger/safe_logger pair that makes the
logger optional, and handle_cli_error.
"""
import pytest
from unittest.mock import MagicMock

import click

from hos.core.exceptions import NotFoundError
from hos.core.logging_manager import (
    HosLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestHosLogger:
    """Tests for HosLogger."""

    def test_creates_log_files(self, tmp_path):
        logger = HosLogger(tmp_path / "logs", component_name="database")

        logger.log_operation("create_show_completed", {"show_id": 3})

        assert (tmp_path / "logs" / "database.log").exists()
        assert (tmp_path / "logs" / "errors.log").exists()

    def test_operation_details_written_as_json(self, tmp_path):
        logger = HosLogger(tmp_path, component_name="unit")

        logger.log_operation("create_show_completed", {"show_id": 3})
        for handler in logger.main_logger.handlers:
            handler.flush()

        content = (tmp_path / "unit.log").read_text()
        assert "OPERATION - create_show_completed" in content
        assert '"show_id": 3' in content

    def test_errors_go_to_error_log(self, tmp_path):
        logger = HosLogger(tmp_path, component_name="unit_errors")

        logger.log_error(NotFoundError("No show w/ ID: 9"), {"operation": "remove_show"})
        for handler in logger.error_logger.handlers:
            handler.flush()

        content = (tmp_path / "errors.log").read_text()
        assert "NotFoundError: No show w/ ID: 9" in content
        assert "operation=remove_show" in content

    def test_log_cli_error_message(self, tmp_path):
        logger = HosLogger(tmp_path, component_name="cli")

        message = logger.log_cli_error(NotFoundError("No user: ghost"))

        assert message == "❌ NotFoundError: No user: ghost"


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_methods_are_no_ops(self):
        logger = NullLogger()
        logger.log_operation("op", {"key": "value"})
        logger.log_error(ValueError("x"), {"context": "test"})
        logger.log_debug("debug")
        logger.log_info("info")
        logger.log_warning("warning")

    def test_log_cli_error_returns_formatted(self):
        result = NullLogger().log_cli_error(ValueError("test error"))
        assert "ValueError" in result
        assert "test error" in result


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_logger_when_provided(self):
        logger = MagicMock(spec=HosLogger)
        assert safe_logger(logger) is logger

    def test_returns_null_logger_for_none(self):
        assert isinstance(safe_logger(None), NullLogger)


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_exits_with_code(self, capsys):
        ctx = click.Context(click.Command("test"), obj={})

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, NotFoundError("No user: ghost"), "member_show", exit_code=2)

        assert exc_info.value.code == 2
        assert "No user: ghost" in capsys.readouterr().err

    def test_logs_through_context_logger(self):
        logger = MagicMock(spec=HosLogger)
        logger.log_cli_error.return_value = "❌ boom"
        ctx = click.Context(click.Command("test"), obj={"logger": logger})

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("boom"), "init", {"db_path": "x.db"})

        context = logger.log_cli_error.call_args[0][1]
        assert context == {"operation": "init", "db_path": "x.db"}

    def test_tolerates_missing_obj(self):
        ctx = click.Context(click.Command("test"))

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("boom"), "init")
