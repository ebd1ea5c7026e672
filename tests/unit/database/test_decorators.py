"""Tests for database decorators and context managers."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hos.core.exceptions import (
    BadRequestError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from hos.core.logging_manager import HosLogger
from hos.database.decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)


class _Service:
    """Minimal object shaped like a manager."""

    def __init__(self, logger=None):
        self.logger = logger

    @log_database_operation("do_work")
    def do_work(self, value):
        return value * 2

    @log_database_operation("fail")
    def fail(self):
        raise NotFoundError("No show w/ ID: 9")

    @validate_metadata(["show_name", "day_of_week"])
    def create(self, metadata):
        return metadata

    @handle_db_errors
    def integrity(self):
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    @handle_db_errors
    def broken(self):
        raise SQLAlchemyError("disk I/O error")

    @handle_db_errors
    def bad_request(self):
        raise BadRequestError("Duplicate show name: Night Owls")


class TestLogDatabaseOperation:
    """Tests for log_database_operation decorator."""

    def test_logs_completion(self):
        logger = MagicMock(spec=HosLogger)

        assert _Service(logger).do_work(21) == 42

        logger.log_operation.assert_called_once()
        name, details = logger.log_operation.call_args[0]
        assert name == "do_work_completed"
        assert details["success"] is True

    def test_logs_and_reraises_errors(self):
        logger = MagicMock(spec=HosLogger)

        with pytest.raises(NotFoundError):
            _Service(logger).fail()

        logger.log_error.assert_called_once()
        assert logger.log_error.call_args[0][1]["operation"] == "fail"
        logger.log_operation.assert_not_called()

    def test_logs_start_with_call_shape(self):
        logger = MagicMock(spec=HosLogger)

        _Service(logger).do_work(value=3)

        message, details = logger.log_debug.call_args[0]
        assert message == "Starting do_work"
        assert details["kwargs_keys"] == ["value"]

    def test_works_without_logger(self):
        assert _Service().do_work(2) == 4


class TestValidateMetadata:
    """Tests for validate_metadata decorator."""

    def test_passes_complete_metadata(self):
        data = {"show_name": "Night Owls", "day_of_week": 0}

        assert _Service().create(data) is data

    def test_zero_counts_as_present(self):
        _Service().create({"show_name": "Sunrise", "day_of_week": 0})

    def test_missing_field_raises(self):
        with pytest.raises(ValidationError, match="day_of_week"):
            _Service().create({"show_name": "Night Owls"})

    def test_blank_field_raises(self):
        with pytest.raises(ValidationError, match="show_name"):
            _Service().create({"show_name": "  ", "day_of_week": 1})

    def test_keyword_metadata(self):
        with pytest.raises(ValidationError):
            _Service().create(metadata={"day_of_week": 1})


class TestHandleDbErrors:
    """Tests for handle_db_errors decorator."""

    def test_integrity_error_becomes_database_error(self):
        with pytest.raises(DatabaseError, match="Data integrity violation"):
            _Service().integrity()

    def test_sqlalchemy_error_becomes_database_error(self):
        with pytest.raises(DatabaseError, match="Database operation failed"):
            _Service().broken()

    def test_domain_errors_propagate(self):
        with pytest.raises(BadRequestError, match="Duplicate show name"):
            _Service().bad_request()


class TestDatabaseOperation:
    """Tests for the DatabaseOperation context manager."""

    @pytest.fixture
    def logger(self):
        return MagicMock(spec=HosLogger)

    def test_success_logs_details(self, logger):
        with DatabaseOperation(logger, "link_playlist", {"show_id": 3}):
            pass

        name, details = logger.log_operation.call_args[0]
        assert name == "link_playlist_completed"
        assert details["show_id"] == 3
        assert details["success"] is True
        assert details["duration_seconds"] >= 0
        logger.log_error.assert_not_called()

    def test_none_logger(self):
        with DatabaseOperation(None, "link_playlist") as op:
            assert op.operation_name == "link_playlist"

    @pytest.mark.parametrize(
        "error, message",
        [
            (IntegrityError("INSERT", {}, Exception("duplicate")), "Data integrity violation"),
            (SQLAlchemyError("connection failed"), "Database operation failed"),
        ],
    )
    def test_storage_errors_rewrapped(self, logger, error, message):
        with pytest.raises(DatabaseError, match=message) as exc_info:
            with DatabaseOperation(logger, "link_playlist"):
                raise error

        assert exc_info.value.__cause__ is error
        logger.log_error.assert_called_once()

    def test_other_errors_propagate_unchanged(self, logger):
        with pytest.raises(ValueError, match="bad date"):
            with DatabaseOperation(logger, "link_playlist"):
                raise ValueError("bad date")

        assert logger.log_error.call_args[0][1]["operation"] == "link_playlist"

    def test_start_logged_only_when_asked(self, logger):
        with DatabaseOperation(logger, "link_playlist"):
            pass
        logger.log_debug.assert_not_called()

        with DatabaseOperation(logger, "link_playlist", log_start=True):
            pass
        assert logger.log_debug.call_args[0][0] == "Starting link_playlist"
