#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for hos database operations.

The route layer validates payload shape before anything reaches the
managers; these helpers normalize values and reject the semantically
invalid ones (empty required fields, a day of week outside 0-6).
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError


DAYS_OF_WEEK = range(0, 7)  # 0 = Sunday

TRUTHY = frozenset({"true", "1", "yes", "on"})
FALSY = frozenset({"false", "0", "no", "off"})


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Zero and False count as present; only missing keys, None and
        blank strings are rejected.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Strip surrounding whitespace; blank values become None.

        Args:
            value: Value to normalize

        Returns:
            Normalized string or None
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_date(value: Any) -> Optional[date]:
        """
        Normalize ISO strings, dates and datetimes to a date.

        Raises:
            ValidationError: If a string is not an ISO date
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip()[:10])
            except ValueError as e:
                raise ValidationError(f"Invalid date format: {value}") from e
        raise ValidationError(f"Invalid date type: {type(value).__name__}")

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """Accept bools, 0/1 and the usual yes/no strings; None passes through."""
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in TRUTHY:
                return True
            if word in FALSY:
                return False
        raise ValidationError(f"Cannot convert '{value}' to boolean")

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert ints and digit strings to int.

        Raises:
            ValidationError: If the value is not an integer
        """
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValidationError(f"Expected an integer, got boolean {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value.strip())
        raise ValidationError(f"Expected an integer, got '{value}'")

    @staticmethod
    def validate_day_of_week(value: Any) -> int:
        """
        Validate a show's day of week.

        Args:
            value: Integer (or digit string) in 0-6, 0 = Sunday

        Returns:
            The day as an int

        Raises:
            ValidationError: If the value is not an integer from 0 to 6
        """
        message = "dayOfWeek must be an integer from 0-6; 0 = Sun, 1 = Mon, etc."
        try:
            day = DataValidator.normalize_int(value)
        except ValidationError as e:
            raise ValidationError(message) from e
        if day not in DAYS_OF_WEEK:
            raise ValidationError(message)
        return day
