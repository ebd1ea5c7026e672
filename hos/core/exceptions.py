#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the hos backend.

The model layer raises these and never serializes a response itself; the
route layer maps each kind to a transport status using ``status_code``.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Storage failures (connection, SQL, migrations)
    ├── BadRequestError - Duplicates, missing related rows, empty updates
    │   └── ValidationError - Malformed input (missing fields, bad values)
    ├── UnauthorizedError - Failed authentication
    └── NotFoundError - Target row absent

Usage:
    from hos.core.exceptions import BadRequestError, NotFoundError

    try:
        db.shows.create(data)
    except BadRequestError as e:
        return {"error": {"message": str(e), "status": e.status_code}}
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, migration problems, or constraint violations that
    were not translated into a domain error.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Data integrity violation: NOT NULL constraint")
    """

    status_code = 500


class BadRequestError(Exception):
    """
    Exception for requests the model layer refuses to apply.

    Raised when a referential integrity check fails:
    - Duplicate username, show name, time slot, playlist date or favorite
    - Related member, show or playlist does not exist
    - Partial update with nothing to update

    Examples:
        >>> raise BadRequestError("Duplicate username: dj_kool")
        >>> raise BadRequestError("No playlist exists w/ ID: 42")
    """

    status_code = 400


class ValidationError(BadRequestError):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Missing required fields
    - Day of week outside 0-6
    - Invalid date formats

    Examples:
        >>> raise ValidationError("Required field 'username' missing or empty")
        >>> raise ValidationError("dayOfWeek must be an integer from 0-6")
    """


class UnauthorizedError(Exception):
    """
    Exception for failed authentication.

    The same message is used whether the username is unknown or the
    password is wrong.
    """

    status_code = 401


class NotFoundError(Exception):
    """Exception for reads, updates and deletes whose target row is absent."""

    status_code = 404
