#!/usr/bin/env python3
"""
member_manager.py
--------------------
Manages Member entities: registration, authentication and profile updates.

Members are looked up by username. Password hashes are written and
checked here but never leave the manager: every returned dictionary is
built from the public member columns only.

Key Features:
    - Registration with duplicate-username check
    - Authentication with a single error for unknown user and bad password
    - Partial updates (password re-hashed when supplied)
    - Lookup attaches the id of the show the member hosts

Usage:
    member_mgr = MemberManager(session, logger)

    member_mgr.register({"username": "aliya", "password": "s3cret",
                         "first_name": "Aliya", "email": "aliya@wxyz.org"})
    member = member_mgr.authenticate("aliya", "s3cret")
    member_mgr.update("aliya", {"is_dj": True})
    member_mgr.remove("aliya")
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from hos.core.exceptions import (
    BadRequestError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from hos.core.logging_manager import safe_logger
from hos.core.security import hash_password, verify_password
from hos.core.validators import DataValidator
from hos.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from hos.database.models import Member, Show
from hos.database.sql import sql_for_partial_update
from .base_manager import BaseManager

# Public columns only; no password
MEMBER_COLUMNS = (
    Member.id.label("id"),
    Member.username.label("username"),
    Member.first_name.label("first_name"),
    Member.last_name.label("last_name"),
    Member.email.label("email"),
    Member.is_dj.label("is_dj"),
    Member.is_admin.label("is_admin"),
    Member.donated.label("donated"),
)

MEMBER_UPDATE_FIELDS = {
    "first_name": "firstname",
    "last_name": "lastname",
    "email": "email",
    "password": "password",
    "is_dj": "is_dj",
    "is_admin": "is_admin",
    "donated": "donated",
}

ROLE_FLAGS = ("is_dj", "is_admin", "donated")

INVALID_CREDENTIALS = "Invalid username/password"


class MemberManager(BaseManager):
    """Manages the members table."""

    @handle_db_errors
    @log_database_operation("member_exists")
    def exists(self, username: str) -> bool:
        """Check if a username is taken."""
        username = DataValidator.normalize_string(username)
        if not username:
            return False
        return self._exists(Member, Member.username == username)

    @handle_db_errors
    @log_database_operation("register_member")
    @validate_metadata(["username", "password"])
    def register(self, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register a new member.

        Args:
            metadata: Dictionary with keys:
                - username, password (required)
                - first_name, last_name, email (optional)
                - is_dj, is_admin, donated (optional, default False)

        Returns:
            The new member's public fields

        Raises:
            ValidationError: If username or password is missing
            BadRequestError: If the username is already taken
        """
        username = DataValidator.normalize_string(metadata["username"])

        if self.exists(username):
            raise BadRequestError(f"Duplicate username: {username}")

        member = Member(
            username=username,
            password=hash_password(metadata["password"]),
            first_name=DataValidator.normalize_string(metadata.get("first_name")),
            last_name=DataValidator.normalize_string(metadata.get("last_name")),
            email=DataValidator.normalize_string(metadata.get("email")),
            **{
                flag: bool(DataValidator.normalize_bool(metadata.get(flag)))
                for flag in ROLE_FLAGS
            },
        )
        self._insert(member, f"Duplicate username: {username}")

        safe_logger(self.logger).log_info(
            "Registered member", {"member_id": member.id, "username": username}
        )
        return self._get_row(username)

    @handle_db_errors
    @log_database_operation("authenticate_member")
    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """
        Verify a username/password pair.

        Args:
            username: Login name
            password: Plaintext password

        Returns:
            The member's public fields

        Raises:
            UnauthorizedError: If the user is unknown or the password is
                wrong (same message for both)
        """
        row = self._fetch_one(
            select(*MEMBER_COLUMNS, Member.password.label("password")).where(
                Member.username == username
            )
        )

        if row is not None:
            hashed = row.pop("password")
            if verify_password(password, hashed):
                return row

        raise UnauthorizedError(INVALID_CREDENTIALS)

    @handle_db_errors
    @log_database_operation("get_all_members")
    def get_all(self) -> List[Dict[str, Any]]:
        """Return every member, ordered by username."""
        return self._fetch_all(select(*MEMBER_COLUMNS).order_by(Member.username))

    @handle_db_errors
    @log_database_operation("get_member")
    def get(self, username: str) -> Dict[str, Any]:
        """
        Return a member with the id of the show they host.

        Returns:
            Public fields plus ``show_id`` (None if the member has no show)

        Raises:
            NotFoundError: If no member has this username
        """
        member = self._get_row(username)
        if member is None:
            raise NotFoundError(f"No user: {username}")

        member["show_id"] = self.session.execute(
            select(Show.id).where(Show.dj_id == member["id"]).order_by(Show.id).limit(1)
        ).scalar()
        return member

    @handle_db_errors
    @log_database_operation("update_member")
    def update(self, username: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update a member.

        This can set a new password or grant admin rights; callers must
        have authorized the change.

        Args:
            username: Member to update
            data: Any of first_name, last_name, email, password, is_dj,
                is_admin, donated

        Returns:
            The member's public fields after the update (never the password)

        Raises:
            BadRequestError: If data is empty or has unknown fields
            ValidationError: If a supplied password is empty
            NotFoundError: If no member has this username
        """
        data = dict(data)

        if "password" in data:
            if not data["password"]:
                raise ValidationError("Password cannot be empty")
            data["password"] = hash_password(data["password"])

        for flag in ROLE_FLAGS:
            if flag in data:
                data[flag] = DataValidator.normalize_bool(data[flag])

        patch = sql_for_partial_update(data, MEMBER_UPDATE_FIELDS)
        if not self._apply_patch("members", patch, "username", username):
            raise NotFoundError(f"No user: {username}")

        return self._get_row(username)

    @handle_db_errors
    @log_database_operation("remove_member")
    def remove(self, username: str) -> Dict[str, Any]:
        """
        Delete a member.

        Favorites go with the member; hosted shows are left in place.

        Raises:
            NotFoundError: If no member has this username
        """
        deleted = self._delete_returning(
            Member, Member.username == username, returning=[Member.username]
        )
        if deleted is None:
            raise NotFoundError(f"No user: {username}")
        return deleted

    def _get_row(self, username: str) -> Optional[Dict[str, Any]]:
        return self._fetch_one(select(*MEMBER_COLUMNS).where(Member.username == username))
