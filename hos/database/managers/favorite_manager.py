#!/usr/bin/env python3
"""
favorite_manager.py
--------------------
Manages members' favorite shows (``member_favorites``).

A member can favorite a given show once. Both sides must exist when the
favorite is created; deleting either side removes the favorite with it.
"""
from typing import Any, Dict, List

from sqlalchemy import select

from hos.core.exceptions import BadRequestError, NotFoundError
from hos.database.decorators import handle_db_errors, log_database_operation
from hos.database.models import Member, MemberFavorite, Show
from .base_manager import BaseManager


class FavoriteManager(BaseManager):
    """Manages the member_favorites table."""

    @handle_db_errors
    @log_database_operation("create_favorite")
    def create(self, member_id: int, show_id: int) -> Dict[str, Any]:
        """
        Record that a member favorites a show.

        Returns:
            {id, member_id, show_id}

        Raises:
            BadRequestError: If the member or show does not exist, or the
                show is already a favorite of this member
        """
        if not self._exists(Member, Member.id == member_id):
            raise BadRequestError(f"No member exists w/ ID: {member_id}")

        if not self._exists(Show, Show.id == show_id):
            raise BadRequestError(f"No show exists w/ ID: {show_id}")

        message = f"Show w/ID: {show_id} already favorited by member w/ID {member_id}"
        if self._exists(
            MemberFavorite,
            MemberFavorite.member_id == member_id,
            MemberFavorite.show_id == show_id,
        ):
            raise BadRequestError(message)

        favorite = self._insert(
            MemberFavorite(member_id=member_id, show_id=show_id), message
        )
        return {"id": favorite.id, "member_id": member_id, "show_id": show_id}

    @handle_db_errors
    @log_database_operation("get_favorites")
    def get(self, member_id: int) -> List[Dict[str, Any]]:
        """Return the member's favorites as ``[{"show_id": ...}, ...]``."""
        return self._fetch_all(
            select(MemberFavorite.show_id.label("show_id"))
            .where(MemberFavorite.member_id == member_id)
            .order_by(MemberFavorite.id)
        )

    @handle_db_errors
    @log_database_operation("remove_favorite")
    def remove(self, member_id: int, show_id: int) -> Dict[str, Any]:
        """
        Remove a favorite.

        Raises:
            NotFoundError: If the member had not favorited the show
        """
        deleted = self._delete_returning(
            MemberFavorite,
            MemberFavorite.member_id == member_id,
            MemberFavorite.show_id == show_id,
            returning=[MemberFavorite.id, MemberFavorite.member_id, MemberFavorite.show_id],
        )
        if deleted is None:
            raise NotFoundError(
                f"No member/show combo w/ IDs: {member_id}/{show_id}"
            )
        return deleted
