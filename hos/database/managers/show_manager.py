#!/usr/bin/env python3
"""
show_manager.py
--------------------
Manages Show entities: the station's weekly timeslots.

Two shows can never share a name or a (day_of_week, show_time) slot.
Both are checked before every create and update; the update checks
compare against the other shows only, so re-saving a show's own name or
slot is allowed.

Key Features:
    - Create with name and slot duplicate checks
    - Listing by day of week, latest slot first within a day
    - Lookup attaches the show's playlists, newest first
    - Partial updates against the merged (current + patch) slot
    - Single round-trip delete

Usage:
    show_mgr = ShowManager(session, logger)

    show = show_mgr.create({
        "dj_id": 3,
        "dj_name": "DJ Kool",
        "show_name": "Night Owls",
        "day_of_week": 5,
        "show_time": "22:00",
    })
    show_mgr.update(show["id"], {"show_time": "23:00"})
    monday = show_mgr.get_all(day_of_week=1)
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from hos.core.exceptions import BadRequestError, NotFoundError, ValidationError
from hos.core.logging_manager import safe_logger
from hos.core.validators import DataValidator
from hos.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from hos.database.models import Playlist, Show, ShowPlaylist
from hos.database.sql import sql_for_partial_update
from .base_manager import BaseManager

SHOW_COLUMNS = (
    Show.id.label("id"),
    Show.dj_id.label("dj_id"),
    Show.dj_name.label("dj_name"),
    Show.show_name.label("show_name"),
    Show.day_of_week.label("day_of_week"),
    Show.show_time.label("show_time"),
    Show.img_url.label("img_url"),
    Show.description.label("description"),
)

SHOW_UPDATE_FIELDS = {
    "dj_name": "dj_name",
    "show_name": "show_name",
    "day_of_week": "day_of_week",
    "show_time": "show_time",
    "img_url": "img_url",
    "description": "description",
}


class ShowManager(BaseManager):
    """Manages the shows table and reads through show_playlists."""

    @handle_db_errors
    @log_database_operation("create_show")
    @validate_metadata(["show_name", "day_of_week", "show_time"])
    def create(self, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new show.

        Args:
            metadata: Dictionary with keys:
                - show_name, day_of_week, show_time (required)
                - dj_id, dj_name, img_url, description (optional)

        Returns:
            The new show

        Raises:
            ValidationError: If a required field is missing or
                day_of_week is not in 0-6
            BadRequestError: If the name or the slot is taken
        """
        show_name = DataValidator.normalize_string(metadata["show_name"])
        day_of_week = DataValidator.validate_day_of_week(metadata["day_of_week"])
        show_time = DataValidator.normalize_string(metadata["show_time"])

        self._check_name_free(show_name)
        self._check_slot_free(day_of_week, show_time)

        show = Show(
            dj_id=DataValidator.normalize_int(metadata.get("dj_id")),
            dj_name=DataValidator.normalize_string(metadata.get("dj_name")),
            show_name=show_name,
            day_of_week=day_of_week,
            show_time=show_time,
            img_url=DataValidator.normalize_string(metadata.get("img_url")),
            description=DataValidator.normalize_string(metadata.get("description")),
        )
        self._insert(show, f"Duplicate show: {show_name} at {day_of_week}/{show_time}")

        safe_logger(self.logger).log_info(
            "Created show",
            {"show_id": show.id, "show_name": show_name, "dj_id": show.dj_id},
        )
        return self._get_row(show.id)

    @handle_db_errors
    @log_database_operation("get_all_shows")
    def get_all(self, day_of_week: Optional[Any] = None) -> List[Dict[str, Any]]:
        """
        List shows, optionally for a single day.

        Shows are ordered by day, and within a day by start time with the
        latest first.

        Args:
            day_of_week: Optional 0-6 filter

        Raises:
            ValidationError: If the filter is not in 0-6
        """
        query = select(*SHOW_COLUMNS)
        if day_of_week is not None:
            query = query.where(
                Show.day_of_week == DataValidator.validate_day_of_week(day_of_week)
            )
        query = query.order_by(Show.day_of_week, Show.show_time.desc())
        return self._fetch_all(query)

    @handle_db_errors
    @log_database_operation("get_show")
    def get(self, show_id: int) -> Dict[str, Any]:
        """
        Return a show with its playlists.

        Returns:
            Show fields plus ``playlists``: list of {id, date, description},
            newest date first

        Raises:
            NotFoundError: If the show does not exist
        """
        show = self._get_row(show_id)
        if show is None:
            raise NotFoundError(f"No show with ID: {show_id}")

        show["playlists"] = self._fetch_all(
            select(
                Playlist.id.label("id"),
                Playlist.date.label("date"),
                Playlist.description.label("description"),
            )
            .join(ShowPlaylist, ShowPlaylist.playlist_id == Playlist.id)
            .where(ShowPlaylist.show_id == show_id)
            .order_by(Playlist.date.desc())
        )
        return show

    @handle_db_errors
    @log_database_operation("update_show")
    def update(self, show_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update a show.

        Args:
            show_id: Show to update
            data: Any of dj_name, show_name, day_of_week, show_time,
                img_url, description

        Returns:
            The show after the update

        Raises:
            BadRequestError: If data is empty or has unknown fields, or the
                new name or slot belongs to another show
            ValidationError: If day_of_week is not in 0-6 or show_name or
                show_time is blank
            NotFoundError: If the show does not exist
        """
        data = dict(data)

        if "day_of_week" in data:
            data["day_of_week"] = DataValidator.validate_day_of_week(data["day_of_week"])
        for required in ("show_name", "show_time"):
            if required in data:
                data[required] = DataValidator.normalize_string(data[required])
                if data[required] is None:
                    raise ValidationError(f"Field '{required}' cannot be empty")

        patch = sql_for_partial_update(data, SHOW_UPDATE_FIELDS)

        current = self._get_row(show_id)
        if current is None:
            raise NotFoundError(f"No show with ID: {show_id}")

        if "show_name" in data:
            self._check_name_free(data["show_name"], exclude_id=show_id)
        if "day_of_week" in data or "show_time" in data:
            self._check_slot_free(
                data.get("day_of_week", current["day_of_week"]),
                data.get("show_time", current["show_time"]),
                exclude_id=show_id,
            )

        self._apply_patch(
            "shows", patch, "id", show_id, f"Show update conflicts: {show_id}"
        )
        return self._get_row(show_id)

    @handle_db_errors
    @log_database_operation("remove_show")
    def remove(self, show_id: int) -> Dict[str, Any]:
        """
        Delete a show; its playlist links and favorites go with it.

        Raises:
            NotFoundError: If the show does not exist
        """
        deleted = self._delete_returning(Show, Show.id == show_id)
        if deleted is None:
            raise NotFoundError(f"No show w/ ID: {show_id}")
        return deleted

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def _check_name_free(self, show_name: str, exclude_id: Optional[int] = None) -> None:
        criteria = [Show.show_name == show_name]
        if exclude_id is not None:
            criteria.append(Show.id != exclude_id)
        if self._exists(Show, *criteria):
            raise BadRequestError(f"Duplicate show name: {show_name}")

    def _check_slot_free(
        self, day_of_week: int, show_time: str, exclude_id: Optional[int] = None
    ) -> None:
        criteria = [Show.day_of_week == day_of_week, Show.show_time == show_time]
        if exclude_id is not None:
            criteria.append(Show.id != exclude_id)
        if self._exists(Show, *criteria):
            raise BadRequestError(f"Duplicate date/time: {day_of_week}/{show_time}")

    def _get_row(self, show_id: int) -> Optional[Dict[str, Any]]:
        return self._fetch_one(select(*SHOW_COLUMNS).where(Show.id == show_id))
