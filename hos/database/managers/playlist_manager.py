#!/usr/bin/env python3
"""
playlist_manager.py
--------------------
Manages Playlist entities and their link to the owning show.

A playlist is created on behalf of a member: the member must host a show,
and may not already have a playlist for the same date. The playlist row
and its ``show_playlists`` link are written inside one savepoint, so
either both exist afterwards or neither does.

Usage:
    playlist_mgr = PlaylistManager(session, logger)

    playlist = playlist_mgr.create({
        "member_id": 3,
        "date": "2026-10-16",
        "description": "Autumn jazz",
    })
    playlist_mgr.get(playlist["id"])["songs"]
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from hos.core.exceptions import BadRequestError, NotFoundError
from hos.core.validators import DataValidator
from hos.database.decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from hos.database.models import Playlist, PlaylistSong, Show, ShowPlaylist, Song
from hos.database.sql import sql_for_partial_update
from .base_manager import BaseManager

PLAYLIST_COLUMNS = (
    Playlist.id.label("id"),
    Playlist.date.label("date"),
    Playlist.description.label("description"),
)

PLAYLIST_UPDATE_FIELDS = {"description": "description"}


class PlaylistManager(BaseManager):
    """Manages the playlists table and its show_playlists links."""

    @handle_db_errors
    @log_database_operation("create_playlist")
    @validate_metadata(["date", "member_id"])
    def create(self, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a playlist for the show hosted by ``member_id``.

        Args:
            metadata: Dictionary with keys:
                - date (required): ISO string or date
                - member_id (required): The DJ creating the playlist
                - description (optional)

        Returns:
            {id, date, description, show_id}

        Raises:
            ValidationError: If date or member_id is missing or malformed
            BadRequestError: If the member already has a playlist on this
                date, or hosts no show
        """
        playlist_date = DataValidator.normalize_date(metadata["date"])
        member_id = DataValidator.normalize_int(metadata["member_id"])
        description = DataValidator.normalize_string(metadata.get("description"))

        if self._exists(
            Playlist,
            Playlist.date == playlist_date,
            ShowPlaylist.playlist_id == Playlist.id,
            Show.id == ShowPlaylist.show_id,
            Show.dj_id == member_id,
        ):
            raise BadRequestError(f"Duplicate playlist for date: {playlist_date}")

        show_id = self.session.execute(
            select(Show.id).where(Show.dj_id == member_id).order_by(Show.id).limit(1)
        ).scalar()
        if show_id is None:
            raise BadRequestError(f"No show exists for DJ w/ ID: {member_id}")

        with DatabaseOperation(
            self.logger, "link_playlist", {"show_id": show_id, "date": str(playlist_date)}
        ):
            with self.session.begin_nested():
                playlist = Playlist(date=playlist_date, description=description)
                self.session.add(playlist)
                self.session.flush()

                self.session.add(ShowPlaylist(show_id=show_id, playlist_id=playlist.id))
                self.session.flush()

        return {
            "id": playlist.id,
            "date": playlist.date,
            "description": playlist.description,
            "show_id": show_id,
        }

    @handle_db_errors
    @log_database_operation("get_all_playlists")
    def get_all(self) -> List[Dict[str, Any]]:
        """
        List every playlist with the id and name of its show, newest first.

        Raises:
            NotFoundError: If there are no playlists
        """
        playlists = self._fetch_all(
            select(
                *PLAYLIST_COLUMNS,
                Show.id.label("show_id"),
                Show.show_name.label("show_name"),
            )
            .join(ShowPlaylist, ShowPlaylist.playlist_id == Playlist.id)
            .join(Show, Show.id == ShowPlaylist.show_id)
            .order_by(Playlist.date.desc(), Playlist.id)
        )
        if not playlists:
            raise NotFoundError("No playlists found")
        return playlists

    @handle_db_errors
    @log_database_operation("get_playlist")
    def get(self, playlist_id: int) -> Dict[str, Any]:
        """
        Return a playlist with its songs in playing order.

        Returns:
            {id, date, description, songs} where each song is
            {song_id, title, artist, album, album_link, album_image, song_order}

        Raises:
            NotFoundError: If the playlist does not exist
        """
        playlist = self._get_row(playlist_id)
        if playlist is None:
            raise NotFoundError(f"No playlist with ID: {playlist_id}")

        playlist["songs"] = self._fetch_all(
            select(
                Song.id.label("song_id"),
                Song.title.label("title"),
                Song.artist.label("artist"),
                Song.album.label("album"),
                Song.album_link.label("album_link"),
                Song.album_image.label("album_image"),
                PlaylistSong.song_order.label("song_order"),
            )
            .join(PlaylistSong, PlaylistSong.song_id == Song.id)
            .where(PlaylistSong.playlist_id == playlist_id)
            .order_by(PlaylistSong.song_order)
        )
        return playlist

    @handle_db_errors
    @log_database_operation("update_playlist")
    def update(self, playlist_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a playlist's description (the only editable field).

        Raises:
            BadRequestError: If data is empty or has fields other than
                description
            NotFoundError: If the playlist does not exist
        """
        patch = sql_for_partial_update(data, PLAYLIST_UPDATE_FIELDS)
        if not self._apply_patch("playlists", patch, "id", playlist_id):
            raise NotFoundError(f"No playlist with ID: {playlist_id}")
        return self._get_row(playlist_id)

    @handle_db_errors
    @log_database_operation("remove_playlist")
    def remove(self, playlist_id: int) -> Dict[str, Any]:
        """
        Delete a playlist along with its show link and song positions.

        Songs themselves stay; other playlists may share them.

        Raises:
            NotFoundError: If the playlist does not exist
        """
        deleted = self._delete_returning(Playlist, Playlist.id == playlist_id)
        if deleted is None:
            raise NotFoundError(f"No playlist w/ ID: {playlist_id}")
        return deleted

    def _get_row(self, playlist_id: int) -> Optional[Dict[str, Any]]:
        return self._fetch_one(select(*PLAYLIST_COLUMNS).where(Playlist.id == playlist_id))
