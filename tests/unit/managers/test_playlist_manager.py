"""
test_playlist_manager.py
------------------------
Unit tests for PlaylistManager: ownership and date checks, the atomic
playlist/show link, song listing and removal.
"""
from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from hos.core.exceptions import BadRequestError, DatabaseError, NotFoundError, ValidationError
from hos.database.models import Playlist, PlaylistSong, ShowPlaylist, Song


class TestPlaylistManagerCreate:
    """Test PlaylistManager.create()."""

    def test_create_links_to_members_show(self, playlist_manager, dj_with_show, db_session):
        member, show = dj_with_show

        playlist = playlist_manager.create(
            {"member_id": member["id"], "date": "2026-10-16", "description": "Autumn jazz"}
        )

        assert playlist["date"] == date(2026, 10, 16)
        assert playlist["description"] == "Autumn jazz"
        assert playlist["show_id"] == show["id"]
        link = db_session.execute(
            select(ShowPlaylist.show_id).where(ShowPlaylist.playlist_id == playlist["id"])
        ).scalar_one()
        assert link == show["id"]

    def test_duplicate_date_for_member(self, playlist_manager, playlist, dj_with_show):
        member, _ = dj_with_show

        with pytest.raises(BadRequestError, match="Duplicate playlist for date: 2026-10-16"):
            playlist_manager.create({"member_id": member["id"], "date": "2026-10-16"})

    def test_same_date_for_different_members(
        self, playlist_manager, playlist, make_member, make_show
    ):
        other = make_member("dj_two")
        make_show("Sunrise", day_of_week=1, show_time="06:00", dj_id=other["id"])

        created = playlist_manager.create({"member_id": other["id"], "date": "2026-10-16"})

        assert created["id"] != playlist["id"]

    def test_member_without_show(self, playlist_manager, make_member):
        member = make_member("listener")

        with pytest.raises(BadRequestError, match="No show exists for DJ w/ ID"):
            playlist_manager.create({"member_id": member["id"], "date": "2026-10-16"})

    def test_missing_date(self, playlist_manager, dj_with_show):
        member, _ = dj_with_show

        with pytest.raises(ValidationError):
            playlist_manager.create({"member_id": member["id"]})

    def test_bad_date(self, playlist_manager, dj_with_show):
        member, _ = dj_with_show

        with pytest.raises(ValidationError):
            playlist_manager.create({"member_id": member["id"], "date": "someday"})

    def test_failed_link_leaves_no_playlist(self, playlist_manager, dj_with_show, db_session):
        """When the show link cannot be written the playlist row goes too."""
        member, _ = dj_with_show
        real_add = db_session.add

        def failing_add(instance, *args, **kwargs):
            if isinstance(instance, ShowPlaylist):
                instance.show_id = None
            return real_add(instance, *args, **kwargs)

        with patch.object(db_session, "add", side_effect=failing_add):
            with pytest.raises(DatabaseError):
                playlist_manager.create({"member_id": member["id"], "date": "2026-10-16"})

        assert db_session.execute(select(func.count(Playlist.id))).scalar() == 0


class TestPlaylistManagerGetAll:
    """Test PlaylistManager.get_all()."""

    def test_lists_with_show(self, playlist_manager, playlist, dj_with_show):
        _, show = dj_with_show

        rows = playlist_manager.get_all()

        assert len(rows) == 1
        assert rows[0]["id"] == playlist["id"]
        assert rows[0]["show_id"] == show["id"]
        assert rows[0]["show_name"] == show["show_name"]

    def test_newest_first(self, playlist_manager, dj_with_show):
        member, _ = dj_with_show
        for day in ("2026-10-02", "2026-10-16"):
            playlist_manager.create({"member_id": member["id"], "date": day})

        dates = [row["date"] for row in playlist_manager.get_all()]

        assert dates == [date(2026, 10, 16), date(2026, 10, 2)]

    def test_empty_raises(self, playlist_manager):
        with pytest.raises(NotFoundError, match="No playlists found"):
            playlist_manager.get_all()


class TestPlaylistManagerGet:
    """Test PlaylistManager.get()."""

    def test_get_empty_playlist(self, playlist_manager, playlist):
        result = playlist_manager.get(playlist["id"])

        assert result["date"] == date(2026, 10, 16)
        assert result["description"] == "Autumn jazz"
        assert result["songs"] == []

    def test_songs_in_order(self, playlist_manager, song_manager, playlist):
        for title in ("First", "Second", "Third"):
            song_manager.create(
                {"playlist_id": playlist["id"], "artist": "Band", "title": title}
            )

        songs = playlist_manager.get(playlist["id"])["songs"]

        assert [s["title"] for s in songs] == ["First", "Second", "Third"]
        assert [s["song_order"] for s in songs] == [1, 2, 3]
        assert set(songs[0]) == {
            "song_id",
            "title",
            "artist",
            "album",
            "album_link",
            "album_image",
            "song_order",
        }

    def test_get_missing(self, playlist_manager):
        with pytest.raises(NotFoundError, match="No playlist with ID: 42"):
            playlist_manager.get(42)


class TestPlaylistManagerUpdate:
    """Test PlaylistManager.update()."""

    def test_update_description(self, playlist_manager, playlist):
        updated = playlist_manager.update(playlist["id"], {"description": "Late set"})

        assert updated["description"] == "Late set"
        assert updated["date"] == date(2026, 10, 16)

    def test_date_not_editable(self, playlist_manager, playlist):
        with pytest.raises(BadRequestError):
            playlist_manager.update(playlist["id"], {"date": "2026-10-17"})

    def test_no_data(self, playlist_manager, playlist):
        with pytest.raises(BadRequestError, match="No data"):
            playlist_manager.update(playlist["id"], {})

    def test_update_missing(self, playlist_manager):
        with pytest.raises(NotFoundError):
            playlist_manager.update(42, {"description": "x"})


class TestPlaylistManagerRemove:
    """Test PlaylistManager.remove()."""

    def test_remove_keeps_songs(self, playlist_manager, song_manager, playlist, db_session):
        song_manager.create({"playlist_id": playlist["id"], "artist": "Band", "title": "Hit"})

        assert playlist_manager.remove(playlist["id"]) == {"id": playlist["id"]}

        assert db_session.execute(select(PlaylistSong.id)).first() is None
        assert db_session.execute(select(ShowPlaylist.id)).first() is None
        assert db_session.execute(select(func.count(Song.id))).scalar() == 1

    def test_remove_missing(self, playlist_manager):
        with pytest.raises(NotFoundError, match="No playlist w/ ID: 42"):
            playlist_manager.remove(42)
