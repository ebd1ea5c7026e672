"""
Fixtures shared by the unit and integration suites.

Every test gets its own SQLite file under pytest's tmp_path, one session
scope around the test body, and a manager bound to that session for each
entity. ``make_member`` and ``make_show`` build rows with sensible
defaults so tests only spell out what they care about.
"""
import pytest

from hos.core.paths import ALEMBIC_DIR
from hos.database.manager import HosDB
from hos.database.managers import (
    FavoriteManager,
    MemberManager,
    PlaylistManager,
    ShowManager,
    SongManager,
)


@pytest.fixture
def test_db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def test_alembic_dir():
    return ALEMBIC_DIR


@pytest.fixture
def test_db(test_db_path, test_alembic_dir):
    """A HosDB on a fresh file; opening it builds the schema."""
    db = HosDB(db_path=test_db_path, alembic_dir=test_alembic_dir)
    yield db
    db.engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Session for one test; nothing it writes is committed."""
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def member_manager(db_session):
    return MemberManager(db_session)


@pytest.fixture
def show_manager(db_session):
    return ShowManager(db_session)


@pytest.fixture
def playlist_manager(db_session):
    return PlaylistManager(db_session)


@pytest.fixture
def song_manager(db_session):
    return SongManager(db_session)


@pytest.fixture
def favorite_manager(db_session):
    return FavoriteManager(db_session)


@pytest.fixture
def make_member(member_manager):
    """Register a member; keyword arguments override the defaults."""
    def _make(username="dj_kool", password="s3cret", **fields):
        return member_manager.register(
            {"username": username, "password": password, **fields}
        )
    return _make


@pytest.fixture
def make_show(show_manager):
    """Create a show; keyword arguments override the defaults."""
    def _make(show_name="Night Owls", day_of_week=5, show_time="22:00", **fields):
        return show_manager.create(
            {
                "show_name": show_name,
                "day_of_week": day_of_week,
                "show_time": show_time,
                **fields,
            }
        )
    return _make


@pytest.fixture
def dj_with_show(make_member, make_show):
    """A DJ member hosting one show: (member, show)."""
    member = make_member("dj_kool", is_dj=True)
    show = make_show(dj_id=member["id"], dj_name="DJ Kool")
    return member, show


@pytest.fixture
def playlist(playlist_manager, dj_with_show):
    """An empty playlist on the DJ's show."""
    member, _ = dj_with_show
    return playlist_manager.create(
        {"member_id": member["id"], "date": "2026-10-16", "description": "Autumn jazz"}
    )
