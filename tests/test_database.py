from datetime import datetime, time

import pytest

from foccuss.database import Database, DatabaseError
from foccuss.models import BlockTimeSettings, Week


@pytest.fixture
def db(tmp_path):
    database = Database(tmp_path / "data" / "foccuss.db")
    database.initialize()
    yield database
    database.close()


def test_initialize_creates_file(tmp_path):
    path = tmp_path / "nested" / "dir" / "foccuss.db"
    with Database(path) as database:
        assert database.initialized is True
    assert path.exists()


def test_uninitialized_database_raises(tmp_path):
    database = Database(tmp_path / "foccuss.db")
    assert database.initialized is False
    with pytest.raises(DatabaseError):
        database.blocked_apps()
    with pytest.raises(DatabaseError):
        database.add_blocked_app("/usr/bin/foo", "Foo")


def test_closed_database_raises(tmp_path):
    with Database(tmp_path / "foccuss.db") as database:
        pass
    with pytest.raises(DatabaseError):
        database.is_blocking_active()


def test_default_schedule(db):
    settings = db.block_time_settings()
    assert settings.start == time(8, 0)
    assert settings.end == time(17, 0)
    assert settings.week == Week(True, True, True, True, True, False, False)
    assert settings.active is True
    assert db.is_blocking_active() is True


def test_add_and_list_blocked_apps_sorted_by_name(db):
    db.add_blocked_app("/opt/zeta/zeta", "Zeta")
    db.add_blocked_app("/opt/alpha/alpha", "Alpha")
    apps = db.blocked_apps()
    assert [app.name for app in apps] == ["Alpha", "Zeta"]
    assert [app.path for app in apps] == ["/opt/alpha/alpha", "/opt/zeta/zeta"]


def test_add_normalizes_path(db):
    db.add_blocked_app("/usr//bin/./tools/../foo/", "Foo")
    assert [app.path for app in db.blocked_apps()] == ["/usr/bin/foo"]
    assert db.is_app_blocked("/usr/bin/foo") is True
    assert db.is_app_blocked("/usr/bin//foo") is True


def test_add_same_path_replaces_entry(db):
    db.add_blocked_app("/usr/bin/foo", "Foo")
    db.add_blocked_app("/usr/bin/foo", "Renamed")
    apps = db.blocked_apps()
    assert len(apps) == 1
    assert apps[0].name == "Renamed"


def test_unknown_app_is_not_blocked(db):
    db.add_blocked_app("/usr/bin/foo", "Foo")
    assert db.is_app_blocked("/usr/bin/bar") is False


def test_remove_drops_app_from_list(db):
    db.add_blocked_app("/usr/bin/foo", "Foo")
    db.add_blocked_app("/usr/bin/bar", "Bar")
    db.remove_blocked_app("/usr/bin/foo")
    assert [app.path for app in db.blocked_apps()] == ["/usr/bin/bar"]


def test_readding_removed_app_blocks_again(db):
    db.add_blocked_app("/usr/bin/foo", "Foo")
    db.remove_blocked_app("/usr/bin/foo")
    db.add_blocked_app("/usr/bin/foo", "Foo")
    assert [app.path for app in db.blocked_apps()] == ["/usr/bin/foo"]


def test_update_settings_round_trip(db):
    settings = BlockTimeSettings(
        start=time(21, 30), end=time(6, 15), week=Week(saturday=True, sunday=True), active=False
    )
    db.update_block_time_settings(settings)
    assert db.block_time_settings() == settings
    assert db.is_blocking_active() is False


def test_update_settings_none_rejected(db):
    with pytest.raises(ValueError):
        db.update_block_time_settings(None)


def test_settings_persist_across_reopen(tmp_path):
    path = tmp_path / "foccuss.db"
    settings = BlockTimeSettings(start=time(9, 0), end=time(12, 0), week=Week(monday=True))
    with Database(path) as database:
        database.update_block_time_settings(settings)
        database.add_blocked_app("/usr/bin/foo", "Foo")
    with Database(path) as database:
        assert database.block_time_settings() == settings
        assert [app.name for app in database.blocked_apps()] == ["Foo"]


def test_is_blocking_now_with_default_schedule(db):
    # 2024-01-01 is a Monday, 2024-01-06 a Saturday
    assert db.is_blocking_now(datetime(2024, 1, 1, 10, 0)) is True
    assert db.is_blocking_now(datetime(2024, 1, 1, 18, 0)) is False
    assert db.is_blocking_now(datetime(2024, 1, 6, 10, 0)) is False


def test_is_blocking_now_inactive(db):
    settings = db.block_time_settings()
    settings.active = False
    db.update_block_time_settings(settings)
    assert db.is_blocking_now(datetime(2024, 1, 1, 10, 0)) is False


def test_is_blocking_now_matches_settings(db):
    moment = datetime(2024, 1, 3, 23, 45)
    settings = BlockTimeSettings(start=time(22, 0), end=time(2, 0), week=Week(*([True] * 7)))
    db.update_block_time_settings(settings)
    assert db.is_blocking_now(moment) == settings.covers(moment)
    assert db.is_blocking_now(moment) is True