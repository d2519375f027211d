from datetime import time

import pytest

from foccuss.controller import BlockerController
from foccuss.database import Database
from foccuss.detector import AppDetector
from foccuss.models import App, BlockTimeSettings, Week
from foccuss.monitor import AppMonitor
from foccuss.service import LinuxService


def _make_executable(directory, name):
    path = directory / name
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def apps_dir(tmp_path):
    directory = tmp_path / "apps"
    directory.mkdir()
    for name in ("Gamma", "Alpha", "beta-tool"):
        _make_executable(directory, name)
    return directory


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "data" / "test.db")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def controller(tmp_path, database, apps_dir):
    desktop = tmp_path / "desktop"
    desktop.mkdir()
    detector = AppDetector(desktop_dirs=[desktop], path_dirs=[apps_dir])
    service = LinuxService(database, home=tmp_path / "home", executable="/nonexistent/foccuss")
    service.installed_path = tmp_path / "system" / "foccuss.service"
    return BlockerController(database, detector, AppMonitor(database), service)


def test_refresh_lists_sorted_by_name(controller):
    apps = controller.refresh_installed_apps()
    assert [app.name for app in apps] == ["Alpha", "beta-tool", "Gamma"]


def test_search_installed_scans_when_empty(controller):
    assert controller.installed_apps == []
    result = controller.search_installed("gam")
    assert [app.name for app in result] == ["Gamma"]
    assert len(controller.installed_apps) == 3


def test_search_installed_empty_text_without_scan(controller):
    assert controller.search_installed("") == []
    assert controller.installed_apps == []


def test_search_installed_case_insensitive(controller):
    controller.refresh_installed_apps()
    assert [app.name for app in controller.search_installed("AL")] == ["Alpha"]
    assert len(controller.search_installed("")) == 3


def test_block_and_unblock(controller, apps_dir):
    app = App(str(apps_dir / "Alpha"), "Alpha")
    assert controller.block_app(app) is True
    assert [a.name for a in controller.blocked_apps] == ["Alpha"]
    assert controller.database.is_app_blocked(app.path)
    assert controller.unblock_app(app) is True
    assert controller.blocked_apps == []


def test_block_invalid_app(controller, tmp_path):
    assert controller.block_app(App(str(tmp_path / "missing"), "Missing")) is False
    assert controller.blocked_apps == []


def test_search_blocked_and_reload(controller, apps_dir):
    controller.block_app(App(str(apps_dir / "Gamma"), "Gamma"))
    controller.block_app(App(str(apps_dir / "Alpha"), "Alpha"))
    assert [a.name for a in controller.search_blocked("gam")] == ["Gamma"]
    assert [a.name for a in controller.load_blocked_apps()] == ["Gamma"]
    assert [a.name for a in controller.search_blocked("")] == ["Alpha", "Gamma"]


def test_search_blocked_with_nothing_blocked(controller):
    assert controller.search_blocked("x") == []


def test_toggle_monitoring(controller):
    assert controller.monitoring_status() == "Status: Monitoring is active"
    assert controller.toggle_monitoring(False) == "Status: Monitoring is inactive"
    assert controller.monitor.monitoring is False
    assert controller.toggle_monitoring(True) == "Status: Monitoring is active"


def test_default_time_settings(controller):
    settings = controller.load_time_settings()
    assert settings.start == time(8, 0)
    assert settings.end == time(17, 0)
    assert settings.week.monday and settings.week.friday
    assert not settings.week.saturday and not settings.week.sunday
    assert settings.active is True


def test_save_time_settings_round_trip(controller):
    settings = BlockTimeSettings(
        start=time(22, 15), end=time(6, 45), week=Week(sunday=True), active=False
    )
    controller.save_time_settings(settings)
    assert controller.load_time_settings() == settings


def test_save_none_rejected(controller):
    with pytest.raises(ValueError):
        controller.save_time_settings(None)


def test_service_status(controller):
    assert controller.service_status() == "Status: Service not installed"
    assert controller.service_installed is False
    path = controller.service.installed_path
    path.parent.mkdir(parents=True)
    path.write_text("[Unit]\n")
    assert controller.service_status() == "Status: Service is stopped"
    assert controller.service_installed is True
    assert controller.service_running is False