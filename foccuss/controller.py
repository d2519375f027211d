"""Application logic behind the blocker's user interface."""

from __future__ import annotations

from datetime import time

import psutil

from foccuss.database import Database
from foccuss.detector import AppDetector
from foccuss.filtering import filter_apps
from foccuss.models import App, BlockTimeSettings, Week
from foccuss.monitor import AppMonitor
from foccuss.service import LinuxService


def _default_time_settings() -> BlockTimeSettings:
    week = Week(monday=True, tuesday=True, wednesday=True, thursday=True, friday=True)
    return BlockTimeSettings(start=time(8, 0), end=time(17, 0), week=week, active=True)


def _service_process_running(executable: str) -> bool:
    for proc in psutil.process_iter(["cmdline"]):
        cmdline = proc.info.get("cmdline") or []
        if "--service" in cmdline and executable in cmdline:
            return True
    return False


class BlockerController:
    """Keeps the installed and blocked application lists, searches and schedule."""

    def __init__(
        self,
        database: Database,
        detector: AppDetector | None = None,
        monitor: AppMonitor | None = None,
        service: LinuxService | None = None,
    ) -> None:
        self.database = database
        self._detector = detector
        self.monitor = monitor if monitor is not None else AppMonitor(database)
        self.service = service if service is not None else LinuxService(database)

        self.installed_apps: list[App] = []
        self.blocked_apps: list[App] = []
        self.filtered_installed: list[App] = []
        self.filtered_blocked: list[App] = []
        self.installed_search = ""
        self.blocked_search = ""
        self.time_settings: BlockTimeSettings | None = None
        self.service_installed = False
        self.service_running = False

        self.load_blocked_apps()
        self.monitor.start()
        self.load_time_settings()

    @property
    def detector(self) -> AppDetector:
        if self._detector is None:
            self._detector = AppDetector()
        return self._detector

    def refresh_installed_apps(self) -> list[App]:
        """Rescan installed applications and return those matching the current search."""
        self.detector.refresh()
        self.installed_apps = self.detector.installed_apps()
        self.filtered_installed = filter_apps(self.installed_apps, self.installed_search)
        return self.filtered_installed

    def load_blocked_apps(self) -> list[App]:
        """Reload blocked applications and return those matching the current search."""
        self.blocked_apps = self.database.blocked_apps()
        self.filtered_blocked = filter_apps(self.blocked_apps, self.blocked_search)
        return self.filtered_blocked

    def search_installed(self, text: str) -> list[App]:
        """Filter installed applications, scanning first if nothing has been scanned yet."""
        self.installed_search = text
        if not self.installed_apps:
            if not text:
                return self.filtered_installed
            return self.refresh_installed_apps()
        self.filtered_installed = filter_apps(self.installed_apps, text)
        return self.filtered_installed

    def search_blocked(self, text: str) -> list[App]:
        """Filter the blocked applications by name."""
        self.blocked_search = text
        if self.blocked_apps or not text:
            self.filtered_blocked = filter_apps(self.blocked_apps, text)
        return self.filtered_blocked

    def block_app(self, app: App) -> bool:
        """Block an existing application; return False if its path is not valid."""
        if app is None or not app.is_valid():
            return False
        self.database.add_blocked_app(app.path, app.name)
        self.load_blocked_apps()
        return True

    def unblock_app(self, app: App) -> bool:
        """Unblock an existing application; return False if its path is not valid."""
        if app is None or not app.is_valid():
            return False
        self.database.remove_blocked_app(app.path)
        self.load_blocked_apps()
        return True

    def toggle_monitoring(self, enabled: bool) -> str:
        """Switch process monitoring on or off and return the new status text."""
        if enabled:
            self.monitor.start()
        else:
            self.monitor.stop()
        return self.monitoring_status()

    def monitoring_status(self) -> str:
        """Return a status line describing whether monitoring is active."""
        if self.monitor.monitoring:
            return "Status: Monitoring is active"
        return "Status: Monitoring is inactive"

    def service_status(self) -> str:
        """Check the background service and return a status line describing it."""
        self.service_installed = self.service.is_service_installed()
        self.service_running = self.service_installed and _service_process_running(
            self.service.executable
        )
        if not self.service_installed:
            return "Status: Service not installed"
        if self.service_running:
            return "Status: Service is running"
        return "Status: Service is stopped"

    def load_time_settings(self) -> BlockTimeSettings:
        """Load the blocking schedule, falling back to weekdays from 08:00 to 17:00."""
        settings = self.database.block_time_settings()
        self.time_settings = settings if settings is not None else _default_time_settings()
        return self.time_settings

    def save_time_settings(self, settings: BlockTimeSettings) -> None:
        """Store a new blocking schedule."""
        if settings is None:
            raise ValueError("settings must not be None")
        self.time_settings = settings
        self.database.update_block_time_settings(settings)