"""Background service files for systemd and desktop autostart."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from foccuss.database import Database
from foccuss.monitor import AppMonitor
from foccuss.servicelog import log_to_file

SERVICE_NAME = "foccuss"
SERVICE_DISPLAY_NAME = "Foccuss Application Blocker"


class LinuxService:
    """Writes and removes the files that run the blocker in the background."""

    def __init__(
        self,
        database: Database | None,
        home: str | os.PathLike | None = None,
        executable: str | None = None,
    ) -> None:
        self.database = database
        self.home = Path(home) if home is not None else Path.home()
        self.executable = executable or os.path.abspath(sys.argv[0])
        self.name = SERVICE_NAME
        self.display_name = SERVICE_DISPLAY_NAME
        self.installed_path = Path("/etc/systemd/user") / f"{self.name}.service"
        self.log_path: Path | None = None
        self.monitor: AppMonitor | None = None

    @property
    def service_file_path(self) -> Path:
        """Where the user's systemd unit is written."""
        return self.home / ".config" / "systemd" / "user" / f"{self.name}.service"

    @property
    def autostart_file_path(self) -> Path:
        """Where the desktop autostart entry is written."""
        return self.home / ".config" / "autostart" / f"{self.name}.desktop"

    def _log(self, message: str) -> None:
        log_to_file(message, self.log_path)

    def initialize(self) -> AppMonitor:
        """Create the process monitor; the database must be initialized."""
        if self.database is None or not self.database.initialized:
            self._log("Database not initialized")
            raise RuntimeError("database not initialized")
        self.monitor = AppMonitor(self.database)
        self._log("AppMonitor created successfully")
        return self.monitor

    def service_unit_text(self) -> str:
        """Return the contents of the systemd user unit."""
        return (
            "[Unit]\n"
            f"Description={self.display_name}\n"
            "After=graphical-session.target\n\n"
            "[Service]\n"
            "Type=simple\n"
            f"ExecStart={self.executable} --service\n"
            "Restart=on-failure\n"
            "RestartSec=10\n"
            "Environment=DISPLAY=:0\n\n"
            "[Install]\n"
            "WantedBy=graphical-session.target\n"
        )

    def autostart_entry_text(self) -> str:
        """Return the contents of the desktop autostart entry."""
        return (
            "[Desktop Entry]\n"
            "Type=Application\n"
            f"Name={self.display_name}\n"
            f"Exec={self.executable} --service\n"
            "Terminal=false\n"
            "Hidden=false\n"
            "X-GNOME-Autostart-enabled=true\n"
        )

    def is_service_installed(self) -> bool:
        """Return whether the system-wide unit file exists."""
        return self.installed_path.exists()

    def create_service_file(self) -> Path:
        """Write the systemd user unit and return its path."""
        path = self.service_file_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.service_unit_text(), encoding="utf-8")
        except OSError:
            self._log(f"Failed to create service file: {path}")
            raise
        self._log(f"Created service file: {path}")
        return path

    def remove_service_file(self) -> bool:
        """Delete the systemd user unit; return whether a file was removed."""
        path = self.service_file_path
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError:
            self._log(f"Failed to remove service file: {path}")
            raise
        self._log(f"Removed service file: {path}")
        return True

    def enable_autostart(self) -> Path:
        """Write the desktop autostart entry and return its path."""
        path = self.autostart_file_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.autostart_entry_text(), encoding="utf-8")
        except OSError:
            self._log("Failed to create autostart desktop file")
            raise
        return path

    def disable_autostart(self) -> bool:
        """Delete the desktop autostart entry; return whether a file was removed."""
        path = self.autostart_file_path
        if not path.exists():
            return False
        path.unlink()
        return True