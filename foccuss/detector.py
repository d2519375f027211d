"""Discovery of installed and running applications."""

from __future__ import annotations

import configparser
import os
import shutil
from collections.abc import Iterable, Iterator
from pathlib import Path

import psutil

from foccuss.models import App

SELF_NAME = "foccuss"
_SYSTEM_PREFIXES = ("kworker", "systemd")
_COMMON_SUBDIRS = ("bin", "usr/bin", "opt")
_FALSE_STRINGS = ("", "0", "false")


def _is_system_process(name: str) -> bool:
    return name.startswith(_SYSTEM_PREFIXES) or name == SELF_NAME


def _as_bool(value: str) -> bool:
    return value.strip().lower() not in _FALSE_STRINGS


def _executables(directory: Path) -> list[Path]:
    """Return the visible executable regular files of a directory, sorted by name."""
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError:
        return []
    return [
        entry
        for entry in entries
        if not entry.name.startswith(".")
        and entry.is_file()
        and os.access(entry, os.X_OK)
    ]


def _default_desktop_dirs() -> list[Path]:
    return [
        Path("/usr/share/applications"),
        Path("/usr/local/share/applications"),
        Path.home() / ".local" / "share" / "applications",
    ]


def parse_desktop_entry(path: str | os.PathLike) -> tuple[str, str] | None:
    """Read a .desktop file and return its (name, command) pair.

    Returns None for entries that are hidden, are not applications, lack a
    name or command, or cannot be read. The command is the first word of
    the Exec line with surrounding double quotes removed.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError, OSError):
        return None
    if not parser.has_section("Desktop Entry"):
        return None
    section = parser["Desktop Entry"]
    name = section.get("Name", "")
    command = section.get("Exec", "")
    no_display = _as_bool(section.get("NoDisplay", "false"))
    entry_type = section.get("Type", "")
    if no_display or entry_type != "Application" or not name or not command:
        return None
    command = command.split(" ")[0]
    if command.startswith('"') and command.endswith('"'):
        command = command[1:-1]
    return name, command


def find_executable_in_directory(directory: str | os.PathLike, app_name: str) -> str | None:
    """Guess the executable of an application installed in a directory.

    Tries the first word of the application name, then the first executable
    in the directory, then the first executable in a few common
    subdirectories. Returns None if nothing is found.
    """
    root = Path(directory)
    if not root.is_dir():
        return None
    candidate = root / app_name.split(" ")[0]
    if candidate.name and os.path.lexists(candidate):
        return str(candidate)
    found = _executables(root)
    if found:
        return str(found[0])
    for subdir in _COMMON_SUBDIRS:
        sub = root / subdir
        if sub.is_dir():
            found = _executables(sub)
            if found:
                return str(found[0])
    return None


class AppDetector:
    """Finds applications from desktop entries and directories on the search path."""

    def __init__(
        self,
        desktop_dirs: Iterable[str | os.PathLike] | None = None,
        path_dirs: Iterable[str | os.PathLike] | None = None,
    ) -> None:
        self.desktop_dirs = (
            [Path(d) for d in desktop_dirs] if desktop_dirs is not None else _default_desktop_dirs()
        )
        self.path_dirs = [Path(d) for d in path_dirs] if path_dirs is not None else None
        self._installed: list[App] = []
        self.refresh()

    def refresh(self) -> None:
        """Rescan the system for installed applications."""
        apps = [*self._desktop_applications(), *self._path_executables()]
        apps.sort(key=lambda app: app.name.lower())
        self._installed = apps

    def installed_apps(self) -> list[App]:
        """Return the applications found by the last scan, sorted by name."""
        return list(self._installed)

    def running_apps(self) -> list[App]:
        """Return the user-visible processes currently running, with their executables."""
        apps = []
        for proc in psutil.process_iter(["name", "exe"]):
            name = proc.info.get("name") or ""
            if not name or _is_system_process(name):
                continue
            exe = proc.info.get("exe")
            if exe:
                apps.append(App(os.path.realpath(exe), name))
        return apps

    def _desktop_applications(self) -> Iterator[App]:
        processed: set[str] = set()
        for directory in self.desktop_dirs:
            if not directory.is_dir():
                continue
            for entry_file in sorted(directory.glob("*.desktop"), key=lambda p: p.name):
                if not entry_file.is_file():
                    continue
                parsed = parse_desktop_entry(entry_file)
                if parsed is None:
                    continue
                name, command = parsed
                exec_path = command
                if not os.path.exists(exec_path):
                    resolved = shutil.which(command)
                    if resolved:
                        exec_path = resolved
                if exec_path and os.path.exists(exec_path) and exec_path not in processed:
                    processed.add(exec_path)
                    yield App(exec_path, name)

    def _path_executables(self) -> Iterator[App]:
        if self.path_dirs is not None:
            directories = self.path_dirs
        else:
            directories = [Path(d) for d in os.environ.get("PATH", "").split(":") if d]
        processed: set[str] = set()
        for directory in directories:
            if not directory.is_dir():
                continue
            for entry in _executables(directory):
                file_path = os.path.abspath(entry)
                if file_path in processed:
                    continue
                if (
                    entry.name.startswith(".")
                    or "/sbin/" in file_path
                    or "/bin/" in file_path
                    or entry.name == SELF_NAME
                ):
                    continue
                processed.add(file_path)
                yield App(file_path, entry.name)