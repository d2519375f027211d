"""Watches running processes and stops those that are blocked."""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Callable, Iterable, Iterator

import psutil

from foccuss.database import Database, DatabaseError
from foccuss.servicelog import log_to_file

SELF_NAME = "foccuss"
_SYSTEM_PREFIXES = ("kworker", "systemd")
_KILL_PAUSE = 0.1

BlockedCallback = Callable[[str, str], None]


def _is_system_process(name: str) -> bool:
    return name.startswith(_SYSTEM_PREFIXES) or name == SELF_NAME


def _list_processes() -> Iterator[tuple[int, str, str]]:
    for proc in psutil.process_iter(["name", "exe"]):
        name = proc.info.get("name") or ""
        exe = proc.info.get("exe") or ""
        yield proc.pid, name, os.path.realpath(exe) if exe else ""


def _terminate(pid: int) -> None:
    try:
        psutil.Process(pid).terminate()
    except (psutil.Error, ValueError, OverflowError):
        pass


class AppMonitor:
    """Periodically checks running processes against the blocked list."""

    def __init__(
        self,
        database: Database | None,
        on_blocked: BlockedCallback | None = None,
        interval: float = 1.0,
    ) -> None:
        self.database = database
        self.on_blocked = on_blocked
        self.interval = interval
        self._monitoring = False
        self._seen: set[str] = set()
        self._lock = threading.RLock()
        self._wake = threading.Event()

    @property
    def monitoring(self) -> bool:
        return self._monitoring

    def start(self) -> None:
        """Switch monitoring on if the database is ready; log why not otherwise."""
        if self._monitoring:
            log_to_file("Monitoring already active")
            return
        if self.database is None:
            log_to_file("Cannot start monitoring - database is null")
            return
        if not self.database.initialized:
            log_to_file("Cannot start monitoring - database not initialized")
            return
        with self._lock:
            self._seen.clear()
        self._wake.clear()
        self._monitoring = True

    def stop(self) -> None:
        """Switch monitoring off and wake a running loop."""
        if not self._monitoring:
            return
        self._monitoring = False
        with self._lock:
            self._seen.clear()
        self._wake.set()

    def check_running_apps(
        self, processes: Iterable[tuple[int, str, str]] | None = None
    ) -> list[tuple[str, str]]:
        """Stop newly started blocked processes.

        ``processes`` holds (pid, name, executable path) triples; by default
        the processes of the system are used. Each blocked executable is
        reported once until it disappears from the process list. Returns the
        (path, name) pairs reported by this call.
        """
        database = self.database
        if database is None or not database.initialized:
            return []
        try:
            if not database.is_blocking_active() or not database.is_blocking_now():
                log_to_file("Blocking is not active at this time")
                return []
        except DatabaseError as exc:
            log_to_file(f"Cannot read blocking schedule: {exc}")
            return []

        if processes is None:
            processes = _list_processes()

        reported: list[tuple[str, str]] = []
        current: set[str] = set()
        with self._lock:
            for pid, name, path in processes:
                if not name or _is_system_process(name) or not path:
                    continue
                try:
                    blocked = database.is_app_blocked(path)
                except DatabaseError as exc:
                    log_to_file(f"Cannot check blocked state of {path}: {exc}")
                    continue
                if not blocked:
                    continue
                current.add(path)
                if path in self._seen:
                    continue
                self._seen.add(path)
                reported.append((path, name))
                if self.on_blocked is not None:
                    self.on_blocked(path, name)
                _terminate(pid)
                time.sleep(_KILL_PAUSE)
            self._seen &= current
        return reported

    def run_forever(self) -> None:
        """Start monitoring and check processes every interval until stopped."""
        self.start()
        try:
            while self._monitoring:
                self.check_running_apps()
                self._wake.wait(self.interval)
        except KeyboardInterrupt:
            self.stop()