"""SQLite storage for blocked applications and the blocking schedule."""

from __future__ import annotations

import os
import posixpath
import sqlite3
from datetime import datetime, time
from pathlib import Path

from foccuss.models import App, BlockTimeSettings, Week

DB_FILE_NAME = "foccuss.db"

_DAY_COLUMNS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS blocked_apps ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "app_path TEXT UNIQUE NOT NULL, "
    "app_name TEXT NOT NULL, "
    "is_blocked BOOLEAN NOT NULL)",
    "CREATE TABLE IF NOT EXISTS block_time_settings ("
    "id INTEGER PRIMARY KEY, "
    "start_hour INTEGER NOT NULL, "
    "start_minute INTEGER NOT NULL, "
    "end_hour INTEGER NOT NULL, "
    "end_minute INTEGER NOT NULL, "
    "monday BOOLEAN, "
    "tuesday BOOLEAN, "
    "wednesday BOOLEAN, "
    "thursday BOOLEAN, "
    "friday BOOLEAN, "
    "saturday BOOLEAN, "
    "sunday BOOLEAN, "
    "is_active BOOLEAN NOT NULL)",
    "INSERT OR IGNORE INTO block_time_settings ("
    "id, start_hour, start_minute, end_hour, end_minute, "
    "monday, tuesday, wednesday, thursday, friday, "
    "saturday, sunday, is_active"
    ") VALUES ("
    "1, 8, 0, 17, 0, "
    "1, 1, 1, 1, 1, "
    "0, 0, 1)",
)


class DatabaseError(Exception):
    """Raised when the database cannot be opened or queried."""


def default_data_dir() -> Path:
    """Return the per-user data directory of the application."""
    base = os.environ.get("XDG_DATA_HOME") or os.path.join(Path.home(), ".local", "share")
    return Path(base) / "Foccuss" / "Foccuss"


def _normalize_path(path: str) -> str:
    if not path:
        return ""
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned.replace("\\", "/")


class Database:
    """Stores which applications are blocked and when blocking applies."""

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path) if path is not None else default_data_dir() / DB_FILE_NAME
        self._conn: sqlite3.Connection | None = None

    @property
    def initialized(self) -> bool:
        return self._conn is not None

    def initialize(self) -> None:
        """Open the database file, creating it and its tables if needed."""
        if self._conn is not None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path)
        except (OSError, sqlite3.Error) as exc:
            raise DatabaseError(f"cannot open database {self.path}: {exc}") from exc
        try:
            with conn:
                for statement in _SCHEMA:
                    conn.execute(statement)
        except sqlite3.Error as exc:
            conn.close()
            raise DatabaseError(f"cannot create tables: {exc}") from exc
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> Database:
        self.initialize()
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise DatabaseError("database is not initialized")
        return self._conn

    def _execute(self, sql: str, params: dict | None = None) -> list[tuple]:
        conn = self._connection()
        try:
            with conn:
                return conn.execute(sql, params or {}).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def add_blocked_app(self, app_path: str, app_name: str) -> None:
        """Record an application as blocked, replacing any earlier entry for its path."""
        self._execute(
            "INSERT OR REPLACE INTO blocked_apps (app_path, app_name, is_blocked) "
            "VALUES (:path, :name, 1)",
            {"path": _normalize_path(app_path), "name": app_name},
        )

    def remove_blocked_app(self, app_path: str) -> None:
        """Mark matching applications as no longer blocked."""
        self._execute(
            "UPDATE blocked_apps SET is_blocked = 0 WHERE app_path LIKE :path",
            {"path": app_path},
        )

    def is_app_blocked(self, app_path: str) -> bool:
        """Return whether the path has an entry in the blocked applications table."""
        rows = self._execute(
            "SELECT 1 FROM blocked_apps WHERE app_path LIKE :path",
            {"path": _normalize_path(app_path)},
        )
        return bool(rows)

    def blocked_apps(self) -> list[App]:
        """Return the currently blocked applications ordered by name."""
        rows = self._execute(
            "SELECT app_path, app_name, is_blocked FROM blocked_apps "
            "WHERE is_blocked = 1 ORDER BY app_name"
        )
        return [App(str(path), str(name)) for path, name, _ in rows]

    def block_time_settings(self) -> BlockTimeSettings | None:
        """Return the stored blocking schedule, or None if there is none."""
        rows = self._execute(
            "SELECT start_hour, start_minute, end_hour, end_minute, "
            + ", ".join(_DAY_COLUMNS)
            + ", is_active FROM block_time_settings WHERE id = 1"
        )
        if not rows:
            return None
        start_hour, start_minute, end_hour, end_minute, *rest = rows[0]
        *days, is_active = rest
        try:
            start = time(int(start_hour), int(start_minute))
            end = time(int(end_hour), int(end_minute))
        except (TypeError, ValueError) as exc:
            raise DatabaseError(f"invalid stored time: {exc}") from exc
        week = Week(*(bool(day) for day in days))
        return BlockTimeSettings(start=start, end=end, week=week, active=bool(is_active))

    def update_block_time_settings(self, settings: BlockTimeSettings) -> None:
        """Store the blocking schedule."""
        if settings is None:
            raise ValueError("settings must not be None")
        params = {
            "start_hour": settings.start.hour,
            "start_minute": settings.start.minute,
            "end_hour": settings.end.hour,
            "end_minute": settings.end.minute,
            "is_active": int(bool(settings.active)),
        }
        params.update({day: int(bool(getattr(settings.week, day))) for day in _DAY_COLUMNS})
        assignments = ", ".join(f"{column} = :{column}" for column in params)
        self._execute(f"UPDATE block_time_settings SET {assignments} WHERE id = 1", params)

    def is_blocking_active(self) -> bool:
        """Return whether the blocking schedule is switched on."""
        rows = self._execute("SELECT is_active FROM block_time_settings WHERE id = 1")
        return bool(rows and rows[0][0])

    def is_blocking_now(self, now: datetime | None = None) -> bool:
        """Return whether the schedule blocks applications at the given moment."""
        settings = self.block_time_settings()
        if settings is None:
            return False
        return settings.covers(now if now is not None else datetime.now())