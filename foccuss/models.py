"""Plain data types for blocked applications and the blocking schedule."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from datetime import datetime, time

import psutil


@dataclass
class Week:
    """The days of the week on which blocking applies."""

    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False

    def is_enabled(self, weekday: int) -> bool:
        """Return whether the ISO weekday (1 = Monday ... 7 = Sunday) is enabled."""
        days = [getattr(self, f.name) for f in fields(self)]
        if 1 <= weekday <= len(days):
            return bool(days[weekday - 1])
        return False


@dataclass
class BlockTimeSettings:
    """A daily blocking window together with the days it applies to."""

    start: time
    end: time
    week: Week = field(default_factory=Week)
    active: bool = True

    def covers(self, moment: datetime) -> bool:
        """Return whether blocking applies at the given moment.

        A window whose start is not before its end wraps past midnight.
        Both ends of the window are inclusive.
        """
        if not self.active:
            return False
        current = moment.time()
        if self.start < self.end:
            within = self.start <= current <= self.end
        else:
            within = current >= self.start or current <= self.end
        if not within:
            return False
        return self.week.is_enabled(moment.isoweekday())


@dataclass
class App:
    """An application identified by its executable path."""

    path: str
    name: str
    active: bool = False

    def is_valid(self) -> bool:
        """Return whether the path is set and exists on disk."""
        return bool(self.path) and os.path.exists(self.path)

    def is_running(self) -> bool:
        """Return whether a process with this executable's file name is running."""
        if not self.is_valid():
            return False
        exe_name = os.path.basename(self.path).lower()
        for proc in psutil.process_iter(["name"]):
            name = proc.info.get("name")
            if name and name.strip().lower() == exe_name:
                return True
        return False