"""Wildcard search over application names."""

from __future__ import annotations

import re
from collections.abc import Iterable

from foccuss.models import App


def wildcard_pattern(search_text: str) -> str:
    """Turn search text into a wildcard pattern matching it anywhere.

    Spaces become ``*`` and the pattern is wrapped in ``*`` on both sides.
    """
    pattern = search_text.replace(" ", "*")
    if not pattern.startswith("*"):
        pattern = "*" + pattern
    if not pattern.endswith("*"):
        pattern = pattern + "*"
    return pattern


def _wildcard_to_regex(pattern: str) -> str:
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                parts.append(re.escape(char))
            else:
                body = pattern[i + 1 : j]
                negate = body[:1] in ("!", "^")
                if negate:
                    body = body[1:]
                body = body.replace("\\", "\\\\")
                parts.append(f"[{'^' if negate else ''}{body}]")
                i = j
        else:
            parts.append(re.escape(char))
        i += 1
    return "".join(parts)


def filter_apps(apps: Iterable[App], search_text: str) -> list[App]:
    """Return the applications whose names match the search, in their original order.

    Matching is case-insensitive; empty search text keeps every application.
    """
    apps = list(apps)
    if not search_text:
        return apps
    regex = re.compile(_wildcard_to_regex(wildcard_pattern(search_text)), re.IGNORECASE)
    return [app for app in apps if regex.fullmatch(app.name)]