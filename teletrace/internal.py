"""Package version, user agent, time and label helpers."""

from __future__ import annotations

from datetime import datetime, timedelta

_LABEL_KEY_SIZE_LIMIT = 100


def version() -> str:
    """Return the current release version."""
    return "0.1.0"


def user_agent() -> str:
    """Return the user agent that exporters add to outgoing requests."""
    return f"teletrace/{version()}"


def monotonic_end_time(start: datetime) -> datetime:
    """Return the present time as an offset from ``start``, never before it."""
    now = datetime.now(tz=start.tzinfo)
    return start + max(timedelta(0), now - start)


def _sanitize_char(ch: str) -> str:
    return ch if ch.isalpha() or ch.isdecimal() else "_"


def sanitize(s: str) -> str:
    """Truncate to 100 characters and replace non-alphanumerics with underscores."""
    if not s:
        return s
    s = "".join(_sanitize_char(ch) for ch in s[:_LABEL_KEY_SIZE_LIMIT])
    if s[0].isdecimal():
        s = "key_" + s
    if s[0] == "_":
        s = "key" + s
    return s