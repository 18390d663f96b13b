# src/core/timefmt.py — v1
"""Human-facing time formatting for CLI metadata lines."""

from __future__ import annotations

from datetime import datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_relative_time(from_dt: datetime, to_dt: datetime | None = None) -> str:
    """Format the age of ``from_dt`` relative to ``to_dt`` (default: now).

    Future timestamps clamp to "just now".
    """
    to_dt = to_dt or _utc_now()
    delta_ms = max(0.0, (to_dt - from_dt).total_seconds() * 1000)

    if delta_ms < 5_000:
        return "just now"

    sec = int(delta_ms // 1000)
    if sec < 60:
        return f"{sec}s ago"

    minutes = sec // 60
    if minutes < 60:
        return f"{minutes}m ago"

    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"

    days = hours // 24
    if days < 30:
        return f"{days}d ago"

    months = days // 30
    if months < 12:
        return f"{months}mo ago"

    return f"{months // 12}y ago"


def format_local_short(dt: datetime, now: datetime | None = None) -> str:
    """Short local datetime, e.g. "Dec 28, 3:43 PM CET".

    The year is included only when it differs from the current one.
    """
    local = dt.astimezone()
    now_local = (now or _utc_now()).astimezone()

    hour = local.hour % 12 or 12
    ampm = "AM" if local.hour < 12 else "PM"
    base = f"{local.strftime('%b')} {local.day}"
    if local.year != now_local.year:
        base += f", {local.year}"
    label = local.tzname() or local.strftime("UTC%z")
    return f"{base}, {hour}:{local.minute:02d} {ampm} {label}"
