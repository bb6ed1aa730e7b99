# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for unihub.

All timestamps are stored in UTC and all Python datetimes are
timezone-aware. Calendar-month arithmetic used by the platform
statistics lives here as well.

Usage:
------
    from unihub.utils.datetime import utc_now

    created_at = Column(DateTime(timezone=True), default=utc_now)
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def start_of_month(dt: datetime) -> datetime:
    """Get midnight UTC of the first day of the month containing dt.

    Args:
        dt: Reference datetime (naive values are treated as UTC).

    Returns:
        Timezone-aware UTC datetime.
    """
    dt_utc = ensure_utc(dt)
    return dt_utc.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def start_of_previous_month(dt: datetime) -> datetime:
    """Get midnight UTC of the first day of the month before dt's month.

    January rolls back to December of the previous year.

    Args:
        dt: Reference datetime (naive values are treated as UTC).

    Returns:
        Timezone-aware UTC datetime.
    """
    first = start_of_month(dt)
    if first.month == 1:
        return first.replace(year=first.year - 1, month=12)
    return first.replace(month=first.month - 1)
