# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Month-over-month growth arithmetic for platform statistics."""

import math
from collections.abc import Iterable
from datetime import datetime
from typing import NamedTuple

from unihub.utils.datetime import ensure_utc, start_of_month, start_of_previous_month


class MonthBuckets(NamedTuple):
    """Creation counts for the current and the previous calendar month."""

    this_month: int
    last_month: int


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Return (start of previous month, start of current month) in UTC."""
    return start_of_previous_month(now), start_of_month(now)


def bucket_by_month(timestamps: Iterable[datetime | None], now: datetime) -> MonthBuckets:
    """Count timestamps falling in the current and the previous calendar month.

    The current month is open-ended, so rows stamped after ``now`` still
    count towards it. Missing timestamps are ignored.
    """
    last_start, this_start = month_bounds(now)
    this_month = 0
    last_month = 0

    for ts in timestamps:
        ts = ensure_utc(ts)
        if ts is None:
            continue
        if ts >= this_start:
            this_month += 1
        elif ts >= last_start:
            last_month += 1

    return MonthBuckets(this_month=this_month, last_month=last_month)


def compute_growth_percentage(this_month: int, last_month: int) -> int:
    """Percentage change from last month to this month.

    Halves round up, e.g. 12.5 becomes 13 and -12.5 becomes -12. With no
    tenants last month there is no baseline and the result is 0.
    """
    if last_month == 0:
        return 0
    return math.floor((this_month - last_month) / last_month * 100 + 0.5)
