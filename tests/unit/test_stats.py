# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for month-over-month growth arithmetic."""

from datetime import datetime, timedelta, timezone

import pytest

from unihub.domains.system.stats import bucket_by_month, compute_growth_percentage, month_bounds
from unihub.utils.datetime import ensure_utc, start_of_previous_month


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestComputeGrowthPercentage:
    """Tests for compute_growth_percentage."""

    @pytest.mark.parametrize(
        ("this_month", "last_month", "expected"),
        [
            (5, 4, 25),
            (3, 2, 50),
            (0, 4, -100),
            (4, 4, 0),
            (9, 8, 13),
            (7, 8, -12),
            (2, 3, -33),
        ],
    )
    def test_percentage(self, this_month: int, last_month: int, expected: int) -> None:
        assert compute_growth_percentage(this_month, last_month) == expected

    def test_zero_baseline_reports_zero(self) -> None:
        """Test that growth from an empty previous month is reported as 0."""
        assert compute_growth_percentage(3, 0) == 0
        assert compute_growth_percentage(0, 0) == 0


class TestBucketByMonth:
    """Tests for bucket_by_month."""

    def test_january_counts_december_as_last_month(self) -> None:
        now = utc(2025, 1, 15, 12)
        timestamps = [
            utc(2025, 1, 1),
            utc(2025, 1, 14, 23, 59),
            utc(2024, 12, 31, 23, 59),
            utc(2024, 12, 1),
            utc(2024, 11, 30, 23, 59),
            None,
        ]

        buckets = bucket_by_month(timestamps, now)

        assert buckets.this_month == 2
        assert buckets.last_month == 2

    def test_future_rows_count_towards_this_month(self) -> None:
        now = utc(2025, 3, 10)

        buckets = bucket_by_month([now + timedelta(days=60)], now)

        assert buckets.this_month == 1

    def test_naive_timestamps_are_utc(self) -> None:
        now = utc(2025, 3, 10)

        buckets = bucket_by_month([datetime(2025, 2, 28, 23, 0)], now)

        assert buckets.last_month == 1

    def test_other_timezones_are_converted(self) -> None:
        """Test that month boundaries are UTC regardless of the stamp's offset."""
        now = utc(2025, 3, 10)
        plus_two = timezone(timedelta(hours=2))

        # 2025-03-01 01:00 +02:00 is still February in UTC
        buckets = bucket_by_month([datetime(2025, 3, 1, 1, 0, tzinfo=plus_two)], now)

        assert buckets.this_month == 0
        assert buckets.last_month == 1

    def test_empty(self) -> None:
        assert tuple(bucket_by_month([], utc(2025, 3, 10))) == (0, 0)


class TestMonthBounds:
    """Tests for month boundary helpers."""

    def test_month_bounds(self) -> None:
        assert month_bounds(utc(2025, 5, 20, 8)) == (utc(2025, 4, 1), utc(2025, 5, 1))

    def test_previous_month_rolls_over_year(self) -> None:
        assert start_of_previous_month(utc(2025, 1, 31, 23)) == utc(2024, 12, 1)

    def test_ensure_utc(self) -> None:
        assert ensure_utc(None) is None
        assert ensure_utc(datetime(2025, 1, 1)) == utc(2025, 1, 1)
