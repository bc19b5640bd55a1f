import datetime

import pytest

from xwoba_matchups.ingest.date_utils import date_range, parse_date, today_in


class TestTodayIn:
    def test_late_utc_evening_is_previous_day_on_west_coast(self) -> None:
        now = datetime.datetime(2025, 5, 13, 3, 30, tzinfo=datetime.UTC)
        assert today_in("America/Los_Angeles", now) == datetime.date(2025, 5, 12)

    def test_naive_instant_treated_as_utc(self) -> None:
        now = datetime.datetime(2025, 5, 13, 3, 30)
        assert today_in("UTC", now) == datetime.date(2025, 5, 13)


class TestDateRange:
    def test_consecutive_days_across_month_boundary(self) -> None:
        days = date_range(datetime.date(2025, 5, 30), 4)
        assert days == [
            datetime.date(2025, 5, 30),
            datetime.date(2025, 5, 31),
            datetime.date(2025, 6, 1),
            datetime.date(2025, 6, 2),
        ]

    def test_non_positive_days_rejected(self) -> None:
        with pytest.raises(ValueError):
            date_range(datetime.date(2025, 5, 12), 0)


class TestParseDate:
    def test_iso_date(self) -> None:
        assert parse_date("2025-05-12") == datetime.date(2025, 5, 12)

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_date("05/12/2025")
