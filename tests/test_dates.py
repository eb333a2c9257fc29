"""Tests for midday-normalised date arithmetic."""

from datetime import date, datetime

import pytest

from phaseline.engine.dates import add_days, diff_in_days, format_display, format_for_storage, parse_date


class TestParseDate:
    def test_iso_string_lands_on_midday(self) -> None:
        assert parse_date("2026-03-08") == datetime(2026, 3, 8, 12)

    def test_datetime_is_renormalised(self) -> None:
        assert parse_date(datetime(2026, 3, 8, 23, 59, 59)) == datetime(2026, 3, 8, 12)

    def test_plain_date(self) -> None:
        assert parse_date(date(2026, 3, 8)) == datetime(2026, 3, 8, 12)

    @pytest.mark.parametrize("raw", [None, "", "   ", "not-a-date", "2026-13-45"])
    def test_missing_or_bad_input_is_today(self, raw) -> None:
        d = parse_date(raw)
        assert d.date() == date.today()
        assert (d.hour, d.minute, d.second) == (12, 0, 0)

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2026-1-5", datetime(2026, 1, 5, 12)),
            ("2026-01-05T08:30:00", datetime(2026, 1, 5, 12)),
            ("0999-01-01", datetime(999, 1, 1, 12)),
        ],
    )
    def test_loose_iso_forms(self, raw: str, expected: datetime) -> None:
        assert parse_date(raw) == expected


class TestAddDays:
    @pytest.mark.parametrize(
        "start, n, expected",
        [
            ("2026-01-31", 1, "2026-02-01"),
            ("2025-12-31", 1, "2026-01-01"),
            ("2024-02-28", 1, "2024-02-29"),
            ("2026-03-01", -1, "2026-02-28"),
            ("2026-03-29", 0, "2026-03-29"),
        ],
    )
    def test_calendar_boundaries(self, start: str, n: int, expected: str) -> None:
        assert format_for_storage(add_days(start, n)) == expected

    def test_does_not_mutate_input(self) -> None:
        d = datetime(2026, 5, 1, 12)
        add_days(d, 10)
        assert d == datetime(2026, 5, 1, 12)

    def test_clamps_at_last_day(self) -> None:
        assert add_days("9999-12-31", 1) == datetime(9999, 12, 31, 12)
        assert add_days("2026-01-01", 5_000_000) == datetime(9999, 12, 31, 12)
        assert add_days("2026-01-01", 10**12) == datetime(9999, 12, 31, 12)

    def test_clamps_at_first_day(self) -> None:
        assert add_days("0001-01-03", -5) == datetime(1, 1, 1, 12)


class TestDiffInDays:
    def test_forward_and_backward(self) -> None:
        assert diff_in_days("2026-01-01", "2026-01-11") == 10
        assert diff_in_days("2026-01-11", "2026-01-01") == -10

    def test_sub_day_drift_is_ignored(self) -> None:
        assert diff_in_days(datetime(2026, 3, 7, 23, 30), "2026-03-09") == 2

    def test_across_dst_change(self) -> None:
        # Spring-forward weekend in most northern-hemisphere zones.
        assert diff_in_days("2026-03-28", "2026-03-30") == 2


def test_format_for_storage() -> None:
    assert format_for_storage(datetime(2026, 4, 5, 12)) == "2026-04-05"
    assert format_for_storage(None) == ""


def test_storage_round_trips_early_years() -> None:
    s = format_for_storage(parse_date("0999-01-01"))
    assert s == "0999-01-01"
    assert parse_date(s) == datetime(999, 1, 1, 12)
    assert format_for_storage(date(45, 6, 7)) == "0045-06-07"


def test_format_display() -> None:
    assert format_display("2026-04-15") == "15 Apr 2026"
    assert format_display("") == ""
