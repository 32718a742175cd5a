"""
Unit tests for the date helpers
"""

from datetime import timezone

import pytest
from dateutil import tz

from app.utils.dates import MAX_EPOCH_MS, derive_date_asked, parse_date_bound, resolve_timezone


class TestParseDateBound:
    """startDate/endDate parsing."""

    def test_epoch_milliseconds(self):
        assert parse_date_bound("1700000000000") == 1700000000000

    def test_iso_date_is_midnight_utc(self):
        assert parse_date_bound("2023-11-16") == 1700092800000

    def test_iso_datetime_with_offset(self):
        assert parse_date_bound("2023-11-14T22:13:20Z") == 1700000000000
        assert parse_date_bound("2023-11-15T03:43:20+05:30") == 1700000000000

    def test_naive_value_uses_default_timezone(self):
        """Midnight in Kolkata is 18:30 UTC the day before."""
        kolkata = tz.gettz("Asia/Kolkata")

        assert parse_date_bound("2023-11-16", kolkata) == 1700092800000 - 19_800_000

    @pytest.mark.parametrize("value", ["", "   ", "soon", "2023-13-45"])
    def test_unparseable(self, value):
        assert parse_date_bound(value) is None

    def test_offset_beyond_a_day_is_rejected(self):
        # dateutil accepts +99:00 but datetime cannot apply it
        assert parse_date_bound("2024-01-01T00:00:00+99:00") is None

    def test_epoch_range(self):
        assert parse_date_bound(str(MAX_EPOCH_MS)) == MAX_EPOCH_MS
        assert parse_date_bound(str(-MAX_EPOCH_MS)) == -MAX_EPOCH_MS
        assert parse_date_bound(str(MAX_EPOCH_MS + 1)) is None
        assert parse_date_bound("99999999999999999999999") is None


class TestDeriveDateAsked:
    """dateAsked from the ets column."""

    def test_epoch_int(self):
        assert derive_date_asked(1700000000000) == "2023-11-14T22:13:20"

    def test_epoch_string(self):
        assert derive_date_asked("1700000000000") == "2023-11-14T22:13:20"

    def test_date_string(self):
        assert derive_date_asked("2023-11-15T03:43:20+05:30") == "2023-11-14T22:13:20"

    def test_naive_date_string_is_utc(self):
        assert derive_date_asked("2024-01-02 10:00:00") == "2024-01-02T10:00:00"

    @pytest.mark.parametrize("value", [None, "", "not a date", "not-a-number-or-date"])
    def test_unparseable_is_none(self, value):
        assert derive_date_asked(value) is None

    @pytest.mark.parametrize("value", [
        "2024-01-01T00:00:00+99:00",
        "9999-12-31T23:00:00-05:00",
        "99999999999999999999999",
        10 ** 30,
    ])
    def test_out_of_range_is_none(self, value):
        assert derive_date_asked(value) is None


class TestResolveTimezone:

    def test_known_zone(self):
        assert resolve_timezone("Asia/Kolkata") is not None
        assert resolve_timezone("Asia/Kolkata") != timezone.utc

    def test_unknown_zone_falls_back_to_utc(self):
        assert resolve_timezone("Mars/Olympus_Mons") == timezone.utc
