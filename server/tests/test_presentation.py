"""Tests for the tag, date and author helpers used by the pages."""

from zoneinfo import ZoneInfo

import pytest

from client.presentation import display_author, format_date, parse_tags


class TestParseTags:

    def test_drops_empty_segments_and_trims(self):
        assert parse_tags("ml, hardware,, startup") == ["ml", "hardware", "startup"]

    def test_preserves_order_and_duplicates(self):
        assert parse_tags("b,a,b") == ["b", "a", "b"]

    @pytest.mark.parametrize("tags", [None, "", " , ,"])
    def test_nothing_to_show(self, tags):
        assert parse_tags(tags) == []


class TestFormatDate:

    def test_zoneless_timestamp_treated_as_utc(self):
        assert format_date("2025-12-08 06:18:48") == "Dec 08, 2025"

    def test_iso_t_separator(self):
        assert format_date("2025-12-08T06:18:48") == "Dec 08, 2025"

    def test_zulu_suffix(self):
        assert format_date("2025-12-08T06:18:48Z", include_time=True) == "Dec 08, 2025, 06:18"

    def test_converts_to_display_zone(self):
        # 23:30 UTC is already the next day in Tokyo
        assert format_date("2025-12-08 23:30:00", ZoneInfo("Asia/Tokyo")) == "Dec 09, 2025"

    def test_explicit_offset_respected(self):
        assert format_date("2025-12-08T01:00:00+02:00", include_time=True) == "Dec 07, 2025, 23:00"

    @pytest.mark.parametrize("raw", ["yesterday-ish", "", "2025-13-45 99:99:99"])
    def test_unparseable_returned_unchanged(self, raw):
        assert format_date(raw) == raw


class TestDisplayAuthor:

    @pytest.mark.parametrize("name", [None, "", "   ", "\n\t"])
    def test_defaults_to_anonymous(self, name):
        assert display_author(name) == "Anonymous"

    def test_trims_name(self):
        assert display_author("  Dana ") == "Dana"
