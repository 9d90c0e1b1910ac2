"""Tests for fix-version range parsing and ordering."""

from __future__ import annotations

import pytest

from vulnfixer.engines.fix_resolver.version_range import (
    is_lower_version,
    parse_version_change_string,
)


class TestParseVersionChangeString:
    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("1.0", "1.0"),
            ("[1.0]", "1.0"),
            ("[1.0, 2.0]", "1.0"),
            ("[1.0,2.0]", "1.0"),
            ("(1.0, 2.0)", ""),
            ("(,1.0]", ""),
            ("(,1.0)", ""),
            ("(1.0,)", ""),
        ],
    )
    def test_interval_table(self, expression, expected):
        assert parse_version_change_string(expression) == expected

    def test_only_first_range_is_consulted(self):
        assert parse_version_change_string("[2.5.1, 3.0.0), [3.1.0]") == "2.5.1"

    def test_open_first_range_hides_later_ranges(self):
        assert parse_version_change_string("(,1.0], [2.0]") == ""

    def test_empty_and_blank(self):
        assert parse_version_change_string("") == ""
        assert parse_version_change_string("   ") == ""

    def test_surrounding_whitespace_stripped(self):
        assert parse_version_change_string(" [1.2.3 ] ") == "1.2.3"


class TestIsLowerVersion:
    def test_semver(self):
        assert is_lower_version("1.1.5", "1.2.0")
        assert not is_lower_version("1.2.0", "1.1.5")

    def test_numeric_not_lexicographic(self):
        assert is_lower_version("1.9.0", "1.10.0")

    def test_equal_is_not_lower(self):
        assert not is_lower_version("1.2.0", "1.2.0")

    def test_prerelease_orders_before_release(self):
        assert is_lower_version("1.0.0-beta.1", "1.0.0")

    def test_leading_v_ignored(self):
        assert is_lower_version("v1.2.3", "1.3.0")

    def test_unparseable_falls_back_to_numeric_segments(self):
        assert is_lower_version("5.3.18.RELEASE", "5.3.20.RELEASE")
        assert not is_lower_version("5.3.20.RELEASE", "5.3.18.RELEASE")
