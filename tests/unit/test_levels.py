"""Tests for the level table."""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from taglog.core.exceptions import InvalidLevel
from taglog.core.levels import (
    LEVELS,
    Level,
    at_least,
    from_external,
    parse_level,
    rank,
    to_external,
)

pytestmark = [pytest.mark.core, pytest.mark.tier(0), pytest.mark.tra("Core.Levels")]


class TestRank:
    """Tests for rank() and at_least()."""

    def test_levels_are_ordered_by_severity(self) -> None:
        """LEVELS lists trace through fatal with increasing rank."""
        assert [level.label for level in LEVELS] == [
            "trace",
            "debug",
            "info",
            "warn",
            "error",
            "fatal",
        ]
        assert [rank(level) for level in LEVELS] == [0, 1, 2, 3, 4, 5]

    def test_level_char_is_first_letter(self) -> None:
        assert "".join(level.char for level in LEVELS) == "TDIWEF"

    @given(st.sampled_from(LEVELS), st.sampled_from(LEVELS))
    def test_at_least_matches_rank_comparison(self, level: Level, threshold: Level) -> None:
        """A level passes a threshold iff its rank is not lower."""
        assert at_least(level, threshold) == (rank(level) >= rank(threshold))


class TestFromExternal:
    """Tests for the stdlib logging severity mapping."""

    @pytest.mark.parametrize(
        ("severity", "expected"),
        [
            (logging.NOTSET, Level.TRACE),
            (5, Level.TRACE),
            (logging.DEBUG, Level.DEBUG),
            (logging.INFO, Level.INFO),
            (logging.WARNING, Level.WARN),
            (logging.ERROR, Level.ERROR),
            (logging.CRITICAL, Level.FATAL),
        ],
    )
    def test_standard_levels_map_onto_table(self, severity: int, expected: Level) -> None:
        assert from_external(severity) == expected

    def test_values_between_constants_round_down(self) -> None:
        assert from_external(25) == Level.INFO
        assert from_external(39) == Level.WARN

    def test_unknown_higher_severity_is_fatal(self) -> None:
        """Values above CRITICAL map to the most severe level."""
        assert from_external(60) == Level.FATAL
        assert from_external(1000) == Level.FATAL

    @pytest.mark.parametrize("value", [-1, "INFO", 2.5, None, True])
    def test_invalid_severity_raises(self, value: object) -> None:
        with pytest.raises(InvalidLevel):
            from_external(value)  # type: ignore[arg-type]

    @given(st.sampled_from(LEVELS))
    def test_to_external_round_trips(self, level: Level) -> None:
        assert from_external(to_external(level)) == level


class TestParseLevel:
    """Tests for parse_level()."""

    def test_accepts_level(self) -> None:
        assert parse_level(Level.ERROR) is Level.ERROR

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("info", Level.INFO),
            ("WARN", Level.WARN),
            ("warning", Level.WARN),
            ("Critical", Level.FATAL),
            (" trace ", Level.TRACE),
        ],
    )
    def test_accepts_names_and_aliases(self, name: str, expected: Level) -> None:
        assert parse_level(name) == expected

    def test_integers_are_external_severities(self) -> None:
        """Plain ints are read as stdlib severities, not ranks."""
        assert parse_level(logging.ERROR) == Level.ERROR
        assert parse_level(2) == Level.TRACE

    @pytest.mark.parametrize("value", ["verbose", "", None, 1.0])
    def test_unknown_values_raise(self, value: object) -> None:
        with pytest.raises(InvalidLevel, match="Invalid log level"):
            parse_level(value)  # type: ignore[arg-type]

    def test_invalid_level_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_level("nope")


class TestFromExternalWithLevels:
    @pytest.mark.parametrize("level", LEVELS)
    def test_level_instances_pass_through(self, level: Level) -> None:
        assert from_external(level) is level
