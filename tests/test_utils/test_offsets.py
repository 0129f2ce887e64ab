"""Tests for bidi_entry.utils.offsets."""

import pytest

from bidi_entry.utils.graphemes import InvalidPositionError, Unit
from bidi_entry.utils.offsets import OffsetRecord, to_logical, to_visual, translate_range

HINTED = OffsetRecord(byte_offset=3, grapheme_offset=1, char_offset=1)
PLAIN = OffsetRecord()


class TestOffsetRecord:
    def test_defaults_are_zero(self):
        assert PLAIN.as_dict() == {"byte_offset": 0, "grapheme_offset": 0, "char_offset": 0}
        assert PLAIN.hinted is False

    def test_hinted(self):
        assert HINTED.hinted is True

    @pytest.mark.parametrize("unit, expected", [
        (Unit.BYTE, 3),
        (Unit.GRAPHEME, 1),
        (Unit.CHAR, 1),
        ("byte", 3),
    ])
    def test_for_unit(self, unit, expected):
        assert HINTED.for_unit(unit) == expected

    def test_for_unknown_unit(self):
        with pytest.raises(ValueError):
            HINTED.for_unit("pixel")


class TestToVisual:
    def test_adds_offset(self):
        assert to_visual(0, HINTED) == 1
        assert to_visual(5, HINTED) == 6

    def test_byte_unit(self):
        assert to_visual(0, HINTED, Unit.BYTE) == 3
        assert to_visual(10, HINTED, Unit.BYTE) == 13

    def test_unhinted_is_identity(self):
        assert to_visual(4, PLAIN) == 4

    def test_rejects_past_limit(self):
        with pytest.raises(InvalidPositionError):
            to_visual(6, HINTED, limit=5)

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            to_visual(-1, HINTED)


class TestToLogical:
    def test_subtracts_offset(self):
        assert to_logical(1, HINTED) == 0
        assert to_logical(6, HINTED) == 5

    def test_hint_region_clamps_to_zero(self):
        assert to_logical(0, HINTED) == 0
        for byte in range(3):
            assert to_logical(byte, HINTED, Unit.BYTE) == 0

    def test_rejects_past_limit(self):
        with pytest.raises(InvalidPositionError, match="past the end"):
            to_logical(7, HINTED, limit=6)

    @pytest.mark.parametrize("bad", [-1, 2.0, True])
    def test_rejects_bad_positions(self, bad):
        with pytest.raises(InvalidPositionError):
            to_logical(bad, HINTED)


class TestRoundTrip:
    @pytest.mark.parametrize("record", [PLAIN, HINTED])
    @pytest.mark.parametrize("unit", list(Unit))
    def test_logical_visual_logical(self, record, unit):
        for p in range(0, 20):
            assert to_logical(to_visual(p, record, unit), record, unit) == p

    def test_visual_hint_region_does_not_round_trip(self):
        assert to_visual(to_logical(0, HINTED), HINTED) == 1


class TestTranslateRange:
    def test_to_visual_normalises_order(self):
        assert translate_range(5, 2, HINTED, to="visual") == (3, 6)

    def test_to_logical_clamps_start(self):
        assert translate_range(0, 4, HINTED, Unit.CHAR, to="logical") == (0, 3)

    def test_unknown_target(self):
        with pytest.raises(ValueError, match="Unknown target"):
            translate_range(0, 1, HINTED, to="screen")
