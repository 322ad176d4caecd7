"""
Unit Tests for the Symbol Table and Font Map
=============================================
"""

import pytest

from code128_font.core.exceptions import DecodeError
from code128_font.core.font import FontMap
from code128_font.core.models import CodeSet
from code128_font.core.symbols import (
    FNC1,
    SHIFT,
    START_B,
    STOP,
    SYMBOLS,
    char_value,
    checksum,
    exclusive_code_set,
    in_code_set,
)


class TestSymbolTable:
    """Tests for the 107-symbol chart."""

    def test_table_size(self):
        assert len(SYMBOLS) == 107
        assert [s.value for s in SYMBOLS] == list(range(107))

    def test_widths(self):
        """Should be 11 modules per symbol and 13 for stop."""
        assert all(s.modules == 11 for s in SYMBOLS[:STOP])
        assert SYMBOLS[STOP].modules == 13

    def test_patterns_are_unique(self):
        assert len({s.widths for s in SYMBOLS}) == 107

    @pytest.mark.parametrize(
        "value,a,b,c",
        [
            (0, " ", " ", "00"),
            (33, "A", "A", "33"),
            (64, "\x00", "`", "64"),
            (95, "\x1f", "\x7f", "95"),
            (96, "FNC3", "FNC3", "96"),
            (98, "ShiftB", "ShiftA", "98"),
            (100, "CodeB", "FNC4", "CodeB"),
            (101, "FNC4", "CodeA", "CodeA"),
            (FNC1, "FNC1", "FNC1", "FNC1"),
        ],
    )
    def test_meanings(self, value, a, b, c):
        symbol = SYMBOLS[value]

        assert symbol.meaning(CodeSet.A) == a
        assert symbol.meaning(CodeSet.B) == b
        assert symbol.meaning(CodeSet.C) == c

    def test_shift_symbol(self):
        assert SYMBOLS[SHIFT].b == "ShiftA"


class TestCharacterValues:
    """Tests for ASCII to symbol value lookups."""

    def test_char_value(self):
        assert char_value(ord("A"), CodeSet.A) == 33
        assert char_value(ord("A"), CodeSet.B) == 33
        assert char_value(0x01, CodeSet.A) == 65
        assert char_value(ord("a"), CodeSet.B) == 65

    def test_char_value_outside_set(self):
        with pytest.raises(KeyError):
            char_value(ord("a"), CodeSet.A)

    def test_code_set_membership(self):
        assert in_code_set(0x00, CodeSet.A)
        assert not in_code_set(0x00, CodeSet.B)
        assert in_code_set(0x7F, CodeSet.B)
        assert not in_code_set(ord("1"), CodeSet.C)

    def test_exclusive_code_set(self):
        """Should judge Latin-1 characters by their ASCII base."""
        assert exclusive_code_set(0x01) == CodeSet.A
        assert exclusive_code_set(ord("a")) == CodeSet.B
        assert exclusive_code_set(ord("A")) is None
        assert exclusive_code_set(ord("ü")) == CodeSet.B

    def test_checksum(self):
        """Should weight each data symbol by its position."""
        assert checksum([START_B, 33, 34, 17, 18]) == 19
        assert checksum([START_B, 0]) == 1


class TestFontMap:
    """Tests for symbol value to font character mapping."""

    def test_printable_range(self):
        font = FontMap()

        assert font.to_char(1) == "!"
        assert font.to_char(94) == "~"

    def test_high_values(self):
        font = FontMap()

        assert font.to_char(95) == "Ã"
        assert font.to_char(START_B) == "Ì"
        assert font.to_char(STOP) == "Î"

    def test_space_substitute(self):
        assert FontMap().to_char(0) == "Â"
        assert FontMap(space_char="\xa0").to_char(0) == "\xa0"

    def test_space_substitute_must_be_one_character(self):
        with pytest.raises(ValueError):
            FontMap(space_char="ab")

    def test_to_values(self):
        """Should accept a plain space for value 0."""
        font = FontMap()

        assert font.to_values("ÌAB123Î") == [104, 33, 34, 17, 18, 19, 106]
        assert font.to_values("Â ") == [0, 0]

    def test_to_values_rejects_other_characters(self):
        with pytest.raises(DecodeError):
            FontMap().to_values("Ì€Î")
