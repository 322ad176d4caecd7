"""
Unit Tests for GS1-128
======================
Element string parsing, validation and FNC1 placement.
"""

import pytest

from code128_font.core import gs1
from code128_font.core.decoder import decode_symbols
from code128_font.core.encoder import EncodeRequest
from code128_font.core.exceptions import EmptyInputError, InvalidInputError
from code128_font.core.models import CodeSet, Symbology
from code128_font.core.symbols import CODE_B, CODE_C, FNC1


def gs1_request(text: str) -> EncodeRequest:
    return EncodeRequest(text=text, symbology=Symbology.GS1_128)


class TestElementStrings:
    """Tests for parsing element strings."""

    def test_check_digit(self):
        """Should compute the GS1 mod-10 check digit."""
        assert gs1.check_digit("0950110153000") == "3"
        assert gs1.check_digit("0061414100001") == "2"

    def test_bracketed_form(self):
        """Should split AIs and data."""
        elements = gs1.parse_element_string("(01)09501101530003(10)AB-12")

        assert [(e.ai, e.data) for e in elements] == [
            ("01", "09501101530003"),
            ("10", "AB-12"),
        ]

    def test_raw_form_with_separator(self):
        """Should end variable-length data at GS."""
        elements = gs1.parse_element_string("10ABC\x1d17250101")

        assert [(e.ai, e.data) for e in elements] == [("10", "ABC"), ("17", "250101")]

    def test_four_digit_ai(self):
        """Should read AI length from the prefix table."""
        elements = gs1.parse_element_string("3103000500")

        assert elements[0].ai == "3103"
        assert elements[0].data == "000500"

    def test_raw_and_bracketed_render(self):
        elements = gs1.parse_element_string("(10)ABC(17)250101")

        assert gs1.to_raw(elements) == "10ABC\x1d17250101"
        assert gs1.to_bracketed(elements) == "(10)ABC(17)250101"

    def test_separator_after_fixed_length_tolerated(self):
        elements = gs1.parse_element_string("0109501101530003\x1d10ABC")

        assert [e.ai for e in elements] == ["01", "10"]

    def test_no_separator_after_last_element(self):
        """Should not insert FNC1 after the last variable-length element."""
        elements = gs1.parse_element_string("(17)250101(10)ABC")

        assert gs1.FNC1_TOKEN not in gs1.to_tokens(elements)


class TestElementValidation:
    """Tests for rejected element strings."""

    def test_empty(self):
        with pytest.raises(EmptyInputError):
            gs1.parse_element_string("")

    def test_wrong_check_digit(self):
        """Should point at the check digit."""
        with pytest.raises(InvalidInputError) as exc_info:
            gs1.parse_element_string("(01)09501101530004")

        assert exc_info.value.position == 17
        assert exc_info.value.character == "4"

    @pytest.mark.parametrize(
        "text",
        [
            "(05)123",
            "(01)123",
            "(10)" + "A" * 21,
            "(10)AB#",
            "(17)251301",
            "(10)",
            "(01",
            "(01)09501101530003x",
            "0109501101530003ZZ",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(InvalidInputError):
            gs1.parse_element_string(text)

    def test_numeric_ai_with_letter(self):
        """Should name the first non-digit."""
        with pytest.raises(InvalidInputError) as exc_info:
            gs1.parse_element_string("(30)12A")

        assert exc_info.value.position == 6
        assert exc_info.value.character == "A"

    def test_day_zero_is_valid(self):
        """Should accept day 00 in dates."""
        assert gs1.parse_element_string("(17)250100")

    def test_length_limit(self):
        """Should allow at most 48 AI, data and separator characters."""
        fits = "(10)" + "A" * 19 + "(21)" + "B" * 19 + "(91)CD"
        too_long = "(10)" + "A" * 19 + "(21)" + "B" * 19 + "(91)CDE"

        assert gs1.parse_element_string(fits)
        with pytest.raises(InvalidInputError):
            gs1.parse_element_string(too_long)

    def test_separators_count_towards_length(self):
        """Should reject 48 AI and data characters plus two separators."""
        with pytest.raises(InvalidInputError):
            gs1.parse_element_string("(10)" + "A" * 20 + "(21)" + "B" * 20 + "(91)CD")

    @pytest.mark.parametrize("text", ["(31٠3)123456", "31٠3123456", "(0١)09501101530003"])
    def test_non_ascii_digits_in_ai(self, encoder, text):
        """Should accept only ASCII digits as AI characters."""
        with pytest.raises(InvalidInputError):
            gs1.parse_element_string(text)
        assert encoder.validate(gs1_request(text)) is False

    @pytest.mark.parametrize(
        "text", ["(8001)X", "(8001)1234567890123", "(8005)ABC", "(8005)1234567"]
    )
    def test_fixed_length_numeric_8000_range(self, text):
        """Should apply the AI's own format over its prefix's."""
        with pytest.raises(InvalidInputError):
            gs1.parse_element_string(text)

    def test_8000_range_full_ai(self):
        elements = gs1.parse_element_string("(8001)12345678901234(8005)123456(10)ABC")

        assert [(e.ai, e.data) for e in elements] == [
            ("8001", "12345678901234"),
            ("8005", "123456"),
            ("10", "ABC"),
        ]
        assert gs1.FNC1_TOKEN not in gs1.to_tokens(elements)

    def test_8018_check_digit(self):
        assert gs1.parse_element_string("(8018)123456789012345675")
        with pytest.raises(InvalidInputError):
            gs1.parse_element_string("(8018)123456789012345670")

    def test_8000_range_prefix_still_variable(self):
        """Should keep the prefix format for AIs without their own entry."""
        elements = gs1.parse_element_string("8020AB12\x1d10XYZ")

        assert [(e.ai, e.data) for e in elements] == [("8020", "AB12"), ("10", "XYZ")]


class TestGs1Encoding:
    """Tests for GS1-128 symbols."""

    def test_gtin(self, encoder):
        """Should emit Start C, FNC1 and digit pairs."""
        result = encoder.encode_symbols(gs1_request("(01)09501101530003"))

        assert result.symbols == (105, FNC1, 1, 9, 50, 11, 1, 53, 0, 3, 71, 106)

    def test_fnc1_once_after_start(self, encoder):
        result = encoder.encode_symbols(gs1_request("(01)09501101530003"))

        assert result.symbols[1] == FNC1
        assert result.symbols.count(FNC1) == 1

    def test_raw_form_matches_bracketed(self, encoder):
        bracketed = encoder.encode_symbols(gs1_request("(10)ABC(17)250101"))
        raw = encoder.encode_symbols(gs1_request("10ABC\x1d17250101"))

        assert bracketed.symbols == raw.symbols

    def test_separator_after_variable_element(self, encoder):
        """Should separate a variable-length element with FNC1."""
        result = encoder.encode_symbols(gs1_request("(10)ABC(17)250101"))

        assert result.start_code_set == CodeSet.B
        assert result.data_symbols == (
            FNC1, 17, 16, 33, 34, 35, FNC1, CODE_C, 17, 25, 1, 1,
        )

    def test_round_trip(self, encoder):
        """Should decode to the raw element string."""
        result = encoder.encode_symbols(gs1_request("(10)ABC(17)250101"))

        decoded = decode_symbols(result.symbols)

        assert decoded.gs1 is True
        assert decoded.text == "10ABC\x1d17250101"

    def test_digits_then_letters(self, encoder):
        result = encoder.encode_symbols(gs1_request("(01)09501101530003(10)ABC"))

        assert result.data_symbols == (
            FNC1, 1, 9, 50, 11, 1, 53, 0, 3, 10, CODE_B, 33, 34, 35,
        )
        assert decode_symbols(result.symbols).text == "010950110153000310ABC"

    def test_plain_mode_has_no_fnc1(self, encoder):
        """Should treat brackets as data outside GS1 mode."""
        result = encoder.encode_symbols(EncodeRequest(text="(01)12"))

        assert FNC1 not in result.symbols
