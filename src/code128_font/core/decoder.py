"""Decoding of Code 128 symbol sequences back into text."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from code128_font.core.exceptions import DecodeError
from code128_font.core.font import FontMap
from code128_font.core.gs1 import GS
from code128_font.core.models import CodeSet
from code128_font.core.symbols import (
    CODE_B,
    CODE_C,
    FNC1,
    FNC2,
    FNC3,
    FNC4,
    SHIFT,
    START_A,
    START_CODE_SETS,
    STOP,
    SYMBOLS,
    checksum,
)


@dataclass(frozen=True)
class DecodedBarcode:
    """Text recovered from a symbol sequence.

    Attributes:
        text: Decoded data; FNC1 separators after the first appear as GS
        start_code_set: Code set selected by the start symbol
        gs1: True when FNC1 follows the start symbol
    """

    text: str
    start_code_set: CodeSet
    gs1: bool = False


def decode_symbols(values: Sequence[int]) -> DecodedBarcode:
    """Decode a full symbol sequence (start, data, checksum, stop).

    Raises:
        DecodeError: If framing, checksum or a symbol is invalid
    """
    values = list(values)
    if len(values) < 3:
        raise DecodeError("A Code 128 symbol needs start, check and stop symbols")
    if values[0] not in START_CODE_SETS:
        raise DecodeError(f"Symbol {values[0]} is not a start symbol")
    if values[-1] != STOP:
        raise DecodeError(f"Symbol {values[-1]} is not the stop symbol")

    expected = checksum(values[:-2])
    if values[-2] != expected:
        raise DecodeError(f"Checksum mismatch: expected {expected}, got {values[-2]}")

    start_code_set = START_CODE_SETS[values[0]]
    code_set = start_code_set
    shifted: CodeSet | None = None
    extended = False
    gs1_data = False
    chars: list[str] = []

    for position, value in enumerate(values[1:-2], 1):
        if not 0 <= value < START_A:
            raise DecodeError(f"Symbol {value} at position {position} is not a data symbol")
        active = shifted or code_set
        shifted = None

        if value == FNC1:
            if position == 1:
                gs1_data = True
            else:
                chars.append(GS)
        elif active == CodeSet.C:
            if value < CODE_B:
                chars.append(SYMBOLS[value].c)
            else:
                code_set = CodeSet.B if value == CODE_B else CodeSet.A
        elif value < FNC3:
            char = SYMBOLS[value].meaning(active)
            if extended:
                char = chr(ord(char) + 128)
                extended = False
            chars.append(char)
        elif value == SHIFT:
            shifted = CodeSet.B if active == CodeSet.A else CodeSet.A
        elif value == CODE_C:
            code_set = CodeSet.C
        elif value in (FNC2, FNC3):
            continue
        elif value == FNC4[active]:
            extended = True
        else:
            code_set = CodeSet.B if value == CODE_B else CodeSet.A

    return DecodedBarcode(text="".join(chars), start_code_set=start_code_set, gs1=gs1_data)


def decode_text(text: str, font: FontMap | None = None) -> DecodedBarcode:
    """Decode font text produced by the encoder.

    Raises:
        DecodeError: If the text is not a valid Code 128 font string
    """
    return decode_symbols((font or FontMap()).to_values(text))
