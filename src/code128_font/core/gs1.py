"""GS1-128 element string parsing and validation.

GS1-128 data is a chain of application identifier (AI) + data elements.
Scanners report FNC1 separators as ASCII 29 (GS). Input is accepted either in
the bracketed human-readable form ``(01)09501101530003(10)AB12`` or in the raw
form ``10AB12<GS>17250101`` where GS terminates variable-length elements
that are not last.

Key rules:
- Variable-length AIs are delimited by FNC1 unless they are the last element
- Fixed-length AIs carry no separator
- A symbol holds at most 48 AI and data characters
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

import structlog

from code128_font.core.exceptions import EmptyInputError, InvalidInputError

logger = structlog.get_logger()

GS = "\x1d"

# Token standing for an FNC1 separator in the encoder's data stream
FNC1_TOKEN = -1

NUMERIC = frozenset("0123456789")
CSET82 = frozenset(
    "!\"%&'()*+,-./0123456789:;<=>?"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"
)

# GS1 General Specifications 5.4.1: at most 48 data characters per symbol,
# counting AIs and FNC1 separators but not the FNC1 after the start symbol
MAX_ELEMENT_STRING_LENGTH = 48

# AI or two-digit prefix  AI length  Data length (n fixed, ..n variable)
# Charset  Flags. Full AIs override their prefix.
# C = mod-10 check digit, D = YYMMDD date
_AI_CHART = """
00  2  18    N  C
01  2  14    N  C
02  2  14    N  C
10  2  ..20  X  -
11  2  6     N  D
12  2  6     N  D
13  2  6     N  D
15  2  6     N  D
16  2  6     N  D
17  2  6     N  D
20  2  2     N  -
21  2  ..20  X  -
22  2  ..20  X  -
24  3  ..30  X  -
25  3  ..30  X  -
30  2  ..8   N  -
31  4  6     N  -
32  4  6     N  -
33  4  6     N  -
34  4  6     N  -
35  4  6     N  -
36  4  6     N  -
37  2  ..8   N  -
39  4  ..18  N  -
40  3  ..30  X  -
41  3  13    N  C
42  3  ..30  X  -
43  4  ..35  X  -
70  4  ..30  X  -
71  3  ..20  X  -
72  4  ..30  X  -
80  4  ..30  X  -
8001  4  14  N  -
8005  4  6   N  -
8006  4  18  N  -
8017  4  18  N  C
8018  4  18  N  C
81  4  ..70  X  -
82  4  ..70  X  -
90  2  ..30  X  -
91  2  ..90  X  -
92  2  ..90  X  -
93  2  ..90  X  -
94  2  ..90  X  -
95  2  ..90  X  -
96  2  ..90  X  -
97  2  ..90  X  -
98  2  ..90  X  -
99  2  ..90  X  -
""".split()


@dataclass(frozen=True)
class AIDefinition:
    """Format of one AI, or of every AI sharing a two-digit prefix."""

    key: str
    ai_length: int
    max_length: int
    fixed: bool
    numeric: bool
    check_digit: bool = False
    is_date: bool = False


def _load_ai_table() -> dict[str, AIDefinition]:
    table = {}
    for i in range(0, len(_AI_CHART), 5):
        key, ai_length, data_length, charset, flags = _AI_CHART[i : i + 5]
        fixed = not data_length.startswith("..")
        table[key] = AIDefinition(
            key=key,
            ai_length=int(ai_length),
            max_length=int(data_length.lstrip(".")),
            fixed=fixed,
            numeric=charset == "N",
            check_digit="C" in flags,
            is_date="D" in flags,
        )
    return table


AI_TABLE: dict[str, AIDefinition] = _load_ai_table()

_BRACKETED_ELEMENT = re.compile(r"\(([0-9]{2,4})\)([^()]*)")


@dataclass(frozen=True)
class Element:
    """A single AI + data element.

    Attributes:
        ai: Application identifier digits
        data: Element data
        definition: Format of the AI
        data_index: Position of the data in the original input
    """

    ai: str
    data: str
    definition: AIDefinition
    data_index: int = 0

    @property
    def needs_separator(self) -> bool:
        """Variable-length data must be terminated by FNC1 unless last."""
        return not self.definition.fixed


def check_digit(digits: str) -> str:
    """Calculate the GS1 mod-10 check digit.

    Args:
        digits: Numeric string without its check digit

    Returns:
        Single check digit as string
    """
    # Weights alternate 3,1,3,1... starting from the rightmost digit
    total = sum(int(d) * (1 if i % 2 else 3) for i, d in enumerate(reversed(digits)))
    return str((10 - total % 10) % 10)


def _definition_for(ai: str, position: int) -> AIDefinition:
    definition = AI_TABLE.get(ai) or AI_TABLE.get(ai[:2])
    if definition is None or len(ai) != definition.ai_length or not set(ai) <= NUMERIC:
        raise InvalidInputError(f"Unknown application identifier '{ai}'", position=position)
    return definition


def _validate_element(element: Element) -> None:
    definition = element.definition
    data = element.data
    start = element.data_index

    if not data:
        raise InvalidInputError(f"AI ({element.ai}) has no data", position=start)
    if definition.fixed and len(data) != definition.max_length:
        raise InvalidInputError(
            f"AI ({element.ai}) requires {definition.max_length} characters, got {len(data)}",
            position=start,
        )
    if len(data) > definition.max_length:
        raise InvalidInputError(
            f"AI ({element.ai}) allows at most {definition.max_length} characters, got {len(data)}",
            position=start + definition.max_length,
        )

    allowed = NUMERIC if definition.numeric else CSET82
    for offset, char in enumerate(data):
        if char not in allowed:
            raise InvalidInputError(
                f"Character {char!r} not allowed in AI ({element.ai})",
                position=start + offset,
                character=char,
            )

    if definition.check_digit and check_digit(data[:-1]) != data[-1]:
        raise InvalidInputError(
            f"AI ({element.ai}) check digit should be {check_digit(data[:-1])}",
            position=start + len(data) - 1,
            character=data[-1],
        )

    if definition.is_date:
        year, month, day = int(data[0:2]), int(data[2:4]), int(data[4:6])
        try:
            # Day 00 means "last day of the month"
            date(2000 + year, month, day or 1)
        except ValueError:
            raise InvalidInputError(
                f"AI ({element.ai}) is not a valid YYMMDD date: {data}",
                position=start,
            ) from None


def _parse_bracketed(text: str) -> list[Element]:
    elements = []
    pos = 0
    for match in _BRACKETED_ELEMENT.finditer(text):
        if match.start() != pos:
            break
        ai = match.group(1)
        elements.append(
            Element(
                ai=ai,
                data=match.group(2),
                definition=_definition_for(ai, match.start(1)),
                data_index=match.start(2),
            )
        )
        pos = match.end()
    if pos != len(text):
        raise InvalidInputError(
            "Malformed application identifier brackets", position=pos, character=text[pos]
        )
    return elements


def _parse_raw(text: str) -> list[Element]:
    elements = []
    pos = 0
    while pos < len(text):
        prefix = AI_TABLE.get(text[pos : pos + 2])
        ai_length = prefix.ai_length if prefix else 2
        ai = text[pos : pos + ai_length]
        definition = _definition_for(ai, pos)
        data_start = pos + ai_length

        if definition.fixed:
            data_end = min(data_start + definition.max_length, len(text))
            next_pos = data_end
            # A separator after fixed-length data is redundant but tolerated
            if text[data_end : data_end + 1] == GS:
                next_pos += 1
        else:
            separator = text.find(GS, data_start)
            data_end = separator if separator >= 0 else len(text)
            next_pos = data_end + 1

        elements.append(
            Element(
                ai=ai,
                data=text[data_start:data_end],
                definition=definition,
                data_index=data_start,
            )
        )
        pos = next_pos
    return elements


def parse_element_string(
    text: str, max_length: int = MAX_ELEMENT_STRING_LENGTH
) -> list[Element]:
    """Parse and validate a GS1 element string.

    Args:
        text: Bracketed ``(AI)data`` form or raw form with GS separators
        max_length: Maximum AI and data characters in one symbol

    Returns:
        Validated elements in input order

    Raises:
        EmptyInputError: If text is empty
        InvalidInputError: If the element string is malformed
    """
    if not text:
        raise EmptyInputError()

    elements = _parse_bracketed(text) if text.startswith("(") else _parse_raw(text)

    for element in elements:
        _validate_element(element)
    total = len(to_tokens(elements))

    if total > max_length:
        logger.debug("gs1_element_string_too_long", length=total, max_length=max_length)
        raise InvalidInputError(
            f"GS1-128 symbols hold at most {max_length} characters, got {total}"
        )
    return elements


def to_tokens(elements: list[Element]) -> list[int]:
    """Flatten elements into encoder tokens, inserting FNC1 separators."""
    tokens: list[int] = []
    for index, element in enumerate(elements):
        tokens.extend(ord(c) for c in element.ai + element.data)
        if element.needs_separator and index < len(elements) - 1:
            tokens.append(FNC1_TOKEN)
    return tokens


def to_raw(elements: list[Element]) -> str:
    """Render elements in the raw form a scanner transmits."""
    return "".join(GS if t == FNC1_TOKEN else chr(t) for t in to_tokens(elements))


def to_bracketed(elements: list[Element]) -> str:
    """Render elements in the human-readable bracketed form."""
    return "".join(f"({e.ai}){e.data}" for e in elements)
