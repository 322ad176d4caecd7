"""ISBT 128 data structure checks and the Mod 37-2 check character."""

from __future__ import annotations

from code128_font.core.exceptions import EmptyInputError, InvalidInputError

PRIMARY_IDENTIFIERS = frozenset("=&")
CONTENT_CHARS = frozenset("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ")

# ISO/IEC 7064 Mod 37-2 alphabet, index = character value
CHECK_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ*"


def validate_data_structure(text: str) -> None:
    """Check an ISBT 128 data structure.

    A data structure is a two-character data identifier (``=`` or ``&``
    followed by a printable ASCII character) and alphanumeric content.

    Raises:
        EmptyInputError: If text is empty
        InvalidInputError: If the identifier or content is malformed
    """
    if not text:
        raise EmptyInputError()
    if text[0] not in PRIMARY_IDENTIFIERS:
        raise InvalidInputError(
            "ISBT 128 data must start with '=' or '&'", position=0, character=text[0]
        )
    if len(text) < 3:
        raise InvalidInputError(
            "ISBT 128 data needs a two-character identifier and content", position=len(text)
        )
    if not 33 <= ord(text[1]) <= 126:
        raise InvalidInputError(
            "Invalid ISBT 128 secondary data identifier", position=1, character=text[1]
        )
    for position, char in enumerate(text[2:], 2):
        if char not in CONTENT_CHARS:
            raise InvalidInputError(
                f"Character {char!r} not allowed in ISBT 128 content",
                position=position,
                character=char,
            )


def _mod37_2(data: str) -> int:
    total = 0
    for position, char in enumerate(data):
        value = CHECK_ALPHABET.find(char)
        if value < 0:
            raise InvalidInputError(
                f"Character {char!r} has no Mod 37-2 value", position=position, character=char
            )
        total = ((total + value) * 2) % 37
    return total


def check_character(data: str) -> str:
    """Compute the ISO/IEC 7064 Mod 37-2 check character.

    ISBT 128 prints this character in the eye-readable text only; it is never
    part of the bar code.

    Args:
        data: Data content without identifier characters

    Returns:
        Check character (0-9, A-Z or ``*``)
    """
    return CHECK_ALPHABET[(38 - _mod37_2(data)) % 37]


def verify_check_character(data: str, check: str) -> bool:
    """Check a Mod 37-2 check character against its data."""
    if len(check) != 1 or check not in CHECK_ALPHABET:
        return False
    return (_mod37_2(data) + CHECK_ALPHABET.index(check)) % 37 == 1
