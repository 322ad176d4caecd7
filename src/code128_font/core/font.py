"""Symbol value to barcode font character mapping."""

from __future__ import annotations

from code128_font.core.exceptions import DecodeError

DEFAULT_SPACE_CHAR = "Â"  # Â


class FontMap:
    """Maps Code 128 symbol values to the characters of a Code 128 font.

    Values 1-94 are drawn by the printable ASCII characters 33-126 and values
    95-106 by the Latin-1 characters 195-206 (start B is ``Ì``, stop is
    ``Î``). Value 0 would be a plain space, which most layout engines collapse,
    so fonts also draw it at a substitute character.
    """

    def __init__(self, space_char: str = DEFAULT_SPACE_CHAR):
        if len(space_char) != 1:
            raise ValueError(f"Space substitute must be one character, got: {space_char!r}")
        self.space_char = space_char
        self._chars = tuple(self._char_for(value) for value in range(107))
        self._values = {char: value for value, char in enumerate(self._chars)}
        self._values[" "] = 0

    def _char_for(self, value: int) -> str:
        if value == 0:
            return self.space_char
        if value < 95:
            return chr(value + 32)
        return chr(value + 100)

    def to_char(self, value: int) -> str:
        """Get the font character drawing a symbol value."""
        return self._chars[value]

    def to_text(self, values: list[int] | tuple[int, ...]) -> str:
        """Translate a symbol sequence into font text."""
        return "".join(self._chars[v] for v in values)

    def to_values(self, text: str) -> list[int]:
        """Translate font text back into symbol values.

        Raises:
            DecodeError: If a character is not drawn by the font
        """
        values = []
        for position, char in enumerate(text):
            value = self._values.get(char)
            if value is None:
                raise DecodeError(
                    f"Character {char!r} at position {position} is not a Code 128 font character"
                )
            values.append(value)
        return values
