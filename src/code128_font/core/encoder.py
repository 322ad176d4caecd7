"""Code 128 font encoder with code set selection, shifts and checksum."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from code128_font.config import EncoderSettings, get_settings
from code128_font.core import gs1, isbt
from code128_font.core.exceptions import (
    EmptyInputError,
    ImageEncodingNotSupportedError,
    InvalidInputError,
)
from code128_font.core.font import FontMap
from code128_font.core.gs1 import FNC1_TOKEN
from code128_font.core.hooks import HookChain
from code128_font.core.models import CodeSet, CodeSetPreference, Symbology
from code128_font.core.symbols import (
    CODE_C,
    FNC1,
    FNC4,
    LATCH,
    SHIFT,
    START,
    START_CODE_SETS,
    STOP,
    SYMBOLS,
    char_value,
    checksum,
    exclusive_code_set,
    in_code_set,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class EncodeRequest:
    """Text to encode and how to encode it.

    Attributes:
        text: Characters to encode
        symbology: Plain Code 128, GS1-128 or ISBT 128; None uses the configured default
        code_set: Start code set hint
        allow_extended: Encode Latin-1 characters with FNC4; None uses the configured default
        include_checksum: Always True, the check symbol is part of every Code 128 symbol
    """

    text: str
    symbology: Symbology | None = None
    code_set: CodeSetPreference = CodeSetPreference.AUTO
    allow_extended: bool | None = None
    include_checksum: bool = True

    def __post_init__(self):
        if not self.include_checksum:
            raise ValueError("Code 128 requires a check symbol; include_checksum must be True")


@dataclass(frozen=True)
class EncodedResult:
    """Encoded symbol sequence and the font text that draws it."""

    text: str
    symbols: tuple[int, ...]
    symbology: Symbology

    @property
    def start_code_set(self) -> CodeSet:
        return START_CODE_SETS[self.symbols[0]]

    @property
    def checksum(self) -> int:
        return self.symbols[-2]

    @property
    def data_symbols(self) -> tuple[int, ...]:
        """Symbols between the start symbol and the check symbol."""
        return self.symbols[1:-2]

    @property
    def module_count(self) -> int:
        """Total symbol width in modules, quiet zones excluded."""
        return sum(SYMBOLS[value].modules for value in self.symbols)


def _lookahead(tokens: list[int]) -> tuple[list[int], list[CodeSet | None]]:
    """Precompute, for each position, the digit run length starting there and
    the first A/B-exclusive code set at or after it."""
    runs = [0] * (len(tokens) + 1)
    exclusive: list[CodeSet | None] = [None] * (len(tokens) + 1)
    for i in range(len(tokens) - 1, -1, -1):
        token = tokens[i]
        runs[i] = runs[i + 1] + 1 if 48 <= token <= 57 else 0
        own = exclusive_code_set(token) if token != FNC1_TOKEN else None
        exclusive[i] = own or exclusive[i + 1]
    return runs, exclusive


def _start_code_set(
    tokens: list[int],
    runs: list[int],
    exclusive: list[CodeSet | None],
    preference: CodeSetPreference,
) -> CodeSet:
    if preference == CodeSetPreference.C and runs[0] >= 2:
        return CodeSet.C
    if preference in (CodeSetPreference.A, CodeSetPreference.B):
        hinted = CodeSet(preference.value)
        if in_code_set(tokens[0] & 0x7F, hinted):
            return hinted
    if runs[0] >= 4:
        return CodeSet.C
    # Control character before any lowercase starts in A
    return exclusive[0] or CodeSet.B


def encode_tokens(
    tokens: list[int],
    preference: CodeSetPreference = CodeSetPreference.AUTO,
    gs1_data: bool = False,
) -> list[int]:
    """Translate data tokens into start and data symbol values.

    Args:
        tokens: Character code points (0-255) and FNC1 separator tokens
        preference: Start code set hint
        gs1_data: Emit FNC1 right after the start symbol

    Returns:
        Symbol values from the start symbol to the last data symbol
    """
    runs, exclusive = _lookahead(tokens)
    code_set = _start_code_set(tokens, runs, exclusive, preference)
    values = [START[code_set]]
    if gs1_data:
        values.append(FNC1)

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == FNC1_TOKEN:
            values.append(FNC1)
            i += 1
            continue

        if code_set == CodeSet.C:
            if runs[i] >= 2:
                values.append((token - 48) * 10 + tokens[i + 1] - 48)
                i += 2
            else:
                code_set = exclusive[i] or CodeSet.B
                values.append(LATCH[code_set])
            continue

        if runs[i] >= 4:
            # Odd run: one digit stays in the current set
            if runs[i] % 2:
                values.append(char_value(token, code_set))
                i += 1
            code_set = CodeSet.C
            values.append(CODE_C)
            continue

        base = token & 0x7F
        if in_code_set(base, code_set):
            if token > 127:
                values.append(FNC4[code_set])
            values.append(char_value(base, code_set))
            i += 1
            continue

        other = CodeSet.B if code_set == CodeSet.A else CodeSet.A
        # Shift when the next set-exclusive character is back in the current set
        if token < 128 and exclusive[i + 1] != other:
            values.extend((SHIFT, char_value(base, other)))
            i += 1
            continue
        code_set = other
        values.append(LATCH[other])

    return values


class Code128Encoder:
    """Encodes text as Code 128 font text."""

    def __init__(
        self, settings: EncoderSettings | None = None, hooks: HookChain | None = None
    ):
        """Initialize encoder.

        Args:
            settings: Encoding defaults. If None, uses global settings.
            hooks: Hooks consulted on every call. If None, no hooks.
        """
        self._settings = settings or get_settings().encoder
        self.hooks = hooks or HookChain()
        self.font = FontMap(self._settings.font_space_char)

    def supports_font_encoding(self) -> bool:
        return True

    def supports_image_encoding(self) -> bool:
        return False

    def encode(self, request: EncodeRequest, hooks: HookChain | None = None) -> str:
        """Encode a request as font text.

        Args:
            request: What to encode
            hooks: Hooks for this call only. If None, uses the encoder's hooks.

        Returns:
            Font text drawing the complete symbol

        Raises:
            InvalidInputError: If the text cannot be encoded
        """
        chain = hooks or self.hooks
        result = chain.run_before_encode(request)
        if result is None:
            result = self.encode_symbols(request).text
        return chain.run_after_encode(request, result)

    def validate(self, request: EncodeRequest, hooks: HookChain | None = None) -> bool:
        """Check whether a request can be encoded.

        Args:
            request: What to check
            hooks: Hooks for this call only. If None, uses the encoder's hooks.

        Returns:
            True if encode() would succeed
        """
        chain = hooks or self.hooks
        result = chain.run_before_validate(request)
        if result is None:
            try:
                self._tokens(request)
                result = True
            except InvalidInputError as e:
                logger.debug(
                    "code128_input_rejected",
                    reason=str(e),
                    position=e.position,
                    symbology=self._symbology(request).value,
                )
                result = False
        return chain.run_after_validate(request, result)

    def encode_as_image(self, request: EncodeRequest) -> bytes:
        """Render a barcode image.

        Raises:
            ImageEncodingNotSupportedError: Always, only font encoding is available
        """
        raise ImageEncodingNotSupportedError(
            "Barcode image encoding is not supported, use font encoding instead"
        )

    def encode_symbols(self, request: EncodeRequest) -> EncodedResult:
        """Run the encoding algorithm without hooks.

        Raises:
            InvalidInputError: If the text cannot be encoded
        """
        symbology = self._symbology(request)
        tokens = self._tokens(request)

        values = encode_tokens(
            tokens, request.code_set, gs1_data=symbology == Symbology.GS1_128
        )
        values.append(checksum(values))
        values.append(STOP)

        result = EncodedResult(
            text=self.font.to_text(values),
            symbols=tuple(values),
            symbology=symbology,
        )
        logger.debug(
            "code128_encoded",
            symbology=symbology.value,
            length=len(request.text),
            symbol_count=len(values),
            start_code_set=result.start_code_set.value,
        )
        return result

    def _symbology(self, request: EncodeRequest) -> Symbology:
        return request.symbology or self._settings.default_symbology

    def _tokens(self, request: EncodeRequest) -> list[int]:
        """Check the request and turn its text into encoder tokens.

        Raises:
            InvalidInputError: If the text cannot be encoded
        """
        text = request.text
        if not text:
            raise EmptyInputError()

        symbology = self._symbology(request)
        if symbology == Symbology.GS1_128:
            elements = gs1.parse_element_string(text, max_length=self._settings.gs1_max_length)
            return gs1.to_tokens(elements)
        if symbology == Symbology.ISBT_128:
            isbt.validate_data_structure(text)

        extended = request.allow_extended
        if extended is None:
            extended = self._settings.allow_extended_charset
        limit = 256 if extended else 128

        tokens = []
        for position, char in enumerate(text):
            code_point = ord(char)
            if code_point >= limit:
                hint = "" if extended or code_point > 255 else " without the extended charset"
                raise InvalidInputError(
                    f"Character {char!r} at position {position} cannot be encoded in Code 128{hint}",
                    position=position,
                    character=char,
                )
            tokens.append(code_point)
        return tokens


# Global encoder instance
_encoder: Code128Encoder | None = None


def get_encoder() -> Code128Encoder:
    """Get the global encoder instance."""
    global _encoder
    if _encoder is None:
        _encoder = Code128Encoder()
    return _encoder
