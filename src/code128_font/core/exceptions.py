"""Exceptions raised by the Code 128 encoder."""

from __future__ import annotations


class BarcodeError(Exception):
    """Base class for barcode encoding errors."""

    pass


class InvalidInputError(BarcodeError, ValueError):
    """Raised when input cannot be encoded under the requested symbology.

    Attributes:
        position: Zero-based index of the offending character, if known
        character: The offending character, if known
    """

    def __init__(
        self, message: str, position: int | None = None, character: str | None = None
    ):
        super().__init__(message)
        self.position = position
        self.character = character


class EmptyInputError(InvalidInputError):
    """Raised when there is nothing to encode."""

    def __init__(self, message: str = "Nothing to encode: input is empty"):
        super().__init__(message)


class ImageEncodingNotSupportedError(BarcodeError, NotImplementedError):
    """Raised when a caller asks for a rendered barcode image."""

    pass


class DecodeError(BarcodeError, ValueError):
    """Raised when a symbol sequence is not a valid Code 128 barcode."""

    pass
