"""Domain models for Code 128 font encoding."""

from enum import Enum


class Symbology(str, Enum):
    """Barcode symbology built on Code 128."""

    CODE128 = "code128"
    GS1_128 = "gs1-128"
    ISBT_128 = "isbt-128"


class CodeSet(str, Enum):
    """Code 128 code set."""

    A = "A"
    B = "B"
    C = "C"


class CodeSetPreference(str, Enum):
    """Start code set requested by the caller."""

    AUTO = "auto"
    A = "A"
    B = "B"
    C = "C"
