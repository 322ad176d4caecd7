"""Code 128 symbol table.

Each of the 107 symbol values has a fixed bar/space width pattern and a
meaning in each of code sets A, B and C: a data character, a digit pair, or
one of the special functions (shift, latch, FNC1-FNC4, start, stop).
The table is built once at import and never modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from code128_font.core.models import CodeSet

# Bar/space widths, indexed by symbol value
_WIDTHS = """
212222 222122 222221 121223 121322 131222 122213 122312 132212 221213
221312 231212 112232 122132 122231 113222 123122 123221 223211 221132
221231 213212 223112 312131 311222 321122 321221 312212 322112 322211
212123 212321 232121 111323 131123 131321 112313 132113 132311 211313
231113 231311 112133 112331 132131 113123 113321 133121 313121 211331
231131 213113 213311 213131 311123 311321 331121 312113 312311 332111
314111 221411 431111 111224 111422 121124 121421 141122 141221 112214
112412 122114 122411 142112 142211 241211 221114 413111 241112 134111
111242 121142 121241 114212 124112 124211 411212 421112 421211 212141
214121 412121 111143 111341 131141 114113 114311 411113 411311 113141
114131 311141 411131 211412 211214 211232 2331112
""".split()

# Value  Set A   Set B   Set C (data characters are derived)
_SPECIALS = """
96   FNC3    FNC3    96
97   FNC2    FNC2    97
98   ShiftB  ShiftA  98
99   CodeC   CodeC   99
100  CodeB   FNC4    CodeB
101  FNC4    CodeA   CodeA
102  FNC1    FNC1    FNC1
103  StartA  StartA  StartA
104  StartB  StartB  StartB
105  StartC  StartC  StartC
106  Stop    Stop    Stop
""".split()

FNC3 = 96
FNC2 = 97
SHIFT = 98
CODE_C = 99
CODE_B = 100
CODE_A = 101
FNC1 = 102
START_A = 103
START_B = 104
START_C = 105
STOP = 106

# Value of the latch symbol that switches into a code set (valid from A, B and C)
LATCH = MappingProxyType({CodeSet.A: CODE_A, CodeSet.B: CODE_B, CodeSet.C: CODE_C})

# FNC4 shares a value with a latch: 101 in set A, 100 in set B
FNC4 = MappingProxyType({CodeSet.A: CODE_A, CodeSet.B: CODE_B})

START = MappingProxyType({CodeSet.A: START_A, CodeSet.B: START_B, CodeSet.C: START_C})
START_CODE_SETS = MappingProxyType({v: k for k, v in START.items()})

CHECKSUM_MODULUS = 103


@dataclass(frozen=True)
class Symbol:
    """A single Code 128 symbol."""

    value: int
    widths: str
    a: str
    b: str
    c: str

    @property
    def modules(self) -> int:
        """Total width in modules (11 for every symbol, 13 for stop)."""
        return sum(int(w) for w in self.widths)

    def meaning(self, code_set: CodeSet) -> str:
        """Get what this symbol stands for in the given code set."""
        return {CodeSet.A: self.a, CodeSet.B: self.b, CodeSet.C: self.c}[code_set]


def _build_table() -> tuple[Symbol, ...]:
    specials = {
        int(_SPECIALS[i]): tuple(_SPECIALS[i + 1 : i + 4])
        for i in range(0, len(_SPECIALS), 4)
    }
    table = []
    for value, widths in enumerate(_WIDTHS):
        if value in specials:
            a, b, c = specials[value]
        else:
            a = chr(value + 32) if value < 64 else chr(value - 64)
            b = chr(value + 32)
            c = f"{value:02d}"
        table.append(Symbol(value=value, widths=widths, a=a, b=b, c=c))
    return tuple(table)


SYMBOLS: tuple[Symbol, ...] = _build_table()


def in_code_set(code_point: int, code_set: CodeSet) -> bool:
    """Check whether an ASCII code point is a data character of set A or B."""
    if code_set == CodeSet.A:
        return 0 <= code_point < 96
    if code_set == CodeSet.B:
        return 32 <= code_point < 128
    return False


def exclusive_code_set(code_point: int) -> CodeSet | None:
    """Get the only A/B set able to encode a character, or None if both can.

    Characters 128-255 are judged by the ASCII character FNC4 extends.
    """
    base = code_point & 0x7F
    if base < 32:
        return CodeSet.A
    if base >= 96:
        return CodeSet.B
    return None


def char_value(code_point: int, code_set: CodeSet) -> int:
    """Get the symbol value of an ASCII character in set A or B.

    Raises:
        KeyError: If the character is not part of the code set
    """
    if not in_code_set(code_point, code_set):
        raise KeyError(f"{code_point!r} not in code set {code_set.value}")
    if code_set == CodeSet.A and code_point < 32:
        return code_point + 64
    return code_point - 32


def checksum(values: list[int] | tuple[int, ...]) -> int:
    """Compute the modulo-103 check value.

    Args:
        values: Start symbol followed by every data symbol (no checksum, no stop)

    Returns:
        Check symbol value
    """
    total = values[0]
    for position, value in enumerate(values[1:], 1):
        total += position * value
    return total % CHECKSUM_MODULUS
