# src/cooptasks/display/colors.py

"""
16-colour terminal palette.

Each colour is a single bit (1 << index) so sets of colours can be OR-ed.
The blit digit of a colour is its index as one lowercase hex character;
buffers store colours as blit digits, one per cell.
"""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    WHITE = 1 << 0
    ORANGE = 1 << 1
    MAGENTA = 1 << 2
    LIGHT_BLUE = 1 << 3
    YELLOW = 1 << 4
    LIME = 1 << 5
    PINK = 1 << 6
    GRAY = 1 << 7
    LIGHT_GRAY = 1 << 8
    CYAN = 1 << 9
    PURPLE = 1 << 10
    BLUE = 1 << 11
    BROWN = 1 << 12
    GREEN = 1 << 13
    RED = 1 << 14
    BLACK = 1 << 15

    @property
    def index(self) -> int:
        return self.value.bit_length() - 1

    @classmethod
    def from_index(cls, index: int) -> Color:
        if not 0 <= index <= 15:
            raise ValueError(f"colour index out of range: {index}")
        return cls(1 << index)

    def to_blit(self) -> str:
        return format(self.index, "x")

    @classmethod
    def from_blit(cls, digit: str) -> Color:
        if len(digit) != 1:
            raise ValueError(f"blit colour must be one hex digit, got {digit!r}")
        return cls.from_index(int(digit, 16))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return PALETTE[self]


PALETTE: dict[Color, tuple[int, int, int]] = {
    Color.WHITE: (0xF0, 0xF0, 0xF0),
    Color.ORANGE: (0xF2, 0xB2, 0x33),
    Color.MAGENTA: (0xE5, 0x7F, 0xD8),
    Color.LIGHT_BLUE: (0x99, 0xB2, 0xF2),
    Color.YELLOW: (0xDE, 0xDE, 0x6C),
    Color.LIME: (0x7F, 0xCC, 0x19),
    Color.PINK: (0xF2, 0xB2, 0xCC),
    Color.GRAY: (0x4C, 0x4C, 0x4C),
    Color.LIGHT_GRAY: (0x99, 0x99, 0x99),
    Color.CYAN: (0x4C, 0x99, 0xB2),
    Color.PURPLE: (0xB2, 0x66, 0xE5),
    Color.BLUE: (0x33, 0x66, 0xCC),
    Color.BROWN: (0x7F, 0x66, 0x4C),
    Color.GREEN: (0x57, 0xA6, 0x4E),
    Color.RED: (0xCC, 0x4C, 0x4C),
    Color.BLACK: (0x11, 0x11, 0x11),
}
