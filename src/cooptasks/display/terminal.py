# src/cooptasks/display/terminal.py

from __future__ import annotations

import sys
from typing import TextIO

from .colors import Color

SEXTANT_FIRST = 0x80
SEXTANT_LAST = 0x9F

# 2x3 cell masks without a dedicated sextant code point.
_SPECIAL_SEXTANTS = {0: " ", 21: "▌", 42: "▐", 63: "█"}


def sextant_glyph(mask: int) -> str:
    """
    Unicode glyph for a 2x3 pixel mask.

    Bit 0 is the top-left pixel, bit 1 top-right, then row by row down to bit 5
    (bottom-right). Unicode's BLOCK SEXTANT range skips the four masks that
    already exist as half/full blocks.
    """
    mask &= 0x3F
    special = _SPECIAL_SEXTANTS.get(mask)
    if special is not None:
        return special
    index = mask - 1 - (mask > 21) - (mask > 42)
    return chr(0x1FB00 + index)


def translate_char(char: str) -> str:
    code = ord(char)
    if SEXTANT_FIRST <= code <= SEXTANT_LAST:
        return sextant_glyph(code - SEXTANT_FIRST)
    return char


class AnsiTerminal:
    """Redirect that renders blitted rows with 24-bit ANSI colour escapes."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def set_cursor_pos(self, x: int, y: int) -> None:
        self._stream.write(f"\033[{y};{x}H")

    def blit(self, text: str, fg: str, bg: str) -> None:
        if not (len(text) == len(fg) == len(bg)):
            raise ValueError("blit arguments must have equal length")
        out: list[str] = []
        last: tuple[str, str] | None = None
        for char, f, b in zip(text, fg, bg):
            if (f, b) != last:
                fr, fg_, fb = Color.from_blit(f).rgb
                br, bg_, bb = Color.from_blit(b).rgb
                out.append(f"\033[38;2;{fr};{fg_};{fb}m\033[48;2;{br};{bg_};{bb}m")
                last = (f, b)
            out.append(translate_char(char))
        out.append("\033[0m")
        self._stream.write("".join(out))

    def clear(self) -> None:
        self._stream.write("\033[2J\033[H")

    def newline(self) -> None:
        self._stream.write("\n")
        self._stream.flush()
