# src/cooptasks/display/buffer.py

from __future__ import annotations

"""
Off-screen character buffer.

Draw into a Buffer, then print it to a terminal in one go to avoid flicker,
or merge several buffers into one. Coordinates are 1-based, like terminal
cursor positions.
"""

from ..core.ports import Redirect
from .colors import Color


class Buffer:
    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"buffer size must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._cursor_x = 1
        self._cursor_y = 1
        self._bg = Color.BLACK.to_blit()
        self._fg = Color.WHITE.to_blit()
        self._chars: list[list[str]] = []
        self._fgs: list[list[str]] = []
        self._bgs: list[list[str]] = []
        self.clear()

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def cursor_pos(self) -> tuple[int, int]:
        return self._cursor_x, self._cursor_y

    def set_cursor_pos(self, x: int, y: int) -> None:
        self._cursor_x = x
        self._cursor_y = y

    @property
    def background_color(self) -> Color:
        return Color.from_blit(self._bg)

    @background_color.setter
    def background_color(self, color: Color) -> None:
        self._bg = Color(color).to_blit()

    @property
    def foreground_color(self) -> Color:
        return Color.from_blit(self._fg)

    @foreground_color.setter
    def foreground_color(self, color: Color) -> None:
        self._fg = Color(color).to_blit()

    def clear(self) -> None:
        """Blank every cell with the current colours."""
        self._chars = [[" "] * self._width for _ in range(self._height)]
        self._fgs = [[self._fg] * self._width for _ in range(self._height)]
        self._bgs = [[self._bg] * self._width for _ in range(self._height)]

    def clear_line(self) -> None:
        """Blank the cursor's row with the current colours."""
        y = self._cursor_y
        if not 1 <= y <= self._height:
            return
        row = y - 1
        self._chars[row] = [" "] * self._width
        self._fgs[row] = [self._fg] * self._width
        self._bgs[row] = [self._bg] * self._width

    def write(self, text: str) -> None:
        """
        Write text at the cursor and advance it.

        Characters left of column 1 are skipped, writing stops at the right
        edge, rows outside the buffer are ignored.
        """
        y = self._cursor_y
        if not 1 <= y <= self._height:
            return
        row = y - 1
        for char in text:
            x = self._cursor_x
            if x > self._width:
                return
            if x >= 1:
                self._chars[row][x - 1] = char
                self._fgs[row][x - 1] = self._fg
                self._bgs[row][x - 1] = self._bg
            self._cursor_x = x + 1

    def get_char(self, x: int, y: int) -> tuple[str, Color, Color]:
        if not (1 <= x <= self._width and 1 <= y <= self._height):
            raise IndexError(f"cell ({x}, {y}) outside {self._width}x{self._height} buffer")
        return (
            self._chars[y - 1][x - 1],
            Color.from_blit(self._fgs[y - 1][x - 1]),
            Color.from_blit(self._bgs[y - 1][x - 1]),
        )

    def row(self, y: int) -> tuple[str, str, str]:
        """(text, fg, bg) of one row, colours as blit strings."""
        r = y - 1
        return "".join(self._chars[r]), "".join(self._fgs[r]), "".join(self._bgs[r])

    def merge(self, other: Buffer, x: int = 1, y: int = 1) -> None:
        """Copy `other` into this buffer with its top-left corner at (x, y), clipped."""
        ow, oh = other.size
        for dy in range(1, min(oh, self._height - y + 1) + 1):
            ry = y + dy - 1
            if ry < 1:
                continue
            for dx in range(1, min(ow, self._width - x + 1) + 1):
                rx = x + dx - 1
                if rx < 1:
                    continue
                char, fg, bg = other.get_char(dx, dy)
                self._chars[ry - 1][rx - 1] = char
                self._fgs[ry - 1][rx - 1] = fg.to_blit()
                self._bgs[ry - 1][rx - 1] = bg.to_blit()

    def print(self, redirect: Redirect, x: int = 1, y: int = 1) -> None:
        """Blit every row to `redirect`, starting at (x, y)."""
        for dy in range(1, self._height + 1):
            text, fg, bg = self.row(dy)
            redirect.set_cursor_pos(x, y + dy - 1)
            redirect.blit(text, fg, bg)
