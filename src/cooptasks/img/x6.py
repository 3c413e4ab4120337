# src/cooptasks/img/x6.py

"""
x6 images: 2x3 pixels per character cell, optionally one fg/bg colour pair per cell.

File layout (big endian):

    offset  size  field
    0       2     magic b"x6"
    2       2     flags (bit 0: coloured; other bits must be zero)
    4       2     width in cells
    6       2     height in cells
    8       w*h   pixel masks, one byte per cell, row-major
    8+w*h   w*h   colours, fg << 4 | bg (coloured images only)

In a mask, bit 0 is the top-left pixel and bit 5 the bottom-right one.
Colours are palette indices (0 = white ... 15 = black).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..codec.binreader import BinReader
from ..core.errors import ImageBoundsError, ImageError, X6FormatError
from ..display.buffer import Buffer
from ..display.colors import Color

logger = logging.getLogger(__name__)

MAGIC = b"x6"
HEADER_SIZE = 8
FLAG_COLORED = 0x0001

DEFAULT_FG = 0
DEFAULT_BG = 15


@dataclass(slots=True)
class X6Block:
    bit_mask: int = 0
    fg: int | None = None
    bg: int | None = None


class X6Image:
    def __init__(self, char_width: int, char_height: int, *, colored: bool = False) -> None:
        if char_width < 0 or char_height < 0:
            raise ValueError(f"image size must be non-negative, got {char_width}x{char_height}")
        self.char_width = char_width
        self.char_height = char_height
        self.colored = colored
        self.blocks: list[X6Block] = [
            X6Block(0, DEFAULT_FG, DEFAULT_BG) if colored else X6Block()
            for _ in range(char_width * char_height)
        ]

    @classmethod
    def new(cls, char_width: int, char_height: int, *, colored: bool = False) -> X6Image:
        return cls(char_width, char_height, colored=colored)

    @property
    def width(self) -> int:
        """Width in pixels."""
        return self.char_width * 2

    @property
    def height(self) -> int:
        """Height in pixels."""
        return self.char_height * 3

    # ------------------------------------------------------------------
    # Decoding / encoding
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes) -> X6Image:
        if len(data) < HEADER_SIZE:
            raise X6FormatError("not an x6 image")
        reader = BinReader(data, big_endian=True)
        if bytes((reader.read_byte(), reader.read_byte())) != MAGIC:
            raise X6FormatError("not an x6 image")
        flags = reader.read_word()
        if flags & ~FLAG_COLORED:
            raise X6FormatError("image contains unsupported flags")
        width = reader.read_word()
        height = reader.read_word()
        colored = bool(flags & FLAG_COLORED)

        cells = width * height
        expected = HEADER_SIZE + cells * (2 if colored else 1)
        if len(data) < expected:
            raise X6FormatError("wrong size of x6 image")

        image = cls(width, height, colored=colored)
        for block in image.blocks:
            block.bit_mask = reader.read_byte()
        if colored:
            for block in image.blocks:
                fgbg = reader.read_byte()
                block.fg = fgbg >> 4
                block.bg = fgbg & 0x0F
        return image

    @classmethod
    def from_file(cls, path: str | Path) -> X6Image:
        path = Path(path)
        if not path.is_file():
            raise ImageError(f"not a file: {path}", code="NOT_A_FILE", details={"path": str(path)})
        data = path.read_bytes()
        if not data:
            raise ImageError(f"empty file: {path}", code="EMPTY_FILE", details={"path": str(path)})
        image = cls.from_bytes(data)
        logger.debug("Loaded x6 image %s (%dx%d cells, colored=%s)", path, image.char_width, image.char_height, image.colored)
        return image

    def to_bytes(self) -> bytes:
        out = bytearray(MAGIC)
        out += (FLAG_COLORED if self.colored else 0).to_bytes(2, "big")
        out += (self.char_width & 0xFFFF).to_bytes(2, "big")
        out += (self.char_height & 0xFFFF).to_bytes(2, "big")
        out += bytes(block.bit_mask & 0xFF for block in self.blocks)
        if self.colored:
            out += bytes(((block.fg or 0) << 4) | (block.bg or 0) for block in self.blocks)
        return bytes(out)

    def write_to_file(self, path: str | Path) -> None:
        Path(path).write_bytes(self.to_bytes())

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, x: int, y: int, value: bool) -> None:
        """Set (True) or clear (False) the pixel at 1-based (x, y)."""
        if not (1 <= x <= self.width and 1 <= y <= self.height):
            raise ImageBoundsError(x, y, self.width, self.height)
        if not isinstance(value, bool):
            raise TypeError("value must be bool")
        block = self.blocks[self._block_index((x + 1) // 2, (y + 2) // 3)]
        pix_mask = 1 << (((y - 1) % 3) * 2 + (x - 1) % 2)
        if value:
            block.bit_mask |= pix_mask
        else:
            block.bit_mask &= ~pix_mask

    def get_pixel(self, x: int, y: int) -> bool:
        if not (1 <= x <= self.width and 1 <= y <= self.height):
            raise ImageBoundsError(x, y, self.width, self.height)
        block = self.blocks[self._block_index((x + 1) // 2, (y + 2) // 3)]
        return bool(block.bit_mask & (1 << (((y - 1) % 3) * 2 + (x - 1) % 2)))

    def set_background(self, x_char: int, y_char: int, bg: int) -> None:
        self._colored_block(x_char, y_char).bg = _color_index(bg)

    def set_foreground(self, x_char: int, y_char: int, fg: int) -> None:
        self._colored_block(x_char, y_char).fg = _color_index(fg)

    def to_buffer(self, fg: Color = Color.WHITE, bg: Color = Color.BLACK) -> Buffer:
        """
        Render into a Buffer, one cell per block.

        Masks below 32 map to characters 0x80+mask. Masks with the bottom-right
        pixel set are drawn inverted (character 0x9F-(mask-32), colours swapped),
        since the glyph range only covers 32 patterns.
        """
        buffer = Buffer(self.char_width, self.char_height)
        for y in range(1, self.char_height + 1):
            buffer.set_cursor_pos(1, y)
            for x in range(1, self.char_width + 1):
                block = self.blocks[self._block_index(x, y)]
                mask = block.bit_mask & 0x3F
                cell_fg, cell_bg = fg, bg
                if self.colored:
                    cell_fg = Color.from_index(block.fg or 0)
                    cell_bg = Color.from_index(block.bg or 0)
                if mask < 32:
                    buffer.background_color = cell_bg
                    buffer.foreground_color = cell_fg
                    buffer.write(chr(0x80 + mask))
                else:
                    buffer.background_color = cell_fg
                    buffer.foreground_color = cell_bg
                    buffer.write(chr(0x9F - (mask - 32)))
        return buffer

    def _block_index(self, x_char: int, y_char: int) -> int:
        return (y_char - 1) * self.char_width + (x_char - 1)

    def _colored_block(self, x_char: int, y_char: int) -> X6Block:
        if not self.colored:
            raise ImageError("not a colored image", code="NOT_COLORED")
        if not (1 <= x_char <= self.char_width and 1 <= y_char <= self.char_height):
            raise ImageBoundsError(x_char, y_char, self.char_width, self.char_height)
        return self.blocks[self._block_index(x_char, y_char)]


def _color_index(value: int) -> int:
    # Accept palette indices and Color members alike.
    if isinstance(value, Color):
        return value.index
    if not 0 <= value <= 15:
        raise ValueError(f"colour index out of range: {value}")
    return value
