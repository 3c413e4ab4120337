# tests/test_display.py

from __future__ import annotations

import io

import pytest

from cooptasks.display.buffer import Buffer
from cooptasks.display.colors import Color
from cooptasks.display.terminal import AnsiTerminal, sextant_glyph, translate_char

from .fakes import RecordingRedirect


def test_color_blit_roundtrip_edges() -> None:
    assert Color.WHITE.to_blit() == "0"
    assert Color.RED.to_blit() == "e"
    assert Color.BLACK.to_blit() == "f"
    assert Color.from_blit("b") is Color.BLUE
    assert Color.from_index(4) is Color.YELLOW

    with pytest.raises(ValueError):
        Color.from_blit("g")
    with pytest.raises(ValueError):
        Color.from_index(16)


def test_new_buffer_is_blank() -> None:
    buf = Buffer(3, 2)

    assert buf.size == (3, 2)
    assert buf.cursor_pos == (1, 1)
    assert buf.get_char(3, 2) == (" ", Color.WHITE, Color.BLACK)
    assert buf.row(1) == ("   ", "000", "fff")


def test_write_uses_current_colors_and_clips() -> None:
    buf = Buffer(4, 2)
    buf.foreground_color = Color.RED
    buf.background_color = Color.BLUE
    buf.set_cursor_pos(3, 1)
    buf.write("abc")

    assert buf.row(1) == ("  ab", "00ee", "ffbb")
    assert buf.cursor_pos == (5, 1)
    assert buf.foreground_color is Color.RED


def test_write_skips_cells_left_of_the_buffer() -> None:
    buf = Buffer(3, 1)
    buf.set_cursor_pos(-1, 1)
    buf.write("xyzw")

    assert buf.row(1)[0] == "zw "


def test_write_outside_rows_is_ignored() -> None:
    buf = Buffer(2, 1)
    buf.set_cursor_pos(1, 2)
    buf.write("zz")

    assert buf.row(1)[0] == "  "
    assert buf.cursor_pos == (1, 2)


def test_clear_and_clear_line_use_current_colors() -> None:
    buf = Buffer(2, 2)
    buf.write("ab")
    buf.background_color = Color.GREEN
    buf.set_cursor_pos(1, 1)
    buf.clear_line()

    assert buf.row(1) == ("  ", "00", "dd")
    buf.clear()
    assert buf.row(2) == ("  ", "00", "dd")


def test_merge_is_clipped() -> None:
    big = Buffer(3, 2)
    small = Buffer(2, 2)
    small.foreground_color = Color.LIME
    small.write("ab")
    small.set_cursor_pos(1, 2)
    small.write("cd")

    big.merge(small, 3, 2)

    assert big.row(1)[0] == "   "
    assert big.row(2) == ("  a", "005", "fff")


def test_print_blits_one_row_at_a_time() -> None:
    buf = Buffer(2, 2)
    buf.write("hi")
    target = RecordingRedirect()

    buf.print(target, 5, 10)

    assert [(c.x, c.y, c.text) for c in target.calls] == [(5, 10, "hi"), (5, 11, "  ")]
    assert target.calls[0].fg == "00"


def test_sextant_glyphs() -> None:
    assert sextant_glyph(0) == " "
    assert sextant_glyph(1) == "\U0001FB00"
    assert sextant_glyph(21) == "▌"
    assert sextant_glyph(22) == "\U0001FB14"
    assert sextant_glyph(42) == "▐"
    assert sextant_glyph(62) == "\U0001FB3B"
    assert sextant_glyph(63) == "█"
    assert translate_char(chr(0x81)) == "\U0001FB00"
    assert translate_char("A") == "A"


def test_ansi_terminal_writes_colors_and_glyphs() -> None:
    out = io.StringIO()
    term = AnsiTerminal(out)

    term.set_cursor_pos(2, 3)
    term.blit("a" + chr(0x80), "0e", "ff")

    text = out.getvalue()
    assert text.startswith("\033[3;2H")
    assert "\033[38;2;240;240;240m" in text
    assert "\033[38;2;204;76;76m" in text
    assert text.endswith(" \033[0m")

    with pytest.raises(ValueError):
        term.blit("ab", "0", "ff")
