# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from cooptasks.core.ports import Redirect


@dataclass(slots=True)
class BlitCall:
    x: int
    y: int
    text: str
    fg: str
    bg: str


@dataclass(slots=True)
class RecordingRedirect(Redirect):
    """
    Fake Redirect used by display tests.

    Records every blit together with the cursor position it was issued at.
    """

    calls: list[BlitCall] = field(default_factory=list)
    cursor: tuple[int, int] = (1, 1)

    def set_cursor_pos(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def blit(self, text: str, fg: str, bg: str) -> None:
        x, y = self.cursor
        self.calls.append(BlitCall(x=x, y=y, text=text, fg=fg, bg=bg))
        self.cursor = (x + len(text), y)


class Recorder:
    """Side-effect log shared by task bodies under test."""

    def __init__(self) -> None:
        self.log: list[tuple] = []

    def __call__(self, *entry) -> None:
        self.log.append(entry)

    def names(self) -> list:
        return [e[0] for e in self.log]
