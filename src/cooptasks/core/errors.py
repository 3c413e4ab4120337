# src/cooptasks/core/errors.py

"""
Runtime-wide exceptions.

Everything raised by cooptasks itself derives from CoopError. Terminated is the
exception: like KeyboardInterrupt it is a BaseException, so task bodies that
catch Exception never absorb a shutdown.

Task failures are never wrapped; they reach the caller of TaskGroup.run() as
the original exception with a note naming the task.
"""

from __future__ import annotations

from typing import Any


class CoopError(Exception):
    """Base error for cooptasks."""

    def __init__(self, message: str, code: str = "COOP_ERROR", details: dict[str, Any] | None = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class Terminated(BaseException):
    """The reserved termination event reached a task group."""

    def __init__(self, group_name: str, tag: str) -> None:
        self.group_name = group_name
        self.tag = tag
        super().__init__(f"terminated (group={group_name!r}, event={tag!r})")


class EventSourceExhausted(CoopError):
    """A finite event source has no events left."""

    def __init__(self, delivered: int) -> None:
        self.delivered = delivered
        super().__init__(
            message=f"event source exhausted after {delivered} events",
            code="EVENT_SOURCE_EXHAUSTED",
            details={"delivered": delivered},
        )


class BinaryReadError(CoopError, EOFError):
    def __init__(self, message: str, offset: int, size: int) -> None:
        self.offset = offset
        self.size = size
        super().__init__(
            message=message,
            code="BINARY_READ_ERROR",
            details={"offset": offset, "size": size},
        )


class ImageError(CoopError):
    def __init__(self, message: str, code: str = "IMAGE_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, details=details)


class X6FormatError(ImageError, ValueError):
    """Bytes are not a valid x6 image."""

    def __init__(self, reason: str) -> None:
        super().__init__(message=reason, code="X6_FORMAT_ERROR", details={"reason": reason})


class ImageBoundsError(ImageError, IndexError):
    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        super().__init__(
            message=f"out of image: ({x}, {y}) not in {width}x{height}",
            code="IMAGE_BOUNDS_ERROR",
            details={"x": x, "y": y, "width": width, "height": height},
        )
