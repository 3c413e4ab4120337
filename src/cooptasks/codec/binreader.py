# src/cooptasks/codec/binreader.py

from __future__ import annotations

from ..core.errors import BinaryReadError


class BinReader:
    """Cursor over a byte string; reads unsigned 8/16/32-bit integers."""

    def __init__(self, data: bytes, *, big_endian: bool = False) -> None:
        self._data = bytes(data)
        self._offset = 0
        self._byteorder = "big" if big_endian else "little"

    @property
    def big_endian(self) -> bool:
        return self._byteorder == "big"

    @property
    def offset(self) -> int:
        return self._offset

    @offset.setter
    def offset(self, value: int) -> None:
        self._offset = int(value)

    def __len__(self) -> int:
        return len(self._data)

    def is_at_end(self) -> bool:
        return self._offset >= len(self._data)

    def read_byte(self) -> int:
        if self.is_at_end():
            raise BinaryReadError("no bytes left", self._offset, 1)
        value = self._data[self._offset]
        self._offset += 1
        return value

    def read_word(self) -> int:
        return self._read_int(2, "no words left")

    def read_dword(self) -> int:
        return self._read_int(4, "no dwords left")

    def _read_int(self, size: int, message: str) -> int:
        if self._offset < 0 or len(self._data) < self._offset + size:
            raise BinaryReadError(message, self._offset, size)
        chunk = self._data[self._offset:self._offset + size]
        self._offset += size
        return int.from_bytes(chunk, self._byteorder)
