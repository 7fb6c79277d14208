"""Little-endian primitive reader shared by the MAP and RSB decoders.

Every read takes a human readable label. A failing read raises a
``DecodeError`` whose first frame is that label; enclosing ``label()``
blocks prefix their own labels as the error travels outward.
"""

from __future__ import annotations

import struct
from contextlib import contextmanager
from typing import Callable, Iterator, List, Tuple, TypeVar

from ..errors import DecodeError, empty_string, truncated

__all__ = ["ByteReader", "latin1"]

T = TypeVar("T")

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_F32 = struct.Struct("<f")


def latin1(raw: bytes) -> str:
    # ISO-8859-1 maps every byte onto the code point of the same value.
    return raw.decode("latin-1")


class ByteReader:
    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def at_end(self) -> bool:
        return self._offset >= len(self._data)

    def peek(self, size: int) -> bytes:
        return self._data[self._offset : self._offset + size]

    @contextmanager
    def label(self, text: str) -> Iterator[None]:
        try:
            yield
        except DecodeError as exc:
            exc.push(text)
            raise

    # Raw ---------------------------------------------------------------------
    def _take(self, size: int) -> int:
        start = self._offset
        if size > self.remaining:
            raise truncated(size, start, self.remaining)
        self._offset = start + size
        return start

    def read_exact(self, size: int, label: str) -> bytes:
        with self.label(label):
            start = self._take(size)
        return self._data[start : start + size]

    def _unpack(self, fmt: struct.Struct, label: str):
        with self.label(label):
            start = self._take(fmt.size)
        return fmt.unpack_from(self._data, start)[0]

    # Scalars -----------------------------------------------------------------
    def u8(self, label: str) -> int:
        return self._unpack(_U8, label)

    def u16(self, label: str) -> int:
        return self._unpack(_U16, label)

    def u32(self, label: str) -> int:
        return self._unpack(_U32, label)

    def f32(self, label: str) -> float:
        return self._unpack(_F32, label)

    def boolean(self, label: str) -> bool:
        return self.u8(label) == 1

    def xy(self, label: str) -> Tuple[float, float]:
        with self.label(label):
            x = self.f32("x")
            y = self.f32("y")
        return x, y

    def xyz(self, label: str) -> Tuple[float, float, float]:
        with self.label(label):
            x = self.f32("x")
            y = self.f32("y")
            z = self.f32("z")
        return x, y, z

    # Arrays ------------------------------------------------------------------
    def f32_array(self, count: int, label: str) -> Tuple[float, ...]:
        return tuple(self.f32(f"{label} {i}") for i in range(count))

    def u32_array(self, count: int, label: str) -> Tuple[int, ...]:
        return tuple(self.u32(f"{label} {i}") for i in range(count))

    def u16_values(self, count: int, label: str) -> List[int]:
        """Bulk read of ``count`` u16 values as a single step."""
        with self.label(label):
            start = self._take(2 * count)
        return list(struct.unpack_from(f"<{count}H", self._data, start))

    def u8_values(self, count: int, label: str) -> List[int]:
        with self.label(label):
            start = self._take(count)
        return list(self._data[start : start + count])

    # Strings -----------------------------------------------------------------
    def cstring(self, label: str) -> bytes:
        """Length-prefixed string; the trailing terminator byte is dropped."""
        with self.label(label):
            start = self._offset
            length = self.u32("string length")
            if length < 1:
                raise empty_string(start)
            raw = self.read_exact(length, f"{length} string bytes")
        return raw[:-1]

    def string(self, label: str) -> str:
        return latin1(self.cstring(label))

    def strings(self, count: int, label: str) -> List[str]:
        return [self.string(f"{label} {i} of {count}") for i in range(count)]

    # Lists -------------------------------------------------------------------
    def repeat(
        self,
        count: int,
        label: str | Callable[[int], str],
        read: Callable[["ByteReader"], T],
    ) -> List[T]:
        items: List[T] = []
        for i in range(count):
            text = label(i) if callable(label) else f"{label} {i} of {count}"
            with self.label(text):
                items.append(read(self))
        return items

    def counted(
        self,
        count_label: str,
        label: str | Callable[[int], str],
        read: Callable[["ByteReader"], T],
    ) -> List[T]:
        """u32 element count followed by that many records."""
        count = self.u32(count_label)
        return self.repeat(count, label, read)
