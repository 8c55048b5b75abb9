"""
Growable line buffer reused across reads.

`capacity` is how many bytes are allocated, `length` is how many of them
hold the current line. Anything past `length` is stale data from an
earlier, longer line and must never be scanned.
"""

from __future__ import annotations

from .rules import INITIAL_BUFFER_CAPACITY, NEWLINE


class LineBuffer:
    def __init__(self, capacity: int = INITIAL_BUFFER_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._data = bytearray(capacity)
        self.length = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    def _grow(self, needed: int) -> None:
        # Double until the line fits, like getline() does.
        new_capacity = max(self.capacity, 1)
        while new_capacity < needed:
            new_capacity *= 2
        self._data.extend(bytes(new_capacity - self.capacity))

    def load(self, chunk: bytes) -> int:
        """Overwrite the buffer with `chunk` and return its length."""
        size = len(chunk)
        if size > self.capacity:
            self._grow(size)
        self._data[:size] = chunk
        self.length = size
        return size

    def ends_with_newline(self) -> bool:
        return self.length > 0 and self._data[self.length - 1] == NEWLINE[0]

    def content_length(self) -> int:
        """Number of bytes before the trailing newline, if any."""
        return self.length - 1 if self.ends_with_newline() else self.length

    def view(self) -> memoryview:
        return memoryview(self._data)[: self.length]

    def raw(self) -> bytearray:
        return self._data

    def release(self) -> None:
        self._data = bytearray(0)
        self.length = 0

    def __len__(self) -> int:
        return self.length

    def __bytes__(self) -> bytes:
        return bytes(self._data[: self.length])
