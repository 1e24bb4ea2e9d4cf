from __future__ import annotations


class Cursor:
    """
    Read position over a JPEG buffer.

    All multi-byte JPEG fields are big-endian. Reading past the end raises
    ValueError; callers that want a soft stop check remaining() first.
    """
    __slots__ = ("buf", "pos")

    def __init__(self, data: bytes | bytearray | memoryview):
        self.buf = memoryview(data)
        self.pos = 0

    def remaining(self) -> int:
        return len(self.buf) - self.pos

    def tell(self) -> int:
        return self.pos

    def seek(self, pos: int) -> None:
        if pos < 0 or pos > len(self.buf):
            raise ValueError(f"position {pos} outside 0..{len(self.buf)}")
        self.pos = pos

    def skip(self, n: int) -> None:
        self.seek(self.pos + n)

    def peek(self, n: int) -> bytes:
        if n > self.remaining():
            raise ValueError(f"need {n} bytes at {self.pos}, only {self.remaining()} left")
        return self.buf[self.pos:self.pos + n].tobytes()

    def uint(self, n: int) -> int:
        """Consume an n-byte unsigned field."""
        value = int.from_bytes(self.peek(n), "big")
        self.pos += n
        return value

    def u8(self) -> int:
        return self.uint(1)

    def u16(self) -> int:
        return self.uint(2)

    def nibbles(self) -> tuple[int, int]:
        """One byte split into (high, low) 4-bit halves, e.g. sampling factors or Td/Ta."""
        b = self.uint(1)
        return b >> 4, b & 0x0F

    def find(self, needle: bytes, start: int, end: int | None = None) -> int:
        """Absolute index of needle within buf[start:end], or -1."""
        idx = self.buf[start:end].tobytes().find(needle)
        return -1 if idx < 0 else start + idx
