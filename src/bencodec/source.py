"""
Forward-only byte cursor used by the decoder.
"""
import io

from .errors import UnexpectedEnd


class ByteSource:
    """
    Wraps a bytes-like object or a readable binary stream.

    Only one byte of lookahead is ever held; everything else is read from
    the stream on demand and never rewound.  Errors raised by the stream
    itself (``OSError`` and friends) propagate untouched.
    """
    def __init__(self, source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        elif not hasattr(source, "read"):
            raise TypeError(f"Cannot decode from object of type {type(source)}")
        self._stream = source
        self._lookahead = None
        self.position = 0  # bytes consumed so far

    def peek(self) -> bytes:
        """Returns the next byte without consuming it, or b'' at end of input."""
        if self._lookahead is None:
            self._lookahead = self._stream.read(1) or b""
        return self._lookahead

    def read(self, n: int) -> bytes:
        """Consumes exactly n bytes."""
        if n <= 0:
            return b""

        chunks = []
        remaining = n
        if self._lookahead:
            chunks.append(self._lookahead)
            remaining -= 1
        self._lookahead = None

        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                got = n - remaining
                self.position += got
                raise UnexpectedEnd(
                    f"Expected {n} bytes, only {got} available", self.position)
            chunks.append(chunk)
            remaining -= len(chunk)

        self.position += n
        return b"".join(chunks)

    def read_while(self, allowed: bytes) -> bytes:
        """Consumes bytes while they are in ``allowed``; the first other byte is left unread."""
        buf = bytearray()
        while True:
            ch = self.peek()
            if not ch or ch not in allowed:
                return bytes(buf)
            self._lookahead = None
            self.position += 1
            buf += ch

    def at_end(self) -> bool:
        return not self.peek()
