"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
import re
from typing import Optional

from .errors import (
    IntegerOverflow,
    MalformedInteger,
    MalformedLength,
    NestingTooDeep,
    NonStringKey,
    TrailingData,
    UnexpectedEnd,
    UnknownType,
)
from .source import ByteSource
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

# -0 and leading zeros are rejected
_INT_RE = re.compile(rb"0|-?[1-9][0-9]*")
_DIGITS = b"0123456789"


class _Container:
    """A list or dictionary whose closing 'e' has not been read yet."""
    def __init__(self, is_dict: bool):
        self.is_dict = is_dict
        self.items = {} if is_dict else []
        self.key = None

    def expects_key(self) -> bool:
        return self.is_dict and self.key is None

    def add(self, value: BencodeType):
        if self.is_dict:
            # later duplicates overwrite earlier ones
            self.items[self.key] = value
            self.key = None
        else:
            self.items.append(value)

    def close(self) -> BencodeType:
        return BencodeDict(self.items) if self.is_dict else BencodeList(self.items)


class BencodeDecoder:
    """
    Decodes Bencoded data into ``BencodeType`` trees.

    ``source`` is a bytes-like object or a binary stream.  Each call to
    ``decode`` consumes exactly one top-level value, so a stream holding
    several values can be read by calling it repeatedly.

    ``max_int_bits`` bounds decoded integers to a signed integer of that
    width; ``None`` accepts any size.  ``max_depth`` bounds how deeply
    lists and dictionaries may nest; ``None`` accepts any depth.  Open
    containers are kept on an explicit stack, so deep input never hits
    the interpreter's recursion limit.
    """
    def __init__(self, source, *, max_int_bits: Optional[int] = 64,
                 max_depth: Optional[int] = None):
        if max_int_bits is not None and max_int_bits < 1:
            raise ValueError(f"max_int_bits must be a positive integer or None, not {max_int_bits}")
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer or None, not {max_depth}")

        self.source = source if isinstance(source, ByteSource) else ByteSource(source)
        if max_int_bits is None:
            self.int_min = self.int_max = None
        else:
            self.int_min = -(1 << (max_int_bits - 1))
            self.int_max = (1 << (max_int_bits - 1)) - 1
        self.max_depth = max_depth

    def decode(self) -> BencodeType:
        """Decodes the next value from the source."""
        return self._parse_value()

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self) -> bytes:
        ch = self.source.peek()
        if not ch:
            raise UnexpectedEnd("Unexpected end of input", self.source.position)
        return ch

    def _consume(self, n=1) -> bytes:
        return self.source.read(n)

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self) -> BencodeType:
        stack = []

        while True:
            ch = self._peek()
            top = stack[-1] if stack else None

            if top is not None and ch == b'e' and (not top.is_dict or top.expects_key()):
                self._consume(1)  # skip 'e'
                value = stack.pop().close()

            elif top is not None and top.expects_key():
                # keys MUST be strings
                if not ch.isdigit():
                    raise NonStringKey(f"Dictionary key starts with {ch!r}", self.source.position)
                top.key = self._parse_string().value
                continue

            elif ch == b'l' or ch == b'd':
                if self.max_depth is not None and len(stack) >= self.max_depth:
                    raise NestingTooDeep(
                        f"Nesting deeper than {self.max_depth} levels", self.source.position)
                self._consume(1)  # skip 'l' / 'd'
                stack.append(_Container(is_dict=ch == b'd'))
                continue

            elif ch == b'i':
                value = self._parse_int()

            elif ch.isdigit():  # Bencode strings start with length, which is a digit
                value = self._parse_string()

            else:
                raise UnknownType(f"Invalid token {ch!r}", self.source.position)

            if not stack:
                return value
            stack[-1].add(value)

    def _parse_int(self) -> BencodeInt:
        """Parses an integer from the Bencoded data."""
        start = self.source.position
        self._consume(1)  # skip 'i'

        number_bytes = self.source.read_while(b"-" + _DIGITS)
        if self._peek() != b'e' or not _INT_RE.fullmatch(number_bytes):
            raise MalformedInteger(f"Invalid integer {number_bytes + self.source.peek()!r}", start)
        self._consume(1)  # skip 'e'

        num = int(number_bytes)
        if self.int_max is not None and not self.int_min <= num <= self.int_max:
            raise IntegerOverflow(f"Integer {num} out of range", start)

        return BencodeInt(num)

    def _parse_string(self) -> BencodeString:
        """Parses a byte string from the Bencoded data."""
        start = self.source.position
        # read length until ':'
        length_bytes = self.source.read_while(_DIGITS)
        if self._peek() != b':':
            raise MalformedLength(f"Invalid string length {length_bytes + self.source.peek()!r}", start)
        self._consume(1)  # skip ':'

        string_bytes = self._consume(int(length_bytes))
        return BencodeString(string_bytes)


def decode(data, *, max_int_bits: Optional[int] = 64, max_depth: Optional[int] = None) -> BencodeType:
    """
    Convenience function to decode Bencoded data.

    A bytes-like ``data`` must hold exactly one value; anything after it
    raises ``TrailingData``.  A stream is read up to the end of its first
    value and left positioned there.
    """
    decoder = BencodeDecoder(data, max_int_bits=max_int_bits, max_depth=max_depth)
    result = decoder.decode()
    if isinstance(data, (bytes, bytearray, memoryview)) and not decoder.source.at_end():
        raise TrailingData("Unexpected data after value", decoder.source.position)
    return result
