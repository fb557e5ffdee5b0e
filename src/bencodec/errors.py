"""
Exceptions raised by the bencode codec.
"""
from typing import Optional

__all__ = [
    "BencodeError",
    "BencodeDecodeError",
    "UnexpectedEnd",
    "MalformedLength",
    "MalformedInteger",
    "IntegerOverflow",
    "UnknownType",
    "NonStringKey",
    "NestingTooDeep",
    "TrailingData",
    "BencodeEncodeError",
    "TypeMismatch",
    "KeyNotFound",
]


class BencodeError(Exception):
    """Base class for every error raised by this package."""


class BencodeDecodeError(BencodeError, ValueError):
    """Custom exception for Bencode decoding errors."""
    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} (at byte {position})"
        super().__init__(message)
        self.position = position


class UnexpectedEnd(BencodeDecodeError):
    """Input ended before a value or terminator was complete."""


class MalformedLength(BencodeDecodeError):
    """A string length prefix is not a non-negative decimal integer."""


class MalformedInteger(BencodeDecodeError):
    """An integer literal violates the i<digits>e grammar."""


class IntegerOverflow(BencodeDecodeError):
    """A well-formed integer does not fit the configured range."""


class UnknownType(BencodeDecodeError):
    """The byte at a value boundary is not i, l, d or a digit."""


class NonStringKey(BencodeDecodeError):
    """A dictionary key does not start with a string length prefix."""


class TrailingData(BencodeDecodeError):
    """Bytes remain in a buffer after its single top-level value."""


class BencodeEncodeError(BencodeError, TypeError):
    """Object has no bencode representation."""


class TypeMismatch(BencodeError, TypeError):
    """An accessor was called on a value of another variant."""
    def __init__(self, expected: str, actual: str):
        super().__init__(f"expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class KeyNotFound(BencodeError, KeyError):
    """Dictionary lookup for a key that is not present."""
    def __init__(self, key: bytes):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"key not found: {self.key!r}"


class NestingTooDeep(BencodeDecodeError):
    """Lists and dictionaries are nested deeper than the decoder allows."""
