"""
Data structures for representing Bencoded types.

Every decoded value is one of four classes sharing the ``BencodeType``
base.  The payload lives in ``.value``; the ``as_*`` accessors return it
when the variant matches and raise ``TypeMismatch`` otherwise.  Trees are
immutable once built: lists are held as tuples and dictionaries behind a
read-only mapping proxy.
"""
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple, Union

from .errors import BencodeEncodeError, KeyNotFound, TypeMismatch

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "wrap",
]


class BencodeType:
    """Base class for all Bencode data types."""
    kind = "value"

    def as_string(self) -> bytes:
        raise TypeMismatch(BencodeString.kind, self.kind)

    def as_integer(self) -> int:
        raise TypeMismatch(BencodeInt.kind, self.kind)

    def as_list(self) -> Tuple["BencodeType", ...]:
        raise TypeMismatch(BencodeList.kind, self.kind)

    def as_dict(self) -> Mapping[bytes, "BencodeType"]:
        raise TypeMismatch(BencodeDict.kind, self.kind)

    def get(self, key: Union[bytes, str]) -> "BencodeType":
        raise TypeMismatch(BencodeDict.kind, self.kind)

    def to_python(self):
        """Unwraps the tree into plain bytes, int, list and dict objects."""
        raise NotImplementedError

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    kind = "integer"

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        self.value = value

    def as_integer(self) -> int:
        return self.value

    def to_python(self):
        return self.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    kind = "string"

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def as_string(self) -> bytes:
        return self.value

    def to_python(self):
        return self.value

    def __len__(self):
        return len(self.value)

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    kind = "list"

    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode values.")
        self.value = tuple(value)

    def as_list(self) -> Tuple[BencodeType, ...]:
        return self.value

    def to_python(self):
        return [item.to_python() for item in self.value]

    def __len__(self):
        return len(self.value)

    def __iter__(self) -> Iterator[BencodeType]:
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    __hash__ = None

    def __repr__(self):
        return f"BencodeList({list(self.value)!r})"


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are raw bytes.  Lookups also accept ``str`` keys, which are
    UTF-8 encoded first.  Iteration yields keys in canonical (byte-wise
    ascending) order regardless of the order they were inserted in.
    """
    kind = "dict"

    def __init__(self, value: dict):
        if not isinstance(value, Mapping):
            raise TypeError("BencodeDict requires a dict.")
        items = {}
        for k, v in value.items():
            # keys must be bytes (bencode requirement)
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError("BencodeDict values must be Bencode values.")
            items[bytes(k)] = v
        self.value = MappingProxyType(items)

    def as_dict(self) -> Mapping[bytes, BencodeType]:
        return self.value

    def get(self, key: Union[bytes, str]) -> BencodeType:
        """Returns the value stored under ``key`` or raises ``KeyNotFound``."""
        key = _key_bytes(key)
        try:
            return self.value[key]
        except KeyError:
            raise KeyNotFound(key) from None

    __getitem__ = get

    def keys(self):
        return sorted(self.value)

    def items(self):
        return [(k, self.value[k]) for k in sorted(self.value)]

    def to_python(self):
        return {k: v.to_python() for k, v in self.value.items()}

    def __contains__(self, key):
        if not isinstance(key, (bytes, bytearray, str)):
            return False
        return _key_bytes(key) in self.value

    def __len__(self):
        return len(self.value)

    def __iter__(self) -> Iterator[bytes]:
        return iter(sorted(self.value))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return dict(self.value) == dict(other.value)

    __hash__ = None

    def __repr__(self):
        return f"BencodeDict({dict(self.value)!r})"


def _key_bytes(key) -> bytes:
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f"dictionary keys must be bytes or str, not {type(key).__name__}")


def wrap(obj) -> BencodeType:
    """
    Builds a Bencode value tree from native Python objects.

    ``int``, ``bytes``, ``str`` (UTF-8), ``list``/``tuple`` and ``dict``
    with ``bytes`` or ``str`` keys are accepted; existing Bencode values
    are returned unchanged.
    """
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise BencodeEncodeError("Cannot bencode a bool")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode())

    if isinstance(obj, (list, tuple)):
        return BencodeList([wrap(x) for x in obj])

    if isinstance(obj, dict):
        items = {}
        for k, v in obj.items():
            if not isinstance(k, (bytes, bytearray, str)):
                raise BencodeEncodeError(f"Cannot bencode dictionary key of type {type(k)}")
            key = _key_bytes(k)
            if key in items:
                raise BencodeEncodeError(f"Duplicate dictionary key {key!r}")
            items[key] = wrap(v)
        return BencodeDict(items)

    raise BencodeEncodeError(f"Cannot bencode object of type {type(obj)}")
