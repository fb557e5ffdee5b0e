"""
Bencode encoder for BitTorrent metainfo and tracker responses.

Output is always canonical: dictionary keys are emitted in ascending
byte order, so re-encoding a decoded ``info`` dictionary reproduces the
bytes its info hash was computed over.
"""
from typing import List

from .errors import BencodeEncodeError
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString


class _Encoded:
    """Bytes already in bencoded form, queued on the work stack."""
    __slots__ = ("data",)

    def __init__(self, data: bytes):
        self.data = data


_END = _Encoded(b"e")


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    out: List[bytes] = []
    # explicit work stack instead of recursion; nesting depth is unbounded
    stack = [obj]

    while stack:
        obj = stack.pop()

        if isinstance(obj, _Encoded):
            out.append(obj.data)

        elif isinstance(obj, bool):
            raise BencodeEncodeError("Cannot bencode a bool")

        elif isinstance(obj, (int, BencodeInt)):
            value = obj if isinstance(obj, int) else obj.value
            out.append(encode_int(value))

        elif isinstance(obj, BencodeString):
            out.append(encode_bytes(obj.value))

        elif isinstance(obj, (bytes, bytearray, memoryview)):
            out.append(encode_bytes(bytes(obj)))

        elif isinstance(obj, str):
            out.append(encode_str(obj))

        elif isinstance(obj, (list, tuple, BencodeList)):
            value = obj.value if isinstance(obj, BencodeList) else obj
            out.append(b"l")
            stack.append(_END)
            stack.extend(reversed(value))

        elif isinstance(obj, (dict, BencodeDict)):
            value = obj.value if isinstance(obj, BencodeDict) else obj
            out.append(b"d")
            stack.append(_END)
            for key, item in reversed(_sorted_items(value)):
                stack.append(item)
                stack.append(_Encoded(encode_bytes(key)))

        else:
            raise BencodeEncodeError(f"Cannot bencode object of type {type(obj)}")

    return b"".join(out)


def _sorted_items(d):
    """Returns (key_bytes, value) pairs ordered by raw key bytes."""
    items = {}
    for key, value in d.items():
        if isinstance(key, str):
            key_bytes = key.encode()
        elif isinstance(key, (bytes, bytearray)):
            key_bytes = bytes(key)
        else:
            raise BencodeEncodeError(f"Cannot bencode dictionary key of type {type(key)}")
        if key_bytes in items:
            raise BencodeEncodeError(f"Duplicate dictionary key {key_bytes!r}")
        items[key_bytes] = value
    return sorted(items.items(), key=lambda kv: kv[0])


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return b"i%de" % n


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return b"%d:%s" % (len(b), b)


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode())
