"""
Human-readable dump of a Bencode value tree, for debugging.
"""
from typing import List

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

PREVIEW_BYTES = 16


def dump(value: BencodeType, indent: int = 2) -> str:
    """Returns an indented multi-line description of ``value``."""
    lines: List[str] = []
    # (value, depth, prefix) entries, pushed in reverse so they pop in order
    stack = [(value, 0, "")]

    while stack:
        value, depth, prefix = stack.pop()
        pad = " " * (depth * indent)

        if isinstance(value, BencodeString):
            lines.append(f"{pad}{prefix}{_describe_bytes(value.value)}")
        elif isinstance(value, BencodeInt):
            lines.append(f"{pad}{prefix}{value.value}")
        elif isinstance(value, BencodeList):
            lines.append(f"{pad}{prefix}list[{len(value)}]")
            stack.extend((item, depth + 1, "- ") for item in reversed(value.value))
        elif isinstance(value, BencodeDict):
            lines.append(f"{pad}{prefix}dict[{len(value)}]")
            stack.extend(
                (item, depth + 1, f"{_describe_bytes(key)}: ") for key, item in reversed(value.items()))
        else:
            lines.append(f"{pad}{prefix}{value!r}")

    return "\n".join(lines)


def _describe_bytes(b: bytes) -> str:
    if all(0x20 <= c < 0x7f for c in b):
        return repr(b.decode("ascii"))
    preview = b[:PREVIEW_BYTES].hex()
    if len(b) > PREVIEW_BYTES:
        preview += "..."
    return f"<{len(b)} bytes {preview}>"
