"""FNV-1 hashing used for symbol lookup and hash-table keys."""

from __future__ import annotations

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193
_MASK = 0xFFFFFFFF


def fnv_hash(data: bytes | bytearray | memoryview) -> int:
    """Return the 32-bit FNV-1 hash of a block of bytes."""
    result = _FNV_OFFSET
    for byte in bytes(data):
        result = ((result ^ byte) * _FNV_PRIME) & _MASK
    return result


def hash_string(text: str | bytes) -> int:
    """Hash a NUL-terminated name the way symbol names are hashed.

    Bytes are treated as signed characters, so bytes with the high bit set
    are sign-extended before being mixed in. Hashing stops at the first NUL.
    """
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    raw = raw.split(b"\0", 1)[0]
    result = _FNV_OFFSET
    for byte in raw:
        if byte & 0x80:
            byte |= 0xFFFFFF00
        result = ((result ^ byte) * _FNV_PRIME) & _MASK
    return result