from __future__ import annotations

from typing import Protocol, runtime_checkable

from beartype import beartype

from .classes import Hash40
from .const import (
    HASH40_BYTES,
    HASH40_MASK,
    META_MASK,
    META_SHIFT,
    U64_MASK,
    ByteOrder,
)
from .errors import ReachedEndOfFile


@runtime_checkable
class Readable(Protocol):
    def read(self, size: int = -1, /) -> bytes: ...


@runtime_checkable
class Writable(Protocol):
    def write(self, data: bytes, /) -> int: ...


@beartype
def read_exact(stream: Readable, length: int) -> bytes:
    data = bytes()
    while len(data) < length:
        read_data = stream.read(length - len(data))
        if not read_data:
            raise ReachedEndOfFile(
                f"Expected {length} bytes, stream ended after {len(data)}"
            )
        data += read_data
    return data


@beartype
def write_all(stream: Writable, data: bytes):
    length_to_write = len(data)
    written = 0
    while written < length_to_write:
        written += stream.write(data[written:])


@beartype
def read_u64(stream: Readable, byteorder: ByteOrder) -> int:
    return int.from_bytes(read_exact(stream, HASH40_BYTES), byteorder)


@beartype
def read_hash40(stream: Readable, byteorder: ByteOrder) -> Hash40:
    """Read an 8 byte slot, keeping the 40 hash bits."""
    return Hash40(read_u64(stream, byteorder) & HASH40_MASK)


@beartype
def read_hash40_with_meta(
    stream: Readable, byteorder: ByteOrder
) -> tuple[Hash40, int]:
    """Read an 8 byte slot holding a hash and 24 bits of metadata above it."""
    raw = read_u64(stream, byteorder)
    return Hash40(raw & HASH40_MASK), raw >> META_SHIFT


@beartype
def write_hash40(stream: Writable, hash_: int, byteorder: ByteOrder):
    write_all(stream, int(hash_).to_bytes(HASH40_BYTES, byteorder))


@beartype
def write_hash40_with_meta(
    stream: Writable, hash_: int, meta: int, byteorder: ByteOrder
):
    """Write a hash with metadata in the high bits of its slot.

    The hash must not carry data above bit 39, it would be or-ed with the
    metadata. Metadata above 24 bits is cut off by the 64 bit slot.
    """
    write_all(stream, pack_meta(hash_, meta).to_bytes(HASH40_BYTES, byteorder))


@beartype
def pack_meta(hash_: int, meta: int) -> int:
    if not 0 <= meta <= META_MASK:
        raise ValueError(f"Metadata does not fit in 32 bits: {meta}")
    return (int(hash_) | (meta << META_SHIFT)) & U64_MASK
