"""Bulk decoding of packed hash tables with numpy."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from .classes import Hash40
from .const import HASH40_MASK, META_MASK, META_SHIFT, ByteOrder


@beartype
def slot_dtype(byteorder: ByteOrder) -> np.dtype:
    """dtype of one 8 byte slot in the given byte order."""
    return np.dtype("<u8" if byteorder == "little" else ">u8")


def _slots(buffer: bytes | bytearray | memoryview, byteorder: ByteOrder):
    return np.frombuffer(buffer, dtype=slot_dtype(byteorder)).astype(np.uint64)


def _as_u64(values) -> NDArray[np.uint64]:
    if not isinstance(values, np.ndarray):
        values = [int(value) for value in values]
    return np.asarray(values, dtype=np.uint64)


@beartype
def decode_array(
    buffer: bytes | bytearray | memoryview, byteorder: ByteOrder
) -> NDArray[np.uint64]:
    return _slots(buffer, byteorder) & np.uint64(HASH40_MASK)


@beartype
def decode_array_with_meta(
    buffer: bytes | bytearray | memoryview, byteorder: ByteOrder
) -> tuple[NDArray[np.uint64], NDArray[np.uint32]]:
    raw = _slots(buffer, byteorder)
    metas = (raw >> np.uint64(META_SHIFT)).astype(np.uint32)
    return raw & np.uint64(HASH40_MASK), metas


@beartype
def encode_array(
    hashes: Iterable[int] | NDArray[np.uint64],
    byteorder: ByteOrder,
    metas: Iterable[int] | NDArray[np.uint32] | None = None,
) -> bytes:
    values = _as_u64(hashes)
    if metas is not None:
        metas = _as_u64(metas)
        if metas.shape != values.shape:
            raise ValueError("hashes and metas differ in length")
        if (metas > np.uint64(META_MASK)).any():
            raise ValueError("Metadata does not fit in 32 bits")
        values = values | (metas << np.uint64(META_SHIFT))
    return values.astype(slot_dtype(byteorder)).tobytes()


def to_hash40s(array: NDArray[np.uint64]) -> list[Hash40]:
    return [Hash40(int(value)) for value in array]
