"""Checksum and packing arithmetic behind Hash40.

The checksum is the IEEE CRC32 used by zlib. Changing the variant would
silently invalidate every hash already stored in binary data, so everything
in the package goes through this module.

Concatenation relies on CRC32 being linear over GF(2): the CRC of ``a + b``
is the CRC of ``a`` shifted by ``len(b)`` zero bytes, xored with the CRC of
``b``. The shift is a multiplication by ``x**(8 * len(b))`` modulo the CRC
polynomial, computed with the same squaring table zlib uses for
``crc32_combine``.
"""

from __future__ import annotations

import zlib
from threading import RLock

from cachetools import LRUCache, cached

from .const import CRC_MASK, LENGTH_MASK, LENGTH_SHIFT

# Reflected IEEE polynomial
POLYNOMIAL = 0xEDB88320

# x**0 in the reflected bit order
_ONE = 1 << 31


def _multmodp(a: int, b: int) -> int:
    """Multiply two polynomials modulo the CRC polynomial. ``a`` must be non-zero."""
    m = _ONE
    p = 0
    while True:
        if a & m:
            p ^= b
            if not a & (m - 1):
                break
        m >>= 1
        b = (b >> 1) ^ POLYNOMIAL if b & 1 else b >> 1
    return p


def _x2n_table() -> tuple[int, ...]:
    # table[k] == x**(2**k) mod p
    p = 1 << 30
    table = [p]
    for _ in range(1, 32):
        p = _multmodp(p, p)
        table.append(p)
    return tuple(table)


_X2N_TABLE = _x2n_table()


def _x2nmodp(n: int, k: int) -> int:
    """Return x**(n * 2**k) modulo the CRC polynomial."""
    p = _ONE
    while n:
        if n & 1:
            p = _multmodp(_X2N_TABLE[k & 31], p)
        n >>= 1
        k += 1
    return p


# Lengths stored in a hash never exceed one byte
@cached(cache=LRUCache(maxsize=LENGTH_MASK + 1), lock=RLock())
def shift_operator(length: int) -> int:
    """Operator moving a CRC past ``length`` zero bytes."""
    return _x2nmodp(length, 3)


def crc32(data: bytes) -> int:
    return zlib.crc32(data) & CRC_MASK


def crc32_combine(crc1: int, crc2: int, length2: int) -> int:
    """CRC of the concatenation of two byte strings from their CRCs."""
    return _multmodp(shift_operator(length2), crc1) ^ crc2


def pack(crc: int, length: int) -> int:
    return ((length & LENGTH_MASK) << LENGTH_SHIFT) | (crc & CRC_MASK)


def hash40(string: str) -> int:
    data = string.encode("utf-8")
    return pack(crc32(data), len(data))


def hash40_concat(first: int, second: int) -> int:
    """Combine two packed hashes as if their labels had been hashed together.

    Exact as long as the second label is shorter than 256 bytes, since only
    the truncated length survives in the hash.
    """
    length1 = (first >> LENGTH_SHIFT) & LENGTH_MASK
    length2 = (second >> LENGTH_SHIFT) & LENGTH_MASK
    crc = crc32_combine(first & CRC_MASK, second & CRC_MASK, length2)
    return pack(crc, length1 + length2)
