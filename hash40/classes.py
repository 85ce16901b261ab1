from __future__ import annotations

import re
from threading import RLock
from typing import TYPE_CHECKING

from beartype import beartype
from cachetools import LRUCache, cached

from . import algorithm
from .const import (
    CRC_MASK,
    HASH40_MASK,
    HEX_DIGITS,
    HEX_PREFIX,
    LENGTH_MASK,
    LENGTH_SHIFT,
    LITERAL_CACHE_SIZE,
    PATH_SEPARATOR,
    U64_MASK,
)
from .errors import HexParseError, LabelNotFoundError, MissingPrefixError

if TYPE_CHECKING:
    from .label_map import LabelMap

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


class Hash40(int):
    """A label hashed with the hash40 algorithm.

    The low 32 bits are the CRC32 of the label and bits 32-39 its length in
    bytes. Binary formats may store metadata above bit 39, which is why the
    value is allowed to span a full 64 bits.
    """

    __slots__ = ()

    def __new__(cls, value: int = 0) -> Hash40:
        if not 0 <= value <= U64_MASK:
            raise ValueError(f"Hash40 out of range: {value:#x}")
        return super().__new__(cls, value)

    @classmethod
    @beartype
    def new(cls, string: str) -> Hash40:
        """Hash a string. The label map is not consulted."""
        return cls(algorithm.hash40(string))

    @classmethod
    @beartype
    def from_hex_str(cls, text: str) -> Hash40:
        if not text.startswith(HEX_PREFIX):
            raise MissingPrefixError(text)
        digits = text[len(HEX_PREFIX) :]
        if not _HEX_RE.fullmatch(digits):
            raise HexParseError(text)
        value = int(digits, 16)
        if value > U64_MASK:
            raise HexParseError(text)
        return cls(value)

    @classmethod
    def from_label(cls, label: str, labels: LabelMap | None = None) -> Hash40:
        """Resolve text that is either a hex hash or a label.

        Text starting with "0x" must be a valid hash, it is never looked up
        as a label. Anything else goes through the label map.
        """
        try:
            return cls.from_hex_str(label)
        except MissingPrefixError:
            pass
        if labels is None:
            labels = _default_labels()
        hash_ = labels.hash_of(label)
        if hash_ is None:
            raise LabelNotFoundError(label)
        return cls(hash_)

    def to_label(self, labels: LabelMap | None = None) -> str:
        """Label of the hash, or its canonical hex text when unknown."""
        if labels is None:
            labels = _default_labels()
        label = labels.label_of(self)
        if label is None:
            return self.hex_str
        return label

    @property
    def hex_str(self) -> str:
        """Canonical text form, metadata bits excluded."""
        return f"{HEX_PREFIX}{int(self) & HASH40_MASK:0{HEX_DIGITS}x}"

    @property
    def crc(self) -> int:
        return int(self) & CRC_MASK

    @property
    def str_len(self) -> int:
        return (int(self) >> LENGTH_SHIFT) & LENGTH_MASK

    def concat(self, other: int) -> Hash40:
        """Hash of the two labels joined, without knowing either label."""
        return Hash40(algorithm.hash40_concat(self, other))

    def concat_str(self, other: str) -> Hash40:
        return self.concat(hash40(other))

    def join_path(self, other: int) -> Hash40:
        return self.concat(SEPARATOR).concat(other)

    def diff(self, other: Hash40) -> Hash40 | None:
        if self == other:
            return None
        return other

    def apply(self, delta: Hash40 | None) -> Hash40:
        if delta is None:
            return self
        return delta

    def __repr__(self) -> str:
        return f"Hash40({HEX_PREFIX}{int(self):0{HEX_DIGITS}x})"

    def __str__(self) -> str:
        return self.to_label()


def _default_labels() -> LabelMap:
    # Deferred, label_map imports this module
    from .label_map import default_label_map

    return default_label_map()


@cached(cache=LRUCache(maxsize=LITERAL_CACHE_SIZE), lock=RLock())
@beartype
def hash40(string: str) -> Hash40:
    """Hash a string, memoized for labels that are hashed over and over."""
    return Hash40.new(string)


SEPARATOR = Hash40.new(PATH_SEPARATOR)
