from __future__ import annotations

import abc

from beartype import beartype

from .classes import Hash40
from .const import HASH40_BYTES, HASH40_MASK, META_SHIFT, ByteOrder
from .label_map import LabelMap
from .stream import pack_meta


class Serializer(metaclass=abc.ABCMeta):
    __slots__ = []

    @beartype
    @abc.abstractmethod
    def serialize(self, obj: object) -> bytes | str:
        """Serialize a hash."""

    @beartype
    @abc.abstractmethod
    def deserialize(self, data: bytes | str) -> object:
        """Create a hash from its serialized form."""


class Hash40Serializer(Serializer):
    __slots__ = ["byteorder"]

    @beartype
    def __init__(self, byteorder: ByteOrder) -> None:
        self.byteorder = byteorder

    @beartype
    def serialize(self, obj: int) -> bytes:
        return int(obj).to_bytes(HASH40_BYTES, self.byteorder)

    @beartype
    def deserialize(self, data: bytes | bytearray) -> Hash40:
        if len(data) != HASH40_BYTES:
            raise ValueError(f"Expected {HASH40_BYTES} bytes, got {len(data)}")
        return Hash40(int.from_bytes(data, self.byteorder) & HASH40_MASK)

    @beartype
    def __repr__(self) -> str:
        return f"Hash40Serializer({self.byteorder!r})"


class MetaSerializer(Serializer):
    """Hash and metadata sharing one 8 byte slot."""

    __slots__ = ["byteorder"]

    @beartype
    def __init__(self, byteorder: ByteOrder) -> None:
        self.byteorder = byteorder

    @beartype
    def serialize(self, obj: tuple[int, int]) -> bytes:
        hash_, meta = obj
        return pack_meta(hash_, meta).to_bytes(HASH40_BYTES, self.byteorder)

    @beartype
    def deserialize(self, data: bytes | bytearray) -> tuple[Hash40, int]:
        if len(data) != HASH40_BYTES:
            raise ValueError(f"Expected {HASH40_BYTES} bytes, got {len(data)}")
        raw = int.from_bytes(data, self.byteorder)
        return Hash40(raw & HASH40_MASK), raw >> META_SHIFT

    @beartype
    def __repr__(self) -> str:
        return f"MetaSerializer({self.byteorder!r})"


class LabelSerializer(Serializer):
    """Textual form used by human readable formats.

    The output depends on the labels known at the time, so text only reads
    back to the same hash while the label map is unchanged.
    """

    __slots__ = ["labels"]

    @beartype
    def __init__(self, labels: LabelMap | None = None) -> None:
        self.labels = labels

    @beartype
    def serialize(self, obj: int) -> str:
        return Hash40(obj).to_label(self.labels)

    @beartype
    def deserialize(self, data: str) -> Hash40:
        return Hash40.from_label(data, self.labels)

    @beartype
    def __repr__(self) -> str:
        return f"LabelSerializer({self.labels!r})"
