from typing import Literal, NamedTuple

VERSION = "0.1.0"

# Byte order of a packed hash is chosen by the data format, never here
ByteOrder = Literal["little", "big"]

# Bytes used by a Hash40 slot in binary data, with or without metadata
HASH40_BYTES = 8

# Low 32 bits hold the CRC32 of the label
CRC_MASK = 0xFFFF_FFFF

# Bits 32-39 hold the label length in bytes, modulo 256
LENGTH_SHIFT = 32
LENGTH_MASK = 0xFF

# The 40 significant bits of a hash
HASH40_MASK = 0xFF_FFFF_FFFF

# High bits of a slot reused by some formats for metadata
META_SHIFT = 40
META_MASK = 0xFFFF_FFFF

U64_MASK = 0xFFFF_FFFF_FFFF_FFFF

HEX_PREFIX = "0x"

# Canonical text of an unresolved hash: 0x followed by 10 hex digits
HEX_DIGITS = 10

# Separator spliced in by Hash40.join_path
PATH_SEPARATOR = "/"

# Size of the memo used by hash40() for literal hashing
LITERAL_CACHE_SIZE = 4096


class LoaderConf(NamedTuple):
    lenient: bool = False  # Skip malformed custom label lines instead of raising
    encoding: str = "utf-8"  # Text encoding of label files
