from __future__ import annotations

from pathlib import Path


class Hash40Error(Exception):
    """Base class for every error raised by hash40."""


class ParseHashError(Hash40Error, ValueError):
    """Text could not be read as a hexadecimal hash."""


class MissingPrefixError(ParseHashError):
    """The hash text does not begin with "0x"."""

    def __init__(self, text: str):
        super().__init__(f"Missing 0x prefix in {text!r}")
        self.text = text


class HexParseError(ParseHashError):
    """The digits after "0x" are not a valid 64 bit hexadecimal number."""

    def __init__(self, text: str):
        super().__init__(f"Invalid hexadecimal hash {text!r}")
        self.text = text


class LabelNotFoundError(Hash40Error, LookupError):
    def __init__(self, label: str):
        super().__init__(f"Label not found: {label!r}")
        self.label = label


class LabelFileError(Hash40Error):
    """A line of a label file could not be used."""

    def __init__(self, message: str, path: Path, line_number: int, line: str):
        super().__init__(f"{path}:{line_number}: {message}")
        self.path = path
        self.line_number = line_number
        self.line = line


class MissingColumnError(LabelFileError):
    def __init__(self, path: Path, line_number: int, line: str):
        super().__init__("expected 'hash,label'", path, line_number, line)


class InvalidHashError(LabelFileError):
    def __init__(self, path: Path, line_number: int, line: str):
        super().__init__("invalid hash column", path, line_number, line)


class ReachedEndOfFile(Hash40Error, EOFError):
    """Read a stream until its end."""
