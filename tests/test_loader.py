from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hash40 import Hash40, LoaderConf, default_label_map
from hash40.errors import (
    HexParseError,
    InvalidHashError,
    LabelFileError,
    MissingColumnError,
    MissingPrefixError,
)
from hash40.label_map import LabelMap, LabelMode
from hash40.loader import (
    load_custom_labels,
    load_labels,
    read_custom_labels,
    read_labels,
)


def test_read_labels(clean_file: Path) -> None:
    clean_file.write_text("foo\nbar\r\n\nfighter/mario\n", encoding="utf-8")
    assert read_labels(clean_file) == ["foo", "bar", "fighter/mario"]


def test_read_labels_encoding(clean_file: Path) -> None:
    clean_file.write_bytes("caf\xe9\n".encode("latin-1"))
    assert read_labels(clean_file, LoaderConf(encoding="latin-1")) == ["caf\xe9"]


def test_read_labels_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_labels(tmp_path / "missing.txt")


def test_read_custom_labels(clean_file: Path) -> None:
    clean_file.write_text(
        "0x0000000001,one\n0x038c736521,foo, with a comma\n", encoding="utf-8"
    )
    assert read_custom_labels(clean_file) == [
        (1, "one"),
        (Hash40.new("foo"), "foo, with a comma"),
    ]


def test_read_custom_labels_missing_column(clean_file: Path) -> None:
    clean_file.write_text("0x0000000001,one\n0x0000000002\n", encoding="utf-8")
    with pytest.raises(MissingColumnError) as exc_info:
        read_custom_labels(clean_file)
    assert exc_info.value.line_number == 2
    assert exc_info.value.line == "0x0000000002"
    assert exc_info.value.path == clean_file


@pytest.mark.parametrize(
    "line, cause", [("0xZZ,bad", HexParseError), ("12,bad", MissingPrefixError)]
)
def test_read_custom_labels_invalid_hash(clean_file: Path, line, cause) -> None:
    clean_file.write_text(f"{line}\n", encoding="utf-8")
    with pytest.raises(InvalidHashError) as exc_info:
        read_custom_labels(clean_file)
    assert exc_info.value.line_number == 1
    assert isinstance(exc_info.value.__cause__, cause)


def test_read_custom_labels_lenient(clean_file: Path, caplog) -> None:
    clean_file.write_text(
        "0x0000000001,one\nbroken\n0xZZ,bad\n0x0000000002,two\n", encoding="utf-8"
    )
    with caplog.at_level(logging.WARNING, logger="hash40.loader"):
        pairs = read_custom_labels(clean_file, LoaderConf(lenient=True))
    assert pairs == [(1, "one"), (2, "two")]
    assert len(caplog.records) == 2


def test_label_file_errors_share_a_base() -> None:
    assert issubclass(MissingColumnError, LabelFileError)
    assert issubclass(InvalidHashError, LabelFileError)


def test_load_labels(clean_file: Path, labels: LabelMap) -> None:
    clean_file.write_text("foo\nbar\n", encoding="utf-8")
    assert load_labels(clean_file, labels) is labels
    assert labels.mode is LabelMode.PURE
    assert labels.label_of(Hash40.new("foo")) == "foo"

    clean_file.write_text("baz\n", encoding="utf-8")
    load_labels(clean_file, labels, add=True)
    assert labels.label_of(Hash40.new("foo")) == "foo"
    assert labels.label_of(Hash40.new("baz")) == "baz"

    load_labels(clean_file, labels)
    assert labels.label_of(Hash40.new("foo")) is None


def test_load_custom_labels(clean_file: Path, labels: LabelMap) -> None:
    clean_file.write_text("0x0000000001,one\n", encoding="utf-8")
    load_custom_labels(clean_file, labels)
    assert labels.mode is LabelMode.CUSTOM
    assert labels.hash_of("one") == 1

    clean_file.write_text("0x0000000002,two\n", encoding="utf-8")
    load_custom_labels(clean_file, labels, add=True)
    assert labels.hash_of("one") == 1
    assert labels.hash_of("two") == 2


def test_load_custom_labels_error_keeps_map(clean_file: Path, labels: LabelMap) -> None:
    labels.set_labels(["foo"])
    clean_file.write_text("0x0000000001,one\nbroken\n", encoding="utf-8")
    with pytest.raises(MissingColumnError):
        load_custom_labels(clean_file, labels)
    assert labels.mode is LabelMode.PURE
    assert labels.label_of(Hash40.new("foo")) == "foo"


def test_load_labels_into_process_map(clean_file: Path) -> None:
    clean_file.write_text("foo\n", encoding="utf-8")
    assert load_labels(clean_file) is default_label_map()
    assert str(Hash40.new("foo")) == "foo"
