"""Loading label files into a label map.

Files are read completely before the label map is touched, so the map's lock
is never held while waiting on I/O.
"""

from __future__ import annotations

from logging import getLogger
from pathlib import Path

from beartype import beartype

from .classes import Hash40
from .const import LoaderConf
from .errors import InvalidHashError, LabelFileError, MissingColumnError, ParseHashError
from .label_map import LabelMap, default_label_map

logger = getLogger(__name__)


def _lines(path: Path, conf: LoaderConf):
    with path.open(encoding=conf.encoding) as f:
        for line_number, line in enumerate(f, 1):
            line = line.rstrip("\r\n")
            if line:
                yield line_number, line


@beartype
def read_labels(path: Path, conf: LoaderConf = LoaderConf()) -> list[str]:
    """Read a label list, one label per line."""
    logger.info("Reading labels from %s", path)
    return [line for _, line in _lines(path, conf)]


def parse_custom_line(path: Path, line_number: int, line: str) -> tuple[Hash40, str]:
    hash_text, sep, label = line.partition(",")
    if not sep:
        raise MissingColumnError(path, line_number, line)
    try:
        hash_ = Hash40.from_hex_str(hash_text)
    except ParseHashError as e:
        raise InvalidHashError(path, line_number, line) from e
    return hash_, label


@beartype
def read_custom_labels(
    path: Path, conf: LoaderConf = LoaderConf()
) -> list[tuple[Hash40, str]]:
    """Read ``0x<hash>,<label>`` lines.

    The first malformed line raises, unless ``conf.lenient`` is set, in which
    case it is logged and skipped.
    """
    logger.info("Reading custom labels from %s", path)
    pairs = []
    for line_number, line in _lines(path, conf):
        try:
            pairs.append(parse_custom_line(path, line_number, line))
        except LabelFileError as e:
            if not conf.lenient:
                raise
            logger.warning("Skipping %s", e)
    return pairs


@beartype
def load_labels(
    path: Path,
    labels: LabelMap | None = None,
    conf: LoaderConf = LoaderConf(),
    add: bool = False,
) -> LabelMap:
    """Install the labels of a label list, replacing the map unless ``add``."""
    if labels is None:
        labels = default_label_map()
    strings = read_labels(path, conf)
    if add:
        labels.add_labels(strings)
    else:
        labels.set_labels(strings)
    return labels


@beartype
def load_custom_labels(
    path: Path,
    labels: LabelMap | None = None,
    conf: LoaderConf = LoaderConf(),
    add: bool = False,
) -> LabelMap:
    if labels is None:
        labels = default_label_map()
    pairs = read_custom_labels(path, conf)
    if add:
        labels.add_custom_labels(pairs)
    else:
        labels.set_custom_labels(pairs)
    return labels
