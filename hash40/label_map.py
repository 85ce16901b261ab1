"""Resolution of hashes back to the labels they were computed from.

A :class:`LabelMap` is in one of three modes. ``UNSET`` knows nothing.
``PURE`` maps hashes to labels that were hashed to obtain them, so the
forward direction can always be recomputed. ``CUSTOM`` pairs hashes and
labels arbitrarily in both directions, which allows naming hashes whose
real label is unknown; every label therefore has to be present to resolve.

A single lock serializes readers and writers. Replacing the map builds the
new one first and only holds the lock for the swap.
"""

from __future__ import annotations

import enum
import threading
from collections.abc import Iterable
from logging import getLogger

from beartype import beartype

from .classes import Hash40

logger = getLogger(__name__)


class LabelMode(enum.Enum):
    UNSET = 1
    PURE = 2
    CUSTOM = 3


def _bimap_insert(
    labels: dict[Hash40, str], hashes: dict[str, Hash40], hash_: Hash40, label: str
):
    """Insert a pair, evicting any pair sharing either side."""
    old_label = labels.pop(hash_, None)
    if old_label is not None:
        del hashes[old_label]
    old_hash = hashes.pop(label, None)
    if old_hash is not None:
        del labels[old_hash]
    labels[hash_] = label
    hashes[label] = hash_


def _pure_insert(
    labels: dict[Hash40, str], hashes: dict[str, Hash40], hash_: Hash40, label: str
):
    """Insert a pair, keeping a reverse entry when the label is not its own hash."""
    previous = labels.get(hash_)
    if previous is not None and previous != label:
        logger.debug("%r: %r replaces %r", hash_, label, previous)
        if hashes.get(previous) == hash_:
            del hashes[previous]
    labels[hash_] = label
    if Hash40.new(label) == hash_:
        hashes.pop(label, None)
    else:
        hashes[label] = hash_


class LabelMap:
    __slots__ = ["strict", "_lock", "_mode", "_labels", "_hashes"]

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._lock = threading.Lock()
        self._mode = LabelMode.UNSET
        self._labels: dict[Hash40, str] = {}
        # Reverse side; in PURE mode only for labels paired with a foreign hash
        self._hashes: dict[str, Hash40] = {}

    @property
    def mode(self) -> LabelMode:
        with self._lock:
            return self._mode

    @beartype
    def set_labels(self, labels: Iterable[str]):
        new_labels: dict[Hash40, str] = {}
        new_hashes: dict[str, Hash40] = {}
        for label in labels:
            _pure_insert(new_labels, new_hashes, Hash40.new(label), label)
        with self._lock:
            self._mode = LabelMode.PURE
            self._labels = new_labels
            self._hashes = new_hashes
        logger.info("Installed %d labels", len(new_labels))

    @beartype
    def set_custom_labels(self, pairs: Iterable[tuple[int, str]]):
        new_labels: dict[Hash40, str] = {}
        new_hashes: dict[str, Hash40] = {}
        for hash_, label in pairs:
            _bimap_insert(new_labels, new_hashes, Hash40(hash_), label)
        with self._lock:
            self._mode = LabelMode.CUSTOM
            self._labels = new_labels
            self._hashes = new_hashes
        logger.info("Installed %d custom labels", len(new_labels))

    @beartype
    def add_labels(self, labels: Iterable[str]):
        pairs = [(Hash40.new(label), label) for label in labels]
        with self._lock:
            if self._mode is LabelMode.UNSET:
                self._mode = LabelMode.PURE
            self._insert(pairs)

    @beartype
    def add_custom_labels(self, pairs: Iterable[tuple[int, str]]):
        pairs = [(Hash40(hash_), label) for hash_, label in pairs]
        with self._lock:
            if self._mode is LabelMode.UNSET:
                self._mode = LabelMode.CUSTOM
            self._insert(pairs)

    def _insert(self, pairs: list[tuple[Hash40, str]]):
        """Insert into the active map. The lock must be held."""
        if self._mode is LabelMode.PURE:
            for hash_, label in pairs:
                _pure_insert(self._labels, self._hashes, hash_, label)
        elif self._mode is LabelMode.CUSTOM:
            for hash_, label in pairs:
                _bimap_insert(self._labels, self._hashes, hash_, label)
        else:
            assert False

    @beartype
    def label_of(self, hash_: int) -> str | None:
        with self._lock:
            if self._mode is LabelMode.UNSET:
                return None
            return self._labels.get(hash_)

    @beartype
    def hash_of(self, label: str) -> Hash40 | None:
        """Hash of a label, or None when the label cannot be resolved.

        An explicit reverse entry wins. Outside of CUSTOM mode and strict
        lookups, a label that was never loaded still resolves to its
        computed hash.
        """
        with self._lock:
            if self._mode is LabelMode.CUSTOM or label in self._hashes:
                return self._hashes.get(label)
            hash_ = Hash40.new(label)
            if self._mode is LabelMode.PURE and self._labels.get(hash_) == label:
                return hash_
            if self.strict:
                return None
            return hash_

    def clear(self):
        with self._lock:
            self._labels.clear()
            self._hashes.clear()

    def snapshot(self) -> dict[Hash40, str]:
        with self._lock:
            return dict(self._labels)

    def __len__(self) -> int:
        with self._lock:
            return len(self._labels)

    def __contains__(self, label: object) -> bool:
        """Whether the label was loaded, fallback hashing aside."""
        if not isinstance(label, str):
            return False
        with self._lock:
            if self._mode is LabelMode.CUSTOM or label in self._hashes:
                return label in self._hashes
            return self._labels.get(Hash40.new(label)) == label

    def __repr__(self):
        return f"<LabelMap: {self.mode.name} strict={self.strict}>"


_LABELS: LabelMap | None = None
_LABELS_LOCK = threading.Lock()


def default_label_map() -> LabelMap:
    """The process-wide label map, created on first use."""
    global _LABELS
    with _LABELS_LOCK:
        if _LABELS is None:
            _LABELS = LabelMap()
        return _LABELS
