"""Candidate files and the fingerprints used to compare them."""

import logging
import os
import stat
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from ..utils.processor import Digest, FileMetadataDifference, Processor, is_regular_file

logger = logging.getLogger(__name__)


class IneligibleFile(Exception):
    """Raised when a path cannot be enrolled as a duplicate candidate."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class MetadataSnapshot(NamedTuple):
    """Identity-relevant attributes of a file at one point in time.

    Timestamps are truncated to whole seconds.
    """
    size: int
    atime: int
    mtime: int
    ctime: int
    inode: int
    device: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> 'MetadataSnapshot':
        return cls(st.st_size, int(st.st_atime), int(st.st_mtime), int(st.st_ctime), st.st_ino, st.st_dev)

    def differences(self, other: 'MetadataSnapshot') -> list[FileMetadataDifference]:
        diffs = []
        for kind in ('atime', 'ctime', 'mtime', 'size'):
            ours = getattr(self, kind)
            theirs = getattr(other, kind)
            if ours != theirs:
                diffs.append(FileMetadataDifference(kind, ours, theirs))
        return diffs


class Comparison(Enum):
    """Outcome of comparing two candidates."""
    EQUAL = 'equal'
    DIFFERENT = 'different'
    INDETERMINATE = 'indeterminate'


class FileRecord:
    """A regular file enrolled as a duplicate candidate.

    The metadata snapshot is taken once, when the record is captured. The first block, the partial hash and the
    full hash are read lazily and memoized; each is computed at most once per record.
    """

    def __init__(self, path: Path, snapshot: MetadataSnapshot, processor: Processor):
        self._path = path
        self._snapshot = snapshot
        self._processor = processor

        self._first_block_computed = False
        self._first_block: bytes | None = None
        self._partial_hash_computed = False
        self._partial_hash: Digest | None = None
        self._full_hash_computed = False
        self._full_hash: Digest | None = None

    @classmethod
    def capture(cls, path: Path, processor: Processor) -> 'FileRecord':
        """Snapshot a file's metadata and wrap it in a record.

        Raises:
            IneligibleFile: The path does not exist, is not a regular file, is empty, or has a zero timestamp
        """
        try:
            st = path.stat()
        except OSError as e:
            raise IneligibleFile(path, f"stat failed: {e}") from e

        if not stat.S_ISREG(st.st_mode):
            raise IneligibleFile(path, "not a regular file")

        snapshot = MetadataSnapshot.from_stat(st)
        if snapshot.size == 0:
            raise IneligibleFile(path, "empty file")
        if min(snapshot.atime, snapshot.mtime, snapshot.ctime) == 0:
            raise IneligibleFile(path, "zero timestamp")

        return cls(path, snapshot, processor)

    def __repr__(self):
        return f"FileRecord({str(self._path)!r}, size={self._snapshot.size})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def snapshot(self) -> MetadataSnapshot:
        return self._snapshot

    @property
    def size(self) -> int:
        return self._snapshot.size

    @property
    def inode(self) -> int:
        return self._snapshot.inode

    def first_block(self) -> bytes | None:
        if not self._first_block_computed:
            self._first_block = self._processor.read_first_block(self._path)
            self._first_block_computed = True
        return self._first_block

    def partial_hash(self) -> Digest:
        if not self._partial_hash_computed:
            self._partial_hash = self._processor.hash_block(self.first_block())
            self._partial_hash_computed = True
        assert self._partial_hash is not None
        return self._partial_hash

    def full_hash(self) -> Digest:
        if not self._full_hash_computed:
            self._full_hash = self._processor.hash_file(self._path)
            self._full_hash_computed = True
        assert self._full_hash is not None
        return self._full_hash

    def bucket_key(self) -> tuple[Digest, int]:
        return self.partial_hash(), self.size

    def differences(self) -> list[FileMetadataDifference] | None:
        """Compare the snapshot against the file as it is now.

        Returns:
            List of differences (empty when unchanged), or None if the path no longer resolves to a regular file
        """
        try:
            st = self._path.stat()
        except OSError:
            return None
        if not stat.S_ISREG(st.st_mode):
            return None
        return self._snapshot.differences(MetadataSnapshot.from_stat(st))

    def changed(self) -> bool:
        diffs = self.differences()
        if diffs is None:
            logger.info(f"File vanished or is no longer a regular file: {self._path}")
            return True
        if diffs:
            for diff in diffs:
                logger.info(f"File changed since enrollment: {self._path}: {diff.description('enrolled', 'current')}")
            return True
        return False

    def compare(self, other: 'FileRecord') -> Comparison:
        """Verify whether two records hold the same bytes, cheapest check first."""
        if self._path == other._path:
            return Comparison.EQUAL

        if not is_regular_file(self._path) or not is_regular_file(other._path):
            return Comparison.INDETERMINATE

        if self.size != other.size:
            return Comparison.DIFFERENT

        block = self.first_block()
        other_block = other.first_block()
        if block is None or other_block is None:
            return Comparison.INDETERMINATE
        if block != other_block:
            return Comparison.DIFFERENT

        if self.full_hash() != other.full_hash():
            return Comparison.DIFFERENT

        result = self._processor.compare_content(self._path, other._path)
        if result is None:
            return Comparison.INDETERMINATE
        return Comparison.EQUAL if result else Comparison.DIFFERENT
