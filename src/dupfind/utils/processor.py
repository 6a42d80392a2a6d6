import datetime
import logging
import os
import pathlib
import stat
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum
from typing import BinaryIO, Iterator

import mmh3

logger = logging.getLogger(__name__)

BLOCK_SIZE = 4096
CHUNK_SIZE = 64 * 1024
DEFAULT_SEED = 42


@dataclass(frozen=True)
class HashFailure:
    """Marker for a digest that could not be computed.

    All failures compare equal and hash alike, so files whose digest failed still land in a common bucket and are
    left to the byte-for-byte comparison to sort out.
    """
    reason: str = field(default='', compare=False)


Digest = int | HashFailure


@contextmanager
def open_for_read(path: pathlib.Path) -> Iterator[BinaryIO]:
    """Open a file for binary reading without updating its access time where possible.

    ``O_NOATIME`` is only honoured for the file owner (or a privileged process); otherwise the file is opened
    normally.
    """
    flags = os.O_RDONLY | getattr(os, 'O_BINARY', 0)
    noatime = getattr(os, 'O_NOATIME', 0)

    fd = -1
    if noatime:
        try:
            fd = os.open(path, flags | noatime)
        except PermissionError:
            fd = -1
    if fd < 0:
        fd = os.open(path, flags)

    with os.fdopen(fd, 'rb', buffering=0) as f:
        yield f


def read_exactly(f: BinaryIO, size: int) -> bytes:
    """Read up to size bytes, stopping short only at end of file."""
    parts = []
    remaining = size
    while remaining > 0:
        data = f.read(remaining)
        if not data:
            break
        parts.append(data)
        remaining -= len(data)
    return b''.join(parts)


def is_regular_file(path: pathlib.Path) -> bool:
    try:
        return stat.S_ISREG(path.stat().st_mode)
    except OSError:
        return False


def file_size(path: pathlib.Path) -> int | None:
    try:
        return path.stat().st_size
    except OSError:
        return None


class FileMetadataDifferenceType(StrEnum):
    ATIME = 'atime'
    CTIME = 'ctime'
    MTIME = 'mtime'
    SIZE = 'size'


class FileMetadataDifference:
    def __init__(self, type: str, a, b):
        self.type = FileMetadataDifferenceType(type)
        self.a = a
        self.b = b

    def __repr__(self):
        return f"FileMetadataDifference({self.type.value!r}, {self.a!r}, {self.b!r})"

    def description(self, tag_a: str | None = None, tag_b: str | None = None, *, tz=None):
        label_a = "" if tag_a is None else f" ({tag_a})"
        label_b = "" if tag_b is None else f" ({tag_b})"
        if self.type in ["atime", "ctime", "mtime"]:
            if tz is None:
                tz = datetime.UTC
            ts_a = datetime.datetime.fromtimestamp(self.a, tz=tz).strftime("%Y-%m-%dT%H:%M:%SZ")
            ts_b = datetime.datetime.fromtimestamp(self.b, tz=tz).strftime("%Y-%m-%dT%H:%M:%SZ")
            return f"{self.type}: {ts_a}{label_a} != {ts_b}{label_b}"
        else:
            return f"{self.type}: {self.a}{label_a} != {self.b}{label_b}"


class Processor:
    """Synchronous backend for the reads a scan performs: first blocks, digests and content comparison.

    Every operation opens the file, reads what it needs through a fixed-size buffer and closes it again; no handle
    outlives a call. Digests are 128-bit MurmurHash3 values with a fixed seed, so they are stable across runs.
    """

    def __init__(self, seed: int = DEFAULT_SEED, block_size: int = BLOCK_SIZE, chunk_size: int = CHUNK_SIZE):
        self._seed = seed
        self._block_size = block_size
        self._chunk_size = chunk_size

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def read_first_block(self, path: pathlib.Path) -> bytes | None:
        """Read the first block of a file.

        :return: Up to block_size bytes, or None if the file could not be read."""
        logger.debug(f"Reading first block of: {path}")
        try:
            with open_for_read(path) as f:
                return read_exactly(f, self._block_size)
        except OSError as e:
            logger.debug(f"Failed to read first block of {path}: {e}")
            return None

    def hash_block(self, block: bytes | None) -> Digest:
        """Digest of a first block, zero-padded to the full block size."""
        if block is None:
            return HashFailure('first block unavailable')
        return mmh3.hash128(block.ljust(self._block_size, b'\0'), seed=self._seed, signed=False)

    def hash_file(self, path: pathlib.Path) -> Digest:
        """Digest of the entire content of a file, streamed in chunks."""
        logger.debug(f"Starting hash computation for: {path}")
        hasher = mmh3.mmh3_x64_128(seed=self._seed)
        try:
            with open_for_read(path) as f:
                while chunk := f.read(self._chunk_size):
                    hasher.update(chunk)
        except OSError as e:
            logger.warning(f"Failed to hash {path}: {e}")
            return HashFailure(str(e))
        result = hasher.uintdigest()
        logger.debug(f"Completed hash computation for: {path}")
        return result

    def compare_content(self, a: pathlib.Path, b: pathlib.Path) -> bool | None:
        """Compare content of two files byte by byte.

        Both files are re-statted after the comparison; a size that moved while the files were being read makes the
        outcome untrustworthy.

        :return: True if two files are equal, False if they differ, None if the comparison could not be completed."""
        logger.debug(f"Starting content comparison: {a} vs {b}")

        size_a = file_size(a)
        size_b = file_size(b)
        if size_a is None or size_b is None:
            return None
        if size_a != size_b:
            return False

        result: bool | None = True
        try:
            with open_for_read(a) as fa, open_for_read(b) as fb:
                while True:
                    chunk_a = read_exactly(fa, self._chunk_size)
                    chunk_b = read_exactly(fb, self._chunk_size)
                    if len(chunk_a) != len(chunk_b) or chunk_a != chunk_b:
                        result = False
                        break
                    if not chunk_a:
                        break
        except OSError as e:
            logger.warning(f"Content comparison failed: {a} vs {b}: {e}")
            return None

        if file_size(a) != size_a or file_size(b) != size_b:
            logger.info(f"File size changed during comparison: {a} vs {b}")
            return None

        logger.debug(f"Completed content comparison: {a} vs {b} (equal={result})")
        return result
