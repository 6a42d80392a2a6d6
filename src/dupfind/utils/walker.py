import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple

from ..index.bucket import BucketIndex
from ..index.record import FileRecord, IneligibleFile
from .processor import Processor

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_PATH_SUBSTRINGS = ('xzfs_fuse_tmp',)


class WalkPolicy(NamedTuple):
    """Policy controlling which entries a traversal skips.

    Attributes:
        excluded_path_substrings: Directories whose path contains any of these strings are not listed
        hidden_prefix: Entries whose name starts with this prefix are neither recorded nor descended into
    """
    excluded_path_substrings: tuple[str, ...] = DEFAULT_EXCLUDED_PATH_SUBSTRINGS
    hidden_prefix: str = '.'

    def excludes_directory(self, path: Path) -> bool:
        path_str = str(path)
        return any(s in path_str for s in self.excluded_path_substrings)

    def excludes_name(self, name: str) -> bool:
        return name.startswith(self.hidden_prefix)


@dataclass
class WalkStatistics:
    directories_visited: int = 0
    directories_skipped: int = 0
    files_enrolled: int = 0
    files_skipped: int = 0


class DirectoryWalker:
    """Traverse a directory tree and enroll every distinct regular file as a candidate.

    Traversal uses an explicit stack of pending directories. Symbolic links to directories are followed, and every
    directory is listed at most once, keyed by (device, inode), so a link back into the tree is not walked again.
    Files are identified the same way, so a file reachable through several hard links (or through a symbolic link
    inside the tree) is enrolled once, under the first path found.

    The sets of seen directories and files belong to the walker instance; a fresh walker starts from scratch.
    """

    def __init__(self, root: Path, processor: Processor, policy: WalkPolicy | None = None):
        self._root = root
        self._processor = processor
        self._policy = policy if policy is not None else WalkPolicy()
        self._seen_directories: set[tuple[int, int]] = set()
        self._seen_files: set[tuple[int, int]] = set()
        self.statistics = WalkStatistics()

    @property
    def root(self) -> Path:
        return self._root

    def walk(self) -> Iterator[FileRecord]:
        """Yield a record for each eligible, not yet seen file under the root."""
        pending = [self._root]

        while pending:
            directory = pending.pop()

            if self._policy.excludes_directory(directory):
                logger.debug(f"Skipping excluded directory: {directory}")
                self.statistics.directories_skipped += 1
                continue

            try:
                st = directory.stat()
            except OSError as e:
                logger.warning(f"Cannot access directory {directory}: {e}")
                self.statistics.directories_skipped += 1
                continue

            identity = (st.st_dev, st.st_ino)
            if identity in self._seen_directories:
                continue
            self._seen_directories.add(identity)

            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError as e:
                logger.warning(f"Cannot list directory {directory}: {e}")
                self.statistics.directories_skipped += 1
                continue

            self.statistics.directories_visited += 1

            for entry in entries:
                if self._policy.excludes_name(entry.name):
                    continue

                entry_path = Path(entry.path)
                try:
                    is_directory = entry.is_dir()
                except OSError:
                    is_directory = False

                if is_directory:
                    pending.append(entry_path)
                    continue

                record = self._enroll(entry_path)
                if record is not None:
                    yield record

    def _enroll(self, path: Path) -> FileRecord | None:
        try:
            st = path.stat()
        except OSError as e:
            logger.debug(f"Cannot resolve inode of {path}: {e}")
            self.statistics.files_skipped += 1
            return None

        if not stat.S_ISREG(st.st_mode):
            return None

        identity = (st.st_dev, st.st_ino)
        if identity in self._seen_files:
            logger.debug(f"Skipping already enrolled inode: {path}")
            self.statistics.files_skipped += 1
            return None
        self._seen_files.add(identity)

        try:
            record = FileRecord.capture(path, self._processor)
        except IneligibleFile as e:
            logger.debug(f"Skipping ineligible file: {e}")
            self.statistics.files_skipped += 1
            return None

        self.statistics.files_enrolled += 1
        return record

    def populate(self, index: BucketIndex) -> BucketIndex:
        """Walk the tree and insert every enrolled record into the index."""
        for record in self.walk():
            index.insert(record)
        return index
