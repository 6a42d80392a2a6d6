import logging
import os
from pathlib import Path
from typing import IO

from .index.bucket import BucketIndex
from .report.group_builder import GroupBuilder
from .report.store import Report, ReportWriter
from .settings import SETTING_LOGGING_PATH, ScanSettings
from .utils.processor import Processor
from .utils.walker import DirectoryWalker, WalkPolicy

logger = logging.getLogger(__name__)


class DuplicateFinder:
    """Workflow for finding duplicate files under a root directory.

    A scan runs in one synchronous pass: the walker enrolls every distinct regular file into a bucket index keyed by
    (partial hash, size), the group builder verifies each bucket holding more than one candidate, and the resulting
    report is written once at the end.
    """

    def __init__(
            self,
            root: str | os.PathLike,
            processor: Processor | None = None,
            settings: ScanSettings | None = None):
        """Initialize finder for a scan root.

        Args:
            root: Directory to scan; converted to an absolute path
            processor: File processing backend for reading, hashing and comparison
            settings: Scan settings; loaded from the root when omitted

        Raises:
            FileNotFoundError: Root directory does not exist
            NotADirectoryError: Root path is not a directory
        """
        root_path = Path(os.path.normpath(Path(root).absolute()))
        if not root_path.exists():
            raise FileNotFoundError(f"Directory does not exist: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        self._root = root_path
        self._processor = processor if processor is not None else Processor()
        self._settings = settings if settings is not None else ScanSettings(root_path)
        self._policy: WalkPolicy = self._settings.walk_policy()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings(self) -> ScanSettings:
        return self._settings

    def configure_logging_from_settings(self) -> bool:
        """Configure logging from settings if a log path is specified.

        Preserves the current logging level if already configured. Only changes the log file path.

        Returns:
            True if logging was configured, False otherwise
        """
        log_path_setting = self._settings.get(SETTING_LOGGING_PATH)
        if log_path_setting:
            current_level = logging.root.level if logging.root.level != logging.NOTSET else logging.INFO

            for handler in logging.root.handlers[:]:
                logging.root.removeHandler(handler)

            logging.basicConfig(
                filename=str(log_path_setting),
                level=current_level,
                format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            return True
        return False

    def index(self) -> tuple[BucketIndex, DirectoryWalker]:
        """Enroll every eligible file under the root into a fresh bucket index."""
        walker = DirectoryWalker(self._root, self._processor, self._policy)
        index = walker.populate(BucketIndex())
        stats = walker.statistics
        logger.info(
            f"Enrolled {stats.files_enrolled} files into {len(index)} buckets "
            f"({stats.directories_visited} directories visited, {stats.directories_skipped} skipped, "
            f"{stats.files_skipped} files skipped)")
        return index, walker

    def scan(self) -> Report:
        """Find duplicate groups under the root."""
        logger.info(f"Searching for duplicates in: {self._root}")
        index, _ = self.index()
        report = GroupBuilder(self._root).build(index)
        logger.info(f"Found {len(report)} duplicate groups")
        return report

    def process(self, output: IO[str]) -> Report:
        """Scan the root and write the report to an open text stream."""
        report = self.scan()
        ReportWriter(output).write(report)
        return report
