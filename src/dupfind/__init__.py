from .finder import DuplicateFinder
from .settings import ScanSettings
from .index.bucket import BucketIndex
from .index.record import Comparison, FileRecord, IneligibleFile, MetadataSnapshot
from .report.group_builder import GroupBuilder, build_groups
from .report.store import DuplicateGroup, Report, ReportEntry, ReportWriter, read_report
from .utils.processor import HashFailure, Processor, FileMetadataDifferenceType
from .utils.walker import DirectoryWalker, WalkPolicy
