import logging
from pathlib import Path

from ..index.bucket import BucketIndex
from ..index.record import Comparison, FileRecord
from .store import DuplicateGroup, Report

logger = logging.getLogger(__name__)


class GroupBuilder:
    """Partition candidate buckets into groups of verified duplicates.

    Each bucket is processed in a single pass. The first unchecked record that is still unchanged becomes the leader
    of a new group, and every other unchecked record is compared against it. Records found to have changed are
    excluded for the rest of the run. If the leader itself changes while its group is being assembled, the group is
    discarded: comparisons made against a moving reference are not trusted.
    """

    def __init__(self, root: Path):
        self._root = root

    def build(self, index: BucketIndex, report: Report | None = None) -> Report:
        if report is None:
            report = Report(self._root)

        for records in index.candidates():
            for group in self.build_bucket(records):
                report.append(group)

        return report

    def build_bucket(self, records: list[FileRecord]) -> list[DuplicateGroup]:
        """Return the reportable groups of one bucket, in the order their leaders appear."""
        checked = [False] * len(records)
        groups = []

        for i, leader in enumerate(records):
            if checked[i]:
                continue
            checked[i] = True

            if leader.changed():
                continue

            group: DuplicateGroup | None = DuplicateGroup(self._root, [leader.path])
            for j, candidate in enumerate(records):
                if j == i or checked[j]:
                    continue

                if candidate.changed():
                    checked[j] = True
                    continue

                if leader.changed():
                    logger.info(f"Discarding group led by {leader.path}: leader changed during verification")
                    group = None
                    break

                outcome = leader.compare(candidate)
                if outcome is Comparison.EQUAL:
                    group.add(candidate.path)
                    checked[j] = True
                elif outcome is Comparison.INDETERMINATE:
                    logger.debug(f"Comparison indeterminate: {leader.path} vs {candidate.path}")

            if group is not None and group.is_reportable():
                logger.debug(f"Found {len(group)} duplicates of {leader.path}")
                groups.append(group)

        return groups


def build_groups(root: Path, index: BucketIndex) -> Report:
    """Verify every multi-record bucket of the index and collect the resulting groups."""
    return GroupBuilder(root).build(index)
