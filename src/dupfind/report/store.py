"""Report storage for duplicate scan results."""

import json
import os
from pathlib import Path
from typing import Any, IO, Iterator, NamedTuple


class ReportEntry(NamedTuple):
    """One member of a duplicate group.

    Attributes:
        display_path: Path relative to the scan root
        real_path: Absolute path of the file
    """
    display_path: str
    real_path: str

    def to_dict(self) -> dict[str, str]:
        return {'display_path': self.display_path, 'real_path': self.real_path}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportEntry":
        return cls(data['display_path'], data['real_path'])


class DuplicateGroup:
    """Files verified to hold identical bytes, in the order they joined the group."""

    def __init__(self, root: Path, paths: list[Path] | None = None):
        self.root = root
        self.paths: list[Path] = paths or []

    def __len__(self) -> int:
        return len(self.paths)

    def add(self, path: Path) -> None:
        self.paths.append(path)

    def is_reportable(self) -> bool:
        return len(self.paths) >= 2

    def entries(self) -> Iterator[ReportEntry]:
        for path in self.paths:
            yield ReportEntry(os.path.relpath(path, self.root), str(path))


class Report:
    """Ordered duplicate groups found under one scan root."""

    def __init__(self, root: Path, groups: list[DuplicateGroup] | None = None):
        self.root = root
        self.groups: list[DuplicateGroup] = groups or []

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[DuplicateGroup]:
        return iter(self.groups)

    def append(self, group: DuplicateGroup) -> None:
        self.groups.append(group)

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary for JSON serialization.

        Returns:
            {"items": [[{"display_path": ..., "real_path": ...}, ...], ...]}
        """
        return {
            'items': [[entry.to_dict() for entry in group.entries()] for group in self.groups]
        }

    def membership(self) -> set[frozenset[str]]:
        """Group membership as sets of real paths, independent of ordering."""
        return {frozenset(str(path) for path in group.paths) for group in self.groups}


class ReportWriter:
    """Writes a report as JSON to an already open text stream."""

    def __init__(self, output: IO[str], indent: int = 2):
        self._output = output
        self._indent = indent

    def write(self, report: Report) -> None:
        json.dump(report.to_dict(), self._output, indent=self._indent)
        self._output.write('\n')


def read_report(source: IO[str], root: Path | None = None) -> Report:
    """Load a report previously written by ReportWriter.

    Args:
        source: Open text stream positioned at the start of the report
        root: Scan root to attach to the groups; when omitted, derived from the first entry

    Returns:
        Report whose groups list the real paths of their members

    Raises:
        ValueError: The document is not a report
    """
    data = json.load(source)
    if not isinstance(data, dict) or not isinstance(data.get('items'), list):
        raise ValueError("report must be an object with an `items` array")

    report: Report | None = None
    for item in data['items']:
        if not isinstance(item, list):
            raise ValueError(f"report group is not an array: {item!r}")
        entries = [ReportEntry.from_dict(e) for e in item]
        if report is None:
            if root is None and entries:
                first = entries[0]
                root = Path(os.path.normpath(os.path.join(first.real_path, _parent_steps(first.display_path))))
            report = Report(root if root is not None else Path('.'))
        report.append(DuplicateGroup(report.root, [Path(e.real_path) for e in entries]))

    if report is None:
        report = Report(root if root is not None else Path('.'))
    return report


def _parent_steps(display_path: str) -> str:
    depth = len(Path(display_path).parts)
    return os.path.join(*(['..'] * depth)) if depth else '.'
