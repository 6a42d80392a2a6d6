from collections import defaultdict
from typing import Iterator

from ..utils.processor import Digest
from .record import FileRecord

BucketKey = tuple[Digest, int]


class BucketIndex:
    """Candidates grouped by (partial hash, size).

    Filled by insertion during traversal and read once afterwards. Records keep their insertion order within a
    bucket, and a bucket holding a single record cannot contain a duplicate.
    """

    def __init__(self):
        self._buckets: defaultdict[BucketKey, list[FileRecord]] = defaultdict(list)
        self._record_count = 0

    def insert(self, record: FileRecord) -> BucketKey:
        """Add a record under its bucket key, reading its first block to do so."""
        key = record.bucket_key()
        self._buckets[key].append(record)
        self._record_count += 1
        return key

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[tuple[BucketKey, list[FileRecord]]]:
        return iter(self._buckets.items())

    def __getitem__(self, key: BucketKey) -> list[FileRecord]:
        if key not in self._buckets:
            raise KeyError(key)
        return self._buckets[key]

    def __contains__(self, key: BucketKey) -> bool:
        return key in self._buckets

    @property
    def record_count(self) -> int:
        return self._record_count

    def candidates(self) -> Iterator[list[FileRecord]]:
        """Yield only buckets with more than one record."""
        for records in self._buckets.values():
            if len(records) > 1:
                yield records
