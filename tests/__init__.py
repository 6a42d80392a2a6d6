"""Tests for dupfind.

Test Files and Coverage:
========================

| Test File                          | Test Classes              | Tested Constructs                   | Tested Functionalities                         |
|------------------------------------|---------------------------|-------------------------------------|------------------------------------------------|
| utils/test_processor.py            | ProcessorTest             | Processor, HashFailure              | First block, digests, streamed comparison      |
| utils/test_walker.py               | DirectoryWalkerTest       | DirectoryWalker, WalkPolicy         | Exclusions, hardlinks, symlinks, statistics    |
| index/test_record.py               | FileRecordTest            | FileRecord, MetadataSnapshot        | Eligibility, memoization, staleness, ladder    |
| index/test_bucket.py               | BucketIndexTest           | BucketIndex                         | Keys, insertion order, candidates              |
| report/test_group_builder.py       | GroupBuilderTest          | GroupBuilder                        | Grouping, staleness, leader discard            |
| report/test_report_store.py        | ReportStoreTest           | Report, ReportWriter, read_report   | JSON layout, relative paths, reading back      |
| commands/test_scan.py              | ScanCommandTest           | prepare_scan(), do_scan()           | Argument validation, output creation           |
| commands/test_delete_list.py       | DeleteListTest            | load_deletion_list(), delete_files()| Validation, per-item failures                  |
| test_finder.py                     | DuplicateFinderTest       | DuplicateFinder                     | End-to-end scenarios, idempotence              |
| test_settings.py                   | ScanSettingsTest          | ScanSettings                        | TOML loading, dotted keys, walk policy         |
| test_cli.py                        | CliTest                   | dupfind_main(), delete_list_main()  | Exit codes, messages                           |
"""
