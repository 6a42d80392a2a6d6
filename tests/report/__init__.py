"""Tests for report module.

Test Files and Coverage:
========================

| Test File                  | Test Classes        | Tested Constructs                          | Tested Functionalities                    |
|----------------------------|---------------------|--------------------------------------------|-------------------------------------------|
| test_group_builder.py      | GroupBuilderTest    | GroupBuilder, build_groups()               | Grouping, staleness, leader discard       |
| test_report_store.py       | ReportStoreTest     | Report, DuplicateGroup, ReportWriter       | JSON layout, relative paths, reading back |
"""
