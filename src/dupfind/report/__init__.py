"""Report module for duplicate grouping and output.

This package contains:
- group_builder: GroupBuilder, which verifies candidate buckets into duplicate groups
- store: Report, DuplicateGroup and ReportWriter for the JSON report
"""
