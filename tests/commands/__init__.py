"""Tests for command implementation modules.

Test Files and Coverage:
========================

| Test File              | Test Classes                                | Tested Constructs                                   | Tested Functionalities                    |
|------------------------|---------------------------------------------|-----------------------------------------------------|-------------------------------------------|
| test_scan.py           | ResolveOutputPathTest, ScanCommandTest      | resolve_output_path(), prepare_scan(), do_scan()    | Extension rules, setup errors, report file|
| test_delete_list.py    | LoadDeletionListTest, DeleteListTest        | load_deletion_list(), delete_files()                | Validation, per-item failures             |
"""
