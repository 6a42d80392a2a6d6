import argparse
import logging
import sys
import textwrap
import tomllib
from pathlib import Path

from .commands.delete_list import MalformedDeletionList, do_delete_list
from .commands.scan import ScanArgs, ScanSetupError, do_scan, prepare_scan
from .utils.profiling import profile_main

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _add_logging_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Report progress on stderr (INFO level) when no log file is configured')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file for operation logging. If not provided, uses logging.path from the settings file or '
             'stderr.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO when --log-file is provided.')


def _configure_logging(args) -> None:
    if args.log_file:
        # Determine log level: use --log-level if provided, otherwise default to INFO
        log_level = args.log_level if args.log_level is not None else 'INFO'
        logging.basicConfig(filename=args.log_file, level=getattr(logging, log_level), format=LOG_FORMAT)
    else:
        if args.log_level is not None:
            log_level = getattr(logging, args.log_level)
        else:
            log_level = logging.INFO if args.verbose else logging.WARNING
        logging.basicConfig(stream=sys.stderr, level=log_level, format='%(levelname)s: %(message)s')


def _fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


@profile_main
def dupfind_main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog='dupfind',
        description='Find groups of byte-identical regular files under a directory and write them to a JSON report.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              dupfind /data/photos duplicates.json
              dupfind /data/photos duplicates        # written to duplicates.json

            Entries whose name starts with "." are ignored, as are directories whose
            path contains "xzfs_fuse_tmp" (configurable in ROOT/.dupfind/settings.toml).
            ''').strip()
    )
    parser.add_argument(
        'directory',
        metavar='DIRECTORY',
        help='Root directory to search for duplicates')
    parser.add_argument(
        'output',
        metavar='OUTPUT',
        help='Path of the JSON report to create. It must not exist; a missing extension is completed to .json')
    parser.add_argument(
        '--settings',
        metavar='PATH',
        help='Settings file to use instead of DIRECTORY/.dupfind/settings.toml')
    _add_logging_arguments(parser)

    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        finder, output = prepare_scan(ScanArgs(
            Path(args.directory),
            Path(args.output),
            Path(args.settings) if args.settings else None,
        ))
    except ScanSetupError as e:
        _fail(str(e))
    except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
        _fail(f"Invalid settings: {e}")

    if not args.log_file:
        finder.configure_logging_from_settings()

    print(f"Searching for duplicates in: {args.directory}")
    print(f"Output JSON will be saved to: {output}")

    try:
        report = do_scan(finder, output)
    except ScanSetupError as e:
        _fail(str(e))

    print(f"Found {len(report)} duplicate groups")


@profile_main
def delete_list_main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog='dupfind-delete',
        description='Remove every file named in a JSON list of the form {"items": ["/path/a", "/path/b"]}.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              dupfind-delete to_remove.json

            A malformed list aborts the run before any file is removed. Files that
            cannot be removed are reported and skipped.
            ''').strip()
    )
    parser.add_argument(
        'list_path',
        metavar='JSON_PATH',
        help='Path to the JSON deletion list')
    _add_logging_arguments(parser)

    args = parser.parse_args(argv)
    if not args.log_file and args.log_level is None:
        # Per-item outcomes are the output of this command
        args.log_level = 'INFO'
    _configure_logging(args)

    try:
        do_delete_list(Path(args.list_path))
    except MalformedDeletionList as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Cannot read deletion list: {e}")


if __name__ == '__main__':
    dupfind_main()
