import logging
from pathlib import Path
from typing import NamedTuple

from ..finder import DuplicateFinder
from ..report.store import Report
from ..settings import ScanSettings
from ..utils.processor import Processor

logger = logging.getLogger(__name__)

REPORT_SUFFIX = '.json'


class ScanSetupError(Exception):
    """Invalid scan arguments, detected before any scanning happens."""


class ScanArgs(NamedTuple):
    """Arguments for the scan operation."""
    directory: Path  # Root directory to search
    output: Path  # Report path as given on the command line
    settings_file: Path | None = None  # Explicit settings file, overriding ROOT/.dupfind/settings.toml
    processor: Processor | None = None


def validate_directory(directory: Path) -> Path:
    if not directory.exists():
        raise ScanSetupError(f"Directory does not exist: {directory}")
    if not directory.is_dir():
        raise ScanSetupError(f"Not a directory: {directory}")
    return directory


def resolve_output_path(output: Path) -> Path:
    """Check the report path and complete a missing extension.

    Returns:
        The path the report will be written to

    Raises:
        ScanSetupError: The path already exists or has an extension other than .json
    """
    if output.exists():
        raise ScanSetupError(f"Output file already exists: {output}")

    if not output.suffix:
        output = output.with_suffix(REPORT_SUFFIX)
        if output.exists():
            raise ScanSetupError(f"Output file already exists: {output}")
    elif output.suffix != REPORT_SUFFIX:
        raise ScanSetupError(f"Output file must have a {REPORT_SUFFIX} extension: {output}")

    return output


def prepare_scan(args: ScanArgs) -> tuple[DuplicateFinder, Path]:
    """Validate arguments and set up the finder without touching the output path."""
    directory = validate_directory(args.directory)
    output = resolve_output_path(args.output)
    settings = ScanSettings(directory, args.settings_file)
    return DuplicateFinder(directory, args.processor, settings), output


def do_scan(finder: DuplicateFinder, output: Path) -> Report:
    """Create the report file, run the scan into it, then flush and close it."""
    try:
        f = open(output, 'x', encoding='utf-8')
    except FileExistsError as e:
        raise ScanSetupError(f"Output file already exists: {output}") from e
    except OSError as e:
        raise ScanSetupError(f"Failed to open output file: {output}: {e}") from e

    logger.info(f"Output JSON will be saved to: {output}")
    with f:
        report = finder.process(f)
        f.flush()
    return report
