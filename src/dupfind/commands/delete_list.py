import json
import logging
import os
from pathlib import Path
from typing import IO, NamedTuple

logger = logging.getLogger(__name__)


class MalformedDeletionList(ValueError):
    """The deletion list is not an object with an `items` array of strings."""


class DeletionResult(NamedTuple):
    removed: list[Path]
    failed: list[tuple[Path, OSError]]


def load_deletion_list(source: IO[str]) -> list[Path]:
    """Parse and validate a deletion list of the form {"items": ["/path/a", "/path/b"]}.

    The whole list is validated before anything is returned, so a malformed list never leads to a partial run.

    Raises:
        MalformedDeletionList: Invalid JSON or text encoding, `items` missing or not an array, or a non-string item
    """
    try:
        data = json.load(source)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDeletionList(f"invalid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('items'), list):
        raise MalformedDeletionList("`items` is not an array")

    paths = []
    for item in data['items']:
        if not isinstance(item, str):
            raise MalformedDeletionList(f"Item is not a string: {json.dumps(item)}")
        paths.append(Path(item))
    return paths


def delete_files(paths: list[Path]) -> DeletionResult:
    """Remove each listed file; a failure is logged and does not stop the remaining removals."""
    result = DeletionResult([], [])
    for path in paths:
        try:
            os.remove(path)
        except OSError as e:
            logger.error(f"Error removing file {path}: {e}")
            result.failed.append((path, e))
        else:
            logger.info(f"Removing file {path}")
            result.removed.append(path)
    return result


def do_delete_list(list_path: Path) -> DeletionResult:
    """Read a deletion list from a file and remove every file it names.

    Raises:
        MalformedDeletionList: The list is malformed; nothing has been removed
        OSError: The list itself cannot be read
    """
    with open(list_path, 'r', encoding='utf-8') as f:
        paths = load_deletion_list(f)
    result = delete_files(paths)
    logger.info(f"Removed {len(result.removed)} files, {len(result.failed)} failures")
    return result
