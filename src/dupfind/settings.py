import tomllib
from pathlib import Path

from .utils.walker import DEFAULT_EXCLUDED_PATH_SUBSTRINGS, WalkPolicy

# Settings key constants
SETTING_EXCLUDED_PATH_SUBSTRINGS = 'walk.excluded_path_substrings'
SETTING_LOGGING_PATH = 'logging.path'


def get_settings_file_path(root: Path) -> Path:
    """Default location of the settings file for a scan root (e.g., /path/to/root/.dupfind/settings.toml)."""
    return root / '.dupfind' / 'settings.toml'


class ScanSettings:
    """Settings manager for scan configuration.

    Provides a read-only key-value interface to settings loaded from a TOML file. By default the file is
    .dupfind/settings.toml under the scan root; the directory is hidden, so the scan never reports it. A missing
    file means every get() call returns its default.

    Example:
        settings = ScanSettings(root)
        substrings = settings.get(SETTING_EXCLUDED_PATH_SUBSTRINGS, ['xzfs_fuse_tmp'])
        log_path = settings.get('logging.path')
    """

    def __init__(self, root: Path, settings_file: Path | None = None):
        """Initialize settings from TOML file.

        Args:
            root: Path to the scan root
            settings_file: Explicit settings file; it must exist when given

        Raises:
            FileNotFoundError: An explicit settings file does not exist
            tomllib.TOMLDecodeError: The settings file is not valid TOML
        """
        self._root = root
        self._settings = {}

        if settings_file is None:
            settings_file = get_settings_file_path(root)
            if not settings_file.exists():
                return

        with open(settings_file, 'rb') as f:
            self._settings = tomllib.load(f)

    def get(self, key: str, default=None):
        """Get a setting value by dotted key path, e.g. 'walk.excluded_path_substrings'.

        Returns the default if any step of the path is missing or is not a table.
        """
        keys = key.split('.')
        value = self._settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def walk_policy(self) -> WalkPolicy:
        """Build the traversal policy described by these settings.

        Raises:
            ValueError: walk.excluded_path_substrings is not a list of strings
        """
        substrings = self.get(SETTING_EXCLUDED_PATH_SUBSTRINGS, list(DEFAULT_EXCLUDED_PATH_SUBSTRINGS))
        if not isinstance(substrings, list) or not all(isinstance(s, str) for s in substrings):
            raise ValueError(f"{SETTING_EXCLUDED_PATH_SUBSTRINGS} must be a list of strings")
        return WalkPolicy(excluded_path_substrings=tuple(substrings))
