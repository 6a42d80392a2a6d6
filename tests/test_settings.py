import tempfile
import tomllib
import unittest
from pathlib import Path

from dupfind.settings import SETTING_EXCLUDED_PATH_SUBSTRINGS, ScanSettings, get_settings_file_path

from .test_utils import write_file


class ScanSettingsTest(unittest.TestCase):
    def test_defaults_without_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = ScanSettings(Path(tmpdir))

            self.assertIsNone(settings.get('logging.path'))
            self.assertEqual('fallback', settings.get('nonexistent.key', 'fallback'))
            self.assertEqual(('xzfs_fuse_tmp',), settings.walk_policy().excluded_path_substrings)

    def test_default_location(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            self.assertEqual(root / '.dupfind' / 'settings.toml', get_settings_file_path(root))

            write_file(get_settings_file_path(root), b'[logging]\npath = "/var/log/dupfind.log"\n')

            self.assertEqual('/var/log/dupfind.log', ScanSettings(root).get('logging.path'))

    def test_explicit_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings_file = write_file(Path(tmpdir) / 'custom.toml',
                                       b'[walk]\nexcluded_path_substrings = ["tmp", "cache"]\n')

            settings = ScanSettings(Path(tmpdir), settings_file)

            self.assertEqual(['tmp', 'cache'], settings.get(SETTING_EXCLUDED_PATH_SUBSTRINGS))
            self.assertEqual(('tmp', 'cache'), settings.walk_policy().excluded_path_substrings)

    def test_explicit_file_missing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                ScanSettings(Path(tmpdir), Path(tmpdir) / 'missing.toml')

    def test_invalid_toml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings_file = write_file(Path(tmpdir) / 'bad.toml', b'[walk\n')

            with self.assertRaises(tomllib.TOMLDecodeError):
                ScanSettings(Path(tmpdir), settings_file)

    def test_dotted_key_through_non_table(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings_file = write_file(Path(tmpdir) / 's.toml', b'walk = 3\n')

            self.assertEqual('default', ScanSettings(Path(tmpdir), settings_file).get('walk.x', 'default'))

    def test_invalid_substrings(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings_file = write_file(Path(tmpdir) / 's.toml', b'[walk]\nexcluded_path_substrings = "tmp"\n')

            with self.assertRaises(ValueError):
                ScanSettings(Path(tmpdir), settings_file).walk_policy()


if __name__ == '__main__':
    unittest.main()
