import json
import tempfile
import unittest
from pathlib import Path

from dupfind.commands.scan import ScanArgs, ScanSetupError, do_scan, prepare_scan, resolve_output_path

from ..test_utils import write_file


class ResolveOutputPathTest(unittest.TestCase):
    def test_json_extension_kept(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / 'report.json'

            self.assertEqual(output, resolve_output_path(output))

    def test_missing_extension_completed(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(Path(tmpdir) / 'report.json', resolve_output_path(Path(tmpdir) / 'report'))

    def test_other_extension_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ScanSetupError) as cm:
                resolve_output_path(Path(tmpdir) / 'report.txt')

            self.assertIn("must have a .json extension", str(cm.exception))

    def test_existing_output_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = write_file(Path(tmpdir) / 'report.json', b'{}')

            with self.assertRaises(ScanSetupError) as cm:
                resolve_output_path(output)

            self.assertIn("already exists", str(cm.exception))

    def test_existing_completed_output_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            write_file(Path(tmpdir) / 'report.json', b'{}')

            with self.assertRaises(ScanSetupError):
                resolve_output_path(Path(tmpdir) / 'report')


class ScanCommandTest(unittest.TestCase):
    def test_missing_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ScanSetupError) as cm:
                prepare_scan(ScanArgs(Path(tmpdir) / 'missing', Path(tmpdir) / 'out.json'))

            self.assertIn("Directory does not exist", str(cm.exception))

    def test_directory_is_a_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_file(Path(tmpdir) / 'file', b'content')

            with self.assertRaises(ScanSetupError) as cm:
                prepare_scan(ScanArgs(path, Path(tmpdir) / 'out.json'))

            self.assertIn("Not a directory", str(cm.exception))

    def test_existing_output_untouched(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / 'root'
            write_file(root / 'a', b'same')
            write_file(root / 'b', b'same')
            output = write_file(Path(tmpdir) / 'out.json', b'previous')

            with self.assertRaises(ScanSetupError):
                prepare_scan(ScanArgs(root, output))

            self.assertEqual(b'previous', output.read_bytes())

    def test_scan_writes_report(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / 'root'
            write_file(root / 'a', b'same')
            write_file(root / 'b', b'same')

            finder, output = prepare_scan(ScanArgs(root, Path(tmpdir) / 'out'))
            self.assertFalse(output.exists())
            report = do_scan(finder, output)

            self.assertEqual(Path(tmpdir) / 'out.json', output)
            self.assertEqual(1, len(report))
            data = json.loads(output.read_text())
            self.assertEqual({'a', 'b'}, {entry['display_path'] for entry in data['items'][0]})

    def test_output_created_meanwhile(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / 'root'
            root.mkdir()
            finder, output = prepare_scan(ScanArgs(root, Path(tmpdir) / 'out.json'))
            write_file(output, b'raced')

            with self.assertRaises(ScanSetupError):
                do_scan(finder, output)

            self.assertEqual(b'raced', output.read_bytes())


if __name__ == '__main__':
    unittest.main()
