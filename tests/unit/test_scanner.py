import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from filesense.categories import ALL_CATEGORIES, Category
from filesense.errors import FolderNotFoundError, FolderReadError, NotAFolderError
from filesense.scanner import analyze, build_file_record, get_file_size


class FakeScandir:
    """Stands in for os.scandir; exceptions in ``items`` are raised by next()."""

    def __init__(self, items):
        self.items = list(items)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __iter__(self):
        return self

    def __next__(self):
        if not self.items:
            raise StopIteration
        item = self.items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class TestAnalyze(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_empty_folder(self):
        analysis = analyze(self.test_dir)

        self.assertEqual(analysis.total_files, 0)
        self.assertEqual(set(analysis.categories), set(ALL_CATEGORIES))
        for files in analysis.categories.values():
            self.assertEqual(len(files), 0)

    def test_missing_folder(self):
        with self.assertRaises(FolderNotFoundError) as ctx:
            analyze(self.test_dir / "nope")
        self.assertEqual(ctx.exception.kind, "NotFound")

    def test_file_is_not_a_folder(self):
        target = self.test_dir / "notes.txt"
        target.write_text("hello")

        with self.assertRaises(NotAFolderError) as ctx:
            analyze(target)
        self.assertEqual(ctx.exception.kind, "NotADirectory")

    def test_listing_failure_is_wrapped(self):
        with patch("filesense.scanner.os.scandir", side_effect=PermissionError("denied")):
            with self.assertRaises(FolderReadError) as ctx:
                analyze(self.test_dir)
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)
        self.assertEqual(ctx.exception.kind, "ReadError")

    def test_unreadable_entries_are_skipped(self):
        notes = self.test_dir / "notes.txt"
        notes.write_text("abc")
        vanished = Mock(path=str(self.test_dir / "vanished.txt"))
        vanished.name = "vanished.txt"
        vanished.is_dir.side_effect = FileNotFoundError("gone")
        readable = Mock(path=str(notes))
        readable.name = "notes.txt"
        readable.is_dir.return_value = False
        listing = FakeScandir([OSError("bad entry"), vanished, readable])

        with patch("filesense.scanner.os.scandir", return_value=listing):
            with self.assertLogs("filesense.scanner", level="WARNING") as logs:
                analysis = analyze(self.test_dir)

        self.assertEqual(analysis.total_files, 1)
        self.assertEqual(analysis.files_in(Category.DOCUMENTS)[0].name, "notes.txt")
        self.assertEqual(len(logs.records), 2)
        self.assertIn("vanished.txt", logs.output[1])

    def test_categorizes_files(self):
        (self.test_dir / "notes.txt").write_text("abc")
        (self.test_dir / "quarterly_report.docx").write_text("")
        (self.test_dir / "family_vacation.jpg").write_text("")
        (self.test_dir / "tax_2024.pdf").write_text("")
        (self.test_dir / "data.xyz").write_text("")

        analysis = analyze(self.test_dir)

        self.assertEqual(analysis.total_files, 5)
        self.assertEqual([f.name for f in analysis.files_in(Category.DOCUMENTS)], ["notes.txt"])
        self.assertEqual(len(analysis.files_in(Category.WORK_DOCUMENTS)), 1)
        self.assertEqual(len(analysis.files_in(Category.PERSONAL_PHOTOS)), 1)
        self.assertEqual(len(analysis.files_in(Category.SENSITIVE)), 1)
        self.assertEqual(len(analysis.files_in(Category.OTHER)), 1)

        notes = analysis.files_in(Category.DOCUMENTS)[0]
        self.assertEqual(notes.size, 3)
        self.assertEqual(notes.extension, "txt")
        self.assertTrue(os.path.isabs(notes.path))

    def test_skips_hidden_and_subfolders(self):
        (self.test_dir / ".DS_Store").write_text("")
        (self.test_dir / ".hidden.txt").write_text("")
        sub = self.test_dir / "nested"
        sub.mkdir()
        (sub / "inside.txt").write_text("")
        (self.test_dir / "visible.txt").write_text("")

        analysis = analyze(self.test_dir)

        self.assertEqual(analysis.total_files, 1)
        self.assertEqual(analysis.files_in(Category.DOCUMENTS)[0].name, "visible.txt")

    def test_progress_callback(self):
        for i in range(3):
            (self.test_dir / f"song_{i}.mp3").write_text("")

        seen = []
        analyze(self.test_dir, progress_callback=lambda count, path: seen.append(count))
        self.assertEqual(seen, [1, 2, 3])

    def test_analysis_is_read_only(self):
        analysis = analyze(self.test_dir)
        with self.assertRaises(TypeError):
            analysis.categories[Category.OTHER] = ()

    def test_to_dict_shape(self):
        (self.test_dir / "main.py").write_text("print()")

        data = analyze(self.test_dir).to_dict()

        self.assertEqual(data["total_files"], 1)
        self.assertEqual(len(data["categories"]), 11)
        entry = data["categories"]["Code"][0]
        self.assertEqual(set(entry), {"name", "path", "size", "extension"})
        self.assertEqual(entry["extension"], "py")


class TestFileRecord(unittest.TestCase):
    def test_size_defaults_to_zero(self):
        self.assertEqual(get_file_size("/definitely/not/here.txt"), 0)

    def test_build_file_record(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Photo.JPG"
            path.write_bytes(b"12345")

            record = build_file_record(path)

            self.assertEqual(record.name, "Photo.JPG")
            self.assertEqual(record.extension, "jpg")
            self.assertEqual(record.size, 5)


if __name__ == '__main__':
    unittest.main()
