import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from filesense.categories import Category
from filesense.commands import analyze_folder, organize_files, select_folder, undo_organize
from filesense.config import Settings, load_settings
from filesense.errors import (
    FolderNotFoundError,
    InvalidMoveLogError,
    InvalidPlanError,
    NotAFolderError,
    OrganizeError,
    UndoError,
)
from filesense.validator import plan_from_analysis


class TestCommands(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.folder = self.test_dir / "Downloads"
        self.folder.mkdir()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_select_folder_uses_settings(self):
        settings = Settings(default_folder=str(self.folder))
        self.assertEqual(select_folder(settings), str(self.folder))

    def test_select_folder_missing(self):
        settings = Settings(default_folder=str(self.test_dir / "missing"))
        with self.assertRaises(FolderNotFoundError):
            select_folder(settings)

    def test_analyze_folder_errors(self):
        with self.assertRaises(FolderNotFoundError):
            analyze_folder(str(self.test_dir / "missing"))

        regular = self.test_dir / "file.txt"
        regular.write_text("")
        with self.assertRaises(NotAFolderError):
            analyze_folder(str(regular))

    def test_analyze_organize_undo(self):
        names = ["notes.txt", "quarterly_report.docx", "family_vacation.jpg",
                 "tax_2024.pdf", "data.xyz", "song.mp3"]
        for name in names:
            (self.folder / name).write_text(name)

        analysis = analyze_folder(str(self.folder))
        self.assertEqual(analysis.total_files, len(names))

        plan = plan_from_analysis(analysis, self.folder)
        result = organize_files(plan)

        self.assertEqual(result["message"], f"Organized {len(names)} files successfully!")
        self.assertEqual(len(result["moves"]), len(names))
        self.assertTrue((self.folder / "Sensitive" / "tax_2024.pdf").exists())
        self.assertTrue((self.folder / "Work Documents" / "quarterly_report.docx").exists())
        self.assertTrue((self.folder / "Personal Photos" / "family_vacation.jpg").exists())

        # Category folders are sub-directories, so a rescan sees nothing
        self.assertEqual(analyze_folder(str(self.folder)).total_files, 0)

        message = undo_organize(result["moves"])

        self.assertEqual(message, f"Undo successful! Restored {len(names)} files.")
        self.assertEqual(sorted(p.name for p in self.folder.iterdir()), sorted(names))

    def test_user_edited_plan(self):
        (self.folder / "notes.txt").write_text("")
        (self.folder / "song.mp3").write_text("")
        plan = plan_from_analysis(analyze_folder(str(self.folder)), self.folder)

        # The user moves the song into a bucket of their own and drops the notes
        plan["Road Trip Mix"] = plan.pop(Category.AUDIO.value)
        del plan[Category.DOCUMENTS.value]

        result = organize_files(plan)

        self.assertEqual(len(result["moves"]), 1)
        self.assertTrue((self.folder / "Road Trip Mix" / "song.mp3").exists())
        self.assertTrue((self.folder / "notes.txt").exists())

    def test_invalid_plan(self):
        with self.assertRaises(InvalidPlanError):
            organize_files({"Documents": [{"path": "/x/notes.txt"}]})

    def test_partial_failure_exposes_moves(self):
        (self.folder / "notes.txt").write_text("")
        (self.folder / "song.mp3").write_text("")
        missing = self.folder / "vanished.txt"
        plan = {
            "target_root": str(self.folder),
            "Documents": [{"path": str(self.folder / "notes.txt")}, {"path": str(missing)}],
            "Audio": [{"path": str(self.folder / "song.mp3")}],
        }

        with self.assertRaises(OrganizeError) as ctx:
            organize_files(plan)

        err = ctx.exception
        self.assertEqual(err.succeeded, 2)
        self.assertEqual(len(err.moves), 2)
        self.assertIn(str(missing), str(err))
        self.assertTrue(str(err).startswith("Moved 2 files, but some errors occurred:"))

        # The partial log is still enough to undo what happened
        self.assertEqual(undo_organize(err.moves), "Undo successful! Restored 2 files.")
        self.assertTrue((self.folder / "notes.txt").exists())
        self.assertTrue((self.folder / "song.mp3").exists())

    def test_undo_failure(self):
        (self.folder / "notes.txt").write_text("")
        result = organize_files({
            "target_root": str(self.folder),
            "Documents": [{"path": str(self.folder / "notes.txt")}],
        })
        (self.folder / "Documents" / "notes.txt").unlink()

        with self.assertRaises(UndoError) as ctx:
            undo_organize(result["moves"])

        self.assertEqual(ctx.exception.succeeded, 0)
        self.assertEqual(len(ctx.exception.errors), 1)

    def test_undo_rejects_incomplete_log(self):
        (self.folder / "notes.txt").write_text("")
        log = [{"from": str(self.folder / "notes.txt"), "to": str(self.folder / "Documents" / "notes.txt")},
               {"to": str(self.folder / "Audio" / "song.mp3")}]

        with self.assertRaises(InvalidMoveLogError) as ctx:
            undo_organize(log)

        self.assertIn("song.mp3", str(ctx.exception))
        self.assertTrue((self.folder / "notes.txt").exists())


class TestSettings(unittest.TestCase):
    def test_environment_overrides(self):
        env = {"FILESENSE_DEFAULT_FOLDER": "/srv/inbox", "FILESENSE_LOG_LEVEL": "debug"}
        with patch.dict(os.environ, env):
            settings = load_settings(load_env_file=False)
        self.assertEqual(settings.default_folder, "/srv/inbox")
        self.assertEqual(settings.log_level, "DEBUG")

    def test_defaults(self):
        with patch.dict(os.environ, {"HOME": "/home/alex"}, clear=True):
            settings = load_settings(load_env_file=False)
        self.assertEqual(settings.default_folder, os.path.join("/home/alex", "Downloads"))
        self.assertEqual(settings.log_level, "INFO")

    def test_no_home(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings(load_env_file=False)
        self.assertEqual(settings.default_folder, "/Users")


if __name__ == "__main__":
    unittest.main()
