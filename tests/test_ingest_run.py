import json
import os
import shutil
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

from ingest_files.config import IngestConfig
from ingest_files.errors import ManifestError, SourceDirError
from ingest_files.manifest import ingest_directory

MTIME = datetime(2023, 11, 5, 8, 30, tzinfo=timezone.utc).timestamp()

class TestIngestRun(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.files_dir = self.test_dir / "files"
        self.files_dir.mkdir()
        self.manifest_path = self.test_dir / "index.json"
        self.manifest_path.write_text(json.dumps({"children": []}), encoding="utf-8")

        for name in [
            "report_2024_q1_summary.pdf",
            "Report_2024_Q1_annex-b.pdf",
            "libros_historia_tomo-IV_capitulo_uno.epub",
            "foo_bar.txt",
            ".DS_Store",
        ]:
            path = self.files_dir / name
            path.write_text("content")
            os.utime(path, (MTIME, MTIME))

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def config(self, **overrides):
        values = {
            "files_dir": self.files_dir,
            "manifest_path": self.manifest_path,
            "path_depth": 3,
        }
        values.update(overrides)
        return IngestConfig(**values)

    def test_second_run_changes_nothing(self):
        """Running twice over the same folder yields the same manifest; the second run only skips."""
        manifest, first = ingest_directory(self.config())
        after_first = self.manifest_path.read_bytes()

        self.assertEqual(len(first.created), 3)
        self.assertEqual([w.file for w in first.warnings], ["foo_bar.txt"])

        manifest_again, second = ingest_directory(self.config())

        self.assertEqual(self.manifest_path.read_bytes(), after_first)
        self.assertEqual(manifest_again, manifest)
        self.assertEqual(second.created, [])
        self.assertEqual(len(second.skipped), 3)
        self.assertTrue(all(s.reason == "already indexed" for s in second.skipped))

    def test_written_tree(self):
        ingest_directory(self.config())
        data = json.loads(self.manifest_path.read_text(encoding="utf-8"))

        self.assertEqual([c["name"] for c in data["children"]], ["Libros", "Report"])

        q1 = data["children"][1]["children"][0]["children"][0]
        self.assertEqual(q1["name"], "Q1")
        self.assertEqual([c["name"] for c in q1["children"]], ["Annex b.pdf", "Summary.pdf"])
        self.assertEqual(q1["children"][1]["date"], "2023-11-05")

        tomo = data["children"][0]["children"][0]["children"][0]
        self.assertEqual(tomo["name"], "Tomo IV")
        self.assertEqual(tomo["children"][0]["name"], "Capitulo uno.epub")

    def test_dry_run_leaves_manifest_untouched(self):
        before = self.manifest_path.read_bytes()

        dry_manifest, dry_report = ingest_directory(self.config(dry_run=True))

        self.assertEqual(self.manifest_path.read_bytes(), before)
        self.assertTrue(dry_report.dry_run)

        real_manifest, real_report = ingest_directory(self.config())
        self.assertEqual(dry_manifest, real_manifest)
        self.assertFalse(real_report.dry_run)

        dry_dict, real_dict = dry_report.to_dict(), real_report.to_dict()
        del dry_dict["dry_run"], real_dict["dry_run"]
        self.assertEqual(dry_dict, real_dict)
        self.assertEqual(dry_report.processed, 5)
        self.assertEqual(len(dry_report.skipped), 0)

    def test_report_out(self):
        report_path = self.test_dir / "report.json"
        ingest_directory(self.config(report_out=report_path, dry_run=True))

        data = json.loads(report_path.read_text(encoding="utf-8"))
        self.assertEqual(data["processed"], 5)
        self.assertTrue(data["dry_run"])
        self.assertIn({"file": "foo_bar.txt", "reason": "needs at least 4 segments (including the filename)"},
                      data["warnings"])

    def test_existing_keys_are_preserved(self):
        self.manifest_path.write_text(json.dumps({"title": "Biblioteca", "children": []}), encoding="utf-8")
        manifest, _ = ingest_directory(self.config())
        self.assertEqual(manifest["title"], "Biblioteca")

    def test_missing_manifest_is_fatal(self):
        self.manifest_path.unlink()
        with self.assertRaises(ManifestError):
            ingest_directory(self.config())
        self.assertFalse(self.manifest_path.exists())

    def test_invalid_manifest_is_fatal(self):
        self.manifest_path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(ManifestError):
            ingest_directory(self.config())
        self.assertEqual(self.manifest_path.read_text(encoding="utf-8"), "[1, 2]")

    def test_missing_files_dir_is_fatal(self):
        with self.assertRaises(SourceDirError):
            ingest_directory(self.config(files_dir=self.test_dir / "nope"))

    @patch("ingest_files.manifest.merge.modified_date", side_effect=PermissionError("denied"))
    def test_stat_failure_aborts_without_writing(self, mock_date):
        before = self.manifest_path.read_bytes()
        with self.assertRaises(PermissionError):
            ingest_directory(self.config())
        self.assertEqual(self.manifest_path.read_bytes(), before)

if __name__ == '__main__':
    unittest.main()
