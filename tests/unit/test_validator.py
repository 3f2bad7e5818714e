import json
import shutil
import tempfile
import unittest
from pathlib import Path
from ingest_files.errors import ManifestError
from ingest_files.manifest.validator import load_manifest, save_manifest, validate_manifest

class TestValidateManifest(unittest.TestCase):
    def test_accepts_minimal_and_nested_trees(self):
        self.assertEqual(validate_manifest({}), {})
        tree = {
            "title": "Biblioteca",
            "children": [
                {"name": "Report", "type": "dir", "children": [
                    {"name": "Summary.pdf", "type": "file", "ext": "pdf",
                     "file": "report_summary.pdf", "date": "2024-01-01"},
                ]},
                {"name": "Empty", "type": "dir", "children": None},
            ],
        }
        self.assertIs(validate_manifest(tree), tree)

    def test_rejects_non_object_root(self):
        with self.assertRaises(ManifestError):
            validate_manifest([])

    def test_rejects_children_that_are_not_lists(self):
        with self.assertRaises(ManifestError) as ctx:
            validate_manifest({"children": [{"name": "A", "type": "dir", "children": "nope"}]})
        self.assertIn("root.children[0].children", str(ctx.exception))

    def test_rejects_non_object_child(self):
        with self.assertRaises(ManifestError):
            validate_manifest({"children": ["file.txt"]})

    def test_rejects_non_string_name(self):
        with self.assertRaises(ManifestError):
            validate_manifest({"children": [{"name": 3, "type": "dir"}]})


class TestLoadManifest(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_missing_file(self):
        with self.assertRaises(ManifestError) as ctx:
            load_manifest(self.test_dir / "index.json")
        self.assertIn("not found", str(ctx.exception))

    def test_invalid_json(self):
        path = self.test_dir / "index.json"
        path.write_text("{children: [", encoding="utf-8")
        with self.assertRaises(ManifestError):
            load_manifest(path)

    def test_save_format(self):
        """Manifest is written with 2-space indent, raw UTF-8 and a trailing newline."""
        path = self.test_dir / "index.json"
        save_manifest({"children": [{"name": "Año", "type": "dir", "children": []}]}, path)

        text = path.read_text(encoding="utf-8")
        self.assertTrue(text.endswith("}\n"))
        self.assertIn('\n  "children": [', text)
        self.assertIn("Año", text)
        self.assertEqual(load_manifest(path), json.loads(text))

if __name__ == '__main__':
    unittest.main()
