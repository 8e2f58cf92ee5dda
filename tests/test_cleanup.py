import shutil
import tempfile
import unittest
from pathlib import Path
from file_organizer.executor import cleanup_empty_dirs

class TestCleanup(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp()).resolve()
        
    def tearDown(self):
        shutil.rmtree(self.test_dir)
        
    def test_cleanup_keeps_hidden_folders(self):
        """Empty folders inside hidden directories are left alone unless hidden files are organized."""
        hidden_empty = self.test_dir / ".cache" / "thumbs" / "EmptyFolder"
        hidden_empty.mkdir(parents=True)
        
        normal_empty = self.test_dir / "NormalEmpty"
        normal_empty.mkdir()
        
        removed = cleanup_empty_dirs(self.test_dir)
        
        self.assertIn("NormalEmpty", removed)
        self.assertTrue(hidden_empty.exists())
        self.assertNotIn(".cache/thumbs/EmptyFolder", removed)

    def test_cleanup_includes_hidden_when_asked(self):
        hidden_empty = self.test_dir / ".cache" / "thumbs"
        hidden_empty.mkdir(parents=True)

        removed = cleanup_empty_dirs(self.test_dir, include_hidden=True)

        self.assertIn(".cache/thumbs", removed)
        self.assertIn(".cache", removed)
        self.assertFalse((self.test_dir / ".cache").exists())

    def test_cleanup_never_removes_root(self):
        removed = cleanup_empty_dirs(self.test_dir)
        self.assertEqual(removed, [])
        self.assertTrue(self.test_dir.exists())

    def test_nested_empty_folders_collapse(self):
        (self.test_dir / "nested" / "empty").mkdir(parents=True)
        (self.test_dir / "not_empty").mkdir()
        (self.test_dir / "not_empty" / "file.txt").touch()

        removed = cleanup_empty_dirs(self.test_dir)

        # Bottom-up walk: the child goes first, then its now-empty parent
        self.assertLess(removed.index("nested/empty"), removed.index("nested"))
        self.assertTrue((self.test_dir / "not_empty").exists())

if __name__ == '__main__':
    unittest.main()
