import unittest
from pathlib import Path

from file_organizer.config import ConflictStrategy
from file_organizer.conflicts import numbered_candidates, resolve_conflict, split_name


class RecordingExists:
    """Existence check over a fixed set of paths that remembers every lookup."""

    def __init__(self, existing):
        self.existing = {Path(p) for p in existing}
        self.calls = []

    def __call__(self, path):
        self.calls.append(Path(path))
        return Path(path) in self.existing


class TestSplitName(unittest.TestCase):
    def test_split(self):
        self.assertEqual(split_name("a.txt"), ("a", ".txt"))
        self.assertEqual(split_name("archive.tar.gz"), ("archive.tar", ".gz"))
        self.assertEqual(split_name("note"), ("note", ""))
        self.assertEqual(split_name(".bashrc"), (".bashrc", ""))


class TestResolveConflict(unittest.TestCase):
    def setUp(self):
        self.dest = Path("/target/txt/a.txt")

    def test_free_destination_is_returned_for_every_strategy(self):
        for strategy in ConflictStrategy:
            with self.subTest(strategy=strategy):
                self.assertEqual(resolve_conflict(self.dest, strategy, RecordingExists([])), self.dest)

    def test_overwrite_keeps_path(self):
        exists = RecordingExists([self.dest])
        self.assertEqual(resolve_conflict(self.dest, ConflictStrategy.OVERWRITE, exists), self.dest)

    def test_skip_signals_none(self):
        exists = RecordingExists([self.dest])
        self.assertIsNone(resolve_conflict(self.dest, ConflictStrategy.SKIP, exists))

    def test_rename_picks_lowest_free_number(self):
        exists = RecordingExists([self.dest, "/target/txt/a (1).txt"])
        result = resolve_conflict(self.dest, ConflictStrategy.RENAME, exists)
        self.assertEqual(result, Path("/target/txt/a (2).txt"))

    def test_rename_checks_candidates_lazily(self):
        exists = RecordingExists([self.dest])
        resolve_conflict(self.dest, ConflictStrategy.RENAME, exists)
        self.assertEqual(exists.calls, [self.dest, Path("/target/txt/a (1).txt")])

    def test_rename_without_extension(self):
        dest = Path("/target/_no_ext/note")
        exists = RecordingExists([dest])
        self.assertEqual(resolve_conflict(dest, ConflictStrategy.RENAME, exists), Path("/target/_no_ext/note (1)"))

    def test_rename_has_no_fixed_bound(self):
        taken = [self.dest] + [Path(f"/target/txt/a ({n}).txt") for n in range(1, 250)]
        result = resolve_conflict(self.dest, ConflictStrategy.RENAME, RecordingExists(taken))
        self.assertEqual(result, Path("/target/txt/a (250).txt"))

    def test_rename_is_idempotent_without_mutation(self):
        exists = RecordingExists([self.dest, "/target/txt/a (1).txt"])
        first = resolve_conflict(self.dest, ConflictStrategy.RENAME, exists)
        second = resolve_conflict(self.dest, ConflictStrategy.RENAME, exists)
        self.assertEqual(first, second)


def test_numbered_candidates_sequence():
    gen = numbered_candidates(Path("/t/photo.jpg"))
    assert [next(gen).name for _ in range(3)] == ["photo (1).jpg", "photo (2).jpg", "photo (3).jpg"]


if __name__ == '__main__':
    unittest.main()
