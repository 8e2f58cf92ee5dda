"""
Organizer engine for the File Organizer.

Walks the source tree, classifies each qualifying file and moves or copies it
into the target. Per-file failures are recorded and never abort the run.

Only one run should operate on a given source/target pair at a time: moves
mutate shared filesystem state without locking.
"""

import errno
import os
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator

from tqdm import tqdm

from .classifier import build_type_map, destination_folder
from .config import OrganizerConfig
from .conflicts import resolve_conflict
from .errors import PerFileError, StructuralError
from .scanner import FileEntry, directory_depth, is_hidden, walk_files

# Outcome statuses
MOVED = "moved"
COPIED = "copied"
WOULD_MOVE = "would_move"
WOULD_COPY = "would_copy"
SKIPPED = "skipped"
WOULD_SKIP = "would_skip"
FAILED = "failed"

REASON_EXISTS = "exists"
REASON_IN_PLACE = "already in place"


@dataclass
class Outcome:
    """What happened (or would happen) to one file."""
    action: str
    source: Path
    destination: Path | None
    status: str
    reason: str = ""
    error: PerFileError | None = None

    def to_dict(self) -> dict:
        return {
            "action": self.action,
            "source": str(self.source),
            "destination": str(self.destination) if self.destination else None,
            "status": self.status,
            "reason": self.reason,
            "error": self.error.message if self.error else None,
        }


@dataclass
class RunReport:
    """Counters and ordered outcomes of a single run."""
    source: Path
    target: Path
    dry_run: bool
    moved: int = 0
    copied: int = 0
    skipped: int = 0
    outcomes: list[Outcome] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)

    def record(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)
        if outcome.status == MOVED:
            self.moved += 1
        elif outcome.status == COPIED:
            self.copied += 1
        elif outcome.status in (SKIPPED, FAILED):
            self.skipped += 1

    @property
    def failures(self) -> list[Outcome]:
        return [o for o in self.outcomes if o.status == FAILED]

    def summary(self) -> str:
        return f"Done. Moved: {self.moved}, Copied: {self.copied}, Skipped: {self.skipped}"

    def to_dict(self) -> dict:
        return {
            "source": str(self.source),
            "target": str(self.target),
            "dry_run": self.dry_run,
            "executed_at": datetime.now().isoformat(timespec='seconds'),
            "moved": self.moved,
            "copied": self.copied,
            "skipped": self.skipped,
            "pruned": list(self.pruned),
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


def _same_file(a: Path, b: Path) -> bool:
    if a == b:
        return True
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def _move_file(src: Path, dst: Path) -> None:
    """Move src onto dst, replacing dst. Falls back to copy+delete across devices."""
    try:
        os.replace(src, dst)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        shutil.move(str(src), str(dst))


def _copy_file(src: Path, dst: Path) -> None:
    """Copy src onto dst with metadata, replacing dst."""
    shutil.copy2(src, dst)


class Organizer:
    """
    Single-pass organizer over one source tree.

    The type-extension table is built once here; counters live in the
    RunReport created by each call to run().
    """

    def __init__(self, config: OrganizerConfig):
        self.config = config
        self.type_map = build_type_map()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def check_structure(self) -> None:
        """
        Verify source and prepare target.

        Raises:
            StructuralError: If source is unusable or target cannot be used.
        """
        cfg = self.config
        source, target = cfg.source, cfg.target

        if not source.exists():
            raise StructuralError(f"Source directory not found: {source}")
        if not source.is_dir():
            raise StructuralError(f"Source is not a directory: {source}")
        try:
            with os.scandir(source) as it:
                next(it, None)
        except OSError as e:
            raise StructuralError(f"Source directory is not readable: {source} ({e.strerror or e})")

        if target.exists():
            if not target.is_dir():
                raise StructuralError(f"Target is not a directory: {target}")
        elif not cfg.dry_run:
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StructuralError(f"Cannot create target directory: {target} ({e.strerror or e})")

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def walk(self, on_error: Callable[[OSError], None] | None = None) -> Iterator[Path]:
        """Lazily yield the files this configuration would organize."""
        cfg = self.config
        return walk_files(
            cfg.source,
            max_depth=cfg.effective_max_depth,
            include_hidden=cfg.include_hidden,
            pattern=cfg.pattern,
            on_error=on_error,
        )

    def destination_for(self, entry: FileEntry) -> Path:
        folder = destination_folder(entry, self.config.mode, self.type_map)
        return self.config.target / folder / entry.name

    # -------------------------------------------------------------------------
    # Per-file processing
    # -------------------------------------------------------------------------

    def process(self, path: Path) -> Outcome:
        """Classify and place a single file. Never raises for I/O problems."""
        cfg = self.config
        action = cfg.action_word
        dest = None

        try:
            entry = FileEntry.from_path(path)
            dest = self.destination_for(entry)
        except (OSError, ValueError, OverflowError) as e:
            return Outcome(action, path, None, FAILED, error=PerFileError.from_exception(path, e))

        if _same_file(path, dest):
            status = WOULD_SKIP if cfg.dry_run else SKIPPED
            return Outcome(action, path, dest, status, reason=REASON_IN_PLACE)

        if cfg.dry_run:
            return self._preview(path, dest)

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            final_dest = resolve_conflict(dest, cfg.conflict)
            if final_dest is None:
                return Outcome(action, path, dest, SKIPPED, reason=REASON_EXISTS)

            if cfg.is_copy:
                _copy_file(path, final_dest)
                return Outcome(action, path, final_dest, COPIED)

            _move_file(path, final_dest)
            return Outcome(action, path, final_dest, MOVED)

        except OSError as e:
            return Outcome(action, path, dest, FAILED, error=PerFileError.from_exception(path, e))

    def _preview(self, path: Path, dest: Path) -> Outcome:
        cfg = self.config
        action = cfg.action_word
        try:
            final_dest = resolve_conflict(dest, cfg.conflict)
        except OSError as e:
            return Outcome(action, path, dest, FAILED, error=PerFileError.from_exception(path, e))

        if final_dest is None:
            return Outcome(action, path, dest, WOULD_SKIP, reason=REASON_EXISTS)
        status = WOULD_COPY if cfg.is_copy else WOULD_MOVE
        return Outcome(action, path, final_dest, status)

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------

    def run(self, on_outcome: Callable[[Outcome], None] | None = None, progress: bool = False) -> RunReport:
        """
        Organize the source tree once.

        The qualifying file list is collected before the first transfer, so
        files placed into a target inside the source are not visited again.

        Args:
            on_outcome: Called with every outcome as soon as it is recorded.
            progress: Show a tqdm progress bar.

        Returns:
            The RunReport for this run.

        Raises:
            StructuralError: If source or target cannot be used.
        """
        cfg = self.config
        self.check_structure()
        report = RunReport(source=cfg.source, target=cfg.target, dry_run=cfg.dry_run)

        def emit(outcome: Outcome) -> None:
            report.record(outcome)
            if on_outcome:
                on_outcome(outcome)

        def walk_error(err: OSError) -> None:
            where = Path(err.filename) if err.filename else cfg.source
            emit(Outcome(cfg.action_word, where, None, FAILED, error=PerFileError.from_exception(where, err)))

        files = list(self.walk(on_error=walk_error))

        with tqdm(total=len(files), unit="file", disable=not progress) as pbar:
            for path in files:
                emit(self.process(path))
                pbar.update(1)

        if cfg.prune_empty and not cfg.dry_run and not cfg.is_copy:
            report.pruned = cleanup_empty_dirs(
                cfg.source,
                keep=cfg.target,
                max_depth=cfg.effective_max_depth,
                include_hidden=cfg.include_hidden,
                emptied={o.source.parent for o in report.outcomes if o.status == MOVED},
            )

        return report


def run(
    config: OrganizerConfig,
    on_outcome: Callable[[Outcome], None] | None = None,
    progress: bool = False,
) -> RunReport:
    """Run one organizer pass for config. See Organizer.run."""
    return Organizer(config).run(on_outcome=on_outcome, progress=progress)


def cleanup_empty_dirs(
    root: Path,
    keep: Path | None = None,
    max_depth: int | None = None,
    include_hidden: bool = False,
    emptied: set[Path] | None = None,
) -> list[str]:
    """
    Remove empty directories under root, bottom-up.

    The root itself, keep and every ancestor of keep survive. When keep is a
    proper subdirectory of root, everything inside it survives too. Only
    directories the organizer would have entered are considered.

    Without emptied, every empty directory qualifies, including ones that
    were already empty. With emptied (the folders files were moved out of),
    only those folders and their ancestors are candidates.

    Returns:
        Removed folder paths relative to root, with '/' separators.
    """
    root = Path(root)
    removed = []
    protect_inside_keep = keep is not None and keep != root and root in keep.parents
    candidates = None
    if emptied is not None:
        candidates = set()
        for folder in emptied:
            folder = Path(folder)
            candidates.add(folder)
            candidates.update(folder.parents)

    for dirpath, dirnames, filenames in os.walk(root, topdown=False):
        current = Path(dirpath)
        if current == root:
            continue

        if keep is not None and (current == keep or current in keep.parents):
            continue
        if protect_inside_keep and keep in current.parents:
            continue
        if candidates is not None and current not in candidates:
            continue

        rel_path = current.relative_to(root)
        if max_depth is not None and directory_depth(root, current) > max_depth:
            continue
        if not include_hidden and any(is_hidden(root.joinpath(*rel_path.parts[:i + 1]))
                                      for i in range(len(rel_path.parts))):
            continue

        try:
            # Only succeeds if the directory is empty
            os.rmdir(current)
            removed.append(rel_path.as_posix())
        except OSError:
            pass

    return removed
