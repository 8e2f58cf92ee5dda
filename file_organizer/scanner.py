"""
Directory scanning for the File Organizer.

Walks the source tree under the depth, hidden-file and pattern rules and
yields the files that qualify for organizing. Nothing here touches the
filesystem beyond reading it.
"""

import os
import re
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

# Windows: FILE_ATTRIBUTE_HIDDEN, BSD/macOS: UF_HIDDEN
FILE_ATTRIBUTE_HIDDEN = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2)
UF_HIDDEN = getattr(stat, "UF_HIDDEN", 0x8000)


@dataclass(frozen=True)
class FileEntry:
    """Metadata of one visited file."""
    path: Path
    parent: Path
    name: str
    modified: float
    is_regular: bool

    @classmethod
    def from_path(cls, path: Path) -> "FileEntry":
        """Read metadata for path without following symlinks. Raises OSError."""
        st = path.lstat()
        return cls(
            path=path,
            parent=path.parent,
            name=path.name,
            modified=st.st_mtime,
            is_regular=stat.S_ISREG(st.st_mode),
        )


def is_hidden(path: Path) -> bool:
    """
    Check whether a file or directory is hidden.

    Hidden means the platform hidden attribute is set, or the name starts
    with a dot. If the attribute cannot be read, only the name is checked.
    """
    if path.name.startswith("."):
        return True
    try:
        st = os.lstat(path)
    except OSError:
        return False
    attributes = getattr(st, "st_file_attributes", 0)
    flags = getattr(st, "st_flags", 0)
    return bool(attributes & FILE_ATTRIBUTE_HIDDEN) or bool(flags & UF_HIDDEN)


def glob_to_regex(glob: str) -> re.Pattern:
    """
    Compile a simple glob into an anchored, case-insensitive regex.

    Only '*' (any run of characters) and '?' (one character) are special;
    every other character matches itself.
    """
    parts = []
    for ch in glob:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def matches_pattern(name: str, pattern: re.Pattern | None) -> bool:
    if pattern is None:
        return True
    return pattern.fullmatch(name) is not None


def directory_depth(root: Path, directory: Path) -> int:
    """Number of path segments between root and directory (root itself is 0)."""
    return len(directory.relative_to(root).parts)


def walk_files(
    root: Path,
    max_depth: int | None = None,
    include_hidden: bool = False,
    pattern: str | None = None,
    on_error: Callable[[OSError], None] | None = None,
) -> Iterator[Path]:
    """
    Lazily yield the regular files under root that qualify for organizing.

    Args:
        root: Directory to walk. It is always entered, even if hidden.
        max_depth: Deepest directory level to enter (root = 0); None for unlimited.
        include_hidden: If False, hidden files and directories are skipped.
        pattern: Optional glob the file name must match (case-insensitive).
        on_error: Called with the OSError of any directory that cannot be listed.

    Yields:
        Paths of qualifying files, each at most once.
    """
    root = Path(root)
    compiled = glob_to_regex(pattern) if pattern is not None else None

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        current = Path(dirpath)
        child_depth = directory_depth(root, current) + 1

        # 1. Prune subdirectories we must not enter
        if max_depth is not None and child_depth > max_depth:
            dirnames[:] = []
        elif not include_hidden:
            dirnames[:] = [d for d in dirnames if not is_hidden(current / d)]
        dirnames.sort()

        # 2. Filter files
        for filename in sorted(filenames):
            filepath = current / filename

            if filepath.is_symlink() or not filepath.is_file():
                continue
            if not include_hidden and is_hidden(filepath):
                continue
            if not matches_pattern(filename, compiled):
                continue

            yield filepath
