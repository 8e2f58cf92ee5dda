"""
Destination conflict resolution.
"""

import itertools
import os
from pathlib import Path
from typing import Callable

from .config import ConflictStrategy


def split_name(name: str) -> tuple[str, str]:
    """
    Split a file name into base and extension (with dot).

    A dot in first position does not start an extension: ".bashrc" -> (".bashrc", "").
    """
    dot = name.rfind(".")
    if dot > 0:
        return name[:dot], name[dot:]
    return name, ""


def numbered_candidates(destination: Path):
    """Yield 'base (1)ext', 'base (2)ext', ... next to destination, forever."""
    base, ext = split_name(destination.name)
    for n in itertools.count(1):
        yield destination.with_name(f"{base} ({n}){ext}")


def resolve_conflict(
    destination: Path,
    strategy: ConflictStrategy,
    exists: Callable[[Path], bool] = os.path.lexists,
) -> Path | None:
    """
    Decide the final path for a file headed to destination.

    Args:
        destination: Candidate destination path.
        strategy: Conflict strategy to apply if destination is taken.
        exists: Existence check, called once per candidate path.

    Returns:
        The path to write to, or None if the file must be skipped.
    """
    if not exists(destination):
        return destination

    if strategy is ConflictStrategy.OVERWRITE:
        return destination
    if strategy is ConflictStrategy.SKIP:
        return None

    # Lowest free number wins
    for candidate in numbered_candidates(destination):
        if not exists(candidate):
            return candidate
