"""
File Organizer
==============

Sorts the files of a directory tree into folders by extension, modification
month or coarse file type, with move/copy, dry-run and conflict handling.
"""

__version__ = "1.0.0"

from .config import OrganizerConfig, Mode, Transfer, ConflictStrategy
from .classifier import destination_folder, extension_of, build_type_map
from .conflicts import resolve_conflict
from .scanner import FileEntry, walk_files, is_hidden, glob_to_regex
from .executor import Organizer, Outcome, RunReport, run, cleanup_empty_dirs
from .errors import (
    OrganizerError,
    ConfigurationError,
    StructuralError,
    PerFileError,
    InternalError,
)

__all__ = [
    "OrganizerConfig",
    "Mode",
    "Transfer",
    "ConflictStrategy",
    "destination_folder",
    "extension_of",
    "build_type_map",
    "resolve_conflict",
    "FileEntry",
    "walk_files",
    "is_hidden",
    "glob_to_regex",
    "Organizer",
    "Outcome",
    "RunReport",
    "run",
    "cleanup_empty_dirs",
    "OrganizerError",
    "ConfigurationError",
    "StructuralError",
    "PerFileError",
    "InternalError",
]
