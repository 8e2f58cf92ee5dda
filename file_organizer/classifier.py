"""
File classification for the File Organizer.

Maps a file to the name of the folder it belongs in. Everything here is pure:
the same name/timestamp always yields the same folder.
"""

from datetime import datetime

from .config import Mode

NO_EXTENSION_FOLDER = "_no_ext"
OTHER_FOLDER = "Others"
DATE_FOLDER_FORMAT = "%Y/%m"

# -----------------------------------------------------------------------------
# Type categories
# -----------------------------------------------------------------------------

TYPE_CATEGORIES = {
    "Images": ("jpg", "jpeg", "png", "gif", "bmp", "tiff", "webp", "heic", "raw", "svg"),
    "Videos": ("mp4", "mov", "avi", "mkv", "wmv", "flv", "webm", "m4v"),
    "Audio": ("mp3", "wav", "flac", "aac", "ogg", "m4a", "wma"),
    "Documents": ("pdf", "doc", "docx", "rtf", "txt", "odt", "md"),
    "Spreadsheets": ("xls", "xlsx", "csv", "ods"),
    "Presentations": ("ppt", "pptx", "odp", "key"),
    "Archives": ("zip", "rar", "7z", "tar", "gz", "bz2"),
    "Code": (
        "java", "kt", "kts", "py", "js", "ts", "html", "css",
        "c", "h", "cpp", "hpp", "cc", "cs", "go", "rb", "php", "rs",
        "swift", "m", "mm", "sh", "bat", "ps1", "sql",
        "json", "xml", "yml", "yaml", "ini", "toml", "gradle",
    ),
}


def build_type_map() -> dict[str, str]:
    """Return a fresh extension -> category lookup (extensions without dot)."""
    type_map: dict[str, str] = {}
    for category, extensions in TYPE_CATEGORIES.items():
        for ext in extensions:
            type_map[ext] = category
    return type_map


_DEFAULT_TYPE_MAP = build_type_map()


def extension_of(name: str) -> str:
    """
    Lowercase extension of a file name, without the dot.

    Returns "" when the name has no dot or ends with one. A leading-dot name
    like ".bashrc" has the extension "bashrc".
    """
    dot = name.rfind(".")
    if dot < 0 or dot == len(name) - 1:
        return ""
    return name[dot + 1:].lower()


def date_folder(timestamp: float) -> str:
    """Local-time 'YYYY/MM' folder for a POSIX timestamp."""
    return datetime.fromtimestamp(timestamp).strftime(DATE_FOLDER_FORMAT)


def destination_folder(entry, mode: Mode, type_map: dict[str, str] | None = None) -> str:
    """
    Folder name (possibly nested, for by-date) a file is organized into.

    Args:
        entry: A FileEntry (only name and modified are read).
        mode: Classification mode.
        type_map: Extension -> category table for by-type mode.

    Returns:
        A non-empty folder path segment.
    """
    if mode is Mode.BY_DATE:
        return date_folder(entry.modified)

    ext = extension_of(entry.name)
    if mode is Mode.BY_TYPE:
        table = type_map if type_map is not None else _DEFAULT_TYPE_MAP
        return table.get(ext, OTHER_FOLDER)

    return ext or NO_EXTENSION_FOLDER
