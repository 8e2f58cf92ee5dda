"""
Error taxonomy for the File Organizer.

Only ConfigurationError, StructuralError and InternalError abort a run.
PerFileError is never raised out of the engine; it is attached to the
outcome of the file that failed.
"""

from pathlib import Path


class OrganizerError(Exception):
    """Base error for the project."""


class ConfigurationError(OrganizerError):
    """Invalid or missing settings."""


class StructuralError(OrganizerError):
    """Source or target cannot be used; nothing has been touched."""


class InternalError(OrganizerError):
    """Unexpected failure outside the other categories."""


class PerFileError(OrganizerError):
    """A failure while handling one file."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message

    @classmethod
    def from_exception(cls, path: Path, exc: BaseException) -> "PerFileError":
        message = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        return cls(path, message or exc.__class__.__name__)
