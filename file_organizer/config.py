"""
Run configuration for the File Organizer.

The presentation layer (CLI) builds an OrganizerConfig once; the engine only
reads it.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ConfigurationError


class Mode(str, Enum):
    """How a file's destination folder is derived."""

    BY_EXTENSION = "by-extension"
    BY_DATE = "by-date"
    BY_TYPE = "by-type"


class Transfer(str, Enum):
    MOVE = "move"
    COPY = "copy"


class ConflictStrategy(str, Enum):
    """What to do when the destination path is already taken."""

    SKIP = "skip"
    RENAME = "rename"
    OVERWRITE = "overwrite"


def _coerce_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"Unknown {field_name}: {value!r} (expected one of: {allowed})")


@dataclass(frozen=True)
class OrganizerConfig:
    """
    Validated, immutable settings for one organizer run.

    Enum fields also accept their string values ("by-date", "copy", ...).
    Paths are expanded and made absolute; target defaults to source.
    """
    source: Path
    target: Path | None = None
    mode: Mode = Mode.BY_EXTENSION
    transfer: Transfer = Transfer.MOVE
    dry_run: bool = False
    include_hidden: bool = False
    recursive: bool = True
    max_depth: int | None = None
    conflict: ConflictStrategy = ConflictStrategy.RENAME
    pattern: str | None = None
    prune_empty: bool = False

    def __post_init__(self):
        if self.source is None or str(self.source).strip() == "":
            raise ConfigurationError("source is required")

        source = Path(self.source).expanduser().resolve()
        target = Path(self.target).expanduser().resolve() if self.target else source

        # Frozen dataclass: normalized values go through object.__setattr__
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "target", target)
        object.__setattr__(self, "mode", _coerce_enum(Mode, self.mode, "mode"))
        object.__setattr__(self, "transfer", _coerce_enum(Transfer, self.transfer, "transfer"))
        object.__setattr__(self, "conflict", _coerce_enum(ConflictStrategy, self.conflict, "conflict"))

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigurationError(f"max-depth must be an integer, got {self.max_depth!r}")
            if self.max_depth < 0:
                raise ConfigurationError("max-depth must be >= 0")

        if self.pattern is not None and self.pattern == "":
            raise ConfigurationError("pattern must not be empty")

    @property
    def effective_max_depth(self) -> int | None:
        """Deepest directory level entered below source; None means unlimited."""
        if not self.recursive:
            return 0
        return self.max_depth

    @property
    def is_copy(self) -> bool:
        return self.transfer is Transfer.COPY

    @property
    def action_word(self) -> str:
        return self.transfer.value

    @classmethod
    def from_namespace(cls, args) -> "OrganizerConfig":
        """Build a config from parsed CLI arguments."""
        return cls(
            source=args.source,
            target=args.target,
            mode=args.mode,
            transfer=args.transfer,
            dry_run=args.dry_run,
            include_hidden=args.include_hidden,
            recursive=args.recursive,
            max_depth=args.max_depth,
            conflict=args.conflict,
            pattern=args.pattern,
            prune_empty=args.prune_empty,
        )
