"""Data model for the scaffold engine.

A run is described by three things:
- ScaffoldEntry: one directory or file to materialize under the project root
- ProjectContext: values substituted into file templates
- RunResult: what actually happened, entry by entry
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict


DEFAULT_PYTHON_VERSION = "3.11"
DEFAULT_LICENSE = "MIT"

MAX_NAME_LENGTH = 100
_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9._-]*$")
_RESERVED_NAMES = {"CON", "PRN", "AUX", "NUL"} | {
    f"{prefix}{n}" for prefix in ("COM", "LPT") for n in range(1, 10)
}


class EntryKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


class WritePolicy(str, Enum):
    """What to do when the target file already exists."""
    CREATE_IF_ABSENT = "create-if-absent"
    ALWAYS_OVERWRITE = "always-overwrite"
    PROMPT_BEFORE_OVERWRITE = "prompt-before-overwrite"


class Decision(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"


class Action(str, Enum):
    """Outcome recorded for a single entry."""
    CREATED = "created"
    SKIPPED = "skipped"
    OVERWRITTEN = "overwritten"


# =============================================================================
# Entries
# =============================================================================

@dataclass(frozen=True)
class ScaffoldEntry:
    """One desired filesystem artifact, relative to the project root."""
    path: str
    kind: EntryKind = EntryKind.FILE
    content: Optional[str] = None
    policy: WritePolicy = WritePolicy.CREATE_IF_ABSENT

    def __post_init__(self):
        if not self.path:
            raise ValueError("Entry path must not be empty")
        if self.kind == EntryKind.DIRECTORY and self.content is not None:
            raise ValueError(f"Directory entry cannot carry content: {self.path}")

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY


def directory(path: str) -> ScaffoldEntry:
    """Shorthand for a directory entry."""
    return ScaffoldEntry(path=path, kind=EntryKind.DIRECTORY)


def file(
    path: str,
    content: str = "",
    policy: WritePolicy = WritePolicy.CREATE_IF_ABSENT,
) -> ScaffoldEntry:
    """Shorthand for a file entry."""
    return ScaffoldEntry(path=path, kind=EntryKind.FILE, content=content, policy=policy)


# =============================================================================
# Project Context
# =============================================================================

class InvalidProjectNameError(ValueError):
    """Project name cannot be used as a directory and identifier."""
    pass


def validate_project_name(name: str) -> str:
    """Check that a project name is safe to use as a directory name.

    Args:
        name: Candidate project name

    Returns:
        The name, unchanged

    Raises:
        InvalidProjectNameError: If the name is empty, too long, contains
            separators or reserved characters, or is a reserved device name
    """
    if not name:
        raise InvalidProjectNameError("Project name must not be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidProjectNameError(
            f"Project name is longer than {MAX_NAME_LENGTH} characters"
        )
    if not _NAME_PATTERN.match(name):
        raise InvalidProjectNameError(
            f"Invalid project name '{name}': must start with a letter and "
            "contain only letters, digits, '.', '_' or '-'"
        )
    if name[-1] in ".-":
        raise InvalidProjectNameError(
            f"Invalid project name '{name}': must not end with '{name[-1]}'"
        )
    if name.split(".")[0].upper() in _RESERVED_NAMES:
        raise InvalidProjectNameError(f"'{name}' is a reserved device name")
    return name


def package_name(name: str) -> str:
    """Turn a project name into an importable module name."""
    return re.sub(r"[^0-9a-zA-Z_]", "_", name).lower()


@dataclass(frozen=True)
class ProjectContext:
    """Values resolved once per run and substituted into templates."""
    name: str
    python_version: str = DEFAULT_PYTHON_VERSION
    timestamp: datetime = field(default_factory=datetime.now)
    repo_url: Optional[str] = None
    author: str = ""
    license: str = DEFAULT_LICENSE

    @property
    def package(self) -> str:
        return package_name(self.name)

    def placeholders(self) -> Dict[str, str]:
        """Placeholder name -> substituted text."""
        return {
            "name": self.name,
            "package": self.package,
            "python_version": self.python_version,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "date": self.timestamp.date().isoformat(),
            "year": str(self.timestamp.year),
            "repo_url": self.repo_url or "",
            "author": self.author,
            "license": self.license,
        }


# =============================================================================
# Results
# =============================================================================

@dataclass
class BackupRecord:
    """An existing file copied aside before being overwritten."""
    original: Path
    backup: Path
    created_at: str


@dataclass
class EntryOutcome:
    """What the engine did with one entry."""
    path: str
    kind: EntryKind
    action: Action
    policy: Optional[WritePolicy] = None
    backup: Optional[Path] = None


@dataclass
class RunResult:
    """Accumulated outcome of applying a list of entries."""
    created: int = 0
    skipped: int = 0
    overwritten: int = 0
    backed_up: int = 0
    touched: List[str] = field(default_factory=list)
    outcomes: List[EntryOutcome] = field(default_factory=list)
    backups: List[BackupRecord] = field(default_factory=list)

    def record(self, outcome: EntryOutcome) -> None:
        """Add one outcome to the totals."""
        self.outcomes.append(outcome)
        if outcome.action == Action.CREATED:
            self.created += 1
            self.touched.append(outcome.path)
        elif outcome.action == Action.OVERWRITTEN:
            self.overwritten += 1
            self.touched.append(outcome.path)
        else:
            self.skipped += 1

    def record_backup(self, backup: BackupRecord) -> None:
        self.backups.append(backup)
        self.backed_up += 1

    @property
    def total(self) -> int:
        return self.created + self.skipped + self.overwritten

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "skipped": self.skipped,
            "overwritten": self.overwritten,
            "backed_up": self.backed_up,
            "touched": list(self.touched),
        }
