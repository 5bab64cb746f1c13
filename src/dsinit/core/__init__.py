"""Core modules for dsinit.

This package contains the pieces every command builds on:
- entry: ScaffoldEntry, ProjectContext and RunResult
- engine: the idempotent scaffold engine
- errors: exception hierarchy
- config: user defaults
"""

from dsinit.core.entry import (
    Action,
    BackupRecord,
    Decision,
    EntryKind,
    EntryOutcome,
    InvalidProjectNameError,
    ProjectContext,
    RunResult,
    ScaffoldEntry,
    WritePolicy,
    directory,
    file,
    package_name,
    validate_project_name,
)

from dsinit.core.errors import (
    ScaffoldError,
    PathEscapeError,
    WriteFailureError,
    CollaboratorError,
)

from dsinit.core.engine import apply, render

from dsinit.core.config import (
    DsinitConfig,
    ConfigManager,
    get_config,
)

__all__ = [
    # Entries
    "Action",
    "BackupRecord",
    "Decision",
    "EntryKind",
    "EntryOutcome",
    "InvalidProjectNameError",
    "ProjectContext",
    "RunResult",
    "ScaffoldEntry",
    "WritePolicy",
    "directory",
    "file",
    "package_name",
    "validate_project_name",
    # Errors
    "ScaffoldError",
    "PathEscapeError",
    "WriteFailureError",
    "CollaboratorError",
    # Engine
    "apply",
    "render",
    # Config
    "DsinitConfig",
    "ConfigManager",
    "get_config",
]
