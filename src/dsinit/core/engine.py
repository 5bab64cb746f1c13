"""Idempotent scaffold engine.

Applies an ordered list of ScaffoldEntry objects under a single project
root. Directories are created idempotently; files are written according
to their WritePolicy. Every write goes through a temp file and
os.replace(), so a target is either left as it was or fully replaced.

The engine never reorders entries, never creates a file's parent
directory on its own and never deletes anything except the temp file
of a failed write.
"""

import logging
import os
import re
import shutil
from datetime import datetime
from pathlib import Path, PureWindowsPath
from typing import Callable, Iterable, Optional

from dsinit.core.entry import (
    Action,
    BackupRecord,
    Decision,
    EntryKind,
    EntryOutcome,
    ProjectContext,
    RunResult,
    ScaffoldEntry,
    WritePolicy,
)
from dsinit.core.errors import PathEscapeError, ScaffoldError, WriteFailureError

logger = logging.getLogger(__name__)

DecisionFn = Callable[[Path], Decision]
Reporter = Callable[[EntryOutcome], None]

BACKUP_MARKER = ".bak."
BACKUP_TIME_FORMAT = "%Y%m%dT%H%M%S"

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


# =============================================================================
# Rendering
# =============================================================================

def render(template: str, context: ProjectContext) -> str:
    """Substitute {{placeholder}} tokens from the context.

    Unknown placeholders are left exactly as written.
    """
    values = context.placeholders()

    def _replace(match: re.Match) -> str:
        return values.get(match.group(1), match.group(0))

    return _PLACEHOLDER.sub(_replace, template)


# =============================================================================
# Path Handling
# =============================================================================

def resolve_entry_path(root: Path, relative: str) -> Path:
    """Resolve an entry path against root.

    Args:
        root: Project root (already resolved)
        relative: Entry path as written in the entry

    Returns:
        Absolute, resolved target path

    Raises:
        PathEscapeError: If the path is absolute or lands outside root
    """
    if Path(relative).is_absolute() or PureWindowsPath(relative).anchor:
        raise PathEscapeError("Absolute entry path is not allowed", path=relative)

    target = (root / relative).resolve()
    if target != root and root not in target.parents:
        raise PathEscapeError("Entry path escapes the project root", path=relative)
    return target


def backup_path_for(target: Path, when: datetime) -> Path:
    """Pick a free `<name>.bak.<timestamp>` path next to target."""
    base = f"{target.name}{BACKUP_MARKER}{when.strftime(BACKUP_TIME_FORMAT)}"
    candidate = target.with_name(base)
    counter = 1
    while candidate.exists():
        candidate = target.with_name(f"{base}.{counter}")
        counter += 1
    return candidate


def atomic_write(target: Path, text: str) -> None:
    """Write text to target so readers never see a partial file.

    Writes a sibling temp file, fsyncs it, then replaces the target.
    Keeps the permission bits of a file being replaced.
    """
    tmp_path = target.with_name(f".{target.name}.{os.getpid()}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if target.is_file():
            shutil.copymode(str(target), str(tmp_path))
        os.replace(str(tmp_path), str(target))
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()
        raise


# =============================================================================
# Engine
# =============================================================================

def apply(
    root: Path,
    entries: Iterable[ScaffoldEntry],
    context: ProjectContext,
    interactive: bool = False,
    decide: Optional[DecisionFn] = None,
    reporter: Optional[Reporter] = None,
) -> RunResult:
    """Apply entries under root, in the order given.

    Args:
        root: Project root; created if missing
        entries: Ordered entries; directories must precede their files
        context: Values for template placeholders
        interactive: Whether PROMPT_BEFORE_OVERWRITE may ask `decide`
        decide: Called with the target path of a file about to be
            overwritten; no function means decline
        reporter: Called with each outcome as it is recorded

    Returns:
        RunResult for the whole run

    Raises:
        PathEscapeError: An entry resolves outside root
        WriteFailureError: The filesystem rejected a create, backup or
            overwrite. Both carry the partial RunResult in `.result`.
    """
    result = RunResult()

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteFailureError(
            f"Cannot create project root: {e.strerror or e}", path=str(root), result=result
        ) from e
    base = root.resolve()

    for entry in entries:
        try:
            target = resolve_entry_path(base, entry.path)
            if entry.kind == EntryKind.DIRECTORY:
                outcome = _apply_directory(entry, target)
            else:
                outcome = _apply_file(entry, target, context, interactive, decide, result)
        except ScaffoldError as e:
            e.result = result
            logger.error("Scaffold aborted at %s: %s", entry.path, e)
            raise

        result.record(outcome)
        logger.debug("%s %s", outcome.action.value, outcome.path)
        if reporter is not None:
            reporter(outcome)

    return result


def _apply_directory(entry: ScaffoldEntry, target: Path) -> EntryOutcome:
    existed = target.is_dir()
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteFailureError(
            f"Cannot create directory: {e.strerror or e}", path=entry.path
        ) from e
    return EntryOutcome(
        path=entry.path,
        kind=EntryKind.DIRECTORY,
        action=Action.SKIPPED if existed else Action.CREATED,
    )


def _apply_file(
    entry: ScaffoldEntry,
    target: Path,
    context: ProjectContext,
    interactive: bool,
    decide: Optional[DecisionFn],
    result: RunResult,
) -> EntryOutcome:
    outcome = EntryOutcome(
        path=entry.path, kind=EntryKind.FILE, action=Action.CREATED, policy=entry.policy
    )

    if target.exists():
        if not _should_overwrite(entry, target, interactive, decide):
            outcome.action = Action.SKIPPED
            return outcome
        outcome.action = Action.OVERWRITTEN
        if entry.policy == WritePolicy.PROMPT_BEFORE_OVERWRITE:
            backup = _backup(entry, target)
            outcome.backup = backup.backup
            result.record_backup(backup)

    text = render(entry.content or "", context)
    try:
        atomic_write(target, text)
    except OSError as e:
        raise WriteFailureError(
            f"Cannot write file: {e.strerror or e}", path=entry.path, policy=entry.policy
        ) from e
    return outcome


def _should_overwrite(
    entry: ScaffoldEntry,
    target: Path,
    interactive: bool,
    decide: Optional[DecisionFn],
) -> bool:
    if entry.policy == WritePolicy.ALWAYS_OVERWRITE:
        return True
    if entry.policy == WritePolicy.CREATE_IF_ABSENT:
        return False
    if not interactive or decide is None:
        logger.debug("Not overwriting %s (non-interactive)", entry.path)
        return False
    return decide(target) == Decision.ACCEPT


def _backup(entry: ScaffoldEntry, target: Path) -> BackupRecord:
    now = datetime.now()
    destination = backup_path_for(target, now)
    try:
        shutil.copy2(str(target), str(destination))
    except OSError as e:
        raise WriteFailureError(
            f"Cannot back up existing file: {e.strerror or e}",
            path=entry.path,
            policy=entry.policy,
        ) from e
    logger.info("Backed up %s to %s", target, destination.name)
    return BackupRecord(original=target, backup=destination, created_at=now.isoformat())
