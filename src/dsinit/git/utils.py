"""Git wrappers used after a scaffold run.

Git is treated as an opaque external command: every helper runs one
`git` subprocess, blocks until it exits and looks only at the exit
status and captured output.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from dsinit.core.errors import CollaboratorError

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial project scaffold"
SCAFFOLD_COMMIT_MESSAGE = "Add project scaffold"
DEFAULT_BRANCH = "main"


# =============================================================================
# Exceptions
# =============================================================================

class GitError(CollaboratorError):
    """Base exception for Git operations."""
    pass


class GitNotInstalledError(GitError):
    """Git is not installed or not in PATH."""
    pass


class GitCommandError(GitError):
    """Git command failed with non-zero exit code."""

    def __init__(self, message: str, returncode: int, stderr: str = "", **kwargs):
        super().__init__(message, returncode=returncode, output=stderr, **kwargs)
        self.stderr = stderr


# =============================================================================
# Core Functions
# =============================================================================

def run_git(
    *args,
    cwd: Optional[Path] = None,
    check: bool = False,
) -> subprocess.CompletedProcess:
    """Run a git command.

    Args:
        *args: Git command arguments
        cwd: Working directory (callers always pass the project root)
        check: Raise exception on failure

    Returns:
        CompletedProcess result

    Raises:
        GitNotInstalledError: If git is not installed
        GitCommandError: If check=True and command fails
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)
    logger.debug("Running %s in %s", cmd_str, cwd)

    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise GitNotInstalledError(
            "Git is not installed or not in PATH. "
            "Please install git: https://git-scm.com/downloads",
            command=cmd,
            cwd=cwd,
        )

    if check and result.returncode != 0:
        raise GitCommandError(
            f"Git command failed: {cmd_str}",
            returncode=result.returncode,
            stderr=(result.stderr or result.stdout or "").strip(),
            command=cmd,
            cwd=cwd,
        )
    return result


def is_git_repo(path: Path) -> bool:
    """Check if path is inside a Git repository.

    Note:
        Returns False if git is not installed (does not raise).
    """
    if not path.is_dir():
        return False
    try:
        result = run_git("rev-parse", "--git-dir", cwd=path)
        return result.returncode == 0
    except GitError:
        return False


def get_repo_root(path: Path) -> Optional[Path]:
    """Get the root directory of the Git repository, or None."""
    try:
        result = run_git("rev-parse", "--show-toplevel", cwd=path)
    except GitError:
        return None
    if result.returncode == 0:
        return Path(result.stdout.strip())
    return None


def is_repo_root(path: Path) -> bool:
    """Check whether path is the top level of its own repository.

    A directory nested inside another working tree is not a repo root.
    """
    root = get_repo_root(path)
    return root is not None and root.resolve() == path.resolve()


def init_repo(path: Path, branch: str = DEFAULT_BRANCH) -> None:
    """Initialize a fresh repository at path.

    Raises:
        GitError: If git is missing or init fails
    """
    run_git("init", "-b", branch, cwd=path, check=True)


def clone_repo(url: str, target: Path) -> None:
    """Clone url into target (which must be absent or empty).

    Runs from target's parent so the clone lands exactly at target.

    Raises:
        GitError: If git is missing or clone fails
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    run_git("clone", url, target.name, cwd=target.parent, check=True)


def has_changes(path: Path) -> bool:
    """Check whether the working tree has anything to commit."""
    result = run_git("status", "--porcelain", cwd=path, check=True)
    return bool(result.stdout.strip())


def commit_all(path: Path, message: str = INITIAL_COMMIT_MESSAGE) -> bool:
    """Stage everything and commit.

    Returns:
        True if a commit was made, False if there was nothing to commit

    Raises:
        GitError: If staging or committing fails
    """
    if not has_changes(path):
        logger.info("Nothing to commit in %s", path)
        return False
    run_git("add", "-A", cwd=path, check=True)
    run_git("commit", "-m", message, cwd=path, check=True)
    return True


def create_tag(path: Path, tag: str, message: Optional[str] = None) -> None:
    """Create an annotated tag on HEAD.

    Raises:
        GitError: If tagging fails (e.g. tag already exists)
    """
    run_git("tag", "-a", tag, "-m", message or tag, cwd=path, check=True)


def tag_exists(path: Path, tag: str) -> bool:
    """Check whether a tag is already defined."""
    result = run_git("tag", "--list", tag, cwd=path)
    return result.returncode == 0 and bool(result.stdout.strip())
