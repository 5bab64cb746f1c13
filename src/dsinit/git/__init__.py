"""Git utilities for dsinit."""

from dsinit.git.utils import (
    DEFAULT_BRANCH,
    INITIAL_COMMIT_MESSAGE,
    SCAFFOLD_COMMIT_MESSAGE,
    GitError,
    GitNotInstalledError,
    GitCommandError,
    run_git,
    is_git_repo,
    get_repo_root,
    is_repo_root,
    init_repo,
    clone_repo,
    has_changes,
    commit_all,
    create_tag,
    tag_exists,
)

__all__ = [
    "DEFAULT_BRANCH",
    "INITIAL_COMMIT_MESSAGE",
    "SCAFFOLD_COMMIT_MESSAGE",
    "GitError",
    "GitNotInstalledError",
    "GitCommandError",
    "run_git",
    "is_git_repo",
    "get_repo_root",
    "is_repo_root",
    "init_repo",
    "clone_repo",
    "has_changes",
    "commit_all",
    "create_tag",
    "tag_exists",
]
