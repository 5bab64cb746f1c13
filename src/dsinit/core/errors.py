"""Exceptions raised by dsinit.

Two families:
- ScaffoldError: fatal, aborts the current run
- CollaboratorError: an external command (git, conda) failed; the
  scaffold on disk is still valid, so callers report it as a warning
"""

from pathlib import Path
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from dsinit.core.entry import RunResult, WritePolicy


# =============================================================================
# Scaffold Errors
# =============================================================================

class ScaffoldError(Exception):
    """Base exception for a run that had to stop.

    Carries the offending path, the write policy in effect (if any) and
    the RunResult accumulated before the failure.
    """

    def __init__(
        self,
        message: str,
        path: str,
        policy: Optional["WritePolicy"] = None,
        result: Optional["RunResult"] = None,
    ):
        super().__init__(message)
        self.path = path
        self.policy = policy
        self.result = result

    def describe(self) -> str:
        """One-line diagnostic for the console."""
        text = f"{self} ({self.path})"
        if self.policy is not None:
            text += f" [policy: {self.policy.value}]"
        return text


class PathEscapeError(ScaffoldError):
    """Entry path resolves outside the project root."""
    pass


class WriteFailureError(ScaffoldError):
    """Filesystem rejected a create or overwrite."""
    pass


# =============================================================================
# Collaborator Errors
# =============================================================================

class CollaboratorError(Exception):
    """External command exited non-zero or could not be started."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        output: str = "",
        cwd: Optional[Path] = None,
    ):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        self.cwd = cwd
