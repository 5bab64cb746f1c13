"""Environment manager wrapper (conda / mamba).

Creates the project environment from the generated environment.yml.
Like git, the environment manager is an opaque subprocess: dsinit only
inspects its exit status and output.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from dsinit.core.errors import CollaboratorError

logger = logging.getLogger(__name__)

ENV_SPEC_FILE = "environment.yml"
SUPPORTED_MANAGERS = ("mamba", "conda")


class CondaError(CollaboratorError):
    """Base exception for environment manager operations."""
    pass


class CondaNotFoundError(CondaError):
    """No supported environment manager on PATH."""
    pass


class CondaCommandError(CondaError):
    """Environment manager exited non-zero."""
    pass


def find_env_manager(preferred: str = "auto") -> str:
    """Pick the environment manager executable.

    Args:
        preferred: "auto" (first of mamba, conda found on PATH) or an
            explicit executable name

    Raises:
        CondaNotFoundError: If nothing suitable is installed
    """
    candidates = SUPPORTED_MANAGERS if preferred == "auto" else (preferred,)
    for name in candidates:
        if shutil.which(name):
            return name
    raise CondaNotFoundError(
        f"No environment manager found (looked for: {', '.join(candidates)}). "
        "Install Miniforge: https://github.com/conda-forge/miniforge",
        command=list(candidates),
    )


def run_conda(
    *args,
    cwd: Path,
    executable: str = "conda",
    check: bool = False,
) -> subprocess.CompletedProcess:
    """Run an environment manager command and wait for it.

    Raises:
        CondaNotFoundError: If the executable cannot be started
        CondaCommandError: If check=True and the command fails
    """
    cmd = [executable] + list(args)
    logger.debug("Running %s in %s", " ".join(cmd), cwd)

    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise CondaNotFoundError(
            f"{executable} is not installed or not in PATH", command=cmd, cwd=cwd
        )

    if check and result.returncode != 0:
        raise CondaCommandError(
            f"{executable} exited with status {result.returncode}",
            command=cmd,
            returncode=result.returncode,
            output=(result.stderr or result.stdout or "").strip(),
            cwd=cwd,
        )
    return result


def create_env(
    root: Path,
    spec_file: str = ENV_SPEC_FILE,
    executable: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """Create the environment described by root/spec_file.

    Args:
        root: Project root containing the spec file
        spec_file: Environment spec, relative to root
        executable: Manager to use; detected when None

    Raises:
        CondaError: If the manager is missing, the spec file is missing
            or environment creation fails
    """
    spec_path = root / spec_file
    if not spec_path.is_file():
        raise CondaError(f"Environment spec not found: {spec_file}", cwd=root)

    executable = executable or find_env_manager()
    return run_conda("env", "create", "-f", spec_file, cwd=root, executable=executable, check=True)
