"""Shared test fixtures for dsinit.

Provides:
- isolated_config: points DSINIT_CONFIG_DIR at a temp dir (autouse)
- context: ProjectContext with a fixed timestamp
- project_root: empty directory to scaffold into
- git_workspace: real git repo with one commit
- cli_runner: Click CliRunner
- mock_git_basic: pytest-subprocess fixture pre-configured for git commands
"""

import subprocess
from datetime import datetime

import pytest
from click.testing import CliRunner

from dsinit.core.config import CONFIG_DIR_ENV
from dsinit.core.entry import ProjectContext


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Never read or write the real user config."""
    config_dir = tmp_path_factory.mktemp("dsinit-config")
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
    return config_dir


@pytest.fixture
def context():
    """Context with a deterministic timestamp."""
    return ProjectContext(
        name="demo",
        python_version="3.11",
        timestamp=datetime(2024, 5, 17, 9, 30, 0),
        author="Test User",
    )


@pytest.fixture
def project_root(tmp_path):
    """Empty directory used as the project root."""
    root = tmp_path / "demo"
    root.mkdir()
    return root


@pytest.fixture
def git_workspace(tmp_path):
    """Create a temporary workspace that is a real git repo.

    Useful for tests that need actual git operations.
    """
    subprocess.run(["git", "init"], cwd=tmp_path, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path,
        capture_output=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test User"],
        cwd=tmp_path,
        capture_output=True,
    )
    readme = tmp_path / "README.md"
    readme.write_text("# Test Project\n")
    subprocess.run(["git", "add", "-A"], cwd=tmp_path, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"],
        cwd=tmp_path,
        capture_output=True,
    )
    return tmp_path


@pytest.fixture
def cli_runner():
    """Click CliRunner for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def mock_git_basic(fp):
    """Mock the git commands `dsinit new` runs on a fresh project.

    Use `fp` directly for custom subprocess mocking in individual tests.
    """
    fp.register(["git", "rev-parse", "--show-toplevel"], returncode=128, stderr="not a git repository\n")
    fp.register(["git", "init", "-b", "main"], stdout="Initialized empty Git repository\n")
    fp.register(["git", "status", "--porcelain"], stdout="?? README.md\n")
    fp.register(["git", "add", "-A"])
    fp.register(["git", "commit", "-m", fp.any()], stdout="[main (root-commit) abc1234]\n")
    fp.register(["git", "tag", "--list", fp.any()], stdout="")
    fp.register(["git", "tag", "-a", fp.any()])
    return fp
