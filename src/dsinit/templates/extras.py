"""Entries added by the `full` tier.

Pre-commit hooks, a CI workflow, extra editor config, a Makefile,
a changelog and a docs stub.
"""

from typing import List

from dsinit.core.entry import ProjectContext, ScaffoldEntry, WritePolicy, directory, file
from dsinit.templates.base import marker_entries

RELEASE_TAG = "v0.1.0"


PRE_COMMIT_CONFIG = """repos:
  - repo: https://github.com/pre-commit/pre-commit-hooks
    rev: v4.6.0
    hooks:
      - id: trailing-whitespace
      - id: end-of-file-fixer
      - id: check-yaml
      - id: check-toml
      - id: check-added-large-files
        args: ["--maxkb=1024"]
  - repo: https://github.com/astral-sh/ruff-pre-commit
    rev: v0.6.9
    hooks:
      - id: ruff
        args: ["--fix"]
      - id: ruff-format
  - repo: https://github.com/kynan/nbstripout
    rev: 0.7.1
    hooks:
      - id: nbstripout
"""


# GitHub expressions use dotted names, which placeholder rendering leaves alone.
CI_WORKFLOW = """name: CI

on:
  push:
    branches: [main]
  pull_request:

jobs:
  test:
    runs-on: ${{ matrix.os }}
    strategy:
      fail-fast: false
      matrix:
        os: [ubuntu-latest, macos-latest]
    defaults:
      run:
        shell: bash -el {0}
    steps:
      - uses: actions/checkout@v4
      - uses: conda-incubator/setup-miniconda@v3
        with:
          environment-file: environment.yml
          activate-environment: {{name}}
          python-version: "{{python_version}}"
      - name: Install package
        run: pip install -e ".[dev]"
      - name: Lint
        run: ruff check src tests
      - name: Test
        run: pytest
"""


VSCODE_EXTENSIONS = """{
    "recommendations": [
        "ms-python.python",
        "ms-toolsai.jupyter",
        "charliermarsh.ruff",
        "editorconfig.editorconfig",
        "redhat.vscode-yaml"
    ]
}
"""


VSCODE_LAUNCH = """{
    "version": "0.2.0",
    "configurations": [
        {
            "name": "Python: current file",
            "type": "debugpy",
            "request": "launch",
            "program": "${file}",
            "console": "integratedTerminal",
            "env": {"PYTHONPATH": "${workspaceFolder}/src"}
        },
        {
            "name": "Pytest: all tests",
            "type": "debugpy",
            "request": "launch",
            "module": "pytest",
            "console": "integratedTerminal"
        }
    ]
}
"""


MAKEFILE = """.PHONY: env install lint test hooks clean

env:
\tconda env create -f environment.yml

install:
\tpip install -e ".[dev]"

lint:
\truff check src tests

test:
\tpytest

hooks:
\tpre-commit install

clean:
\tfind . -type d -name __pycache__ -prune -exec rm -rf {} +
\trm -rf .pytest_cache .ruff_cache build dist *.egg-info
"""


CHANGELOG = """# Changelog

All notable changes to {{name}} are documented here.

## [0.1.0] - {{date}}

### Added
- Initial project scaffold.
"""


DOCS_INDEX = """# {{name}}

Project documentation.

- Data sources: describe where `data/raw` comes from
- Methods: summarize the modelling approach
- Results: link figures in `reports/figures`
"""

DOCS_SOURCE_LINE = "\nSource repository: {{repo_url}}\n"


def extras_dir_entries(context: ProjectContext) -> List[ScaffoldEntry]:
    return [
        directory(".github"),
        directory(".github/workflows"),
        directory("docs"),
        *marker_entries("models", "reports/figures"),
    ]


def extras_file_entries(context: ProjectContext) -> List[ScaffoldEntry]:
    docs_index = DOCS_INDEX + (DOCS_SOURCE_LINE if context.repo_url else "")
    return [
        file(".pre-commit-config.yaml", PRE_COMMIT_CONFIG),
        file(".github/workflows/ci.yml", CI_WORKFLOW, WritePolicy.ALWAYS_OVERWRITE),
        file(".vscode/extensions.json", VSCODE_EXTENSIONS, WritePolicy.ALWAYS_OVERWRITE),
        file(".vscode/launch.json", VSCODE_LAUNCH),
        file("Makefile", MAKEFILE),
        file("CHANGELOG.md", CHANGELOG),
        file("docs/index.md", docs_index),
    ]
