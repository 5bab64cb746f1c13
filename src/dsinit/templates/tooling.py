"""Entries added by the `core` tier.

Build configuration, a starter module with its test, editor settings
and a license file.
"""

from typing import List

from dsinit.core.entry import ProjectContext, ScaffoldEntry, WritePolicy, directory, file
from dsinit.templates.base import marker_entries


PYPROJECT = '''[build-system]
requires = ["setuptools>=68", "wheel"]
build-backend = "setuptools.build_meta"

[project]
name = "{{name}}"
version = "0.1.0"
description = "Add a short description here"
readme = "README.md"
requires-python = ">={{python_version}}"
license = { text = "{{license}}" }
dependencies = [
    "numpy",
    "pandas",
]

[project.optional-dependencies]
dev = [
    "pytest>=7.0",
    "ruff>=0.4",
]

[tool.setuptools.packages.find]
where = ["src"]

[tool.pytest.ini_options]
testpaths = ["tests"]
pythonpath = ["src"]

[tool.ruff]
line-length = 100
src = ["src", "tests"]

[tool.ruff.lint]
select = ["E", "F", "I", "B"]
'''


DATA_MODULE = '''"""Data loading helpers for {{name}}."""

from pathlib import Path

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[2]
RAW_DIR = PROJECT_ROOT / "data" / "raw"
PROCESSED_DIR = PROJECT_ROOT / "data" / "processed"


def load_raw(filename: str) -> pd.DataFrame:
    """Read a CSV file from data/raw."""
    return pd.read_csv(RAW_DIR / filename)


def save_processed(df: pd.DataFrame, filename: str) -> Path:
    """Write a DataFrame to data/processed and return the path."""
    PROCESSED_DIR.mkdir(parents=True, exist_ok=True)
    path = PROCESSED_DIR / filename
    df.to_csv(path, index=False)
    return path
'''


DATA_TEST = '''"""Tests for {{package}}.data."""

import pandas as pd

from {{package}} import data


def test_save_processed_roundtrip(tmp_path, monkeypatch):
    monkeypatch.setattr(data, "PROCESSED_DIR", tmp_path)
    df = pd.DataFrame({"a": [1, 2], "b": [3, 4]})

    path = data.save_processed(df, "out.csv")

    assert path.exists()
    assert pd.read_csv(path).equals(df)
'''


EDITORCONFIG = """root = true

[*]
charset = utf-8
end_of_line = lf
insert_final_newline = true
trim_trailing_whitespace = true
indent_style = space
indent_size = 4

[*.{yml,yaml,json,toml}]
indent_size = 2

[Makefile]
indent_style = tab
"""


VSCODE_SETTINGS = """{
    "python.testing.pytestEnabled": true,
    "python.testing.pytestArgs": ["tests"],
    "python.analysis.extraPaths": ["src"],
    "editor.formatOnSave": true,
    "[python]": {
        "editor.defaultFormatter": "charliermarsh.ruff",
        "editor.rulers": [100]
    },
    "files.exclude": {
        "**/__pycache__": true,
        "**/.pytest_cache": true,
        "**/.ipynb_checkpoints": true
    }
}
"""


MIT_LICENSE = """MIT License

Copyright (c) {{year}} {{author}}

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""


# Licenses without bundled text get a pointer to the full terms.
GENERIC_LICENSE = """Copyright (c) {{year}} {{author}}

This project is licensed under the {{license}} license.
See https://spdx.org/licenses/ for the full license text.
"""


def tooling_dir_entries(context: ProjectContext) -> List[ScaffoldEntry]:
    return [
        *marker_entries("data/interim", "data/external"),
        directory("reports"),
        directory("reports/figures"),
        directory(".vscode"),
    ]


def tooling_file_entries(context: ProjectContext) -> List[ScaffoldEntry]:
    license_text = MIT_LICENSE if context.license.upper() == "MIT" else GENERIC_LICENSE
    return [
        file("pyproject.toml", PYPROJECT, WritePolicy.PROMPT_BEFORE_OVERWRITE),
        file(f"src/{context.package}/data.py", DATA_MODULE),
        file("tests/test_data.py", DATA_TEST),
        file(".editorconfig", EDITORCONFIG),
        file(".vscode/settings.json", VSCODE_SETTINGS),
        file("LICENSE", license_text),
    ]
