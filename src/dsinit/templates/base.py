"""Entries shared by every tier.

Directory layout, version-control markers, ignore rules, the conda
environment spec, the package skeleton and the README.
"""

from typing import List

from dsinit.core.entry import ProjectContext, ScaffoldEntry, WritePolicy, directory, file

GITKEEP = ".gitkeep"


def marker_entries(*paths: str) -> List[ScaffoldEntry]:
    """Empty .gitkeep files so empty directories survive `git add`."""
    entries = []
    for path in paths:
        entries.append(directory(path))
        entries.append(file(f"{path}/{GITKEEP}"))
    return entries


GITIGNORE = """# Byte-compiled / cache
__pycache__/
*.py[cod]
*$py.class
*.so

# Packaging
build/
dist/
*.egg-info/

# Environments
.env
.venv/
venv/
env.bak/
venv.bak/

# Jupyter
.ipynb_checkpoints/

# Testing / tooling
.pytest_cache/
.ruff_cache/
.mypy_cache/
.coverage
htmlcov/

# Data (tracked via .gitkeep only)
data/raw/*
data/processed/*
data/interim/*
data/external/*
!data/**/.gitkeep

# Models and reports
models/*
!models/.gitkeep
reports/figures/*
!reports/figures/.gitkeep

# Backups written by dsinit
*.bak.*

# Editors
.idea/
*.swp
.DS_Store
"""


ENVIRONMENT_YML = """name: {{name}}
channels:
  - conda-forge
dependencies:
  - python={{python_version}}
  - pip
  - numpy
  - pandas
  - matplotlib
  - jupyterlab
  - ipykernel
  - pytest
"""


PACKAGE_INIT = '''"""{{name}}."""

__version__ = "0.1.0"
'''


README = """# {{name}}

> Add a one-paragraph description of the project here.

Created {{date}} with dsinit.

## Getting Started

```bash
conda env create -f environment.yml
conda activate {{name}}
```

## Project Layout

```
{{name}}/
├── data/
│   ├── raw/           # Immutable input data
│   └── processed/     # Cleaned data ready for modelling
├── notebooks/         # Exploratory notebooks
├── src/{{package}}/    # Reusable source code
└── tests/             # Tests
```
"""


def layout_entries(context: ProjectContext) -> List[ScaffoldEntry]:
    """Directories and markers every project gets."""
    return [
        *marker_entries("data/raw", "data/processed", "notebooks"),
        directory("src"),
        directory(f"src/{context.package}"),
        directory("tests"),
    ]


def project_file_entries(context: ProjectContext) -> List[ScaffoldEntry]:
    """Ignore rules, environment spec, package skeleton and README."""
    return [
        file(".gitignore", GITIGNORE),
        file("environment.yml", ENVIRONMENT_YML, WritePolicy.PROMPT_BEFORE_OVERWRITE),
        file(f"src/{context.package}/__init__.py", PACKAGE_INIT),
        file("tests/__init__.py", ""),
        file("README.md", README, WritePolicy.PROMPT_BEFORE_OVERWRITE),
    ]
