"""Tier presets for dsinit scaffolding.

Each tier is an ordered list of entry builders. Tiers only add to the
one below them:
- minimal: data folders, environment spec, package skeleton, README
- core: + build config, starter module and test, editor settings, LICENSE
- full: + pre-commit, CI workflow, Makefile, changelog, docs

Picking a tier is a data lookup; the engine applies whatever list it
is given.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from dsinit.core.entry import ProjectContext, ScaffoldEntry
from dsinit.templates.base import layout_entries, project_file_entries
from dsinit.templates.tooling import tooling_dir_entries, tooling_file_entries
from dsinit.templates.extras import RELEASE_TAG, extras_dir_entries, extras_file_entries

Builder = Callable[[ProjectContext], List[ScaffoldEntry]]


@dataclass(frozen=True)
class Tier:
    """A named scaffold preset."""
    name: str
    description: str
    builders: Tuple[Builder, ...]
    release_tag: str = ""

    def entries(self, context: ProjectContext) -> List[ScaffoldEntry]:
        return order_entries(
            entry for build in self.builders for entry in build(context)
        )


_MINIMAL = (layout_entries, project_file_entries)
_CORE = _MINIMAL + (tooling_dir_entries, tooling_file_entries)
_FULL = _CORE + (extras_dir_entries, extras_file_entries)

# Template registry
TIERS: Dict[str, Tier] = {
    "minimal": Tier(
        "minimal",
        "Data folders, conda environment, package skeleton and README",
        _MINIMAL,
    ),
    "core": Tier(
        "core",
        "Minimal + pyproject, starter module and test, editor settings, LICENSE",
        _CORE,
    ),
    "full": Tier(
        "full",
        "Core + pre-commit hooks, CI workflow, Makefile, changelog and docs",
        _FULL,
        release_tag=RELEASE_TAG,
    ),
}

DEFAULT_TIER = "core"


def get_available_tiers() -> Dict[str, str]:
    """Tier name -> description."""
    return {name: tier.description for name, tier in TIERS.items()}


def get_tier(name: str) -> Tier:
    """Look up a tier by name.

    Raises:
        ValueError: If the tier does not exist
    """
    if name not in TIERS:
        raise ValueError(f"Unknown tier: {name}. Available: {list(TIERS.keys())}")
    return TIERS[name]


def order_entries(entries) -> List[ScaffoldEntry]:
    """Put every directory before every file.

    Directories keep their relative order and are de-duplicated (first
    occurrence wins), which makes any combination of builders safe to
    hand to the engine.

    Raises:
        ValueError: If two file entries share a path
    """
    directories: List[ScaffoldEntry] = []
    files: List[ScaffoldEntry] = []
    seen_dirs = set()
    seen_files = set()

    for entry in entries:
        if entry.is_directory:
            if entry.path not in seen_dirs:
                seen_dirs.add(entry.path)
                directories.append(entry)
        else:
            if entry.path in seen_files:
                raise ValueError(f"Duplicate file entry: {entry.path}")
            seen_files.add(entry.path)
            files.append(entry)

    return directories + files


def build_entries(tier: str, context: ProjectContext) -> List[ScaffoldEntry]:
    """Ordered entry list for a tier."""
    return get_tier(tier).entries(context)
