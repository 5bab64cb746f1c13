"""Console theme for dsinit.

Colors for per-entry status lines and the final summary.
"""

from dataclasses import dataclass
from rich.console import Console
from rich.style import Style
from rich.theme import Theme

from dsinit.core.entry import Action


@dataclass
class Palette:
    """dsinit color palette."""

    PRIMARY = "#00BFFF"      # Deep sky blue - titles, paths
    SECONDARY = "#7FDBFF"    # Light blue

    # Status colors
    SUCCESS = "#2ECC40"      # Green
    WARNING = "#FFB000"      # Amber
    ERROR = "#FF4136"        # Red

    # Text
    TEXT_DIM = "#777777"

    # Entry actions
    CREATED = "#2ECC40"
    SKIPPED = "#777777"
    OVERWRITTEN = "#FFB000"
    BACKUP = "#B10DC9"       # Purple


THEME = Theme({
    # Entry actions
    "action.created": Style(color=Palette.CREATED),
    "action.skipped": Style(color=Palette.SKIPPED),
    "action.overwritten": Style(color=Palette.OVERWRITTEN, bold=True),
    "action.backup": Style(color=Palette.BACKUP),

    # Status
    "status.ok": Style(color=Palette.SUCCESS, bold=True),
    "status.warn": Style(color=Palette.WARNING, bold=True),
    "status.error": Style(color=Palette.ERROR, bold=True),

    # UI elements
    "title": Style(color=Palette.PRIMARY, bold=True),
    "path": Style(color=Palette.PRIMARY),
    "hint": Style(color=Palette.SECONDARY),
    "text.dim": Style(color=Palette.TEXT_DIM),
})


class Symbols:
    """Terminal symbols for status lines."""

    CREATED = "+"
    SKIPPED = "="
    OVERWRITTEN = "~"
    BACKUP = "↩"
    OK = "✓"
    WARN = "!"
    FAILED = "✗"
    ARROW_RIGHT = "▸"


ACTION_SYMBOLS = {
    Action.CREATED: Symbols.CREATED,
    Action.SKIPPED: Symbols.SKIPPED,
    Action.OVERWRITTEN: Symbols.OVERWRITTEN,
}


def make_console(**kwargs) -> Console:
    """Console with the dsinit theme applied.

    Status lines carry long paths, so they are not wrapped.
    """
    kwargs.setdefault("soft_wrap", True)
    return Console(theme=THEME, **kwargs)
