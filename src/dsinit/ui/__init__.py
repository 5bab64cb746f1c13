"""dsinit UI components."""

from dsinit.ui.theme import Palette, THEME, Symbols, ACTION_SYMBOLS, make_console
from dsinit.ui.report import OutcomePrinter, print_summary, print_error, print_warning

__all__ = [
    "Palette",
    "THEME",
    "Symbols",
    "ACTION_SYMBOLS",
    "make_console",
    "OutcomePrinter",
    "print_summary",
    "print_error",
    "print_warning",
]
