"""reqcheck UI - terminal output components."""

from .console import console, ReqcheckConsole
from .theme import COLORS, SYMBOLS, STATUS_STYLES, REQCHECK_THEME
from .errors import show_error, show_check_error
from .report import build_table, print_report

__all__ = [
    "console", "ReqcheckConsole", "COLORS", "SYMBOLS", "STATUS_STYLES", "REQCHECK_THEME",
    "show_error", "show_check_error", "build_table", "print_report",
]
