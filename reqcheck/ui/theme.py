"""
reqcheck UI theme - color constants and styling definitions.
"""

from rich.style import Style
from rich.theme import Theme

COLORS = {
    "success": "#22c55e",
    "error": "#ef4444",
    "warning": "#eab308",
    "secondary": "#6b7280",
    "primary": "#ffffff",
    "highlight": "#fbbf24",
    "muted": "#9ca3af",
}

SYMBOLS = {
    "success": "✓",
    "error": "✗",
    "warning": "⚠",
}

# Report status -> (symbol key, style)
STATUS_STYLES = {
    "ok": ("success", "success"),
    "warning": ("warning", "warning"),
    "error": ("error", "error"),
}

REQCHECK_THEME = Theme({
    "success": Style(color=COLORS["success"], bold=True),
    "error": Style(color=COLORS["error"], bold=True),
    "warning": Style(color=COLORS["warning"], bold=True),
    "secondary": Style(color=COLORS["secondary"], dim=True),
    "primary": Style(color=COLORS["primary"]),
    "highlight": Style(color=COLORS["highlight"], bold=True),
    "muted": Style(color=COLORS["muted"]),
    "success_symbol": Style(color=COLORS["success"]),
    "error_symbol": Style(color=COLORS["error"]),
    "warning_symbol": Style(color=COLORS["warning"]),
})
