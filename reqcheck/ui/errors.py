"""Structured error display for usage and evaluation errors."""

from typing import Dict, Optional

from rich.markup import escape

from reqcheck.errors import EvaluationError, ReqCheckError, UsageError

from .console import console
from .theme import SYMBOLS


def show_error(title: str, message: str, context: Optional[Dict[str, str]] = None) -> None:
    lines = [f"[error]{SYMBOLS['error']} FAILED:[/] [primary]{escape(title)}[/]", "", f"  [error]Error:[/] {escape(message)}"]
    if context:
        lines.append("")
        for key, value in context.items():
            display_value = value if len(value) < 50 else value[:47] + "..."
            lines.append(f"  [secondary]{key}:[/] {escape(display_value)}")
    console.error_panel("\n".join(lines))


def show_check_error(exc: ReqCheckError) -> None:
    """Render a reqcheck error raised while loading or checking requirements."""
    if isinstance(exc, EvaluationError):
        context = {"Expression": exc.expression} if exc.expression else None
        show_error("Condition evaluation", str(exc), context)
    elif isinstance(exc, UsageError):
        show_error("Usage", str(exc))
    else:
        show_error("reqcheck", str(exc))
