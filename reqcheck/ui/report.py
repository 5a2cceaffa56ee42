"""Coloured terminal report built with rich tables."""

from rich.markup import escape
from rich.table import Table

from reqcheck.checker import RunResult
from reqcheck.views.base import strip_tags
from reqcheck.views.console import summary_line

from .console import ReqcheckConsole, console as default_console
from .theme import STATUS_STYLES, SYMBOLS

LABELS = {"ok": "OK", "warning": "WARNING", "error": "FAILED"}


def build_table(result: RunResult) -> Table:
    table = Table(show_header=True, header_style="primary", box=None, padding=(0, 1))
    table.add_column("", width=2)
    table.add_column("Requirement", ratio=1)
    table.add_column("Result")
    table.add_column("Required by", ratio=1)

    for requirement in result.requirements:
        symbol_key, style = STATUS_STYLES[requirement.status]
        table.add_row(
            f"[{style}_symbol]{SYMBOLS[symbol_key]}[/]",
            f"[bold]{escape(requirement.name)}[/bold]",
            f"[{style}]{LABELS[requirement.status]}[/{style}]",
            f"[secondary]{escape(strip_tags(requirement.by))}[/]",
        )
        memo = strip_tags(requirement.memo)
        if memo:
            table.add_row("", f"[muted]{escape(memo)}[/]", "", "")
    return table


def print_report(result: RunResult, console: ReqcheckConsole = default_console) -> None:
    """Print the result as a themed table followed by the summary line."""
    console.print()
    console.print("[highlight]Requirements Checker[/]")
    console.print()
    console.print(build_table(result))
    console.print()

    summary = result.summary
    if summary.errors:
        style = "error"
    elif summary.warnings:
        style = "warning"
    else:
        style = "success"
    console.print(f"[{style}_symbol]{SYMBOLS[style]}[/] [{style}]{summary_line(result)}[/]")
