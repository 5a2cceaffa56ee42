"""Plain text report for terminals and log files."""

from typing import Any, List

from reqcheck.checker import RunResult
from reqcheck.views.base import Renderer, strip_tags

DESCRIPTION = (
    "This script checks if your server configuration meets the requirements\n"
    "for running the application.\n"
    "It checks if the right versions of the interpreter and its extensions are\n"
    "available, and if configuration options are set correctly.\n"
)


def summary_line(result: RunResult) -> str:
    summary = result.summary
    return f"Errors: {summary.errors}   Warnings: {summary.warnings}   Total checks: {summary.total}"


class ConsoleRenderer(Renderer):
    """Lists each requirement as OK, FAILED!!! or WARNING!!! followed by a summary line."""

    name = "console"

    def render(self, result: RunResult, **context: Any) -> str:
        lines: List[str] = ["", "Requirements Checker", "", DESCRIPTION]

        header = "Check conclusion:"
        lines.extend([header, "-" * len(header), ""])

        for requirement in result.requirements:
            if requirement.condition:
                lines.append(f"{requirement.name}: OK")
            else:
                label = "FAILED!!!" if requirement.mandatory else "WARNING!!!"
                lines.append(f"{requirement.name}: {label}")
                lines.append(f"Required by: {strip_tags(requirement.by)}")
            memo = strip_tags(requirement.memo)
            if memo:
                lines.append(memo)
            lines.append("")

        summary = summary_line(result)
        lines.extend(["-" * len(summary), summary, "", ""])
        return "\n".join(lines)
