"""HTML report for viewing in a browser."""

from html import escape
from typing import Any, List

from reqcheck.checker import CheckedRequirement, RunResult
from reqcheck.views.base import Renderer

STYLE = """
body { font-family: -apple-system, "Segoe UI", Helvetica, Arial, sans-serif; color: #333; }
.container { max-width: 960px; margin: 0 auto; padding: 0 15px; }
.text-center { text-align: center; }
.alert { padding: 15px; margin-bottom: 20px; border: 1px solid transparent; border-radius: 4px; }
.alert-success { color: #155724; background-color: #d4edda; border-color: #c3e6cb; }
.alert-info { color: #0c5460; background-color: #d1ecf1; border-color: #bee5eb; }
.alert-danger { color: #721c24; background-color: #f8d7da; border-color: #f5c6cb; }
.table { width: 100%; border-collapse: collapse; margin-bottom: 20px; }
.table th, .table td { padding: 8px; border: 1px solid #ddd; vertical-align: top; }
tr.success td { background-color: #dff0d8; }
tr.warning td { background-color: #fcf8e3; }
tr.danger td { background-color: #f2dede; }
"""

CONCLUSIONS = {
    "danger": (
        "Unfortunately your server configuration does not satisfy the requirements by this application."
        "<br>Please refer to the table below for detailed explanation."
    ),
    "info": (
        "Your server configuration satisfies the minimum requirements by this application."
        "<br>Please pay attention to the warnings listed below and check if your application "
        "will use the corresponding features."
    ),
    "success": "Congratulations! Your server configuration satisfies all requirements.",
}


def row_class(requirement: CheckedRequirement) -> str:
    """CSS class for a requirement row: success, danger or warning."""
    if requirement.condition:
        return "success"
    return "danger" if requirement.mandatory else "warning"


def result_label(requirement: CheckedRequirement) -> str:
    if requirement.condition:
        return "Passed"
    return "Failed" if requirement.mandatory else "Warning"


class HtmlRenderer(Renderer):
    """
    Tabular HTML report.

    Names and 'required by' values are escaped; memos are emitted as-is so
    requirement sets can link to documentation.
    """

    name = "web"

    def render(self, result: RunResult, **context: Any) -> str:
        summary = result.summary
        if summary.errors > 0:
            alert = "danger"
        elif summary.warnings > 0:
            alert = "info"
        else:
            alert = "success"

        rows: List[str] = []
        for requirement in result.requirements:
            rows.append(
                f'            <tr class="{row_class(requirement)}">\n'
                f"                <td>{escape(requirement.name)}</td>\n"
                f'                <td class="text-center"><span class="result">{result_label(requirement)}</span></td>\n'
                f"                <td>{escape(requirement.by)}</td>\n"
                f"                <td>{requirement.memo}</td>\n"
                f"            </tr>"
            )

        server_info = escape(str(context.get("server_info", "")))
        now = escape(str(context.get("now", "")))
        title = escape(str(context.get("title", "Application Requirements Checker")))

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <title>Requirements Checker</title>
    <style>{STYLE}</style>
</head>
<body>
<div class="container">
    <header class="text-center">
        <h1>{title}</h1>
    </header>
    <hr>
    <main>
        <h3>Description</h3>
        <p>
            This script checks if your server configuration meets the requirements
            for running the application. It checks if the right versions of the
            interpreter and its extensions are available, and if configuration
            options are set correctly.
        </p>
        <p>
            There are two kinds of requirements being checked. Mandatory requirements are those
            that have to be met to allow the application to work as expected. Optional
            requirements show a warning when they are not met; the application still works
            but some specific functionality may be unavailable.
        </p>

        <h3>Conclusion</h3>
        <div class="alert alert-{alert}">
            <strong>{CONCLUSIONS[alert]}</strong>
        </div>

        <h3>Details</h3>
        <table class="table table-bordered">
            <tr>
                <th>Name</th>
                <th class="text-center">Result</th>
                <th>Required By</th>
                <th>Note</th>
            </tr>
{chr(10).join(rows)}
        </table>
    </main>
    <hr>
    <footer>
        <p>Server: {server_info} {now}</p>
    </footer>
</div>
</body>
</html>
"""
