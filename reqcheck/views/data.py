"""JSON report for scripts and automation."""

import json
from typing import Any

from reqcheck.checker import RunResult
from reqcheck.views.base import Renderer


class JsonRenderer(Renderer):
    name = "json"

    def render(self, result: RunResult, **context: Any) -> str:
        output = result.to_dict()
        output["can_proceed"] = result.summary.errors == 0
        return json.dumps(output, indent=2, default=str)
