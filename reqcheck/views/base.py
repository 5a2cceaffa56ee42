"""Renderer base class."""

import re
from typing import Any

from reqcheck.checker import RunResult

_TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(text: str) -> str:
    """Remove HTML tags from a memo or 'required by' text."""
    return _TAG_RE.sub("", text or "")


class Renderer:
    """Turns a RunResult into a report. Renderers never modify the result."""

    name = ""

    def render(self, result: RunResult, **context: Any) -> str:
        raise NotImplementedError
