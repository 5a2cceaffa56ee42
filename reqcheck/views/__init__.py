"""Report renderers for requirement check results."""

from typing import Dict, Sequence

from reqcheck.errors import UsageError
from reqcheck.views.base import Renderer, strip_tags
from reqcheck.views.console import ConsoleRenderer
from reqcheck.views.data import JsonRenderer
from reqcheck.views.web import HtmlRenderer

RENDERERS: Dict[str, Renderer] = {
    renderer.name: renderer for renderer in (ConsoleRenderer(), HtmlRenderer(), JsonRenderer())
}


def get_renderer(name: str) -> Renderer:
    try:
        return RENDERERS[name]
    except KeyError:
        raise UsageError(
            f"Unknown report format {name!r}, expected one of: {', '.join(sorted(RENDERERS))}"
        ) from None


def default_renderer_name(argv: Sequence[str]) -> str:
    """Console report when invoked with command-line arguments, HTML otherwise."""
    return "console" if argv else "web"


__all__ = [
    "RENDERERS", "Renderer", "ConsoleRenderer", "HtmlRenderer", "JsonRenderer",
    "get_renderer", "default_renderer_name", "strip_tags",
]
