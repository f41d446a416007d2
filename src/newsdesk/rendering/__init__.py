"""Rich text rendering and send-time reference resolution."""

from newsdesk.rendering.markup import render, render_span, render_spans
from newsdesk.rendering.passes import (
    DEFAULT_PASSES,
    DirectoryClient,
    ResolutionPass,
    run_passes,
)
from newsdesk.rendering.rich_text import parse_rich_text

__all__ = [
    "DEFAULT_PASSES",
    "DirectoryClient",
    "ResolutionPass",
    "parse_rich_text",
    "render",
    "render_span",
    "render_spans",
    "run_passes",
]
