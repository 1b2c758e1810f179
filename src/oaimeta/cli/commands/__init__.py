"""Command implementations for the oaimeta CLI."""

from .render import add_format_arguments, handle_filter, handle_render

__all__ = [
    "add_format_arguments",
    "handle_render",
    "handle_filter",
]
