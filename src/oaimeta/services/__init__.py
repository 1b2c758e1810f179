"""Services for oaimeta."""

from .rendering import RenderedRecord, RenderingService, to_string

__all__ = [
    "RenderedRecord",
    "RenderingService",
    "to_string",
]
