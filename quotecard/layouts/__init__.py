"""Card layouts. Importing this package registers every layout."""

from . import default, minimal, modern, social, vintage  # noqa: F401
from .base import LayoutRenderer, RenderPass
from .registry import get_layout_class, list_layouts, register_layout

__all__ = [
    "LayoutRenderer",
    "RenderPass",
    "get_layout_class",
    "list_layouts",
    "register_layout",
]
