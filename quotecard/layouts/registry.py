"""Registry of layout renderers, keyed by layout id."""

from typing import Type

from ..models import LayoutId
from ..utils import get_logger
from .base import LayoutRenderer

logger = get_logger(__name__)

_LAYOUTS: dict[str, Type[LayoutRenderer]] = {}


def register_layout(name: str):
    """
    Class decorator that registers a layout under ``name``.

    Example:
        @register_layout("minimal")
        class MinimalLayout(LayoutRenderer):
            ...
    """

    def decorator(cls: Type[LayoutRenderer]) -> Type[LayoutRenderer]:
        cls.name = name
        _LAYOUTS[name] = cls
        return cls

    return decorator


def get_layout_class(name: str) -> Type[LayoutRenderer]:
    """
    Layout class for ``name``.

    Unknown names resolve to the default layout.
    """
    cls = _LAYOUTS.get(name)
    if cls is None:
        logger.warning(f"Unknown layout '{name}', using '{LayoutId.DEFAULT.value}'")
        cls = _LAYOUTS[LayoutId.DEFAULT.value]
    return cls


def list_layouts() -> dict[str, Type[LayoutRenderer]]:
    """All registered layouts as {name: class}."""
    return _LAYOUTS.copy()
