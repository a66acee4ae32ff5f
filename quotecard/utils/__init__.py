"""Utility modules for quotecard."""

from .logging_config import get_logger, setup_logging
from .retry import image_retrying, youtube_retry

__all__ = ["get_logger", "setup_logging", "image_retrying", "youtube_retry"]
