"""Adapters for external data sources."""

from .youtube import YouTubeAdapter, YouTubeDataAPIAdapter

__all__ = ["YouTubeAdapter", "YouTubeDataAPIAdapter"]
