"""Notion Canvas Sync - Sync Canvas LMS assignments into a Notion database."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("notion-canvas-sync")
except PackageNotFoundError:
    __version__ = "0.0.0"  # Fallback for development
