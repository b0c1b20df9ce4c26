"""Watcher implementations used by the route agent."""

from .file import FileRouteWatcher  # noqa: F401

__all__ = ["FileRouteWatcher"]
