"""MCP tools for anime-renamer."""

from . import rename
from . import cache_tools
from . import meta

__all__ = [
    "rename",
    "cache_tools",
    "meta",
]
