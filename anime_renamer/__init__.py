"""anime-renamer package.

Decides target filenames and folders for anime files by running user Lua
scripts in a sandbox. Exports the renamer API and the FastMCP app factory.
"""
from .core.renamer import LuaRenamer, compute_filename, compute_destination
from .server import create_app

__all__ = ["LuaRenamer", "compute_filename", "compute_destination", "create_app"]
