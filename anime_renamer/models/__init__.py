"""Models and type definitions for anime-renamer."""

from .types import (
    Title, AnimeInfo, EpisodeInfo, GroupInfo, FileInfo, ImportFolder, Placement,
    ScriptInfo, RenameInvocation, is_destination, is_excluded,
)

__all__ = [
    "Title", "AnimeInfo", "EpisodeInfo", "GroupInfo", "FileInfo", "ImportFolder",
    "Placement", "ScriptInfo", "RenameInvocation", "is_destination", "is_excluded",
]
