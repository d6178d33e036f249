"""Metadata and help tools for anime-renamer."""

from importlib.metadata import version, PackageNotFoundError

from ..core.renamer import RENAMER_ID
from ..core.settings import load_settings
from ..core.cache import CACHE_WINDOW

# Version info
try:
    __VERSION__ = version("anime-renamer")
except PackageNotFoundError:
    __VERSION__ = "0.0.0+dev"


def health():
    """Liveness check; reports whether Shoko lookups are configured."""
    s = load_settings()
    return {"schemaVersion": "1.0.0", "ok": True, "renamer": RENAMER_ID, "shoko": bool(s.shoko_url)}


def about():
    """Version, limits and the globals a rename script can use."""
    s = load_settings()
    return {
        "schemaVersion": "1.0.0",
        "name": "anime-renamer",
        "version": __VERSION__,
        "renamer": RENAMER_ID,
        "endpoints": {"shoko": s.shoko_url},
        "limits": {"cacheWindowSec": CACHE_WINDOW, "timeoutSec": s.timeout},
        "globals": [
            "filename", "destination", "subfolder", "replace_illegal_chars", "remove_illegal_chars",
            "use_existing_anime_location", "animes", "anime", "episodes", "episode", "groups", "group",
            "file", "importfolders", "episode_numbers", "log", "logwarn", "logerror",
            "AnimeType", "TitleType", "Language", "EpisodeType", "ImportFolderType",
        ],
    }


def register_tools(mcp):
    """Register health and about with FastMCP."""
    mcp.tool()(health)
    mcp.tool()(about)
