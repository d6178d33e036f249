"""Cache management tools for anime-renamer."""

from ..core.renamer import get_context


def cache_info():
    """Rename decision cache statistics."""
    info = get_context().cache.info()
    info["schemaVersion"] = "1.0.0"
    return info


def cache_clear():
    """Clear the rename decision cache."""
    cleared = get_context().cache.clear()
    return {"schemaVersion": "1.0.0", "cleared": cleared}


def register_tools(mcp):
    """Register decision cache tools with FastMCP."""
    mcp.tool()(cache_info)
    mcp.tool()(cache_clear)
