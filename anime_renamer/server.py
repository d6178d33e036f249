# SPDX-License-Identifier: MIT
"""
anime-renamer server entrypoint.

Wires FastMCP with the tool modules under anime_renamer/tools/.
"""

from __future__ import annotations

import logging
import sys

from mcp.server.fastmcp import FastMCP

from .core.settings import load_settings
from .tools import rename, cache_tools, meta


def create_app() -> FastMCP:
    mcp = FastMCP("anime-renamer")

    rename.register_tools(mcp)
    cache_tools.register_tools(mcp)
    meta.register_tools(mcp)

    return mcp


def main() -> None:
    # stdout carries the MCP transport
    logging.basicConfig(
        stream=sys.stderr,
        level=load_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    create_app().run()


if __name__ == "__main__":
    main()
