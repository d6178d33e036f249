"""Rename preview tools for anime-renamer."""

import logging
import threading
from typing import Any, Dict, List

import requests

from ..core.episodes import episode_range as _episode_range
from ..core.errors import ValidationError, ScriptError, ResolutionError
from ..core.http_client import err_payload
from ..core.normalizers import norm_invocation
from ..core.renamer import LuaRenamer
from ..core.settings import load_settings
from ..core.shoko import ShokoClient

logger = logging.getLogger(__name__)

# The shared Lua runtime must not run two scripts at once
_LOCK = threading.Lock()


def _renamer() -> LuaRenamer:
    s = load_settings()
    if s.shoko_url and s.shoko_apikey:
        client = ShokoClient(s.shoko_url, s.shoko_apikey, timeout=s.timeout)
        return LuaRenamer(catalog=client, placements=client)
    return LuaRenamer()


def _folder(f) -> Dict[str, Any]:
    return {"id": f["id"], "name": f["name"], "location": f["location"], "type": f["drop_type"]}


def _run(invocation: Dict[str, Any], fn) -> Dict[str, Any]:
    try:
        inv = norm_invocation(invocation)
    except (KeyError, TypeError, ValueError) as e:
        return err_payload("renamer", "VALIDATION", f"bad invocation: {e}")
    try:
        with _LOCK:
            out = fn(_renamer(), inv)
        out["schemaVersion"] = "1.0.0"
        return out
    except ValidationError as e:
        return err_payload("renamer", "VALIDATION", str(e))
    except ScriptError as e:
        return err_payload("script", "SCRIPT", str(e))
    except ResolutionError as e:
        return err_payload("renamer", "RESOLUTION", str(e))
    except requests.Timeout:
        return err_payload("shoko", "TIMEOUT", "Upstream timed out")
    except requests.HTTPError as e:
        resp = e.response
        sc = resp.status_code if resp is not None else 0
        return err_payload("shoko", f"UPSTREAM_{sc}", str(e))
    except Exception as e:
        logger.exception("Unexpected renamer failure")
        return err_payload("renamer", "UNEXPECTED", str(e))


def preview_filename(invocation: Dict[str, Any]):
    """Filename the script would give the file (null means the host default applies)."""
    return _run(invocation, lambda r, inv: {"filename": r.compute_filename(inv)})


def preview_destination(invocation: Dict[str, Any]):
    """Import folder and subfolder the script would move the file to."""
    def fn(r, inv):
        folder, subfolder = r.compute_destination(inv)
        return {"destination": _folder(folder) if folder else None, "subfolder": subfolder}
    return _run(invocation, fn)


def preview_rename(invocation: Dict[str, Any]):
    """Filename, import folder and subfolder in one call."""
    def fn(r, inv):
        filename = r.compute_filename(inv)
        folder, subfolder = r.compute_destination(inv)
        return {
            "filename": filename,
            "destination": _folder(folder) if folder else None,
            "subfolder": subfolder,
        }
    return _run(invocation, fn)


def episode_range(episodes: List[Dict[str, Any]], pad: int = 2):
    """
    Compact episode list, e.g. [{"type":"Episode","number":1}, ...] -> "01-03 S01".
    """
    try:
        text = _episode_range(((e.get("type") or "Episode", int(e["number"])) for e in episodes), pad)
        return {"schemaVersion": "1.0.0", "episodes": text}
    except (KeyError, TypeError, ValueError) as e:
        return err_payload("renamer", "VALIDATION", f"bad episode list: {e}")


def register_tools(mcp):
    """Register rename tools with FastMCP."""
    mcp.tool()(preview_filename)
    mcp.tool()(preview_destination)
    mcp.tool()(preview_rename)
    mcp.tool()(episode_range)
