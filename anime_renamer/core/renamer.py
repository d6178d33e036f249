"""Rename decisions: run the user script and interpret what it set."""

import logging
import os
from typing import Any, List, Optional, Protocol, Tuple

from .cache import Decision, ResultCache, fingerprint
from .destination import PlacementLookup, existing_location, resolve_destination, resolve_subfolder
from .episodes import representative_episode
from .errors import ResolutionError, ValidationError
from .paths import clean_segment, replace_illegal_chars
from .projection import build_env
from .sandbox import LuaSandbox, lua_type
from ..models.types import ImportFolder, RenameInvocation

logger = logging.getLogger(__name__)

RENAMER_ID = "LuaRenamer"


class ImportFolderCatalog(Protocol):
    def list_all(self) -> List[ImportFolder]: ...


class ScriptLogger:
    """Log sinks handed to scripts as log/logwarn/logerror."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logging.getLogger("anime_renamer.script")

    def info(self, message: str) -> None:
        self._log.info(message)

    def warning(self, message: str) -> None:
        self._log.warning(message)

    def error(self, message: str) -> None:
        self._log.error(message)


class RenamerContext:
    """Process-wide state shared by every renamer: the Lua runtime and the result cache.

    Not thread-safe. Hosts running renames on several threads must hold one
    lock around each call that uses a given context.
    """

    def __init__(self) -> None:
        self.sandbox = LuaSandbox()
        self.cache = ResultCache()


_CONTEXT: Optional[RenamerContext] = None


def get_context() -> RenamerContext:
    global _CONTEXT
    if _CONTEXT is None:
        _CONTEXT = RenamerContext()
    return _CONTEXT


def check_bad_args(inv: RenameInvocation) -> None:
    script = inv.get("script") or {}
    if not (script.get("script") or "").strip():
        raise ValidationError("Script is empty or null")
    if script.get("type") != RENAMER_ID:
        raise ValidationError(f"Script doesn't match {RENAMER_ID}")
    if not inv.get("animes"):
        raise ValidationError("No anime info")
    if not inv.get("episodes"):
        raise ValidationError("No episode info")
    primary_id = inv["animes"][0]["id"]
    if representative_episode(inv["episodes"], primary_id) is None:
        raise ValidationError(f"No episode belongs to the primary anime {primary_id}")


def _flag(env, name: str) -> bool:
    value = env[name]
    if not isinstance(value, bool):
        raise ResolutionError(f"{name} must be a boolean, got {lua_type(value) or type(value).__name__}")
    return value


class LuaRenamer:
    """Decides filename and destination for a file by running its Lua script.

    Collaborators are optional: without a catalog the invocation's own
    `import_folders` are offered to the script, and without a placement lookup
    `use_existing_anime_location` has no effect.
    """

    def __init__(
        self,
        catalog: Optional[ImportFolderCatalog] = None,
        placements: Optional[PlacementLookup] = None,
        script_logger: Optional[ScriptLogger] = None,
        context: Optional[RenamerContext] = None,
    ) -> None:
        self.catalog = catalog
        self.placements = placements
        self.script_logger = script_logger or ScriptLogger()
        self.context = context or get_context()

    def compute_filename(self, inv: RenameInvocation) -> Optional[str]:
        check_bad_args(inv)
        result = self.get_info(inv)
        return result.filename if result else None

    def compute_destination(self, inv: RenameInvocation) -> Tuple[Optional[ImportFolder], Optional[str]]:
        check_bad_args(inv)
        result = self.get_info(inv)
        return (result.destination, result.subfolder) if result else (None, None)

    def get_info(self, inv: RenameInvocation) -> Optional[Decision]:
        """Full decision for an already validated invocation, or None for no opinion."""
        script = inv["script"]["script"]
        file = inv["file"]
        key = fingerprint(file)
        cached = self.context.cache.get(script, key)
        if cached is not None:
            logger.debug("Cache hit for %s", file["filename"])
            return cached

        folders = self.catalog.list_all() if self.catalog is not None else list(inv.get("import_folders") or [])
        bindings = build_env(
            inv, folders, self.script_logger.info, self.script_logger.warning, self.script_logger.error
        )
        _, env = self.context.sandbox.run(script, bindings)

        replace = _flag(env, "replace_illegal_chars")
        remove = _flag(env, "remove_illegal_chars")
        use_existing = _flag(env, "use_existing_anime_location")

        filename = self._filename(env["filename"], file["filename"], replace, remove)

        found = None
        if use_existing and self.placements is not None:
            found = existing_location(self.placements, inv["animes"][0]["id"], file["hashes"].get("crc"))
            if found is None:
                logger.debug("No existing location for anime %s, resolving normally", inv["animes"][0]["id"])
        if found is not None:
            destination, subfolder = found
        else:
            destination = resolve_destination(env["destination"], folders, file["path"])
            subfolder = resolve_subfolder(env["subfolder"], inv["animes"][0]["preferred_title"], replace, remove)

        if filename is None or not subfolder.strip():
            logger.info("No rename decision for %s", file["filename"])
            return None

        decision = Decision(filename, destination, subfolder)
        self.context.cache.set(key, decision)
        return decision

    @staticmethod
    def _filename(value: Any, original: Optional[str], replace: bool, remove: bool) -> Optional[str]:
        if value is None:
            return original
        if not isinstance(value, str):
            raise ResolutionError(f"filename must be a string or nil, got {lua_type(value) or type(value).__name__}")
        return clean_segment(replace_illegal_chars(value, replace, remove)) + os.path.splitext(original or "")[1]


def compute_filename(inv: RenameInvocation, **kw) -> Optional[str]:
    return LuaRenamer(**kw).compute_filename(inv)


def compute_destination(inv: RenameInvocation, **kw) -> Tuple[Optional[ImportFolder], Optional[str]]:
    return LuaRenamer(**kw).compute_destination(inv)
