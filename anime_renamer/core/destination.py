"""Destination and subfolder resolution for script outputs."""

import logging
import os
from typing import Any, List, Optional, Protocol, Tuple

from .errors import ResolutionError
from .paths import common_prefix_len, norm_path, replace_illegal_chars, clean_segment
from .projection import IMPORT_FOLDER_CLASSID
from .sandbox import lua_type
from ..models.types import ImportFolder, Placement, is_destination, is_excluded

logger = logging.getLogger(__name__)


class PlacementLookup(Protocol):
    """Prior file placements known to the host."""

    def placements_for(self, anime_id: int) -> List[Placement]: ...

    def location_by_id(self, folder_id: int) -> Optional[ImportFolder]: ...


def _require_destination(folder: ImportFolder) -> ImportFolder:
    if not is_destination(folder):
        raise ResolutionError(
            f'selected import folder "{folder["location"]}" is not a destination folder, check import folder type'
        )
    return folder


def best_prefix_folder(folders: List[ImportFolder], file_path: str) -> Optional[ImportFolder]:
    """Destination folder sharing the longest common prefix with `file_path`.

    Ties go to the earliest folder in the list.
    """
    best, best_len = None, -1
    for f in folders:
        if not is_destination(f):
            continue
        n = common_prefix_len(f["location"], file_path)
        if n > best_len:
            best, best_len = f, n
    return best


def resolve_destination(value: Any, folders: List[ImportFolder], file_path: str) -> ImportFolder:
    """Import folder chosen by the script's `destination` value.

    nil picks by path prefix, a string matches a folder name case-insensitively,
    and a table must be one of the `importfolders` entries.
    """
    if value is None:
        folder = best_prefix_folder(folders, file_path)
        if folder is None:
            raise ResolutionError("could not find an available destination import folder")
    elif isinstance(value, str):
        name = value.casefold()
        folder = next((f for f in folders if f["name"].casefold() == name), None)
        if folder is None:
            raise ResolutionError(f"could not find destination folder by name: {value}")
    elif lua_type(value) == "table":
        if value["_classid"] != IMPORT_FOLDER_CLASSID:
            raise ResolutionError("destination table was not the correct class, assign a table from importfolders")
        index = value["_index"]
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(folders):
            raise ResolutionError(f"destination import folder index out of range: {index}")
        folder = folders[index]
    else:
        raise ResolutionError("destination must be an import folder name, an import folder or nil")
    return _require_destination(folder)


def resolve_subfolder(value: Any, default: str, replace: bool, remove: bool) -> str:
    """Relative subfolder path from the script's `subfolder` value.

    nil means a single segment named after the primary anime. A table is read
    as an array of segments in key order; non-integer keys are ignored.
    """
    if value is None:
        segments = [default]
    elif lua_type(value) == "table":
        parts = {}
        for k, v in value.items():
            if not isinstance(k, int) or isinstance(k, bool):
                continue
            if not isinstance(v, str):
                raise ResolutionError(f"subfolder array must only contain strings, got {lua_type(v) or type(v).__name__} at {k}")
            parts[k] = v
        segments = [parts[k] for k in sorted(parts)]
    else:
        raise ResolutionError("subfolder must be an array of path segments or nil")
    cleaned = [clean_segment(replace_illegal_chars(s, replace, remove)) for s in segments]
    return norm_path(os.path.join(*cleaned)) if cleaned else ""


def existing_location(
    lookup: PlacementLookup,
    anime_id: int,
    crc: Optional[str],
) -> Optional[Tuple[ImportFolder, str]]:
    """Folder and subfolder of the most recently updated sibling file.

    The current file is skipped by CRC. Excluded folders qualify here even
    though they are never picked for new placements.
    """
    own = (crc or "").casefold()
    placements = [p for p in lookup.placements_for(anime_id) if (p["crc"] or "").casefold() != own or not own]
    placements.sort(key=lambda p: p["updated"], reverse=True)
    for p in placements:
        folder = lookup.location_by_id(p["import_folder_id"])
        if folder is None or not (is_destination(folder) or is_excluded(folder)):
            continue
        logger.debug("Reusing location of %s in %s", p["path"], folder["name"])
        return folder, os.path.dirname(norm_path(p["path"]))
    return None
